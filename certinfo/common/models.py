"""Pydantic models: decoded certificate, request, name, key, extension."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


COMMON_NAME_OID = "2.5.4.3"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class AlgorithmIdentifier(_Frozen):
    """Algorithm OID plus the DER of its parameters, if any."""
    oid: str
    parameters: Optional[bytes] = None


class NameAttribute(_Frozen):
    oid: str  # Attribute type, dotted decimal
    value: str


class DistinguishedName(_Frozen):
    """Ordered sequence of (type, value) pairs; order is never changed."""
    attributes: List[NameAttribute] = Field(default_factory=list)

    @property
    def common_name(self) -> Optional[str]:
        """Last CN value in the name, as most tools treat it."""
        cn = None
        for attr in self.attributes:
            if attr.oid == COMMON_NAME_OID:
                cn = attr.value
        return cn


class Validity(_Frozen):
    not_before: datetime
    not_after: datetime


class PublicKeyInfo(_Frozen):
    """subjectPublicKeyInfo with the raw BIT STRING payload.

    `algorithm.parameters` holds the DER of the algorithm parameters
    (named curve OID, DSA domain parameters, NULL for RSA).
    """
    algorithm: AlgorithmIdentifier
    key_bytes: bytes = b""


class Extension(_Frozen):
    """X.509v3 extension; `value` is the DER wrapped by extnValue."""
    oid: str
    critical: bool = False
    value: bytes = b""


class Attribute(_Frozen):
    """CSR attribute; every value is kept as DER."""
    oid: str
    values: List[bytes] = Field(default_factory=list)


class Certificate(_Frozen):
    """Decoded X.509 certificate.

    `version` is the displayed version number (3 for a v3 certificate).
    `tbs_signature_algorithm` is the copy inside the signed part and must
    equal `signature_algorithm` when present.
    """
    version: int = 3
    serial_number: int
    signature_algorithm: AlgorithmIdentifier
    tbs_signature_algorithm: Optional[AlgorithmIdentifier] = None
    issuer: DistinguishedName
    validity: Validity
    subject: DistinguishedName
    public_key: Optional[PublicKeyInfo] = None
    issuer_unique_id: Optional[bytes] = None
    subject_unique_id: Optional[bytes] = None
    extensions: List[Extension] = Field(default_factory=list)
    signature_value: bytes = b""

    def get_extension(self, oid: str) -> Optional[Extension]:
        for ext in self.extensions:
            if ext.oid == oid:
                return ext
        return None


class CertificateRequest(_Frozen):
    """Decoded PKCS#10 certificate signing request."""
    version: int = 1
    subject: DistinguishedName
    public_key: Optional[PublicKeyInfo] = None
    attributes: List[Attribute] = Field(default_factory=list)
    signature_algorithm: AlgorithmIdentifier
    signature_value: bytes = b""
