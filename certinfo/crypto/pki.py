"""Load PEM/DER certificates and requests into the decoded models."""

from datetime import timezone
from pathlib import Path
from typing import Optional

from asn1crypto import core
from asn1crypto import csr as asn1_csr
from asn1crypto import x509 as asn1_x509
from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding

from certinfo.common.asn1 import distinguished_name, is_absent
from certinfo.common.errors import BadCertError
from certinfo.common.models import (
    AlgorithmIdentifier,
    Attribute,
    Certificate,
    CertificateRequest,
    Extension,
    PublicKeyInfo,
    Validity,
)


PEM_MARKER = b"-----BEGIN"
CSR_MARKERS = (b"-----BEGIN CERTIFICATE REQUEST-----", b"-----BEGIN NEW CERTIFICATE REQUEST-----")

_VERSIONS = {"v1": 1, "v2": 2, "v3": 3}


def _version(value: core.Integer) -> int:
    native = value.native
    if isinstance(native, str):
        return _VERSIONS[native]
    return native + 1


def _algorithm(alg: core.Sequence) -> AlgorithmIdentifier:
    params = alg["parameters"]
    return AlgorithmIdentifier(
        oid=alg["algorithm"].dotted,
        parameters=None if is_absent(params) else params.dump(),
    )


def _public_key(spki: core.Sequence) -> PublicKeyInfo:
    try:
        bits = spki["public_key"]
    except KeyError:
        # asn1crypto has no key spec for this algorithm
        bits = core.Sequence.load(spki.dump())[1]
    # First content octet of a BIT STRING is the unused-bits count
    return PublicKeyInfo(
        algorithm=_algorithm(spki["algorithm"]),
        key_bytes=bytes(bits.contents[1:]),
    )


def _optional_bits(value: core.Asn1Value) -> Optional[bytes]:
    if is_absent(value):
        return None
    return bytes(value.native)


def certificate_from_x509(cert: x509.Certificate) -> Certificate:
    """
    Convert a cryptography certificate into the decoded model.

    Args:
        cert: Loaded X.509 certificate

    Returns:
        Decoded certificate ready for rendering

    Raises:
        BadCertError: If a field cannot be decoded
    """
    try:
        parsed = asn1_x509.Certificate.load(cert.public_bytes(Encoding.DER))
        tbs = parsed["tbs_certificate"]
        extensions = []
        if not is_absent(tbs["extensions"]):
            for ext in tbs["extensions"]:
                extensions.append(Extension(
                    oid=ext["extn_id"].dotted,
                    critical=bool(ext["critical"].native),
                    value=bytes(ext["extn_value"].contents),
                ))
        validity = tbs["validity"]
        return Certificate(
            version=_version(tbs["version"]),
            serial_number=tbs["serial_number"].native,
            signature_algorithm=_algorithm(parsed["signature_algorithm"]),
            tbs_signature_algorithm=_algorithm(tbs["signature"]),
            issuer=distinguished_name(tbs["issuer"]),
            validity=Validity(
                not_before=validity["not_before"].native.astimezone(timezone.utc),
                not_after=validity["not_after"].native.astimezone(timezone.utc),
            ),
            subject=distinguished_name(tbs["subject"]),
            public_key=_public_key(tbs["subject_public_key_info"]),
            issuer_unique_id=_optional_bits(tbs["issuer_unique_id"]),
            subject_unique_id=_optional_bits(tbs["subject_unique_id"]),
            extensions=extensions,
            signature_value=bytes(parsed["signature_value"].native),
        )
    except (ValueError, TypeError, KeyError) as e:
        raise BadCertError(f"Failed to decode certificate: {e}")


def request_from_x509(csr: x509.CertificateSigningRequest) -> CertificateRequest:
    """
    Convert a cryptography CSR into the decoded model.

    Raises:
        BadCertError: If a field cannot be decoded
    """
    try:
        parsed = asn1_csr.CertificationRequest.load(csr.public_bytes(Encoding.DER))
        info = parsed["certification_request_info"]
        attributes = [
            Attribute(oid=attr["type"].dotted, values=[value.dump() for value in attr["values"]])
            for attr in info["attributes"]
        ]
        return CertificateRequest(
            version=_version(info["version"]),
            subject=distinguished_name(info["subject"]),
            public_key=_public_key(info["subject_pk_info"]),
            attributes=attributes,
            signature_algorithm=_algorithm(parsed["signature_algorithm"]),
            signature_value=bytes(parsed["signature"].native),
        )
    except (ValueError, TypeError, KeyError) as e:
        raise BadCertError(f"Failed to decode certificate request: {e}")


def load_certificate_from_bytes(cert_data: bytes) -> Certificate:
    """
    Load an X.509 certificate from bytes.

    Args:
        cert_data: Certificate data in PEM or DER format

    Returns:
        Decoded certificate

    Raises:
        BadCertError: If certificate cannot be parsed
    """
    try:
        if PEM_MARKER in cert_data:
            cert = x509.load_pem_x509_certificate(cert_data)
        else:
            cert = x509.load_der_x509_certificate(cert_data)
    except ValueError as e:
        raise BadCertError(f"Failed to parse certificate: {e}")
    return certificate_from_x509(cert)


def load_certificate(cert_path: Path) -> Certificate:
    """
    Load an X.509 certificate from a PEM or DER file.

    Raises:
        BadCertError: If certificate cannot be loaded
    """
    try:
        with open(cert_path, "rb") as f:
            cert_data = f.read()
    except OSError as e:
        raise BadCertError(f"Failed to load certificate: {e}")
    return load_certificate_from_bytes(cert_data)


def load_certificate_request_from_bytes(csr_data: bytes) -> CertificateRequest:
    """
    Load a PKCS#10 request from PEM or DER bytes.

    Raises:
        BadCertError: If the request cannot be parsed
    """
    try:
        if PEM_MARKER in csr_data:
            csr = x509.load_pem_x509_csr(csr_data)
        else:
            csr = x509.load_der_x509_csr(csr_data)
    except ValueError as e:
        raise BadCertError(f"Failed to parse certificate request: {e}")
    return request_from_x509(csr)


def load_certificate_request(csr_path: Path) -> CertificateRequest:
    try:
        with open(csr_path, "rb") as f:
            csr_data = f.read()
    except OSError as e:
        raise BadCertError(f"Failed to load certificate request: {e}")
    return load_certificate_request_from_bytes(csr_data)


def is_request_pem(data: bytes) -> bool:
    """True when the PEM armour announces a certificate request."""
    return any(marker in data for marker in CSR_MARKERS)
