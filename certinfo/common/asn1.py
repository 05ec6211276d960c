"""asn1crypto helpers shared by the loader and the extension decoders."""

from asn1crypto import core
from asn1crypto import x509 as asn1_x509

from certinfo.common.models import DistinguishedName, NameAttribute
from certinfo.common.utils import colon_hex


def ia5_text(value: core.Asn1Value) -> str:
    """
    Raw text of an IA5String-like value.

    asn1crypto normalises DNS names, e-mail addresses and URIs when building
    `.native` (IDNA, IRI decoding); the report shows the encoded form.
    """
    return bytes(value.contents or b"").decode("ascii", errors="replace")


def attribute_text(value: core.Asn1Value) -> str:
    """Best-effort display text for a name attribute or CSR attribute value."""
    if isinstance(value, core.IA5String):
        return ia5_text(value)
    try:
        native = value.native
    except (ValueError, TypeError):
        return colon_hex(bytes(value.contents or b""))
    if isinstance(native, str):
        return native
    if isinstance(native, (bytes, bytearray)):
        return colon_hex(bytes(native))
    return str(native)


def distinguished_name(name: asn1_x509.Name) -> DistinguishedName:
    """Flatten an asn1crypto Name into the ordered model form."""
    attributes = []
    for rdn in name.chosen:
        for atv in rdn:
            attributes.append(
                NameAttribute(oid=atv["type"].dotted, value=attribute_text(atv["value"]))
            )
    return DistinguishedName(attributes=attributes)


def relative_name(rdn: asn1_x509.RelativeDistinguishedName) -> DistinguishedName:
    """Single RDN as a name (CRL distribution point relative names)."""
    return DistinguishedName(attributes=[
        NameAttribute(oid=atv["type"].dotted, value=attribute_text(atv["value"]))
        for atv in rdn
    ])


def is_absent(value: core.Asn1Value) -> bool:
    """True for an OPTIONAL field that was not encoded."""
    return isinstance(value, core.Void)
