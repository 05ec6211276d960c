"""Per-OID extension decoders.

Every decoder takes the raw extension value (the DER inside extnValue) and
the indentation of its value lines, and returns those lines. `DECODERS`
maps an OID to its decoder; anything missing from it, or failing to decode,
is shown as a hex dump under the usual header.
"""

import ipaddress
from typing import Callable, Dict, List, Tuple

from asn1crypto import core
from asn1crypto import x509 as asn1_x509

from certinfo.common.asn1 import attribute_text, distinguished_name, ia5_text, is_absent, relative_name
from certinfo.common.logger import get_logger
from certinfo.common.models import Attribute, Extension
from certinfo.common.utils import colon_hex
from certinfo.config import DEFAULT_LAYOUT, TextLayout
from certinfo.render import oids
from certinfo.render.primitives import (
    format_hex_block,
    format_name,
    format_serial,
    lookup_oid_name,
    oid_label,
)


logger = get_logger(__name__)

Decoder = Callable[[bytes, int], List[str]]


KEY_USAGE_NAMES = (
    ("digital_signature", "Digital Signature"),
    ("non_repudiation", "Non Repudiation"),
    ("key_encipherment", "Key Encipherment"),
    ("data_encipherment", "Data Encipherment"),
    ("key_agreement", "Key Agreement"),
    ("key_cert_sign", "Certificate Sign"),
    ("crl_sign", "CRL Sign"),
    ("encipher_only", "Encipher Only"),
    ("decipher_only", "Decipher Only"),
)

REASON_NAMES = (
    ("unused", "Unused"),
    ("key_compromise", "Key Compromise"),
    ("ca_compromise", "CA Compromise"),
    ("affiliation_changed", "Affiliation Changed"),
    ("superseded", "Superseded"),
    ("cessation_of_operation", "Cessation Of Operation"),
    ("certificate_hold", "Certificate Hold"),
    ("privilege_withdrawn", "Privilege Withdrawn"),
    ("aa_compromise", "AA Compromise"),
)

GENERAL_NAME_LABELS = {
    "dns_name": "DNS",
    "rfc822_name": "email",
    "ip_address": "IP Address",
    "uniform_resource_identifier": "URI",
    "directory_name": "DirName",
    "registered_id": "Registered ID",
    "other_name": "othername",
    "x400_address": "X400Name",
    "edi_party_name": "EdiPartyName",
}

# Line order of the alternative name block
GENERAL_NAME_ORDER = tuple(GENERAL_NAME_LABELS)


def _load(spec, value: bytes):
    """Load `value` as `spec`; inner fields are parsed when first accessed."""
    return spec.load(value, strict=True)


def _ip_text(raw: bytes) -> str:
    if len(raw) in (4, 16):
        return str(ipaddress.ip_address(raw))
    if len(raw) in (8, 32):
        # Name constraints carry address and netmask back to back
        half = len(raw) // 2
        return f"{ipaddress.ip_address(raw[:half])}/{ipaddress.ip_address(raw[half:])}"
    return colon_hex(raw)


def general_name(gn: asn1_x509.GeneralName) -> Tuple[str, str]:
    """
    Split a GeneralName into its choice name and display text.

    Args:
        gn: asn1crypto GeneralName

    Returns:
        (choice name, text), e.g. ("dns_name", "example.com")
    """
    kind = gn.name
    value = gn.chosen
    if kind in ("dns_name", "rfc822_name", "uniform_resource_identifier"):
        return kind, ia5_text(value)
    if kind == "ip_address":
        return kind, _ip_text(bytes(value.contents))
    if kind == "directory_name":
        return kind, format_name(distinguished_name(value))
    if kind == "registered_id":
        return kind, lookup_oid_name(value.dotted)
    return kind, "<unsupported>"


def format_general_name(gn: asn1_x509.GeneralName, ip_label: str = "IP Address") -> str:
    kind, text = general_name(gn)
    label = ip_label if kind == "ip_address" else GENERAL_NAME_LABELS[kind]
    return f"{label}:{text}"


def alternative_names(value: bytes) -> List[Tuple[str, str]]:
    """Decode a SubjectAltName/IssuerAltName value into (kind, text) pairs."""
    return [general_name(gn) for gn in _load(asn1_x509.GeneralNames, value)]


def basic_constraints_ca(ext: Extension) -> bool:
    """cA flag of a Basic Constraints extension; undecodable means False."""
    try:
        return bool(_load(asn1_x509.BasicConstraints, ext.value)["ca"].native)
    except Exception as e:
        logger.debug("extension.decode_failed", oid=ext.oid, error=str(e))
        return False


def _basic_constraints(value: bytes, indent: int) -> List[str]:
    bc = _load(asn1_x509.BasicConstraints, value).native
    line = "CA:TRUE" if bc["ca"] else "CA:FALSE"
    if bc["path_len_constraint"] is not None:
        line += f", pathlen:{bc['path_len_constraint']}"
    return [" " * indent + line]


def _key_usage(value: bytes, indent: int) -> List[str]:
    bits = _load(asn1_x509.KeyUsage, value).native
    usages = [label for name, label in KEY_USAGE_NAMES if name in bits]
    if not usages:
        return []
    return [" " * indent + ", ".join(usages)]


def _extended_key_usage(value: bytes, indent: int) -> List[str]:
    purposes = _load(asn1_x509.ExtKeyUsageSyntax, value)
    names = [lookup_oid_name(oid.dotted) for oid in purposes]
    if not names:
        return []
    return [" " * indent + ", ".join(names)]


def _alternative_names(value: bytes, indent: int) -> List[str]:
    grouped: Dict[str, List[str]] = {}
    for gn in _load(asn1_x509.GeneralNames, value):
        grouped.setdefault(gn.name, []).append(format_general_name(gn))
    return [
        " " * indent + ", ".join(grouped[kind])
        for kind in GENERAL_NAME_ORDER
        if kind in grouped
    ]


def _subject_key_identifier(value: bytes, indent: int) -> List[str]:
    key_id = _load(core.OctetString, value).native
    return [" " * indent + colon_hex(key_id)]


def _authority_key_identifier(value: bytes, indent: int) -> List[str]:
    aki = _load(asn1_x509.AuthorityKeyIdentifier, value)
    pad = " " * indent
    lines = []
    if not is_absent(aki["key_identifier"]):
        lines.append(pad + "keyid:" + colon_hex(aki["key_identifier"].native))
    if not is_absent(aki["authority_cert_issuer"]):
        for gn in aki["authority_cert_issuer"]:
            lines.append(pad + format_general_name(gn))
    if not is_absent(aki["authority_cert_serial_number"]):
        lines.append(pad + "serial:" + format_serial(aki["authority_cert_serial_number"].native))
    return lines


def _information_access(spec) -> Decoder:
    def decode(value: bytes, indent: int) -> List[str]:
        lines = []
        for desc in _load(spec, value):
            method = lookup_oid_name(desc["access_method"].dotted)
            location = format_general_name(desc["access_location"])
            lines.append(f"{' ' * indent}{method} - {location}")
        return lines
    return decode


def _crl_distribution_points(value: bytes, indent: int) -> List[str]:
    pad = " " * indent
    inner = " " * (indent + 2)
    lines = []
    for dp in _load(asn1_x509.CRLDistributionPoints, value):
        lines.append("")
        dpn = dp["distribution_point"]
        if not is_absent(dpn):
            if dpn.name == "full_name":
                lines.append(pad + "Full Name:")
                lines.extend(inner + format_general_name(gn) for gn in dpn.chosen)
            else:
                lines.append(pad + "Relative Name:")
                lines.append(inner + format_name(relative_name(dpn.chosen)))
        if not is_absent(dp["reasons"]):
            reasons = dp["reasons"].native
            lines.append(pad + "Reasons: " + ", ".join(
                label for name, label in REASON_NAMES if name in reasons))
        if not is_absent(dp["crl_issuer"]):
            lines.append(pad + "CRL Issuer:")
            lines.extend(inner + format_general_name(gn) for gn in dp["crl_issuer"])
    if lines:
        lines.append("")
    return lines


def _certificate_policies(value: bytes, indent: int) -> List[str]:
    pad = " " * indent
    lines = []
    for policy in _load(asn1_x509.CertificatePolicies, value):
        lines.append(pad + "Policy: " + lookup_oid_name(policy["policy_identifier"].dotted))
        qualifiers = policy["policy_qualifiers"]
        if is_absent(qualifiers):
            continue
        for qualifier in qualifiers:
            lines.extend(_policy_qualifier(qualifier, indent + 2))
    return lines


def _policy_qualifier(qualifier: asn1_x509.PolicyQualifierInfo, indent: int) -> List[str]:
    pad = " " * indent
    qualifier_id = qualifier["policy_qualifier_id"].dotted
    body = qualifier["qualifier"]
    if qualifier_id == oids.CertificatePoliciesOID.CPS_QUALIFIER.dotted_string:
        return [pad + "CPS: " + attribute_text(body)]
    if qualifier_id == oids.CertificatePoliciesOID.CPS_USER_NOTICE.dotted_string:
        lines = [pad + "User Notice:"]
        notice_ref = body["notice_ref"]
        if not is_absent(notice_ref):
            lines.append(pad + "  Organization: " + attribute_text(notice_ref["organization"]))
            numbers = ", ".join(str(n) for n in notice_ref["notice_numbers"].native)
            lines.append(pad + "  Numbers: " + numbers)
        if not is_absent(body["explicit_text"]):
            lines.append(pad + "  Explicit Text: " + attribute_text(body["explicit_text"]))
        return lines
    return [pad + f"{oid_label(qualifier_id)}: " + colon_hex(body.dump())]


def _name_constraints(value: bytes, indent: int) -> List[str]:
    nc = _load(asn1_x509.NameConstraints, value)
    pad = " " * indent
    lines = []
    for field, title in (("permitted_subtrees", "Permitted:"), ("excluded_subtrees", "Excluded:")):
        if is_absent(nc[field]):
            continue
        lines.append(pad + title)
        for subtree in nc[field]:
            lines.append(pad + "  " + format_general_name(subtree["base"], ip_label="IP"))
    return lines


def _netscape_comment(value: bytes, indent: int) -> List[str]:
    return [" " * indent + attribute_text(core.load(value, strict=True))]


DECODERS: Dict[str, Decoder] = {
    oids.ExtensionOID.BASIC_CONSTRAINTS.dotted_string: _basic_constraints,
    oids.ExtensionOID.KEY_USAGE.dotted_string: _key_usage,
    oids.ExtensionOID.EXTENDED_KEY_USAGE.dotted_string: _extended_key_usage,
    oids.ExtensionOID.SUBJECT_ALTERNATIVE_NAME.dotted_string: _alternative_names,
    oids.ExtensionOID.ISSUER_ALTERNATIVE_NAME.dotted_string: _alternative_names,
    oids.ExtensionOID.SUBJECT_KEY_IDENTIFIER.dotted_string: _subject_key_identifier,
    oids.ExtensionOID.AUTHORITY_KEY_IDENTIFIER.dotted_string: _authority_key_identifier,
    oids.ExtensionOID.AUTHORITY_INFORMATION_ACCESS.dotted_string:
        _information_access(asn1_x509.AuthorityInfoAccessSyntax),
    oids.ExtensionOID.SUBJECT_INFORMATION_ACCESS.dotted_string:
        _information_access(asn1_x509.SubjectInfoAccessSyntax),
    oids.ExtensionOID.CRL_DISTRIBUTION_POINTS.dotted_string: _crl_distribution_points,
    oids.ExtensionOID.FRESHEST_CRL.dotted_string: _crl_distribution_points,
    oids.ExtensionOID.CERTIFICATE_POLICIES.dotted_string: _certificate_policies,
    oids.ExtensionOID.NAME_CONSTRAINTS.dotted_string: _name_constraints,
    oids.NETSCAPE_COMMENT: _netscape_comment,
}


def render_extension(ext: Extension, indent: int, layout: TextLayout = DEFAULT_LAYOUT) -> List[str]:
    """
    Render one extension block: header line plus value lines.

    Args:
        ext: Extension with its raw value
        indent: Column of the header line; values sit one level deeper
        layout: Layout constants

    Returns:
        Lines of the block, without trailing newlines
    """
    header = " " * indent + oid_label(ext.oid) + ":"
    if ext.critical:
        header += " critical"
    value_indent = indent + layout.indent_step

    decoder = DECODERS.get(ext.oid)
    if decoder is not None:
        try:
            return [header] + decoder(ext.value, value_indent)
        except Exception as e:
            logger.debug("extension.decode_failed", oid=ext.oid, error=str(e))
    return [header] + format_hex_block(ext.value, value_indent, layout.extension_wrap)


EXTENSION_REQUEST_OIDS = (oids.EXTENSION_REQUEST, oids.MS_EXTENSION_REQUEST)


def extension_request(raw: bytes) -> List[Extension]:
    """Decode one extension request attribute value (DER `Extensions`)."""
    return [
        Extension(
            oid=ext["extn_id"].dotted,
            critical=bool(ext["critical"].native),
            value=bytes(ext["extn_value"].contents),
        )
        for ext in _load(asn1_x509.Extensions, raw)
    ]


def requested_extensions(attributes: List[Attribute]) -> List[Extension]:
    """
    Extensions carried by the extension request attribute of a CSR.

    An undecodable attribute value contributes no extensions; the long form
    lists it under the attributes instead.
    """
    extensions = []
    for attr in attributes:
        if attr.oid not in EXTENSION_REQUEST_OIDS:
            continue
        for raw in attr.values:
            try:
                extensions += extension_request(raw)
            except Exception as e:
                logger.debug("attribute.decode_failed", oid=attr.oid, error=str(e))
    return extensions
