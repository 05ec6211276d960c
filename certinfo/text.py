"""Text reports for certificates and certificate requests.

Long forms follow the OpenSSL `-text` layout; short forms are a few lines
meant for listings. All four functions are pure: the same input always
gives the same string, and a structural problem raises `RenderError`
before any text is produced.
"""

from typing import List, Optional

from certinfo.common.errors import RenderError
from certinfo.common.logger import get_logger
from certinfo.common.models import Certificate, CertificateRequest, DistinguishedName, Extension
from certinfo.config import DEFAULT_LAYOUT, TextLayout
from certinfo.render import oids
from certinfo.render.extensions import alternative_names, basic_constraints_ca, requested_extensions
from certinfo.render.primitives import abbreviate, format_name, format_timestamp
from certinfo.render.sections import (
    algorithm_line,
    attributes_section,
    extensions_section,
    key_summary,
    name_line,
    public_key_section,
    serial_section,
    signature_section,
    unique_id_section,
    validity_section,
    version_section,
)


logger = get_logger(__name__)

SAN_OID = oids.ExtensionOID.SUBJECT_ALTERNATIVE_NAME.dotted_string
BASIC_CONSTRAINTS_OID = oids.ExtensionOID.BASIC_CONSTRAINTS.dotted_string


def _join(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


def _short_line(label: str, value: str) -> str:
    # Values start at column 15
    return f"  {label:<12} {value}".rstrip()


def _require_consistent_algorithms(cert: Certificate) -> None:
    """Signed-part and outer signature algorithms must agree."""
    if (cert.tbs_signature_algorithm is not None
            and cert.tbs_signature_algorithm.oid != cert.signature_algorithm.oid):
        raise RenderError(
            f"signature algorithm mismatch: {cert.tbs_signature_algorithm.oid} "
            f"in the signed part, {cert.signature_algorithm.oid} outside"
        )


def certificate_text(cert: Certificate, layout: Optional[TextLayout] = None) -> str:
    """
    Render the long, OpenSSL-style report of a certificate.

    Args:
        cert: Decoded certificate
        layout: Layout constants (defaults to the OpenSSL columns)

    Returns:
        Complete report, every line newline-terminated

    Raises:
        RenderError: If the public key is missing or empty, or the signed
            and outer signature algorithms differ
    """
    layout = layout or DEFAULT_LAYOUT
    _require_consistent_algorithms(cert)
    data = 2 * layout.indent_step
    lines = ["Certificate:", " " * layout.indent_step + "Data:"]
    lines += version_section(cert.version, data)
    lines += serial_section(cert.serial_number, data, layout)
    lines.append(algorithm_line(cert.tbs_signature_algorithm or cert.signature_algorithm, data))
    lines.append(name_line("Issuer", cert.issuer, data))
    lines += validity_section(cert.validity, data, layout)
    lines.append(name_line("Subject", cert.subject, data))
    lines += public_key_section(cert.public_key, data, layout)
    lines += unique_id_section("Issuer Unique ID", cert.issuer_unique_id, data, layout)
    lines += unique_id_section("Subject Unique ID", cert.subject_unique_id, data, layout)
    lines += extensions_section("X509v3 extensions", cert.extensions, data, layout)
    lines += signature_section(cert.signature_algorithm, cert.signature_value, layout)
    return _join(lines)


def certificate_request_text(csr: CertificateRequest, layout: Optional[TextLayout] = None) -> str:
    """
    Render the long, OpenSSL-style report of a certificate request.

    Raises:
        RenderError: If the public key is missing or empty
    """
    layout = layout or DEFAULT_LAYOUT
    data = 2 * layout.indent_step
    lines = ["Certificate Request:", " " * layout.indent_step + "Data:"]
    lines += version_section(csr.version, data)
    lines.append(name_line("Subject", csr.subject, data))
    lines += public_key_section(csr.public_key, data, layout)
    lines += attributes_section(csr.attributes, data, layout)
    lines += extensions_section("Requested Extensions", requested_extensions(csr.attributes), data, layout)
    lines += signature_section(csr.signature_algorithm, csr.signature_value, layout)
    return _join(lines)


def _san_values(extensions: List[Extension], common_name: Optional[str]) -> List[str]:
    """SAN values in listing order: DNS names other than the CN, IPs, emails, URIs."""
    names = []
    for ext in extensions:
        if ext.oid != SAN_OID:
            continue
        try:
            names += alternative_names(ext.value)
        except Exception as e:
            logger.debug("extension.decode_failed", oid=ext.oid, error=str(e))
    values = [text for kind, text in names if kind == "dns_name" and text != common_name]
    for wanted in ("ip_address", "rfc822_name", "uniform_resource_identifier"):
        values += [text for kind, text in names if kind == wanted]
    return values


def _subject_line(subject: DistinguishedName, extensions: List[Extension]) -> str:
    cn = subject.common_name
    head = cn if cn is not None else format_name(subject)
    items = [head] if head else []
    items += _san_values(extensions, cn)
    return _short_line("Subject:", ", ".join(items))


def _certificate_type(cert: Certificate) -> str:
    ext = cert.get_extension(BASIC_CONSTRAINTS_OID)
    if ext is None or not basic_constraints_ca(ext):
        return "TLS"
    if cert.issuer == cert.subject:
        return "Root CA"
    return "Intermediate CA"


def certificate_short_text(cert: Certificate) -> str:
    """
    Render a short summary of a certificate.

    Example:
        X.509v3 TLS Certificate (RSA 2048) [Serial: 1234...5678]
          Subject:     leaf.example.com, www.example.com
          Valid from:  Jan  1 00:00:00 2020 GMT
                  to:  Jan  1 00:00:00 2030 GMT

    Raises:
        RenderError: If the public key is missing or empty, or the signed
            and outer signature algorithms differ
    """
    _require_consistent_algorithms(cert)
    lines = [
        f"X.509v3 {_certificate_type(cert)} Certificate ({key_summary(cert.public_key)}) "
        f"[Serial: {abbreviate(str(cert.serial_number))}]",
        _subject_line(cert.subject, cert.extensions),
        _short_line("Valid from:", format_timestamp(cert.validity.not_before)),
        f"{'to:':>13}  {format_timestamp(cert.validity.not_after)}",
    ]
    return _join(lines)


def certificate_request_short_text(csr: CertificateRequest) -> str:
    """
    Render a short summary of a certificate request.

    Raises:
        RenderError: If the public key is missing or empty
    """
    lines = [
        f"X.509v3 Certificate Signing Request ({key_summary(csr.public_key)})",
        _subject_line(csr.subject, requested_extensions(csr.attributes)),
    ]
    return _join(lines)
