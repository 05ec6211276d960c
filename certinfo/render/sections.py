"""Section assemblers for the long-form reports.

Each function returns the lines of one section, already indented, without
trailing newlines. The renderers in `certinfo.text` only put them in order.
"""

from typing import Callable, Dict, List, Optional, Tuple

from asn1crypto import core, keys

from certinfo.common.asn1 import attribute_text
from certinfo.common.errors import RenderError
from certinfo.common.logger import get_logger
from certinfo.common.models import (
    AlgorithmIdentifier,
    Attribute,
    DistinguishedName,
    Extension,
    PublicKeyInfo,
    Validity,
)
from certinfo.common.utils import colon_hex
from certinfo.config import DEFAULT_LAYOUT, TextLayout
from certinfo.render import oids
from certinfo.render.extensions import EXTENSION_REQUEST_OIDS, extension_request, render_extension
from certinfo.render.primitives import (
    format_big_int,
    format_hex_block,
    format_int_block,
    format_name,
    format_serial,
    format_timestamp,
    lookup_oid_name,
    oid_label,
)


logger = get_logger(__name__)

KeyRenderer = Callable[[PublicKeyInfo, int, TextLayout], List[str]]

# Serials that fit a signed 64-bit integer print in decimal, like OpenSSL
_SHORT_SERIAL_BITS = 63


def version_section(version: int, indent: int = 8) -> List[str]:
    return [f"{' ' * indent}Version: {version} ({max(version - 1, 0):#x})"]


def serial_section(serial: int, indent: int = 8, layout: TextLayout = DEFAULT_LAYOUT) -> List[str]:
    pad = " " * indent
    if serial.bit_length() <= _SHORT_SERIAL_BITS:
        return [f"{pad}Serial Number: {format_big_int(serial)}"]
    return [f"{pad}Serial Number:", " " * (indent + layout.indent_step) + format_serial(serial)]


def algorithm_line(algorithm: AlgorithmIdentifier, indent: int) -> str:
    return f"{' ' * indent}Signature Algorithm: {lookup_oid_name(algorithm.oid)}"


def name_line(label: str, dn: DistinguishedName, indent: int = 8) -> str:
    text = format_name(dn)
    line = f"{' ' * indent}{label}:"
    return f"{line} {text}" if text else line


def validity_section(validity: Validity, indent: int = 8, layout: TextLayout = DEFAULT_LAYOUT) -> List[str]:
    inner = " " * (indent + layout.indent_step)
    return [
        " " * indent + "Validity",
        f"{inner}Not Before: {format_timestamp(validity.not_before)}",
        f"{inner}Not After : {format_timestamp(validity.not_after)}",
    ]


def unique_id_section(label: str, unique_id: Optional[bytes], indent: int = 8,
                      layout: TextLayout = DEFAULT_LAYOUT) -> List[str]:
    if not unique_id:
        return []
    return [f"{' ' * indent}{label}:"] + format_hex_block(
        unique_id, indent + layout.indent_step, layout.key_wrap)


def _rsa_numbers(pk: PublicKeyInfo) -> Tuple[int, int]:
    key = keys.RSAPublicKey.load(pk.key_bytes, strict=True)
    return key["modulus"].native, key["public_exponent"].native


def _ec_curve(pk: PublicKeyInfo) -> Optional[str]:
    """Named curve OID, or None for implicit/explicit parameters."""
    if not pk.algorithm.parameters:
        return None
    params = keys.ECDomainParameters.load(pk.algorithm.parameters, strict=True)
    if params.name != "named":
        return None
    return params.chosen.dotted


def _ec_bits(curve: Optional[str], point: bytes) -> int:
    if curve in oids.CURVE_PARAMETERS:
        return oids.CURVE_PARAMETERS[curve][1]
    if point[:1] in (b"\x02", b"\x03"):
        return (len(point) - 1) * 8
    return (len(point) - 1) // 2 * 8


def _dsa_numbers(pk: PublicKeyInfo) -> Tuple[int, int, int, int]:
    params = keys.DSAParams.load(pk.algorithm.parameters or b"", strict=True)
    y = core.Integer.load(pk.key_bytes, strict=True).native
    return y, params["p"].native, params["q"].native, params["g"].native


def _rsa_lines(pk: PublicKeyInfo, indent: int, layout: TextLayout) -> List[str]:
    modulus, exponent = _rsa_numbers(pk)
    pad = " " * indent
    block = indent + layout.indent_step
    return (
        [f"{pad}Public-Key: ({modulus.bit_length()} bit)", f"{pad}Modulus:"]
        + format_int_block(modulus, block, layout.key_wrap)
        + [f"{pad}Exponent: {format_big_int(exponent)}"]
    )


def _ec_lines(pk: PublicKeyInfo, indent: int, layout: TextLayout) -> List[str]:
    curve = _ec_curve(pk)
    pad = " " * indent
    lines = [f"{pad}Public-Key: ({_ec_bits(curve, pk.key_bytes)} bit)", f"{pad}pub:"]
    lines += format_hex_block(pk.key_bytes, indent + layout.indent_step, layout.key_wrap)
    if curve is not None:
        lines.append(f"{pad}ASN1 OID: {lookup_oid_name(curve)}")
        nist = oids.CURVE_PARAMETERS.get(curve, (None, 0))[0]
        if nist:
            lines.append(f"{pad}NIST CURVE: {nist}")
    return lines


def _dsa_lines(pk: PublicKeyInfo, indent: int, layout: TextLayout) -> List[str]:
    y, p, q, g = _dsa_numbers(pk)
    pad = " " * indent
    block = indent + layout.indent_step
    lines = [f"{pad}Public-Key: ({p.bit_length()} bit)"]
    for label, value in (("pub", y), ("P", p), ("Q", q), ("G", g)):
        lines.append(f"{pad}{label}:")
        lines += format_int_block(value, block, layout.key_wrap)
    return lines


def _raw_key_lines(name: str) -> KeyRenderer:
    def render(pk: PublicKeyInfo, indent: int, layout: TextLayout) -> List[str]:
        pad = " " * indent
        return [f"{pad}{name} Public-Key:", f"{pad}pub:"] + format_hex_block(
            pk.key_bytes, indent + layout.indent_step, layout.key_wrap)
    return render


KEY_RENDERERS: Dict[str, KeyRenderer] = {
    oids.RSA_ENCRYPTION: _rsa_lines,
    oids.RSASSA_PSS: _rsa_lines,
    oids.EC_PUBLIC_KEY: _ec_lines,
    oids.DSA: _dsa_lines,
    oids.ED25519: _raw_key_lines("ED25519"),
    oids.ED448: _raw_key_lines("ED448"),
    oids.X25519: _raw_key_lines("X25519"),
    oids.X448: _raw_key_lines("X448"),
}


def require_public_key(pk: Optional[PublicKeyInfo]) -> PublicKeyInfo:
    """
    Check the structural minimum for a public key.

    Raises:
        RenderError: If the key is missing or carries no key bytes
    """
    if pk is None:
        raise RenderError("public key is missing")
    if not pk.key_bytes:
        raise RenderError(f"public key ({lookup_oid_name(pk.algorithm.oid)}) has no key bytes")
    return pk


def public_key_section(pk: Optional[PublicKeyInfo], indent: int = 8,
                       layout: TextLayout = DEFAULT_LAYOUT) -> List[str]:
    """
    Subject Public Key Info section.

    Args:
        pk: Public key of the certificate or request
        indent: Column of the section header
        layout: Layout constants

    Returns:
        Section lines

    Raises:
        RenderError: If the key is missing or empty
    """
    pk = require_public_key(pk)
    step = layout.indent_step
    algorithm_indent = indent + step
    value_indent = algorithm_indent + step
    lines = [
        " " * indent + "Subject Public Key Info:",
        f"{' ' * algorithm_indent}Public Key Algorithm: {lookup_oid_name(pk.algorithm.oid)}",
    ]

    renderer = KEY_RENDERERS.get(pk.algorithm.oid)
    if renderer is None:
        note = "Unsupported public key algorithm"
    else:
        try:
            return lines + renderer(pk, value_indent, layout)
        except Exception as e:
            logger.debug("public_key.decode_failed", oid=pk.algorithm.oid, error=str(e))
            note = "Unable to decode public key"
    return lines + [" " * value_indent + note] + format_hex_block(
        pk.key_bytes, value_indent + step, layout.key_wrap)


def key_summary(pk: Optional[PublicKeyInfo]) -> str:
    """Short key description: `RSA 2048`, `ECDSA P-256`, `Ed25519`, ..."""
    pk = require_public_key(pk)
    oid = pk.algorithm.oid
    try:
        if oid in (oids.RSA_ENCRYPTION, oids.RSASSA_PSS):
            return f"RSA {_rsa_numbers(pk)[0].bit_length()}"
        if oid == oids.EC_PUBLIC_KEY:
            curve = _ec_curve(pk)
            if curve is None:
                return "ECDSA"
            nist = oids.CURVE_PARAMETERS.get(curve, (None, 0))[0]
            return f"ECDSA {nist or lookup_oid_name(curve)}"
        if oid == oids.DSA:
            return f"DSA {_dsa_numbers(pk)[1].bit_length()}"
    except Exception as e:
        logger.debug("public_key.decode_failed", oid=oid, error=str(e))
        return lookup_oid_name(oid)
    if oid == oids.ED25519:
        return "Ed25519"
    if oid == oids.ED448:
        return "Ed448"
    return lookup_oid_name(oid)


def extensions_section(title: str, extensions: List[Extension], indent: int = 8,
                       layout: TextLayout = DEFAULT_LAYOUT) -> List[str]:
    """Titled block of extensions; empty when there are none."""
    if not extensions:
        return []
    lines = [f"{' ' * indent}{title}:"]
    for ext in extensions:
        lines += render_extension(ext, indent + layout.indent_step, layout)
    return lines


def _attribute_value(raw: bytes) -> str:
    try:
        return attribute_text(core.load(raw, strict=True))
    except ValueError:
        return colon_hex(raw)


def _undecodable_request_lines(attr: Attribute, indent: int, layout: TextLayout) -> List[str]:
    """Extension request values that do not decode, as labelled hex dumps."""
    lines = []
    for raw in attr.values:
        try:
            extension_request(raw)
        except Exception:
            lines.append(f"{' ' * indent}{oid_label(attr.oid)}:")
            lines += format_hex_block(raw, indent + layout.indent_step, layout.extension_wrap)
    return lines


def attributes_section(attributes: List[Attribute], indent: int = 8,
                       layout: TextLayout = DEFAULT_LAYOUT) -> List[str]:
    """
    CSR attributes block.

    Decodable extension requests are left to the Requested Extensions
    section; any value that fails to decode is dumped here instead.
    """
    attr_indent = indent + layout.indent_step
    pad = " " * attr_indent
    lines = []
    for attr in attributes:
        if attr.oid in EXTENSION_REQUEST_OIDS:
            lines += _undecodable_request_lines(attr, attr_indent, layout)
            continue
        values = ", ".join(_attribute_value(raw) for raw in attr.values)
        lines.append(f"{pad}{oid_label(attr.oid)}: {values}".rstrip())
    if not lines:
        return []
    return [f"{' ' * indent}Attributes:"] + lines


def signature_section(algorithm: AlgorithmIdentifier, signature: bytes,
                      layout: TextLayout = DEFAULT_LAYOUT) -> List[str]:
    return [algorithm_line(algorithm, layout.indent_step)] + format_hex_block(
        signature, layout.signature_indent, layout.signature_wrap)
