"""Leaf formatters: serials, hex blocks, big integers, timestamps, names, OIDs."""

from datetime import datetime, timezone
from typing import List, Union

from certinfo.common.models import DistinguishedName
from certinfo.common.utils import colon_hex, int_to_bytes
from certinfo.render.oids import NAME_ATTRIBUTE_LABELS, OID_NAMES


MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def lookup_oid_name(oid: str) -> str:
    """Display name for an OID, or the dotted string itself."""
    return OID_NAMES.get(oid, oid)


def oid_label(oid: str) -> str:
    """Display name for an OID, or `OID.<dotted>` when it has none."""
    name = OID_NAMES.get(oid)
    if name is None:
        return f"OID.{oid}"
    return name


def format_serial(serial: Union[int, bytes]) -> str:
    """
    Render a serial number as colon-separated hex.

    Args:
        serial: Serial as an integer, or as the big-endian two's complement
            content octets of the DER INTEGER

    Returns:
        Hex of the magnitude; a sign padding `00` never shows up, negative
        serials are prefixed with "(Negative)"
    """
    if isinstance(serial, (bytes, bytearray)):
        serial = int.from_bytes(serial, byteorder="big", signed=True) if serial else 0
    prefix = "(Negative)" if serial < 0 else ""
    return prefix + colon_hex(int_to_bytes(serial))


def format_hex_block(data: bytes, indent: int, width: int) -> List[str]:
    """
    Split bytes into wrapped lines of colon hex.

    Every line is prefixed by `indent` spaces and, except the last one,
    ends with a colon. A length that is an exact multiple of `width`
    produces no trailing empty line.
    """
    pad = " " * indent
    lines = []
    for start in range(0, len(data), width):
        chunk = colon_hex(data[start:start + width])
        if start + width < len(data):
            chunk += ":"
        lines.append(pad + chunk)
    return lines


def format_int_block(n: int, indent: int, width: int) -> List[str]:
    """Hex block for a key component; `00` is prepended when the top bit is set."""
    raw = int_to_bytes(n)
    if raw[0] & 0x80:
        raw = b"\x00" + raw
    return format_hex_block(raw, indent, width)


def format_big_int(n: int) -> str:
    """Decimal with a hex annotation, e.g. `65537 (0x10001)` or `-5 (-0x5)`."""
    if n < 0:
        return f"{n} (-{-n:#x})"
    return f"{n} ({n:#x})"


def format_timestamp(t: datetime) -> str:
    """
    Calendar form used by OpenSSL: `Jan  2 15:04:05 2006 GMT`.

    Naive datetimes are taken as UTC. Month names come from a fixed table
    so the output never depends on the locale.
    """
    if t.tzinfo is not None:
        t = t.astimezone(timezone.utc)
    return (f"{MONTHS[t.month - 1]} {t.day:2d} "
            f"{t.hour:02d}:{t.minute:02d}:{t.second:02d} {t.year} GMT")


def format_name(dn: DistinguishedName) -> str:
    """`label=value` pairs in the order given, joined by `, `."""
    parts = []
    for attr in dn.attributes:
        label = NAME_ATTRIBUTE_LABELS.get(attr.oid, f"OID.{attr.oid}")
        parts.append(f"{label}={attr.value}")
    return ", ".join(parts)


def abbreviate(s: str) -> str:
    if len(s) <= 8:
        return s
    return s[:4] + "..." + s[-4:]
