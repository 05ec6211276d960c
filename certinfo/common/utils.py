"""Byte and integer helpers shared across the package."""


def int_to_bytes(n: int) -> bytes:
    """Big-endian magnitude of n, at least one byte."""
    n = abs(n)
    return n.to_bytes(max(1, (n.bit_length() + 7) // 8), byteorder="big")


def colon_hex(data: bytes) -> str:
    """Lower-case hex with a colon between bytes."""
    return ":".join(f"{b:02x}" for b in data)
