"""Helpers for hex strings and byte padding."""

from __future__ import annotations

__all__ = [
    "to_hex",
    "from_hex",
    "has_hex_prefix",
    "is_hex_character",
    "is_upper_hex_character",
    "is_hex",
    "get_unprefixed_hex",
    "bytes_to_hex",
    "hex_to_bytes",
    "hex_to_bytes_fixed",
    "right_pad_bytes",
    "left_pad_bytes",
]

_HEX_CHARS = frozenset("0123456789abcdefABCDEF")


def _char(c: str | int) -> str:
    return chr(c) if isinstance(c, int) else c


def to_hex(b: bytes) -> str:
    """Return the hex form of b with a ``0x`` prefix."""
    return "0x" + bytes(b).hex()


def from_hex(s: str) -> bytes:
    """Return the bytes of a hex string with optional ``0x`` prefix.

    An odd number of digits is padded with a leading zero; decoding stops at
    the first invalid digit.
    """
    if len(s) > 1 and s[:2] in ("0x", "0X"):
        s = s[2:]
    if len(s) % 2 == 1:
        s = "0" + s
    return hex_to_bytes(s)


def has_hex_prefix(s: str) -> bool:
    """Return whether s begins with ``0x`` or ``0X``."""
    return len(s) >= 2 and s[0] == "0" and s[1] in "xX"


def is_hex_character(c: str | int) -> bool:
    """Return whether c is a hexadecimal digit."""
    return _char(c) in _HEX_CHARS


def is_upper_hex_character(c: str | int) -> bool:
    """Return whether c is an uppercase hexadecimal letter."""
    return "A" <= _char(c) <= "F"


def is_hex(s: str) -> bool:
    """Return whether s is an even-length string of hex digits."""
    return len(s) % 2 == 0 and all(is_hex_character(c) for c in s)


def get_unprefixed_hex(s: str) -> tuple[str, bool]:
    """Return the hex digits of s without prefix and whether any is uppercase.

    Raises ValueError if s is not an even-length (optionally prefixed) hex string.
    """
    if len(s) % 2 != 0:
        raise ValueError(f"not a hex string: {s!r}")
    if has_hex_prefix(s):
        s = s[2:]
    if not all(is_hex_character(c) for c in s):
        raise ValueError(f"not a hex string: {s!r}")
    return s, any(is_upper_hex_character(c) for c in s)


def bytes_to_hex(d: bytes) -> str:
    """Return the lowercase hex encoding of d, without prefix."""
    return bytes(d).hex()


def hex_to_bytes(s: str) -> bytes:
    """Decode hex digits, keeping the whole bytes read before any invalid digit."""
    out = bytearray()
    for pos in range(0, len(s) - 1, 2):
        pair = s[pos : pos + 2]
        if not (is_hex_character(pair[0]) and is_hex_character(pair[1])):
            break
        out.append(int(pair, 16))
    return bytes(out)


def hex_to_bytes_fixed(s: str, flen: int) -> bytes:
    """Decode hex digits into exactly flen bytes, cropping or zero-padding on the left."""
    h = hex_to_bytes(s)
    if len(h) >= flen:
        return h[len(h) - flen :]
    return bytes(flen - len(h)) + h


def right_pad_bytes(data: bytes, length: int) -> bytes:
    """Zero-pad data on the right up to length bytes."""
    if length <= len(data):
        return data
    return bytes(data) + bytes(length - len(data))


def left_pad_bytes(data: bytes, length: int) -> bytes:
    """Zero-pad data on the left up to length bytes."""
    if length <= len(data):
        return data
    return bytes(length - len(data)) + bytes(data)