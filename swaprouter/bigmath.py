"""Integer helpers for 64- and 256-bit quantities."""

from __future__ import annotations

import re

__all__ = [
    "MAX_INT8",
    "MIN_INT8",
    "MAX_INT16",
    "MIN_INT16",
    "MAX_INT32",
    "MIN_INT32",
    "MAX_INT64",
    "MIN_INT64",
    "MAX_UINT8",
    "MAX_UINT16",
    "MAX_UINT32",
    "MAX_UINT64",
    "MAX_BIG256",
    "MAX_BIG63",
    "HexOrDecimal256",
    "HexOrDecimal64",
    "parse_big256",
    "parse_uint64",
    "parse_int",
    "big_pow",
    "big_max",
    "big_min",
    "first_bit_set",
    "padded_big_bytes",
    "read_bits",
    "big_endian_byte_at",
    "byte_at",
    "u256",
    "s256",
    "exp",
    "safe_sub",
    "safe_add",
    "safe_mul",
]

MAX_INT8 = (1 << 7) - 1
MIN_INT8 = -(1 << 7)
MAX_INT16 = (1 << 15) - 1
MIN_INT16 = -(1 << 15)
MAX_INT32 = (1 << 31) - 1
MIN_INT32 = -(1 << 31)
MAX_INT64 = (1 << 63) - 1
MIN_INT64 = -(1 << 63)
MAX_UINT8 = (1 << 8) - 1
MAX_UINT16 = (1 << 16) - 1
MAX_UINT32 = (1 << 32) - 1
MAX_UINT64 = (1 << 64) - 1

_TT255 = 1 << 255
_TT256 = 1 << 256
_TT256M1 = _TT256 - 1

MAX_BIG256 = _TT256M1
MAX_BIG63 = (1 << 63) - 1

_SIGNED_HEX = re.compile(r"[+-]?[0-9a-fA-F]+")
_SIGNED_DEC = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_HEX = re.compile(r"[0-9a-fA-F]+")
_UNSIGNED_DEC = re.compile(r"[0-9]+")


def parse_big256(s: str) -> int:
    """Parse a decimal or ``0x`` hex integer of at most 256 bits.

    Leading zeros are accepted and the empty string parses as zero.
    """
    if s == "":
        return 0
    if len(s) >= 2 and s[:2].lower() == "0x":
        digits, pattern, base = s[2:], _SIGNED_HEX, 16
    else:
        digits, pattern, base = s, _SIGNED_DEC, 10
    if pattern.fullmatch(digits) is None:
        raise ValueError(f"invalid 256 bit integer: {s}")
    value = int(digits, base)
    if abs(value).bit_length() > 256:
        raise ValueError(f"invalid 256 bit integer: {s}")
    return value


def parse_uint64(s: str) -> int:
    """Parse a decimal or ``0x`` hex unsigned 64-bit integer.

    Leading zeros are accepted and the empty string parses as zero.
    """
    if s == "":
        return 0
    if len(s) >= 2 and s[:2] in ("0x", "0X"):
        digits, pattern, base = s[2:], _UNSIGNED_HEX, 16
    else:
        digits, pattern, base = s, _UNSIGNED_DEC, 10
    if pattern.fullmatch(digits) is None:
        raise ValueError(f"invalid unsigned 64 bit integer: {s}")
    value = int(digits, base)
    if value > MAX_UINT64:
        raise ValueError(f"invalid unsigned 64 bit integer: {s}")
    return value


def parse_int(s: str) -> int:
    """Parse a signed 64-bit decimal integer."""
    if _SIGNED_DEC.fullmatch(s) is None:
        raise ValueError(f"invalid signed integer: {s}")
    value = int(s, 10)
    if not MIN_INT64 <= value <= MAX_INT64:
        raise ValueError(f"invalid signed integer: {s}")
    return value


class HexOrDecimal256(int):
    """A 256-bit integer read from hex or decimal text and written as hex."""

    @classmethod
    def from_text(cls, input: str | bytes) -> "HexOrDecimal256":
        text = input.decode() if isinstance(input, (bytes, bytearray)) else input
        try:
            return cls(parse_big256(text))
        except ValueError:
            raise ValueError(f"invalid hex or decimal integer {text!r}") from None

    def to_text(self) -> str:
        value = int(self)
        if value < 0:
            return f"-{-value:#x}"
        return f"{value:#x}"


class HexOrDecimal64(int):
    """An unsigned 64-bit integer read from hex or decimal text and written as hex."""

    @classmethod
    def from_text(cls, input: str | bytes) -> "HexOrDecimal64":
        text = input.decode() if isinstance(input, (bytes, bytearray)) else input
        try:
            return cls(parse_uint64(text))
        except ValueError:
            raise ValueError(f"invalid hex or decimal integer {text!r}") from None

    def to_text(self) -> str:
        return f"{int(self):#x}"


def big_pow(a: int, b: int) -> int:
    """Return ``a ** b``; a non-positive exponent gives 1."""
    if b <= 0:
        return 1
    return a**b


def big_max(x: int, y: int) -> int:
    """Return the larger of x and y (x when equal)."""
    return y if x < y else x


def big_min(x: int, y: int) -> int:
    """Return the smaller of x and y (x when equal)."""
    return y if x > y else x


def first_bit_set(v: int) -> int:
    """Return the index of the lowest set bit of v; 0 for zero."""
    if v == 0:
        return 0
    return (v & -v).bit_length() - 1


def read_bits(bigint: int, length: int) -> bytes:
    """Return the absolute value of bigint as ``length`` big-endian bytes.

    High bytes that do not fit are dropped.
    """
    value = abs(bigint) & ((1 << (8 * length)) - 1)
    return value.to_bytes(length, "big")


def padded_big_bytes(bigint: int, n: int) -> bytes:
    """Encode bigint big-endian, left-padded to at least n bytes."""
    magnitude = abs(bigint)
    if magnitude.bit_length() // 8 >= n:
        return magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")
    return read_bits(bigint, n)


def big_endian_byte_at(bigint: int, n: int) -> int:
    """Return byte n of the big-endian encoding, counting from the least significant."""
    return (abs(bigint) >> (8 * n)) & 0xFF


def byte_at(bigint: int, padlength: int, n: int) -> int:
    """Return byte n of bigint padded to padlength bytes, where n == 0 is the most significant."""
    if n >= padlength:
        return 0
    return big_endian_byte_at(bigint, padlength - 1 - n)


def u256(x: int) -> int:
    """Return x as a 256-bit two's complement value."""
    return x & _TT256M1


def s256(x: int) -> int:
    """Interpret a 256-bit value as a two's complement signed number."""
    if x < _TT255:
        return x
    return x - _TT256


def exp(base: int, exponent: int) -> int:
    """Return base ** |exponent| truncated to 256 bits."""
    return pow(base, abs(exponent), _TT256)


def safe_sub(x: int, y: int) -> tuple[int, bool]:
    """Return the 64-bit difference and whether it underflowed."""
    return (x - y) & MAX_UINT64, x < y


def safe_add(x: int, y: int) -> tuple[int, bool]:
    """Return the 64-bit sum and whether it overflowed."""
    return (x + y) & MAX_UINT64, y > MAX_UINT64 - x


def safe_mul(x: int, y: int) -> tuple[int, bool]:
    """Return the 64-bit product and whether it overflowed."""
    if x == 0 or y == 0:
        return 0, False
    return (x * y) & MAX_UINT64, y > MAX_UINT64 // x