"""Hex encoding with a mandatory ``0x`` prefix.

Byte strings must have an even number of hex digits; an empty byte string
encodes as ``"0x"``. Integers are encoded with the fewest digits (no leading
zeros) and zero encodes as ``"0x0"``.
"""

from __future__ import annotations

__all__ = [
    "HEX_PREFIX",
    "HexDecodeError",
    "EmptyStringError",
    "InvalidHexError",
    "MissingPrefixError",
    "OddLengthError",
    "EmptyNumberError",
    "LeadingZeroError",
    "Uint64RangeError",
    "UintRangeError",
    "Big256RangeError",
    "decode",
    "encode",
    "decode_uint64",
    "encode_uint64",
    "decode_big",
    "encode_big",
    "has_0x_prefix",
    "decode_nibble",
]

HEX_PREFIX = "0x"
UINT_BITS = 64
MAX_BIG_HEX_LEN = 64
MAX_UINT64_HEX_LEN = 16
MAX_UINT64 = (1 << 64) - 1


class HexDecodeError(ValueError):
    """Base class of hex decoding errors; each subclass has a fixed message."""

    message = "hex decoding error"

    def __init__(self) -> None:
        super().__init__(self.message)


class EmptyStringError(HexDecodeError):
    message = "empty hex string"


class InvalidHexError(HexDecodeError):
    message = "invalid hex string"


class MissingPrefixError(HexDecodeError):
    message = "hex string without 0x prefix"


class OddLengthError(HexDecodeError):
    message = "hex string of odd length"


class EmptyNumberError(HexDecodeError):
    message = 'hex string "0x"'


class LeadingZeroError(HexDecodeError):
    message = "hex number with leading zero digits"


class Uint64RangeError(HexDecodeError):
    message = "hex number > 64 bits"


class UintRangeError(HexDecodeError):
    message = f"hex number > {UINT_BITS} bits"


class Big256RangeError(HexDecodeError):
    message = "hex number > 256 bits"


def has_0x_prefix(input: str) -> bool:
    """Return whether ``input`` starts with ``0x`` or ``0X``."""
    return len(input) >= 2 and input[0] == "0" and input[1] in "xX"


def decode_nibble(ch: str) -> int | None:
    """Return the value of a single hex digit, or ``None`` if it is not one."""
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "A" <= ch <= "F":
        return ord(ch) - ord("A") + 10
    if "a" <= ch <= "f":
        return ord(ch) - ord("a") + 10
    return None


def _decode_hex_digits(raw: str) -> bytes:
    """Decode unprefixed hex digits, reporting bad characters before bad length."""
    if any(decode_nibble(ch) is None for ch in raw):
        raise InvalidHexError()
    if len(raw) % 2:
        raise OddLengthError()
    return bytes.fromhex(raw)


def decode(input: str) -> bytes:
    """Decode a ``0x``-prefixed hex string into bytes."""
    if input == "":
        raise EmptyStringError()
    if not has_0x_prefix(input):
        raise MissingPrefixError()
    return _decode_hex_digits(input[2:])


def encode(b: bytes) -> str:
    """Encode bytes as a ``0x``-prefixed hex string."""
    return HEX_PREFIX + bytes(b).hex()


def _check_number(input: str) -> str:
    if input == "":
        raise EmptyStringError()
    if not has_0x_prefix(input):
        raise MissingPrefixError()
    raw = input[2:]
    if raw == "":
        raise EmptyNumberError()
    if len(raw) > 1 and raw[0] == "0":
        raise LeadingZeroError()
    return raw


def decode_uint64(input: str) -> int:
    """Decode a ``0x``-prefixed hex quantity that must fit in 64 bits."""
    raw = _check_number(input)
    value = 0
    for ch in raw:
        nibble = decode_nibble(ch)
        if nibble is None:
            raise InvalidHexError()
        value = value * 16 + nibble
        if value > MAX_UINT64:
            raise Uint64RangeError()
    return value


def encode_uint64(i: int) -> str:
    """Encode an unsigned 64-bit integer as a ``0x``-prefixed hex quantity."""
    if not 0 <= i <= MAX_UINT64:
        raise ValueError(f"value {i} is not an unsigned 64 bit integer")
    return f"{HEX_PREFIX}{i:x}"


def decode_big(input: str) -> int:
    """Decode a ``0x``-prefixed hex quantity of at most 256 bits."""
    raw = _check_number(input)
    if len(raw) > MAX_BIG_HEX_LEN:
        raise Big256RangeError()
    value = 0
    for ch in raw:
        nibble = decode_nibble(ch)
        if nibble is None:
            raise InvalidHexError()
        value = value * 16 + nibble
    return value


def encode_big(bigint: int) -> str:
    """Encode an integer as a ``0x``-prefixed hex quantity; negatives get a leading ``-``."""
    if bigint == 0:
        return "0x0"
    if bigint < 0:
        return f"-{HEX_PREFIX}{-bigint:x}"
    return f"{HEX_PREFIX}{bigint:x}"