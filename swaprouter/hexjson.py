"""Text and JSON forms of ``0x``-prefixed hex values.

Byte strings, 256-bit integers and unsigned integers are written as JSON
strings with a ``0x`` prefix. An empty text form decodes to the empty or zero
value. When a JSON value is not a string, or its contents are not valid hex,
decoding raises :class:`UnmarshalTypeError`.
"""

from __future__ import annotations

import json

from .hexutil import (
    MAX_BIG_HEX_LEN,
    MAX_UINT64,
    MAX_UINT64_HEX_LEN,
    Big256RangeError,
    EmptyNumberError,
    HexDecodeError,
    InvalidHexError,
    LeadingZeroError,
    MissingPrefixError,
    OddLengthError,
    Uint64RangeError,
    UintRangeError,
    decode_nibble,
    encode,
    encode_big,
    encode_uint64,
    has_0x_prefix,
)

__all__ = [
    "UnmarshalTypeError",
    "HexBytes",
    "HexBig",
    "HexUint64",
    "HexUint",
    "unmarshal_fixed_text",
    "unmarshal_fixed_unprefixed_text",
    "unmarshal_fixed_json",
]

_MAX_UINT = MAX_UINT64
_JSON_WHITESPACE = " \t\n\r"


class UnmarshalTypeError(ValueError):
    """A JSON value that cannot be decoded into the requested hex type."""

    def __init__(self, value: str, type_name: str) -> None:
        super().__init__(f"cannot unmarshal {value} into value of type {type_name}")
        self.value = value
        self.type_name = type_name


def _as_text(input: str | bytes | bytearray) -> str:
    if isinstance(input, (bytes, bytearray)):
        return bytes(input).decode()
    return input


def _check_text(text: str, want_prefix: bool) -> str:
    if text == "":
        return ""
    if has_0x_prefix(text):
        text = text[2:]
    elif want_prefix:
        raise MissingPrefixError()
    if len(text) % 2:
        raise OddLengthError()
    return text


def _check_number_text(text: str) -> str:
    if text == "":
        return ""
    if not has_0x_prefix(text):
        raise MissingPrefixError()
    raw = text[2:]
    if raw == "":
        raise EmptyNumberError()
    if len(raw) > 1 and raw[0] == "0":
        raise LeadingZeroError()
    return raw


def _decode_digits(raw: str) -> bytes:
    if any(decode_nibble(ch) is None for ch in raw):
        raise InvalidHexError()
    return bytes.fromhex(raw)


def _parse_nibbles(raw: str) -> int:
    value = 0
    for ch in raw:
        nibble = decode_nibble(ch)
        if nibble is None:
            raise InvalidHexError()
        value = value * 16 + nibble
    return value


def _json_string_body(input: str | bytes | bytearray, type_name: str) -> str:
    """Validate JSON text and return the raw contents of a string literal."""
    text = _as_text(input).strip(_JSON_WHITESPACE)
    json.loads(text)  # raises json.JSONDecodeError on malformed input
    if not (len(text) >= 2 and text[0] == '"' and text[-1] == '"'):
        raise UnmarshalTypeError("non-string", type_name)
    return text[1:-1]


def _wrap_type_error(func, body: str, type_name: str):
    try:
        return func(body)
    except HexDecodeError as err:
        raise UnmarshalTypeError(str(err), type_name) from err


def _fixed(typname: str, raw: str, size: int) -> bytes:
    if len(raw) // 2 != size:
        raise ValueError(
            f"hex string has length {len(raw)}, want {size * 2} for {typname}"
        )
    return _decode_digits(raw)


def unmarshal_fixed_text(typname: str, input: str | bytes, size: int) -> bytes:
    """Decode ``0x``-prefixed hex text that must hold exactly ``size`` bytes."""
    raw = _check_text(_as_text(input), want_prefix=True)
    return _fixed(typname, raw, size)


def unmarshal_fixed_unprefixed_text(typname: str, input: str | bytes, size: int) -> bytes:
    """Decode hex text with an optional ``0x`` prefix holding exactly ``size`` bytes."""
    raw = _check_text(_as_text(input), want_prefix=False)
    return _fixed(typname, raw, size)


def unmarshal_fixed_json(typname: str, input: str | bytes, size: int) -> bytes:
    """Decode a JSON string of ``0x``-prefixed hex holding exactly ``size`` bytes."""
    body = _json_string_body(input, typname)
    return _wrap_type_error(
        lambda text: unmarshal_fixed_text(typname, text, size), body, typname
    )


class HexBytes(bytes):
    """Bytes whose text form is ``0x``-prefixed hex; empty bytes are ``"0x"``."""

    def to_text(self) -> str:
        return encode(self)

    def to_json(self) -> str:
        return json.dumps(self.to_text())

    def __str__(self) -> str:
        return encode(self)

    def __repr__(self) -> str:
        return f"HexBytes({self.to_text()!r})"

    @classmethod
    def from_text(cls, input: str | bytes) -> "HexBytes":
        raw = _check_text(_as_text(input), want_prefix=True)
        return cls(_decode_digits(raw))

    @classmethod
    def from_json(cls, input: str | bytes) -> "HexBytes":
        body = _json_string_body(input, cls.__name__)
        return _wrap_type_error(cls.from_text, body, cls.__name__)


class HexBig(int):
    """An integer of at most 256 bits whose text form is a ``0x`` hex quantity."""

    def to_text(self) -> str:
        return encode_big(int(self))

    def to_json(self) -> str:
        return json.dumps(self.to_text())

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"HexBig({self.to_text()!r})"

    @classmethod
    def from_text(cls, input: str | bytes) -> "HexBig":
        raw = _check_number_text(_as_text(input))
        if len(raw) > MAX_BIG_HEX_LEN:
            raise Big256RangeError()
        return cls(_parse_nibbles(raw))

    @classmethod
    def from_json(cls, input: str | bytes) -> "HexBig":
        body = _json_string_body(input, cls.__name__)
        return _wrap_type_error(cls.from_text, body, cls.__name__)


class HexUint64(int):
    """An unsigned 64-bit integer whose text form is a ``0x`` hex quantity."""

    _limit = MAX_UINT64

    def __new__(cls, value: int = 0):
        if not 0 <= int(value) <= cls._limit:
            raise ValueError(f"value {value} out of range for {cls.__name__}")
        return super().__new__(cls, value)

    def to_text(self) -> str:
        return encode_uint64(int(self))

    def to_json(self) -> str:
        return json.dumps(self.to_text())

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_text()!r})"

    @classmethod
    def from_text(cls, input: str | bytes) -> "HexUint64":
        raw = _check_number_text(_as_text(input))
        if len(raw) > MAX_UINT64_HEX_LEN:
            raise Uint64RangeError()
        return cls(_parse_nibbles(raw))

    @classmethod
    def from_json(cls, input: str | bytes) -> "HexUint64":
        body = _json_string_body(input, cls.__name__)
        return _wrap_type_error(cls.from_text, body, cls.__name__)


class HexUint(HexUint64):
    """A machine-sized unsigned integer whose text form is a ``0x`` hex quantity."""

    _limit = _MAX_UINT

    def to_text(self) -> str:
        return encode_uint64(int(self))

    def to_json(self) -> str:
        return json.dumps(self.to_text())

    @classmethod
    def from_text(cls, input: str | bytes) -> "HexUint":
        try:
            value = HexUint64.from_text(input)
        except Uint64RangeError:
            raise UintRangeError() from None
        if value > _MAX_UINT:
            raise UintRangeError()
        return cls(int(value))

    @classmethod
    def from_json(cls, input: str | bytes) -> "HexUint":
        body = _json_string_body(input, cls.__name__)
        return _wrap_type_error(cls.from_text, body, cls.__name__)