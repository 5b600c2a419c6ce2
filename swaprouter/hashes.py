"""Fixed-size 32-byte hashes and Keccak-256 hashing."""

from __future__ import annotations

from Crypto.Hash import keccak

from .bytesutil import from_hex, has_hex_prefix, is_hex
from .hexjson import (
    unmarshal_fixed_json,
    unmarshal_fixed_text,
    unmarshal_fixed_unprefixed_text,
)
from .hexutil import encode

__all__ = [
    "HASH_LENGTH",
    "EMPTY_HASH",
    "Hash",
    "UnprefixedHash",
    "is_hex_hash",
    "keccak256_hash",
]

HASH_LENGTH = 32


def _crop_left(b: bytes, length: int) -> bytes:
    """Fit b into length bytes, dropping or zero-padding on the left."""
    raw = bytes(b)
    if len(raw) > length:
        return raw[len(raw) - length :]
    return bytes(length - len(raw)) + raw


def _int_bytes(n: int) -> bytes:
    n = abs(n)
    return n.to_bytes((n.bit_length() + 7) // 8, "big")


class Hash:
    """A 32-byte hash value."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | None = None) -> None:
        raw = bytes(HASH_LENGTH) if data is None else bytes(data)
        if len(raw) != HASH_LENGTH:
            raise ValueError(
                f"{type(self).__name__} needs {HASH_LENGTH} bytes, got {len(raw)}"
            )
        self._data = raw

    @property
    def data(self) -> bytes:
        return self._data

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return HASH_LENGTH

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()!r})"

    def __str__(self) -> str:
        return self.hex()

    @classmethod
    def from_bytes(cls, b: bytes) -> "Hash":
        """Build a hash from b, cropping or zero-padding on the left."""
        return cls(_crop_left(b, HASH_LENGTH))

    @classmethod
    def from_int(cls, b: int) -> "Hash":
        """Build a hash from the big-endian bytes of |b|."""
        return cls.from_bytes(_int_bytes(b))

    @classmethod
    def from_hex(cls, s: str) -> "Hash":
        """Build a hash from lenient hex text (optional prefix, odd length allowed)."""
        return cls.from_bytes(from_hex(s))

    @classmethod
    def from_text(cls, input: str | bytes) -> "Hash":
        """Parse strict ``0x``-prefixed hex text of exactly 32 bytes."""
        return cls(unmarshal_fixed_text("Hash", input, HASH_LENGTH))

    @classmethod
    def from_json(cls, input: str | bytes) -> "Hash":
        """Parse a JSON string of ``0x``-prefixed hex of exactly 32 bytes."""
        return cls(unmarshal_fixed_json("Hash", input, HASH_LENGTH))

    @classmethod
    def from_db(cls, src: object) -> "Hash":
        """Build a hash from a raw database column value."""
        if not isinstance(src, (bytes, bytearray, memoryview)):
            raise TypeError(f"can't scan {type(src).__name__} into Hash")
        raw = bytes(src)
        if len(raw) != HASH_LENGTH:
            raise ValueError(
                f"can't scan bytes of len {len(raw)} into Hash, want {HASH_LENGTH}"
            )
        return cls(raw)

    def to_int(self) -> int:
        return int.from_bytes(self._data, "big")

    def hex(self) -> str:
        return encode(self._data)

    def terminal_string(self) -> str:
        """Return a shortened form for console output."""
        return f"{self._data[:3].hex()}…{self._data[29:].hex()}"

    def to_text(self) -> str:
        return self.hex()


class UnprefixedHash(Hash):
    """A hash whose text form has no ``0x`` prefix."""

    __slots__ = ()

    @classmethod
    def from_text(cls, input: str | bytes) -> "UnprefixedHash":
        """Parse hex text of exactly 32 bytes; the ``0x`` prefix is optional."""
        return cls(unmarshal_fixed_unprefixed_text("UnprefixedHash", input, HASH_LENGTH))

    def to_text(self) -> str:
        return self._data.hex()


EMPTY_HASH = Hash()


def is_hex_hash(s: str) -> bool:
    """Return whether s is 64 hex digits, with or without ``0x``."""
    if has_hex_prefix(s):
        s = s[2:]
    return len(s) == 2 * HASH_LENGTH and is_hex(s)


def keccak256_hash(*args: bytes) -> Hash:
    """Return the Keccak-256 hash of the concatenation of args."""
    hasher = keccak.new(digest_bits=256)
    for chunk in args:
        hasher.update(bytes(chunk))
    return Hash(hasher.digest())