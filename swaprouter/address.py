"""20-byte account addresses with checksummed hex forms."""

from __future__ import annotations

import json
from dataclasses import dataclass

from .bytesutil import from_hex, has_hex_prefix, is_hex
from .hashes import Hash, keccak256_hash
from .hexjson import (
    unmarshal_fixed_json,
    unmarshal_fixed_text,
    unmarshal_fixed_unprefixed_text,
)

__all__ = [
    "ADDRESS_LENGTH",
    "Address",
    "UnprefixedAddress",
    "MixedcaseAddress",
    "is_hex_address",
]

ADDRESS_LENGTH = 20


def _crop_left(b: bytes, length: int) -> bytes:
    raw = bytes(b)
    if len(raw) > length:
        return raw[len(raw) - length :]
    return bytes(length - len(raw)) + raw


def is_hex_address(s: str) -> bool:
    """Return whether s is 40 hex digits, with or without ``0x``."""
    if has_hex_prefix(s):
        s = s[2:]
    return len(s) == 2 * ADDRESS_LENGTH and is_hex(s)


class Address:
    """A 20-byte account address."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | None = None) -> None:
        raw = bytes(ADDRESS_LENGTH) if data is None else bytes(data)
        if len(raw) != ADDRESS_LENGTH:
            raise ValueError(
                f"{type(self).__name__} needs {ADDRESS_LENGTH} bytes, got {len(raw)}"
            )
        self._data = raw

    @property
    def data(self) -> bytes:
        return self._data

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return ADDRESS_LENGTH

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
    def from_bytes(cls, b: bytes) -> "Address":
        """Build an address from b, cropping or zero-padding on the left."""
        return cls(_crop_left(b, ADDRESS_LENGTH))

    @classmethod
    def from_int(cls, b: int) -> "Address":
        """Build an address from the big-endian bytes of |b|."""
        n = abs(b)
        return cls.from_bytes(n.to_bytes((n.bit_length() + 7) // 8, "big"))

    @classmethod
    def from_hex(cls, s: str) -> "Address":
        """Build an address from lenient hex text."""
        return cls.from_bytes(from_hex(s))

    @classmethod
    def from_text(cls, input: str | bytes) -> "Address":
        """Parse strict ``0x``-prefixed hex text of exactly 20 bytes."""
        return cls(unmarshal_fixed_text("Address", input, ADDRESS_LENGTH))

    @classmethod
    def from_json(cls, input: str | bytes) -> "Address":
        """Parse a JSON string of ``0x``-prefixed hex of exactly 20 bytes."""
        return cls(unmarshal_fixed_json("Address", input, ADDRESS_LENGTH))

    @classmethod
    def from_db(cls, src: object) -> "Address":
        """Build an address from a raw database column value."""
        if not isinstance(src, (bytes, bytearray, memoryview)):
            raise TypeError(f"can't scan {type(src).__name__} into Address")
        raw = bytes(src)
        if len(raw) != ADDRESS_LENGTH:
            raise ValueError(
                f"can't scan bytes of len {len(raw)} into Address, want {ADDRESS_LENGTH}"
            )
        return cls(raw)

    def hex(self) -> str:
        """Return the mixed-case checksummed hex form."""
        unchecksummed = self._data.hex()
        digest = keccak256_hash(unchecksummed.encode("ascii")).data
        chars = []
        for pos, ch in enumerate(unchecksummed):
            byte = digest[pos // 2]
            nibble = byte >> 4 if pos % 2 == 0 else byte & 0xF
            chars.append(ch.upper() if ch > "9" and nibble > 7 else ch)
        return "0x" + "".join(chars)

    def lower_hex(self) -> str:
        return "0x" + self._data.hex()

    def to_hash(self) -> Hash:
        """Return the address left-padded with zeros to a hash."""
        return Hash.from_bytes(self._data)

    def to_text(self) -> str:
        return self.lower_hex()


class UnprefixedAddress(Address):
    """An address whose text form has no ``0x`` prefix."""

    __slots__ = ()

    @classmethod
    def from_text(cls, input: str | bytes) -> "UnprefixedAddress":
        """Parse hex text of exactly 20 bytes; the ``0x`` prefix is optional."""
        return cls(
            unmarshal_fixed_unprefixed_text("UnprefixedAddress", input, ADDRESS_LENGTH)
        )

    def to_text(self) -> str:
        return self._data.hex()


@dataclass(frozen=True)
class MixedcaseAddress:
    """An address together with the original, possibly checksummed, string."""

    address: Address
    original: str

    @classmethod
    def from_address(cls, address: Address) -> "MixedcaseAddress":
        return cls(address, address.hex())

    @classmethod
    def from_string(cls, hexaddr: str) -> "MixedcaseAddress":
        if not is_hex_address(hexaddr):
            raise ValueError("invalid address")
        return cls(Address.from_bytes(from_hex(hexaddr)), hexaddr)

    @classmethod
    def from_json(cls, input: str | bytes) -> "MixedcaseAddress":
        address = Address.from_json(input)
        return cls(address, json.loads(input))

    def to_json(self) -> str:
        body = self.original[2:] if self.original[:2] in ("0x", "0X") else self.original
        return json.dumps(f"0x{body}")

    def valid_checksum(self) -> bool:
        return self.original == self.address.hex()

    def __str__(self) -> str:
        if self.valid_checksum():
            return f"{self.original} [chksum ok]"
        return f"{self.original} [chksum INVALID]"