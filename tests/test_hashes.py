import json

import pytest

from swaprouter.hashes import (
    EMPTY_HASH,
    HASH_LENGTH,
    Hash,
    UnprefixedHash,
    is_hex_hash,
    keccak256_hash,
)
from swaprouter.hexjson import UnmarshalTypeError
from swaprouter.hexutil import InvalidHexError, MissingPrefixError, OddLengthError


def test_from_bytes_pads_left():
    assert Hash.from_bytes(b"\x01").data == bytes(31) + b"\x01"


def test_from_bytes_crops_left():
    assert Hash.from_bytes(bytes(range(40))).data == bytes(range(8, 40))


def test_from_hex_lenient():
    assert Hash.from_hex("0x1") == Hash.from_bytes(b"\x01")
    assert Hash.from_hex("01") == Hash.from_bytes(b"\x01")


def test_int_round_trip():
    n = 2**255 + 7
    assert Hash.from_int(n).to_int() == n


def test_from_int_negative_uses_magnitude():
    assert Hash.from_int(-5) == Hash.from_int(5)


def test_text_round_trip():
    h = Hash.from_bytes(bytes(range(32)))
    text = h.to_text()
    assert text.startswith("0x")
    assert len(text) == 2 + 2 * HASH_LENGTH
    assert Hash.from_text(text) == h
    assert str(h) == h.hex()


def test_from_text_wrong_length():
    with pytest.raises(ValueError, match="hex string has length 4, want 64 for Hash"):
        Hash.from_text("0x1234")


def test_from_text_missing_prefix():
    with pytest.raises(MissingPrefixError):
        Hash.from_text("00" * 32)


def test_from_text_bad_digit():
    with pytest.raises(InvalidHexError):
        Hash.from_text("0x" + "zz" * 32)


def test_json_round_trip():
    h = Hash.from_int(12345)
    assert Hash.from_json(json.dumps(h.hex())) == h


def test_json_non_string():
    with pytest.raises(UnmarshalTypeError):
        Hash.from_json("null")


def test_json_bad_digit():
    with pytest.raises(UnmarshalTypeError):
        Hash.from_json(json.dumps("0x" + "zz" * 32))


def test_from_db():
    raw = bytes(range(32))
    assert Hash.from_db(raw).data == raw
    with pytest.raises(TypeError):
        Hash.from_db("not bytes")
    with pytest.raises(ValueError):
        Hash.from_db(b"\x00" * 31)


def test_terminal_string():
    h = Hash.from_bytes(bytes(range(32)))
    assert h.terminal_string() == "000102…1d1e1f"


def test_unprefixed_hash():
    h = UnprefixedHash.from_bytes(bytes(range(32)))
    text = h.to_text()
    assert not text.startswith("0x")
    assert len(text) == 64
    assert UnprefixedHash.from_text(text) == h
    assert UnprefixedHash.from_text("0x" + text) == h


def test_unprefixed_hash_odd_length():
    with pytest.raises(OddLengthError):
        UnprefixedHash.from_text("0x2")


def test_is_hex_hash():
    assert is_hex_hash("0x" + "ab" * 32)
    assert is_hex_hash("AB" * 32)
    assert not is_hex_hash("0x" + "ab" * 31)
    assert not is_hex_hash("0x" + "zz" * 32)


def test_keccak_empty():
    assert keccak256_hash().hex() == (
        "0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


def test_keccak_concatenates():
    assert keccak256_hash(b"ab", b"c") == keccak256_hash(b"abc")
    assert keccak256_hash(b"abc") != keccak256_hash(b"abd")


def test_empty_hash():
    assert EMPTY_HASH == Hash()
    assert EMPTY_HASH.to_int() == 0


def test_wrong_length_constructor():
    with pytest.raises(ValueError):
        Hash(b"\x00" * 5)