import json

import pytest

from swaprouter.address import (
    Address,
    MixedcaseAddress,
    UnprefixedAddress,
    is_hex_address,
)
from swaprouter.hexjson import UnmarshalTypeError
from swaprouter.hexutil import MissingPrefixError

CHECKSUMMED = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]


@pytest.mark.parametrize("checksummed", CHECKSUMMED)
def test_checksum_hex(checksummed):
    address = Address.from_hex(checksummed.lower())
    assert address.hex() == checksummed
    assert address.lower_hex() == checksummed.lower()
    assert str(address) == checksummed


def test_from_bytes_pad_and_crop():
    assert Address.from_bytes(b"\x07").data == bytes(19) + b"\x07"
    assert Address.from_bytes(bytes(range(25))).data == bytes(range(5, 25))


def test_from_int_round_trip():
    address = Address.from_int(0xABCDEF)
    assert int.from_bytes(address.data, "big") == 0xABCDEF


def test_to_hash_left_pads():
    address = Address.from_bytes(bytes(range(1, 21)))
    assert address.to_hash().data == bytes(12) + address.data


def test_text_round_trip():
    address = Address.from_hex(CHECKSUMMED[0])
    assert address.to_text() == CHECKSUMMED[0].lower()
    assert Address.from_text(address.to_text()) == address


def test_from_text_errors():
    with pytest.raises(ValueError, match="want 40 for Address"):
        Address.from_text("0x1234")
    with pytest.raises(MissingPrefixError):
        Address.from_text("ab" * 20)


def test_json():
    address = Address.from_hex(CHECKSUMMED[1])
    assert Address.from_json(json.dumps(CHECKSUMMED[1])) == address
    with pytest.raises(UnmarshalTypeError):
        Address.from_json("10")
    with pytest.raises(UnmarshalTypeError):
        Address.from_json(json.dumps("0x" + "zz" * 20))


def test_from_db():
    raw = bytes(range(20))
    assert Address.from_db(raw).data == raw
    with pytest.raises(TypeError):
        Address.from_db(12)
    with pytest.raises(ValueError):
        Address.from_db(bytes(32))


def test_unprefixed_address():
    address = UnprefixedAddress.from_hex(CHECKSUMMED[2])
    assert address.to_text() == CHECKSUMMED[2][2:].lower()
    assert UnprefixedAddress.from_text(address.to_text()) == address
    assert UnprefixedAddress.from_text(CHECKSUMMED[2]) == address


def test_is_hex_address():
    assert is_hex_address(CHECKSUMMED[0])
    assert is_hex_address(CHECKSUMMED[0][2:])
    assert not is_hex_address(CHECKSUMMED[0][:-2])
    assert not is_hex_address("0x" + "gg" * 20)


def test_mixedcase_valid_checksum():
    mixed = MixedcaseAddress.from_string(CHECKSUMMED[3])
    assert mixed.valid_checksum()
    assert str(mixed) == CHECKSUMMED[3] + " [chksum ok]"
    assert mixed.address == Address.from_hex(CHECKSUMMED[3])


def test_mixedcase_invalid_checksum():
    lowered = CHECKSUMMED[3].lower()
    mixed = MixedcaseAddress.from_string(lowered)
    assert not mixed.valid_checksum()
    assert str(mixed) == lowered + " [chksum INVALID]"


def test_mixedcase_rejects_bad_string():
    with pytest.raises(ValueError, match="invalid address"):
        MixedcaseAddress.from_string("0x1234")


def test_mixedcase_from_address():
    address = Address.from_hex(CHECKSUMMED[0])
    mixed = MixedcaseAddress.from_address(address)
    assert mixed.original == CHECKSUMMED[0]
    assert mixed.valid_checksum()


def test_mixedcase_json():
    mixed = MixedcaseAddress.from_json(json.dumps(CHECKSUMMED[1]))
    assert mixed.original == CHECKSUMMED[1]
    assert json.loads(mixed.to_json()) == CHECKSUMMED[1]


def test_mixedcase_to_json_adds_prefix():
    mixed = MixedcaseAddress.from_string(CHECKSUMMED[1][2:])
    assert json.loads(mixed.to_json()) == "0x" + CHECKSUMMED[1][2:]