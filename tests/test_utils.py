import json
import re
import time

import pytest

from swaprouter.bigmath import MAX_INT64, MAX_UINT64
from swaprouter.utils import (
    big_uint64,
    get_big_int,
    get_big_int_from_str,
    get_data,
    get_int_from_str,
    get_uint64,
    get_uint64_from_str,
    is_equal_ignore_case,
    now,
    now_milli,
    now_milli_str,
    now_str,
    to_json_string,
)


CONTENT = {"b": [1, 2], "a": "x"}


def test_to_json_string_compact_round_trip():
    text = to_json_string(CONTENT, False)
    assert " " not in text and "\n" not in text
    assert json.loads(text) == CONTENT
    assert text.index('"a"') < text.index('"b"')


def test_to_json_string_pretty_round_trip():
    text = to_json_string(CONTENT, True)
    assert "\n  " in text
    assert json.loads(text) == CONTENT


def test_to_json_string_escapes_html():
    assert to_json_string("<a>", False) == '"\\u003ca\\u003e"'


def test_to_json_string_unencodable_is_empty():
    assert to_json_string(object(), False) == ""
    assert to_json_string(float("nan"), True) == ""


def test_is_equal_ignore_case():
    assert is_equal_ignore_case("Hello", "hELLO")
    assert not is_equal_ignore_case("Hello", "Help!")
    assert not is_equal_ignore_case("a", "aa")


@pytest.mark.parametrize("value", [0, 1, 2**200, 2**256 - 1])
def test_big_int_from_str_round_trip(value):
    assert get_big_int_from_str(str(value)) == value
    assert get_big_int_from_str(hex(value)) == value


def test_big_int_from_str_empty_is_zero():
    assert get_big_int_from_str("") == 0


@pytest.mark.parametrize("text", ["abc", "0xgg", str(2**256)])
def test_big_int_from_str_errors(text):
    with pytest.raises(ValueError, match=re.escape("invalid 256 bit integer: " + text)):
        get_big_int_from_str(text)


def test_int_from_str():
    assert get_int_from_str("-42") == -42
    assert get_int_from_str(str(MAX_INT64)) == MAX_INT64
    with pytest.raises(ValueError, match=re.escape("invalid signed integer: 1.5")):
        get_int_from_str("1.5")
    with pytest.raises(ValueError):
        get_int_from_str(str(MAX_INT64 + 1))


def test_uint64_from_str():
    assert get_uint64_from_str(hex(MAX_UINT64)) == MAX_UINT64
    assert get_uint64_from_str(str(MAX_UINT64)) == MAX_UINT64
    too_big = str(MAX_UINT64 + 1)
    with pytest.raises(ValueError, match=re.escape("invalid unsigned 64 bit integer: " + too_big)):
        get_uint64_from_str(too_big)


def test_now_values_are_current():
    before = int(time.time())
    seconds = now()
    text = now_str()
    after = int(time.time())
    assert before <= seconds <= after
    assert before <= int(text) <= after


def test_now_milli_values_are_current():
    before = time.time_ns() // 1_000_000
    millis = now_milli()
    text = now_milli_str()
    after = time.time_ns() // 1_000_000
    assert before <= millis <= after
    assert before <= int(text) <= after


def test_get_data_pads_and_clips():
    data = b"\x01\x02\x03"
    result = get_data(data, 1, 4)
    assert len(result) == 4
    assert result[:2] == data[1:3]
    assert result[2:] == bytes(2)
    assert get_data(data, 0, len(data)) == data
    assert get_data(data, 10, 5) == bytes(5)


def test_big_uint64():
    assert big_uint64(5) == (5, False)
    assert big_uint64(MAX_UINT64) == (MAX_UINT64, False)
    assert big_uint64(MAX_UINT64 + 1) == (0, True)
    assert big_uint64(-1)[1] is True


def test_get_big_int():
    data = b"\x01\x00\xff"
    assert get_big_int(data, 0, len(data)) == int.from_bytes(data, "big")
    assert get_big_int(data, 1, 100) == int.from_bytes(data[1:], "big")
    assert get_big_int(data, len(data), 1) == 0
    assert get_big_int(data, 0, 0) == 0


def test_get_uint64():
    data = bytes([0xFF] * 9)
    assert get_uint64(data, 1, 8) == (MAX_UINT64, False)
    assert get_uint64(data, 0, 9)[1] is True