"""Assorted helpers: JSON text, integer parsing, clocks and byte slicing."""

from __future__ import annotations

import json
import time
from typing import Any

from .bigmath import MAX_UINT64, parse_big256, parse_int, parse_uint64
from .bytesutil import right_pad_bytes

__all__ = [
    "to_json_string",
    "is_equal_ignore_case",
    "get_big_int_from_str",
    "get_int_from_str",
    "get_uint64_from_str",
    "now",
    "now_str",
    "now_milli",
    "now_milli_str",
    "get_data",
    "big_uint64",
    "get_big_int",
    "get_uint64",
]

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def to_json_string(content: Any, pretty: bool = False) -> str:
    """Return content as JSON text, or an empty string if it cannot be encoded.

    Keys are sorted and HTML-sensitive characters are escaped.
    """
    try:
        if pretty:
            text = json.dumps(
                content, indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False
            )
        else:
            text = json.dumps(
                content,
                separators=(",", ":"),
                sort_keys=True,
                ensure_ascii=False,
                allow_nan=False,
            )
    except (TypeError, ValueError):
        return ""
    for char, escaped in _HTML_ESCAPES:
        text = text.replace(char, escaped)
    return text


def is_equal_ignore_case(s1: str, s2: str) -> bool:
    """Return whether s1 and s2 are equal when case is ignored."""
    if len(s1) != len(s2):
        return False
    return all(
        a == b or a.lower() == b.lower() or a.upper() == b.upper()
        for a, b in zip(s1, s2)
    )


def get_big_int_from_str(s: str) -> int:
    """Parse a decimal or ``0x`` hex integer of at most 256 bits."""
    try:
        return parse_big256(s)
    except ValueError:
        raise ValueError("invalid 256 bit integer: " + s) from None


def get_int_from_str(s: str) -> int:
    """Parse a signed decimal integer."""
    try:
        return parse_int(s)
    except ValueError:
        raise ValueError("invalid signed integer: " + s) from None


def get_uint64_from_str(s: str) -> int:
    """Parse a decimal or ``0x`` hex unsigned 64-bit integer."""
    try:
        return parse_uint64(s)
    except ValueError:
        raise ValueError("invalid unsigned 64 bit integer: " + s) from None


def now() -> int:
    """Return the current Unix time in seconds."""
    return int(time.time())


def now_str() -> str:
    """Return the current Unix time in seconds as decimal text."""
    return str(now())


def now_milli() -> int:
    """Return the current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def now_milli_str() -> str:
    """Return the current Unix time in milliseconds as decimal text."""
    return str(now_milli())


def get_data(data: bytes, start: int, size: int) -> bytes:
    """Return data[start:start+size] without running out of range, right-padded to size."""
    length = len(data)
    start = min(start, length)
    end = min(start + size, length)
    return right_pad_bytes(bytes(data[start:end]), size)


def big_uint64(v: int) -> tuple[int, bool]:
    """Return the low 64 bits of |v| and whether v does not fit in an unsigned 64-bit integer."""
    return abs(v) & MAX_UINT64, not 0 <= v <= MAX_UINT64


def get_big_int(data: bytes, start: int, size: int) -> int:
    """Return the big-endian integer in data[start:start+size], clipped to the data."""
    length = len(data)
    if length <= start or size == 0:
        return 0
    end = min(start + size, length)
    return int.from_bytes(bytes(data[start:end]), "big")


def get_uint64(data: bytes, start: int, size: int) -> tuple[int, bool]:
    """Return the integer in data[start:start+size] as 64 bits and an overflow flag."""
    return big_uint64(get_big_int(data, start, size))