"""Decimal text encoding of arbitrary-size integers."""

from __future__ import annotations

import re

__all__ = ["marshal_big_int", "unmarshal_big_int"]

_NUMBER = re.compile(r"([+-]?)([0-9A-Za-z_]+)")


def marshal_big_int(i: int | None) -> str:
    """Return the decimal text of i; ``None`` is written as ``<nil>``."""
    if i is None:
        return "<nil>"
    return str(int(i))


def unmarshal_big_int(s: str) -> int:
    """Parse an integer whose base is given by its prefix.

    ``0x`` means hex, ``0b`` binary, ``0o`` or a bare leading ``0`` octal,
    otherwise decimal. Underscores may separate digits.
    """
    match = _NUMBER.fullmatch(s) if s.isascii() else None
    if match is None:
        raise ValueError(f"cannot unmarshal {s!r} into an integer")
    sign, body = match.groups()
    lowered = body.lower()
    if (
        len(body) > 1
        and body[0] == "0"
        and not lowered.startswith(("0x", "0b", "0o"))
        and body.strip("0_") != ""
    ):
        body = "0o" + body[1:]
    try:
        value = int(body, 0)
    except ValueError:
        raise ValueError(f"cannot unmarshal {s!r} into an integer") from None
    return -value if sign == "-" else value