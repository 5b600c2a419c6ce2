"""Human readable byte sizes."""

from __future__ import annotations

__all__ = ["StorageSize"]

_UNITS = (
    (1099511627776, "TiB"),
    (1073741824, "GiB"),
    (1048576, "MiB"),
    (1024, "KiB"),
)


class StorageSize(float):
    """A size in bytes that prints with a binary unit."""

    def _format(self, separator: str) -> str:
        for limit, unit in _UNITS:
            if self > limit:
                return f"{self / limit:.2f}{separator}{unit}"
        return f"{float(self):.2f}{separator}B"

    def __str__(self) -> str:
        return self._format(" ")

    def terminal_string(self) -> str:
        """Return the compact form used on the console."""
        return self._format("")