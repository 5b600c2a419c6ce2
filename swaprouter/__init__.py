"""Hex, big-integer, hash, address, logging and key-value helpers for a swap router."""

__version__ = "0.1.0"

__all__ = [
    "address",
    "bigmath",
    "bigtext",
    "bytesutil",
    "hashes",
    "hexjson",
    "hexutil",
    "kvstore",
    "logger",
    "paths",
    "storagesize",
    "utils",
]