"""File system path helpers."""

from __future__ import annotations

import os
import platform
import sys

__all__ = [
    "make_name",
    "file_exist",
    "absolute_path",
    "execute_dir",
    "current_dir",
]


def make_name(name: str, version: str) -> str:
    """Return ``name/vVERSION/PLATFORM/RUNTIME`` identifying this node."""
    return f"{name}/v{version}/{sys.platform}/python{platform.python_version()}"


def file_exist(file_path: str) -> bool:
    """Return False only when nothing exists at file_path."""
    try:
        os.stat(file_path)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def absolute_path(datadir: str, filename: str) -> str:
    """Return filename if absolute, otherwise datadir joined with filename."""
    if os.path.isabs(filename):
        return filename
    joined = os.path.join(datadir, filename)
    return os.path.normpath(joined) if joined else ""


def execute_dir() -> str:
    """Return the absolute directory of the running program."""
    return os.path.abspath(os.path.dirname(sys.argv[0]))


def current_dir() -> str:
    """Return the current working directory."""
    return os.getcwd()