"""Whole-file reading and writing helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, os.PathLike]


def write_entire_file(name: PathLike, data: bytes) -> None:
    """Replace the contents of ``name`` with ``data``."""
    Path(name).write_bytes(bytes(data))


def append_to_file(name: PathLike, data: bytes) -> None:
    """Append ``data`` to ``name``, creating it if needed."""
    with open(name, "ab") as f:
        f.write(bytes(data))


def read_entire_file(name: PathLike) -> bytes:
    """Return the whole contents of ``name`` as bytes."""
    return Path(name).read_bytes()


def read_entire_text(name: PathLike) -> str:
    """Return the whole contents of ``name`` decoded as UTF-8."""
    return read_entire_file(name).decode("utf-8")


def get_file_size(name: PathLike) -> int:
    """Return the size of ``name`` in bytes, or 0 if it cannot be opened."""
    try:
        return os.path.getsize(name)
    except OSError:
        return 0