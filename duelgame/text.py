"""Small string helpers: ASCII case conversion, bounded copies and splitting."""

from __future__ import annotations

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_TO_LOWER = str.maketrans(_UPPER, _LOWER)
_TO_UPPER = str.maketrans(_LOWER, _UPPER)


def _until_nul(source: str) -> str:
    """Return the part of ``source`` before the first NUL character."""
    return source.split("\0", 1)[0]


def to_lower(source: str) -> str:
    """Lower-case the ASCII letters of ``source``; other characters are kept."""
    return source.translate(_TO_LOWER)


def to_upper(source: str) -> str:
    """Upper-case the ASCII letters of ``source``; other characters are kept."""
    return source.translate(_TO_UPPER)


def find_char(source: str, c: str) -> bool:
    """Tell whether character ``c`` occurs in ``source`` before any NUL."""
    if c == "\0":
        return False
    return c in _until_nul(source)


def strlcpy(source: str, size: int) -> str:
    """Copy ``source`` into a buffer of ``size`` slots, keeping one for the terminator.

    The result holds at most ``size - 1`` characters.
    """
    if size < 1:
        raise ValueError("size must be at least 1")
    return _until_nul(source)[: size - 1]


def split(source: str, c: str) -> list[str]:
    """Split ``source`` on ``c``, dropping empty pieces."""
    return [piece for piece in _until_nul(source).split(c) if piece]