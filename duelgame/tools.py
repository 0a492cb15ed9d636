"""Size conversions, hard assertions and scope-exit callbacks."""

from __future__ import annotations

import inspect
from contextlib import contextmanager
from typing import Callable, Iterator


def kb(x: int) -> int:
    """Kilobytes to bytes."""
    return x * 1024


def mb(x: int) -> int:
    """Megabytes to bytes."""
    return kb(x) * 1024


def gb(x: int) -> int:
    """Gigabytes to bytes."""
    return mb(x) * 1024


def tb(x: int) -> int:
    """Terabytes to bytes."""
    return gb(x) * 1024


def bytes_to_kb(x: int) -> float:
    """Bytes to kilobytes."""
    return x / 1024.0


def bytes_to_mb(x: int) -> float:
    """Bytes to megabytes."""
    return bytes_to_kb(x) / 1024.0


def bytes_to_gb(x: int) -> float:
    """Bytes to gigabytes."""
    return bytes_to_mb(x) / 1024.0


class AssertionFailure(AssertionError):
    """A failed hard assertion, with the place it happened."""

    def __init__(self, expression: str, file_name: str, line_number: int, comment: str = "---"):
        self.expression = expression
        self.file_name = file_name
        self.line_number = line_number
        self.comment = comment
        super().__init__(
            "Assertion failed\n\n"
            f"File:\n{file_name}\n\n"
            f"Line:\n{line_number}\n\n"
            f"Expresion:\n{expression}\n\n"
            f"Comment:\n{comment}"
        )


def perma_assert(expression: object, comment: str = "---") -> None:
    """Raise AssertionFailure if ``expression`` is falsy, whatever the optimisation mode."""
    if expression:
        return
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    file_name = caller.f_code.co_filename if caller is not None else "<unknown>"
    line_number = caller.f_lineno if caller is not None else 0
    del frame, caller
    raise AssertionFailure(repr(expression), file_name, line_number, comment)


@contextmanager
def defer(func: Callable[[], object]) -> Iterator[None]:
    """Call ``func`` when the ``with`` block ends, even on an exception."""
    try:
        yield
    finally:
        func()