"""Document and screen coordinate types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class DocPos:
    """0-based ``(line, col)`` into the buffer; orders line-major."""

    line: int
    col: int

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


@dataclass(frozen=True, slots=True)
class ScreenPos:
    """1-based ``(x, y)`` cell on the visible text area."""

    x: int
    y: int


__all__ = ["DocPos", "ScreenPos"]
