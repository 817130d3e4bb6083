"""Visible window over buffer line indices."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Viewport:
    """Half-open window ``[lower_line, upper_line)`` at most ``height`` lines tall."""

    lower_line: int = 0
    upper_line: int = 1
    height: int = 23

    @classmethod
    def for_document(cls, line_count: int, height: int) -> "Viewport":
        return cls(lower_line=0, upper_line=min(line_count, height), height=height)

    @property
    def span(self) -> int:
        return self.upper_line - self.lower_line

    def contains(self, idx: int) -> bool:
        return self.lower_line <= idx < self.upper_line

    def move_down(self, n: int = 1) -> None:
        self.upper_line += n
        self.lower_line += n

    def move_up(self, n: int = 1) -> None:
        if self.upper_line == 0:
            return
        if n > self.lower_line:
            self.upper_line -= self.lower_line
            self.lower_line = 0
        else:
            self.upper_line -= n
            self.lower_line -= n

    def shrink_upper(self) -> None:
        if self.upper_line > self.lower_line:
            self.upper_line -= 1

    def resize(self, old_count: int, new_count: int) -> None:
        """Re-fit the window after the document went from ``old_count`` lines to ``new_count``."""

        if new_count > old_count:
            while self.span < self.height and self.upper_line < new_count:
                self.upper_line += 1
        elif new_count < old_count:
            while self.upper_line > new_count:
                if self.lower_line > 0:
                    self.move_up(1)
                else:
                    self.shrink_upper()


__all__ = ["Viewport"]
