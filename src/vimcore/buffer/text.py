"""Line-oriented document storage.

Every positional method clamps out-of-range line and column arguments to
the nearest valid value instead of raising. Callers (cursor motions,
replay, selection deletion) rely on that leniency.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from vimcore.runtime import telemetry

from .coords import DocPos


@dataclass(slots=True)
class BufferDelta:
    """Text removed by a range deletion.

    ``anchor`` is where ``text`` has to be re-inserted to restore the
    document. It differs from the range start only when a trailing line was
    dropped, in which case ``text`` begins with the newline that joined it.
    """

    text: str
    anchor: DocPos


class Buffer:
    """Ordered lines of text; never fewer than one line."""

    def __init__(self, lines: Optional[Iterable[str]] = None, *, name: str = "default") -> None:
        self.name = name
        self._lines: List[str] = list(lines) if lines is not None else []
        if not self._lines:
            self._lines.append("")
        self.version = 0

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        pieces = text.split("\n")
        if len(pieces) > 1 and not pieces[-1]:
            pieces.pop()
        return cls([piece[:-1] if piece.endswith("\r") else piece for piece in pieces], name=name)

    def to_text(self) -> str:
        return "\n".join(self._lines)

    def lines(self) -> Sequence[str]:
        return tuple(self._lines)

    def len(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def _line(self, idx: int) -> int:
        return max(0, min(idx, len(self._lines) - 1))

    def _col(self, line: int, col: int) -> int:
        return max(0, min(col, len(self._lines[line])))

    def _touch(self) -> None:
        self.version += 1

    def line_at(self, idx: int) -> str:
        return self._lines[self._line(idx)]

    def len_of_line_at(self, idx: int) -> int:
        return len(self._lines[self._line(idx)])

    def char_at(self, line: int, col: int) -> Optional[str]:
        text = self._lines[self._line(line)]
        if col < 0 or col >= len(text):
            return None
        return text[col]

    def insert_at(self, line: int, col: int, ch: str) -> None:
        self.append_str_at(line, col, ch)

    def append_str_at(self, line: int, col: int, text: str) -> None:
        line = self._line(line)
        col = self._col(line, col)
        current = self._lines[line]
        self._lines[line] = current[:col] + text + current[col:]
        self._touch()

    def delete_at(self, line: int, col: int) -> Optional[str]:
        """Remove the character before ``col`` (the first one when ``col`` is 0)."""

        line = self._line(line)
        current = self._lines[line]
        if not current:
            return None
        target = max(self._col(line, col) - 1, 0)
        self._lines[line] = current[:target] + current[target + 1 :]
        self._touch()
        return current[target]

    def new_line_at(self, line: int, col: int) -> None:
        line = self._line(line)
        col = self._col(line, col)
        current = self._lines[line]
        self._lines[line] = current[:col]
        self._lines.insert(line + 1, current[col:])
        self._touch()

    def add_line_before(self, idx: int, content: str) -> None:
        if idx >= len(self._lines):
            self._lines.append(content)
        else:
            self._lines.insert(max(idx, 0), content)
        self._touch()

    def push_line(self, content: str) -> None:
        self._lines.append(content)
        self._touch()

    def delete_line_at(self, idx: int) -> str:
        idx = self._line(idx)
        self._touch()
        if len(self._lines) == 1:
            removed = self._lines[0]
            self._lines[0] = ""
            return removed
        return self._lines.pop(idx)

    def replace_line_at(self, idx: int, content: str) -> str:
        idx = self._line(idx)
        previous = self._lines[idx]
        self._lines[idx] = content
        self._touch()
        return previous

    def insert_text(self, pos: DocPos, text: str) -> DocPos:
        """Splice ``text`` (which may span lines) at ``pos``; return the end position."""

        line = self._line(pos.line)
        col = self._col(line, pos.col)
        current = self._lines[line]
        pieces = text.split("\n")
        pieces[0] = current[:col] + pieces[0]
        end = DocPos(line + len(pieces) - 1, len(pieces[-1]))
        pieces[-1] = pieces[-1] + current[col:]
        self._lines[line : line + 1] = pieces
        self._touch()
        return end

    def delete_range(self, start: DocPos, end: DocPos) -> str:
        return self.remove_span(start, end).text

    def remove_span(self, start: DocPos, end: DocPos) -> BufferDelta:
        """Delete the inclusive span between two positions.

        A line left with neither prefix nor suffix is dropped as well, and
        the newline that joined it is reported in the removed text.
        """

        if end < start:
            start, end = end, start
        first = self._line(start.line)
        last = self._line(end.line)
        head = self._lines[first]
        tail = self._lines[last]
        start_col = self._col(first, start.col)
        end_col = max(-1, min(end.col, len(tail) - 1))

        with telemetry.span(
            "buffer::delete_range",
            component="buffer",
            metadata={"buffer": self.name, "start": f"{first}:{start_col}", "end": f"{last}:{end_col}"},
        ):
            if first == last:
                removed = head[start_col : end_col + 1]
                merged = head[:start_col] + head[max(end_col + 1, start_col) :]
            else:
                removed = "\n".join(
                    [head[start_col:], *self._lines[first + 1 : last], tail[: end_col + 1]]
                )
                merged = head[:start_col] + tail[end_col + 1 :]
            self._lines[first : last + 1] = [merged]
            anchor = DocPos(first, start_col)

            if not merged and len(self._lines) > 1:
                self._lines.pop(first)
                if first < len(self._lines):
                    removed += "\n"
                else:
                    previous = first - 1
                    anchor = DocPos(previous, len(self._lines[previous]))
                    removed = "\n" + removed
            self._touch()
        return BufferDelta(text=removed, anchor=anchor)


__all__ = ["Buffer", "BufferDelta"]
