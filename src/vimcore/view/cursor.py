"""Cursor position, motions and viewport scrolling."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from vimcore.buffer import Buffer, DocPos, ScreenPos

from .viewport import Viewport

_BLANKS = frozenset(" \t\n")


def is_word_char(ch: Optional[str]) -> bool:
    return ch is not None and ch.isalnum()


class CursorModel:
    """Logical cursor over a ``Buffer`` with the viewport that follows it.

    ``cur_line`` is the 1-based logical line and ``col`` the 0-based column.
    The screen position is derived from both and the viewport, so the
    cursor row always falls inside the visible window.
    """

    def __init__(self, buffer: Buffer, viewport: Viewport) -> None:
        self.buffer = buffer
        self.viewport = viewport
        self.cur_line = 1
        self.col = 0
        self.past_end = False

    @property
    def cur_pos(self) -> ScreenPos:
        return ScreenPos(x=self.col + 1, y=self.cur_line - self.viewport.lower_line)

    @property
    def doc_pos(self) -> DocPos:
        return DocPos(self.cur_line - 1, self.col)

    @contextmanager
    def allow_past_end(self) -> Iterator["CursorModel"]:
        """Temporarily allow the column one past the last character."""

        previous = self.past_end
        self.past_end = True
        try:
            yield self
        finally:
            self.past_end = previous

    def line_length(self, idx: Optional[int] = None) -> int:
        """Number of valid x positions on a line under the current policy."""

        line = self.cur_line - 1 if idx is None else idx
        length = self.buffer.len_of_line_at(line)
        if self.past_end:
            return max(1, length + 1)
        return max(1, length)

    def clamp_x(self) -> None:
        self.col = max(0, min(self.col, self.line_length() - 1))

    def scroll_into_view(self) -> None:
        idx = self.cur_line - 1
        if self.viewport.contains(idx):
            return
        if idx < self.viewport.lower_line:
            self.viewport.move_up(self.viewport.lower_line - idx)
        elif idx >= self.viewport.upper_line:
            self.viewport.move_down(idx - self.viewport.upper_line + 1)

    def cur_char(self) -> Optional[str]:
        return self.buffer.char_at(self.cur_line - 1, self.col)

    # basic motions

    def inc_x(self) -> None:
        if self.col + 1 < self.line_length():
            self.col += 1

    def dec_x(self) -> None:
        if self.col > 0:
            self.col -= 1

    def inc_y(self) -> None:
        if self.cur_line < self.buffer.len():
            self.cur_line += 1
            self.scroll_into_view()
        self.clamp_x()

    def dec_y(self) -> None:
        if self.cur_line > 1:
            self.cur_line -= 1
            self.scroll_into_view()
        self.clamp_x()

    def move_to_start_of_line(self) -> None:
        self.col = 0

    def move_to_end_of_line(self) -> None:
        self.col = self.line_length() - 1

    def move_to_first_char_of_line(self) -> None:
        self.col = 0
        while self.col < self.line_length() - 1 and self.cur_char() in _BLANKS:
            self.col += 1

    def move_to_last_line(self) -> None:
        self.cur_line = self.buffer.len()
        self.scroll_into_view()
        self.clamp_x()

    def goto(self, pos: DocPos) -> None:
        self.cur_line = max(0, min(pos.line, self.buffer.len() - 1)) + 1
        self.col = pos.col
        self.clamp_x()
        self.scroll_into_view()

    def forward_to_next_char(self) -> bool:
        if self.col < self.line_length() - 1:
            self.col += 1
            return True
        if self.cur_line >= self.buffer.len():
            return False
        self.cur_line += 1
        self.col = 0
        self.scroll_into_view()
        return True

    def backward_to_next_char(self) -> bool:
        if self.col > 0:
            self.col -= 1
            return True
        if self.cur_line <= 1:
            return False
        self.cur_line -= 1
        self.col = self.line_length() - 1
        self.scroll_into_view()
        return True

    # word motions

    def _on_word(self) -> bool:
        return is_word_char(self.cur_char())

    def _restore(self, origin: DocPos) -> bool:
        self.goto(origin)
        return False

    def _to_end_of_cur_word(self) -> None:
        while self._on_word():
            line = self.cur_line
            if not self.forward_to_next_char():
                return
            if self.cur_line != line:
                break
        self.backward_to_next_char()

    def _to_start_of_cur_word(self) -> None:
        while self._on_word():
            line = self.cur_line
            if not self.backward_to_next_char():
                return
            if self.cur_line != line:
                break
        self.forward_to_next_char()

    def forward_to_start_of_next_word(self) -> bool:
        origin = self.doc_pos
        while self._on_word():
            line = self.cur_line
            if not self.forward_to_next_char():
                return self._restore(origin)
            if self.cur_line != line:
                break
        while not self._on_word():
            if not self.forward_to_next_char():
                return self._restore(origin)
        return True

    def forward_to_end_of_next_word(self) -> bool:
        origin = self.doc_pos
        if not self.forward_to_next_char():
            return self._restore(origin)
        while not self._on_word():
            if not self.forward_to_next_char():
                return self._restore(origin)
        self._to_end_of_cur_word()
        return True

    def backward_to_start_of_next_word(self) -> bool:
        origin = self.doc_pos
        if not self.backward_to_next_char():
            return self._restore(origin)
        while not self._on_word():
            if not self.backward_to_next_char():
                return self._restore(origin)
        self._to_start_of_cur_word()
        return True

    # line edits

    def reflow(self, old_count: int) -> None:
        """Re-fit the viewport after the line count changed and re-clamp the cursor."""

        self.viewport.resize(old_count, self.buffer.len())
        self.cur_line = max(1, min(self.cur_line, self.buffer.len()))
        self.scroll_into_view()
        self.clamp_x()

    def new_line(self) -> None:
        old_count = self.buffer.len()
        self.buffer.new_line_at(self.cur_line - 1, self.col)
        self.cur_line += 1
        self.col = 0
        self.reflow(old_count)

    def new_line_behind(self) -> None:
        self.col = self.buffer.len_of_line_at(self.cur_line - 1)
        self.new_line()

    def new_line_ahead(self) -> None:
        old_count = self.buffer.len()
        self.buffer.add_line_before(self.cur_line - 1, "")
        self.col = 0
        self.reflow(old_count)

    def delete_line_at(self, idx: int) -> str:
        old_count = self.buffer.len()
        removed = self.buffer.delete_line_at(idx)
        self.reflow(old_count)
        return removed

    def delete_cur_line(self) -> str:
        return self.delete_line_at(self.cur_line - 1)


__all__ = ["CursorModel", "is_word_char"]
