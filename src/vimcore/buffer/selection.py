"""Visual-mode selection extents and membership queries.

Selections are stored exactly as the user drew them (anchor first) and are
normalized on every read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .coords import DocPos
from .text import Buffer


@dataclass(frozen=True, slots=True)
class CharacterView:
    start: DocPos
    end: DocPos


@dataclass(frozen=True, slots=True)
class LineView:
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class BlockView:
    """Rectangular selection; declared but not supported by any operation."""

    start: DocPos
    end: DocPos


SelectView = Union[CharacterView, LineView, BlockView]


class UnsupportedSelectionError(NotImplementedError):
    """Raised when an operation meets a block-wise selection."""

    def __init__(self, view: BlockView) -> None:
        super().__init__("block-wise selections are not supported")
        self.view = view


def sort_select_view(view: Optional[SelectView]) -> Optional[SelectView]:
    if view is None:
        return None
    if isinstance(view, CharacterView):
        if view.end < view.start:
            return CharacterView(start=view.end, end=view.start)
        return view
    if isinstance(view, LineView):
        if view.end < view.start:
            return LineView(start=view.end, end=view.start)
        return view
    raise UnsupportedSelectionError(view)


def is_select_start(view: Optional[SelectView], col: int, line: int) -> bool:
    """True when the cell at ``(line, col)`` lies inside the selection."""

    ordered = sort_select_view(view)
    if ordered is None:
        return False
    if isinstance(ordered, LineView):
        return ordered.start <= line <= ordered.end
    return ordered.start <= DocPos(line, col) <= ordered.end


def is_select_end(view: Optional[SelectView], col: int, line: int) -> bool:
    """True when the cell is the last selected one or lies beyond it."""

    ordered = sort_select_view(view)
    if ordered is None:
        return False
    if isinstance(ordered, LineView):
        return line > ordered.end
    return DocPos(line, col) >= ordered.end


def selected_range(view: Optional[SelectView], buffer: Buffer) -> Optional[Tuple[DocPos, DocPos]]:
    """Buffer coordinates covering the selection, or ``None`` without one."""

    ordered = sort_select_view(view)
    if ordered is None:
        return None
    if isinstance(ordered, LineView):
        last_col = max(buffer.len_of_line_at(ordered.end), 1) - 1
        return DocPos(ordered.start, 0), DocPos(ordered.end, last_col)
    return ordered.start, ordered.end


__all__ = [
    "BlockView",
    "CharacterView",
    "LineView",
    "SelectView",
    "UnsupportedSelectionError",
    "is_select_end",
    "is_select_start",
    "selected_range",
    "sort_select_view",
]
