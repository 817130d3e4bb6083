"""Document storage, coordinates, selections and the edit history."""

from .coords import DocPos, ScreenPos
from .history import ActionKind, ActionLog, EditAction
from .selection import (
    BlockView,
    CharacterView,
    LineView,
    SelectView,
    UnsupportedSelectionError,
    is_select_end,
    is_select_start,
    selected_range,
    sort_select_view,
)
from .text import Buffer, BufferDelta

__all__ = [
    "ActionKind",
    "ActionLog",
    "BlockView",
    "Buffer",
    "BufferDelta",
    "CharacterView",
    "DocPos",
    "EditAction",
    "LineView",
    "ScreenPos",
    "SelectView",
    "UnsupportedSelectionError",
    "is_select_end",
    "is_select_start",
    "selected_range",
    "sort_select_view",
]
