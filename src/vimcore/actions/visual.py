"""Actions dedicated to Visual mode selection management."""

from __future__ import annotations

from vimcore.buffer import BlockView, CharacterView, DocPos, LineView, UnsupportedSelectionError
from vimcore.modes.base_mode import EditorMode, ModeContext, ModeResult

from .edit import begin_insert


def swap_anchor(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    selection = session.selection
    cursor = session.cursor
    if isinstance(selection, CharacterView):
        cursor.goto(selection.start)
        session.selection = CharacterView(start=selection.end, end=selection.start)
    elif isinstance(selection, LineView):
        cursor.goto(DocPos(selection.start, cursor.col))
        session.selection = LineView(start=selection.end, end=selection.start)
    elif isinstance(selection, BlockView):
        raise UnsupportedSelectionError(selection)
    else:
        return ModeResult(consumed=False, status="no_selection")
    return ModeResult(consumed=True, status="visual_swap")


def toggle_character_wise(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    selection = session.selection
    if isinstance(selection, LineView):
        session.selection = CharacterView(
            start=DocPos(selection.start, 0), end=session.cursor.doc_pos
        )
        return ModeResult(consumed=True, status="visual_character")
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit_visual")


def toggle_line_wise(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    selection = session.selection
    if isinstance(selection, CharacterView):
        session.selection = LineView(
            start=selection.start.line, end=session.cursor.cur_line - 1
        )
        return ModeResult(consumed=True, status="visual_line")
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit_visual")


def delete_selection(context: ModeContext, match) -> ModeResult:
    del match
    delta = context.session.delete_selected()
    if delta is None:
        return ModeResult(consumed=False, switch_to=EditorMode.NORMAL, status="no_selection")
    context.bus.emit("visual.delete", {"text": delta.text, "anchor": delta.anchor})
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="visual_delete",
        message=delta.text,
    )


def change_selection(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    start = session.selection_start()
    delta = session.delete_selected()
    if delta is None or start is None:
        return ModeResult(consumed=False, switch_to=EditorMode.NORMAL, status="no_selection")
    with session.cursor.allow_past_end():
        session.cursor.goto(start)
    context.bus.emit("visual.delete", {"text": delta.text, "anchor": delta.anchor})
    return begin_insert(context, message="visual_change")


__all__ = [
    "change_selection",
    "delete_selection",
    "swap_anchor",
    "toggle_character_wise",
    "toggle_line_wise",
]
