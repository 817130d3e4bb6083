"""Text-changing verbs for Normal and Insert mode, mirrored into the action log."""

from __future__ import annotations

from typing import MutableMapping, Optional, cast

from vimcore.buffer import ActionKind, DocPos
from vimcore.modes.base_mode import EditorMode, ModeContext, ModeResult


def _insert_state(context: ModeContext) -> MutableMapping[str, object]:
    return cast(
        MutableMapping[str, object], context.extras.setdefault("insert_state", {})
    )


def begin_insert(
    context: ModeContext, *, message: str, opens_line: Optional[str] = None
) -> ModeResult:
    """Open a new Insert entry at the cursor and switch to Insert mode."""

    session = context.session
    cursor = session.cursor
    session.actions.add_action(
        ActionKind.INSERT, cursor.cur_line, cursor.doc_pos, opens_line=opens_line
    )
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message=message)


# Insert mode


def self_insert(context: ModeContext, text: str) -> ModeResult:
    session = context.session
    for ch in text:
        session.append_char_at_cur(ch)
        session.actions.append_key_to_top(ch)
    return ModeResult(consumed=True, status="insert")


def insert_newline(context: ModeContext, match) -> ModeResult:
    del match
    return self_insert(context, "\n")


def insert_tab(context: ModeContext, match) -> ModeResult:
    del match
    return self_insert(context, " " * context.session.config.tab_width)


def insert_backspace(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    cursor = session.cursor
    buffer = session.buffer

    if cursor.col == 0:
        if cursor.cur_line <= 1:
            return ModeResult(consumed=True, status="noop")
        old_count = buffer.len()
        previous = cursor.cur_line - 2
        joint = buffer.len_of_line_at(previous)
        tail = buffer.delete_line_at(cursor.cur_line - 1)
        buffer.append_str_at(previous, joint, tail)
        cursor.cur_line -= 1
        cursor.col = joint
        cursor.reflow(old_count)
        removed = "\n"
    else:
        removed = buffer.delete_at(cursor.cur_line - 1, cursor.col) or ""
        cursor.dec_x()

    top = session.actions.peek()
    if top is not None and top.kind is ActionKind.INSERT and top.contents:
        session.actions.discard_key_on_top()
    elif removed == "\n" and _insert_state(context).pop("close_line", False):
        # the line opened above was joined back before anything was typed on it
        session.actions.reanchor_top(cursor.doc_pos, cursor.cur_line)
    elif removed:
        session.actions.record_backspace(removed, cursor.doc_pos, cursor.cur_line)
    return ModeResult(consumed=True, status="backspace")


def finish_insert(context: ModeContext, match) -> ModeResult:
    del match
    if _insert_state(context).pop("close_line", False):
        context.session.actions.append_key_to_top("\n")
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit_insert")


# Normal mode


def delete_char(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    cursor = session.cursor
    line, pos = cursor.cur_line, cursor.doc_pos
    removed = session.delete_chars(1)
    if not removed:
        return ModeResult(consumed=True, status="noop")
    session.actions.add_action(ActionKind.DELETE, line, pos)
    session.actions.append_string_to_top(removed)
    return ModeResult(consumed=True, status="delete_char", message=removed)


def delete_line(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    cursor = session.cursor
    buffer = session.buffer
    idx = cursor.cur_line - 1
    old_count = buffer.len()
    last_col = max(buffer.len_of_line_at(idx), 1) - 1
    delta = buffer.remove_span(DocPos(idx, 0), DocPos(idx, last_col))
    cursor.reflow(old_count)
    cursor.move_to_first_char_of_line()
    if not delta.text:
        return ModeResult(consumed=True, status="noop")
    session.actions.add_action(ActionKind.DELETE, delta.anchor.line + 1, delta.anchor)
    session.actions.append_string_to_top(delta.text)
    context.bus.emit("edit.delete_line", delta)
    return ModeResult(consumed=True, status="delete_line")


__all__ = [
    "begin_insert",
    "delete_char",
    "delete_line",
    "finish_insert",
    "insert_backspace",
    "insert_newline",
    "insert_tab",
    "self_insert",
]
