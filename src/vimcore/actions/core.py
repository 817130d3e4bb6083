"""Mode switches and the Normal-mode ways into Insert mode."""

from __future__ import annotations

from vimcore.buffer import ActionKind, CharacterView, DocPos, LineView
from vimcore.modes.base_mode import EditorMode, ModeContext, ModeResult

from .edit import begin_insert


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del match
    return begin_insert(context, message="enter_insert")


def append_after_cursor(context: ModeContext, match) -> ModeResult:
    del match
    cursor = context.session.cursor
    with cursor.allow_past_end():
        cursor.inc_x()
    return begin_insert(context, message="append")


def append_at_line_end(context: ModeContext, match) -> ModeResult:
    del match
    cursor = context.session.cursor
    with cursor.allow_past_end():
        cursor.move_to_end_of_line()
    return begin_insert(context, message="append_end")


def insert_at_first_char(context: ModeContext, match) -> ModeResult:
    del match
    context.session.cursor.move_to_first_char_of_line()
    return begin_insert(context, message="insert_first_char")


def open_line_below(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    cursor = session.cursor
    idx = cursor.cur_line - 1
    anchor = DocPos(idx, session.buffer.len_of_line_at(idx))
    line = cursor.cur_line
    cursor.new_line_behind()
    session.actions.add_action(ActionKind.INSERT, line, anchor, opens_line="below")
    session.actions.append_key_to_top("\n")
    return ModeResult(consumed=True, switch_to=EditorMode.INSERT, message="open_below")


def open_line_above(context: ModeContext, match) -> ModeResult:
    del match
    context.session.cursor.new_line_ahead()
    context.extras["insert_state"] = {"close_line": True}
    return begin_insert(context, message="open_above", opens_line="above")


def substitute_char(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    cursor = session.cursor
    line, pos = cursor.cur_line, cursor.doc_pos
    if session.cur_char() is not None:
        removed = session.delete_cur_char() or ""
        session.actions.add_action(ActionKind.DELETE, line, pos)
        session.actions.append_string_to_top(removed)
    return begin_insert(context, message="substitute")


def substitute_line(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    cursor = session.cursor
    idx = cursor.cur_line - 1
    previous = session.buffer.replace_line_at(idx, "")
    cursor.move_to_start_of_line()
    if previous:
        session.actions.add_action(ActionKind.DELETE, cursor.cur_line, DocPos(idx, 0))
        session.actions.append_string_to_top(previous)
    return begin_insert(context, message="substitute_line")


def exit_to_normal_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit")


def enter_visual_mode(context: ModeContext, match) -> ModeResult:
    del match
    anchor = context.session.cursor.doc_pos
    context.session.selection = CharacterView(start=anchor, end=anchor)
    return ModeResult(consumed=True, switch_to=EditorMode.VISUAL, message="enter_visual")


def enter_visual_line_mode(context: ModeContext, match) -> ModeResult:
    del match
    line = context.session.cursor.cur_line - 1
    context.session.selection = LineView(start=line, end=line)
    return ModeResult(
        consumed=True, switch_to=EditorMode.VISUAL, message="enter_visual_line"
    )


def enter_command_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.COMMAND, message="enter_command")


__all__ = [
    "append_after_cursor",
    "append_at_line_end",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_visual_line_mode",
    "enter_visual_mode",
    "exit_to_normal_mode",
    "insert_at_first_char",
    "open_line_above",
    "open_line_below",
    "substitute_char",
    "substitute_line",
]
