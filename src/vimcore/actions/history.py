"""Undo, redo and repeat by replaying recorded keystrokes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from vimcore.buffer import ActionKind, EditAction
from vimcore.modes.base_mode import EditorMode, KeyInput, ModeContext, ModeResult
from vimcore.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover
    from vimcore.session import EditorSession


def revoke_action(session: "EditorSession", action: Optional[EditAction]) -> None:
    """Reverse ``action`` in the buffer without recording anything."""

    if action is None:
        return
    cursor = session.cursor
    with telemetry.span(
        "history::revoke",
        component="history",
        metadata={"kind": action.kind.value, "pos": str(action.pos), "keys": len(action.contents)},
    ):
        with session.actions.replay(), cursor.allow_past_end():
            cursor.goto(action.pos)
            if action.kind is ActionKind.DELETE:
                for key in action.contents:
                    session.append_char_at_cur(key)
            else:
                for key in action.contents:
                    times = session.config.tab_width if key == "\t" else 1
                    for _ in range(times):
                        session.delete_cur_char()
            cursor.goto(action.pos)
    cursor.clamp_x()


def restore_action(
    session: "EditorSession", action: Optional[EditAction], *, repeating: bool = False
) -> None:
    """Re-apply ``action`` by feeding its keys through the mode handlers.

    With ``repeating`` the keys are replayed at the current cursor instead of
    the recorded anchor.
    """

    if action is None:
        return
    cursor = session.cursor
    context = session.context
    with telemetry.span(
        "history::restore",
        component="history",
        metadata={"kind": action.kind.value, "repeating": repeating, "keys": len(action.contents)},
    ):
        with session.actions.replay(), cursor.allow_past_end():
            if not repeating:
                cursor.goto(action.pos)
            if action.kind is ActionKind.INSERT:
                for key in action.contents:
                    context.feed(EditorMode.INSERT, KeyInput.parse(key))
            else:
                for _ in action.contents:
                    context.feed(EditorMode.NORMAL, "x")
    cursor.clamp_x()


def undo(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    if not session.actions.can_undo():
        return ModeResult(consumed=True, status="noop", message="already at oldest change")
    action = session.actions.backward()
    revoke_action(session, action)
    telemetry.record_event(
        "history.undo", data={"kind": action.kind.value, "pos": str(action.pos)}
    )
    context.bus.emit("history.undo", action)
    return ModeResult(consumed=True, status="undo")


def redo(context: ModeContext, match) -> ModeResult:
    del match
    session = context.session
    if not session.actions.can_redo():
        return ModeResult(consumed=True, status="noop", message="already at newest change")
    action = session.actions.forward()
    restore_action(session, action)
    telemetry.record_event(
        "history.redo", data={"kind": action.kind.value, "pos": str(action.pos)}
    )
    context.bus.emit("history.redo", action)
    return ModeResult(consumed=True, status="redo")


def repeat_last(context: ModeContext, match) -> ModeResult:
    """Apply the newest change again at the cursor as a new undoable entry."""

    del match
    session = context.session
    last = session.actions.peek()
    if last is None:
        return ModeResult(consumed=True, status="noop")

    cursor = session.cursor
    line, pos = cursor.cur_line, cursor.doc_pos
    if last.kind is ActionKind.INSERT:
        with cursor.allow_past_end():
            if last.opens_line == "below":
                cursor.move_to_end_of_line()
            elif last.opens_line == "above":
                cursor.move_to_start_of_line()
        line, pos = cursor.cur_line, cursor.doc_pos
        session.actions.add_action(ActionKind.INSERT, line, pos, opens_line=last.opens_line)
        session.actions.append_string_to_top("".join(last.contents))
        restore_action(session, session.actions.peek(), repeating=True)
    else:
        with cursor.allow_past_end():
            removed = session.delete_chars(len(last.contents))
        cursor.clamp_x()
        if not removed:
            return ModeResult(consumed=True, status="noop")
        session.actions.add_action(ActionKind.DELETE, line, pos)
        session.actions.append_string_to_top(removed)
    return ModeResult(consumed=True, status="repeat")


__all__ = ["redo", "repeat_last", "restore_action", "revoke_action", "undo"]
