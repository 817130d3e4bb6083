from __future__ import annotations

from typing import List

from vimcore.buffer import ActionKind, Buffer, CharacterView, DocPos, LineView
from vimcore.config import EditorConfig, EditorMode
from vimcore.session import EditorSession


def make_session(*lines: str, **kwargs) -> EditorSession:
    return EditorSession(Buffer(list(lines)), **kwargs)


def feed(session: EditorSession, *tokens: str) -> EditorMode:
    mode = session.mode
    for token in tokens:
        mode = session.handle_key(token)
    return mode


def test_session_starts_in_normal_mode() -> None:
    session = make_session("hello")

    assert session.mode is EditorMode.NORMAL
    assert session.cursor.doc_pos == DocPos(0, 0)


def test_visual_delete_of_selected_span() -> None:
    session = make_session("hello", "world")

    mode = feed(session, "l", "l", "v", "l", "l", "d")

    assert mode is EditorMode.NORMAL
    assert session.buffer.lines() == ("he", "world")
    assert session.selection is None


def test_count_prefixed_motion() -> None:
    session = make_session("a", "b", "c")

    feed(session, "2", "j")

    assert session.cursor.cur_line == 3
    assert str(session.task) == ""


def test_insert_undo_redo_cycle() -> None:
    session = make_session("hello")

    feed(session, "i", "a", "ESC")
    assert session.buffer.lines() == ("ahello",)

    feed(session, "u")
    assert session.buffer.lines() == ("hello",)

    feed(session, "CTRL+r")
    assert session.buffer.lines() == ("ahello",)


def test_typing_then_backspacing_restores_buffer() -> None:
    session = make_session("hello")

    feed(session, "i", "x", "y", "ENTER", "z")
    assert session.buffer.lines() == ("xy", "zhello")
    feed(session, "BACKSPACE", "BACKSPACE", "BACKSPACE", "BACKSPACE")

    assert session.buffer.lines() == ("hello",)
    top = session.actions.peek()
    assert top is not None and top.contents == []


def test_backspace_over_existing_text_is_undoable() -> None:
    session = make_session("hello")
    feed(session, "A", "BACKSPACE", "BACKSPACE", "ESC")
    assert session.buffer.lines() == ("hel",)

    feed(session, "u", "u")

    assert session.buffer.lines() == ("hello",)


def test_backspace_on_first_line_start_is_noop() -> None:
    session = make_session("abc")

    feed(session, "i", "BACKSPACE")

    assert session.buffer.lines() == ("abc",)
    assert session.mode is EditorMode.INSERT


def test_redo_without_undo_is_noop() -> None:
    session = make_session("hello")
    feed(session, "x")

    feed(session, "CTRL+r")

    assert session.buffer.lines() == ("ello",)


def test_undo_with_empty_history_is_noop() -> None:
    session = make_session("hello")

    feed(session, "u")

    assert session.buffer.lines() == ("hello",)
    assert session.mode is EditorMode.NORMAL


def test_new_edit_clears_redo() -> None:
    session = make_session("abc")
    feed(session, "x", "u")
    assert session.actions.can_redo()

    feed(session, "l", "x")

    assert not session.actions.can_redo()
    assert session.buffer.lines() == ("ac",)


def test_x_joins_next_line_from_empty_line() -> None:
    session = make_session("", "abc")

    feed(session, "x")
    assert session.buffer.lines() == ("abc",)

    feed(session, "u")
    assert session.buffer.lines() == ("", "abc")


def test_x_on_empty_document_records_nothing() -> None:
    session = make_session("")

    feed(session, "x")

    assert session.actions.history() == ()


def test_repeat_last_delete() -> None:
    session = make_session("abc")

    feed(session, "x", ".")
    assert session.buffer.lines() == ("c",)

    feed(session, "u", "u")
    assert session.buffer.lines() == ("abc",)


def test_repeat_last_insert_at_cursor() -> None:
    session = make_session("ab")

    feed(session, "i", "x", "y", "ESC", "$", ".")

    assert session.buffer.lines() == ("xyaxyb",)
    assert len(session.actions.history()) == 2


def test_repeat_visual_delete_at_line_end_undoes_in_place() -> None:
    session = make_session("abcdef")

    feed(session, "v", "l", "d", "$", ".")
    assert session.buffer.lines() == ("cde",)

    feed(session, "u")
    assert session.buffer.lines() == ("cdef",)
    feed(session, "u")
    assert session.buffer.lines() == ("abcdef",)


def test_repeat_delete_line_then_undo_each_step() -> None:
    session = make_session("ab", "cd", "ef", "gh")

    feed(session, "d", "d", "j", ".")
    assert session.buffer.lines() == ("cd", "gh")

    feed(session, "u")
    assert session.buffer.lines() == ("cd", "ef", "gh")
    feed(session, "u")
    assert session.buffer.lines() == ("ab", "cd", "ef", "gh")


def test_repeat_open_line_below_opens_new_line() -> None:
    session = make_session("abc")

    feed(session, "o", "x", "ESC", "k", "l", ".")
    assert session.buffer.lines() == ("abc", "x", "x")

    feed(session, "u")
    assert session.buffer.lines() == ("abc", "x")
    feed(session, "u")
    assert session.buffer.lines() == ("abc",)


def test_repeat_open_line_above_starts_at_line_start() -> None:
    session = make_session("abc")

    feed(session, "O", "x", "ESC", "j", "l", ".")
    assert session.buffer.lines() == ("x", "x", "abc")

    feed(session, "u")
    assert session.buffer.lines() == ("x", "abc")
    feed(session, "u")
    assert session.buffer.lines() == ("abc",)


def test_counted_delete_char() -> None:
    session = make_session("abcdef")

    feed(session, "3", "x")
    assert session.buffer.lines() == ("def",)

    feed(session, "u")
    assert session.buffer.lines() == ("cdef",)


def test_delete_line_and_undo() -> None:
    session = make_session("a", "b", "c")

    feed(session, "j", "d", "d")
    assert session.buffer.lines() == ("a", "c")
    assert session.cursor.cur_line == 2

    feed(session, "u")
    assert session.buffer.lines() == ("a", "b", "c")


def test_counted_delete_line() -> None:
    session = make_session("a", "b", "c")

    feed(session, "2", "d", "d")

    assert session.buffer.lines() == ("c",)


def test_delete_last_remaining_line_keeps_one_line() -> None:
    session = make_session("abc")

    feed(session, "d", "d")
    assert session.buffer.lines() == ("",)

    feed(session, "u")
    assert session.buffer.lines() == ("abc",)


def test_unknown_compound_is_dropped() -> None:
    session = make_session("abc")

    feed(session, "d", "w")

    assert session.buffer.lines() == ("abc",)
    assert session.cursor.col == 0
    assert str(session.task) == ""


def test_open_line_below_records_newline() -> None:
    session = make_session("abc")

    feed(session, "o", "x", "ESC")
    assert session.buffer.lines() == ("abc", "x")
    action = session.actions.peek()
    assert action is not None and action.contents == ["\n", "x"]

    feed(session, "u")
    assert session.buffer.lines() == ("abc",)

    feed(session, "CTRL+r")
    assert session.buffer.lines() == ("abc", "x")


def test_open_line_above_closes_line_on_escape() -> None:
    session = make_session("abc")

    feed(session, "O", "x", "ESC")
    assert session.buffer.lines() == ("x", "abc")
    action = session.actions.peek()
    assert action is not None and action.contents == ["x", "\n"]

    feed(session, "u")
    assert session.buffer.lines() == ("abc",)


def test_backspace_joining_opened_line_keeps_document() -> None:
    session = make_session("ab", "cd")

    feed(session, "j", "O", "BACKSPACE", "ESC")
    assert session.buffer.lines() == ("ab", "cd")
    action = session.actions.peek()
    assert action is not None and action.contents == []

    feed(session, "u")
    assert session.buffer.lines() == ("ab", "cd")


def test_typing_after_joining_opened_line_undoes_cleanly() -> None:
    session = make_session("ab", "cd")

    feed(session, "j", "O", "BACKSPACE", "x", "ESC")
    assert session.buffer.lines() == ("abx", "cd")

    feed(session, "u")
    assert session.buffer.lines() == ("ab", "cd")

    feed(session, "CTRL+r")
    assert session.buffer.lines() == ("abx", "cd")


def test_append_variants() -> None:
    session = make_session("abc")

    feed(session, "a", "X", "ESC")
    assert session.buffer.lines() == ("aXbc",)

    feed(session, "A", "d", "ESC")
    assert session.buffer.lines() == ("aXbcd",)
    assert session.cursor.col == 4


def test_insert_at_first_non_blank() -> None:
    session = make_session("   abc")
    feed(session, "$")

    feed(session, "I", "X", "ESC")

    assert session.buffer.lines() == ("   Xabc",)


def test_substitute_char_then_undo_in_two_steps() -> None:
    session = make_session("abc")

    feed(session, "s", "X", "ESC")
    assert session.buffer.lines() == ("Xbc",)

    feed(session, "u")
    assert session.buffer.lines() == ("bc",)
    feed(session, "u")
    assert session.buffer.lines() == ("abc",)


def test_substitute_line() -> None:
    session = make_session("abc", "def")

    feed(session, "S", "x", "y", "ESC")
    assert session.buffer.lines() == ("xy", "def")

    feed(session, "u", "u")
    assert session.buffer.lines() == ("abc", "def")


def test_tab_inserts_spaces_recorded_individually() -> None:
    session = make_session("abc", config=EditorConfig(tab_width=2))

    feed(session, "i", "TAB", "ESC")
    assert session.buffer.lines() == ("  abc",)
    action = session.actions.peek()
    assert action is not None and action.contents == [" ", " "]

    feed(session, "u")
    assert session.buffer.lines() == ("abc",)


def test_visual_line_delete_and_undo() -> None:
    session = make_session("a", "b", "c")

    feed(session, "V", "j")
    assert session.selection == LineView(start=0, end=1)
    feed(session, "d")
    assert session.buffer.lines() == ("c",)

    feed(session, "u")
    assert session.buffer.lines() == ("a", "b", "c")


def test_visual_change_enters_insert_with_new_action() -> None:
    session = make_session("hello")

    mode = feed(session, "v", "l", "c")
    assert mode is EditorMode.INSERT
    assert session.buffer.lines() == ("llo",)

    feed(session, "X", "ESC")
    assert session.buffer.lines() == ("Xllo",)
    kinds = [action.kind for action in session.actions.history()]
    assert kinds == [ActionKind.DELETE, ActionKind.INSERT]

    feed(session, "u", "u")
    assert session.buffer.lines() == ("hello",)


def test_visual_delete_redo() -> None:
    session = make_session("hello")

    feed(session, "v", "l", "d", "u")
    assert session.buffer.lines() == ("hello",)

    feed(session, "CTRL+r")
    assert session.buffer.lines() == ("llo",)


def test_visual_swap_anchor() -> None:
    session = make_session("hello")

    feed(session, "v", "l", "l", "o")

    assert session.cursor.col == 0
    assert session.selection == CharacterView(start=DocPos(0, 2), end=DocPos(0, 0))


def test_visual_toggles() -> None:
    session = make_session("abc", "def")

    feed(session, "v", "j", "V")
    assert session.selection == LineView(start=0, end=1)
    feed(session, "v")
    assert isinstance(session.selection, CharacterView)

    assert feed(session, "v") is EditorMode.NORMAL
    assert session.selection is None


def test_visual_escape_discards_selection() -> None:
    session = make_session("abc")

    assert feed(session, "v", "l", "ESC") is EditorMode.NORMAL
    assert session.selection is None
    assert session.buffer.lines() == ("abc",)


def test_word_motions_through_keys() -> None:
    session = make_session("foo bar baz")

    feed(session, "w")
    assert session.cursor.col == 4
    feed(session, "e")
    assert session.cursor.col == 6
    feed(session, "b")
    assert session.cursor.col == 4
    feed(session, "G", "0")
    assert session.cursor.col == 0


def test_unknown_key_is_noop() -> None:
    session = make_session("abc")

    assert feed(session, "z", "CTRL+z") is EditorMode.NORMAL
    assert session.buffer.lines() == ("abc",)


def test_kill_key_exits_from_any_mode() -> None:
    session = make_session("abc")

    assert feed(session, "i", "CTRL+q") is EditorMode.EXIT
    assert feed(session, "x", "ESC", "i") is EditorMode.EXIT
    assert session.buffer.lines() == ("abc",)


def test_custom_kill_key() -> None:
    session = make_session("abc", config=EditorConfig(kill_key="CTRL+x"))

    assert feed(session, "CTRL+q") is EditorMode.NORMAL
    assert feed(session, "CTRL+x") is EditorMode.EXIT


def test_leaving_normal_mode_clears_task() -> None:
    session = make_session("abc")

    feed(session, "2", "v")

    assert session.mode is EditorMode.VISUAL
    assert str(session.task) == ""


def test_mode_switch_events() -> None:
    session = make_session("abc")
    switches: List[object] = []
    session.bus.subscribe("mode.switch", switches.append)

    feed(session, "i", "ESC", ":", "ESC")

    assert switches == [
        EditorMode.INSERT,
        EditorMode.NORMAL,
        EditorMode.COMMAND,
        EditorMode.NORMAL,
    ]
