from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from vimcore.adapters.textual import TextualUIHooks, TextualVimAdapter
from vimcore.adapters.textual.app import render_lines
from vimcore.buffer import CharacterView, DocPos, LineView
from vimcore.session import EditorSession, EditorSnapshot


def make_session(text: str = "hello\nworld") -> EditorSession:
    return EditorSession.from_text(
        text, path="buffer.txt", writer=lambda path, _text: Path(path)
    )


def test_adapter_updates_view_and_status() -> None:
    session = make_session()
    views: List[EditorSnapshot] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_view=views.append,
        update_status=statuses.append,
    )
    adapter = TextualVimAdapter(session, hooks)

    adapter.handle_textual_key("i")
    adapter.handle_textual_key("x", text="x")
    adapter.handle_textual_key("ESC")

    assert views  # snapshots captured
    assert views[-1].version == session.buffer.version
    assert "enter_insert" in statuses
    assert "exit_insert" in statuses
    assert session.buffer.line_at(0) == "xhello"


def test_adapter_relays_command_events() -> None:
    session = make_session()
    command_lines: List[str] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_view=lambda snapshot: None,
        show_command=command_lines.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualVimAdapter(session, hooks)

    adapter.handle_textual_key(":", text=":")
    adapter.handle_textual_key("w", text="w")
    adapter.handle_textual_key("q", text="q")
    adapter.handle_textual_key("ENTER")

    assert command_lines[-1] == ""
    assert ("command.submit", "wq") in events
    written = next(payload for name, payload in events if name == "command.write")
    assert isinstance(written, dict)
    assert written["path"] == "buffer.txt"
    assert adapter.finished


def test_adapter_surfaces_visual_selection_events() -> None:
    session = make_session()
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_view=lambda snapshot: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualVimAdapter(session, hooks)

    adapter.handle_textual_key("v", text="v")
    adapter.handle_textual_key("l", text="l")

    visual_payloads = [event for event in events if event["name"] == "visual.selection"]
    assert visual_payloads
    assert visual_payloads[-1]["payload"] == CharacterView(
        start=DocPos(0, 0), end=DocPos(0, 1)
    )


def test_adapter_forwards_modifiers() -> None:
    session = make_session()
    hooks = TextualUIHooks(update_view=lambda snapshot: None)
    adapter = TextualVimAdapter(session, hooks)

    result = adapter.handle_textual_key("q", modifiers=("ctrl",))

    assert result.status == "killed"
    assert adapter.finished


def test_adapter_emits_log_lines() -> None:
    session = make_session()
    logs: List[str] = []
    hooks = TextualUIHooks(update_view=lambda snapshot: None, log=logs.append)
    adapter = TextualVimAdapter(session, hooks)

    adapter.handle_textual_key("i")

    assert any(line.startswith("key ->") for line in logs)
    assert any("mode='insert'" in line for line in logs)
    assert any("undo_depth=1" in line for line in logs)


def test_status_label_names_mode_and_position() -> None:
    session = make_session()
    adapter = TextualVimAdapter(session, TextualUIHooks(update_view=lambda s: None))

    adapter.handle_textual_key("j")

    assert adapter.status_label() == "NORMAL  buffer.txt  2:1"


def test_render_lines_highlights_selection_and_cursor() -> None:
    rendered = render_lines(
        [(0, "hello"), (1, "world")],
        CharacterView(start=DocPos(0, 3), end=DocPos(1, 1)),
        cursor=(1, 1),
    )

    assert rendered.plain == "hello\nworld"
    styled = {
        (span.start, span.end): str(span.style) for span in rendered.spans
    }
    assert styled[(3, 4)] == "reverse"
    assert styled[(4, 5)] == "reverse"
    assert styled[(6, 7)] == "reverse"
    assert styled[(7, 8)] == "reverse underline"
    assert (8, 9) not in styled


def test_render_lines_marks_cursor_past_line_end() -> None:
    rendered = render_lines([(0, "")], LineView(start=0, end=0), cursor=(0, 0))

    assert rendered.plain == " "
