"""Executable Textual app that hosts an editing session."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from vimcore.buffer import SelectView, is_select_end, is_select_start
from vimcore.config import MODE_LABELS, EditorConfig, EditorMode
from vimcore.runtime import telemetry
from vimcore.session import EditorSession, EditorSnapshot

from .controller import TextualUIHooks, TextualVimAdapter

_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
}


def render_lines(
    lines: Sequence[Tuple[int, str]],
    selection: Optional[SelectView],
    cursor: Optional[Tuple[int, int]] = None,
) -> Text:
    """Build the text area with the selection inverted and the cursor underlined.

    Highlighting switches on at the first selected cell and off after the
    last one, line by line.
    """

    output = Text()
    for row, (line, content) in enumerate(lines):
        if row:
            output.append("\n")
        inverted = False
        for col, ch in enumerate(content):
            if is_select_start(selection, col, line):
                inverted = True
            style = "reverse" if inverted else ""
            if cursor == (line, col):
                style = f"{style} underline".strip()
            output.append(ch, style=style or None)
            if is_select_end(selection, col, line):
                inverted = False
        if cursor is not None and cursor[0] == line and cursor[1] >= len(content):
            output.append(" ", style="underline")
    return output


class VimCoreApp(App[None]):
    """Minimal Textual UI embedding an editor session."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #text-area {
        height: 1fr;
        padding: 0 1;
    }

    #status-bar {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #command-bar {
        height: 1;
        padding: 0 1;
    }
    """

    BINDINGS = [("ctrl+c", "quit", "Quit")]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualVimAdapter | None = None
        self._last_status = ""
        self._text_area = Static("", id="text-area")
        self._status_bar = Static("", id="status-bar")
        self._command_bar = Static("", id="command-bar")

    def compose(self) -> ComposeResult:
        yield self._text_area
        yield self._status_bar
        yield self._command_bar

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            show_command=self._show_command,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualVimAdapter(self.session, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()
        if self.adapter.finished:
            self.exit()

    def _update_view(self, snapshot: EditorSnapshot) -> None:
        cursor = (snapshot.cur_line - 1, snapshot.col)
        self._text_area.update(
            render_lines(self.session.visible_lines(), snapshot.selection, cursor)
        )
        self._update_status(self._last_status)

    def _update_status(self, status: str) -> None:
        self._last_status = status
        if self.adapter is None:
            return
        label = MODE_LABELS[self.session.mode]
        line = Text(self.adapter.status_label(), style=f"bold {label.color}")
        if status:
            line.append(f"  {status}", style="dim")
        self._status_bar.update(line)

    def _show_command(self, command: str) -> None:
        in_command = self.session.mode is EditorMode.COMMAND
        self._command_bar.update(f":{command}" if in_command else "")

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "command.error" and isinstance(payload, dict):
            self._update_status(str(payload.get("message", "")))

    def _log_line(self, line: str) -> None:
        telemetry.record_event("ui.trace", level="debug", data={"line": line})

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key == "ctrl+c":
            return None
        if key in _NAMED_KEYS:
            return (_NAMED_KEYS[key], None, ())
        if "+" in key and len(key) > 1:
            *modifiers, base = key.split("+")
            if base == "space":
                base = " "
            return (base, None, tuple(mod.upper() for mod in modifiers))
        if event.character:
            return (event.character, event.character, ())
        return None


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file with vi keys.")
    parser.add_argument("path", nargs="?", help="File to open (created on first write)")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="telelog preset to use instead of VIMCORE_* environment settings",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = EditorConfig.from_env()
    if args.path and Path(args.path).exists():
        session = EditorSession.from_file(args.path, config=config)
    else:
        session = EditorSession(config=config, path=args.path)
    VimCoreApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
