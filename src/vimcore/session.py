"""Editor session: the one object that owns a document and its editing state.

Hosts create an ``EditorSession`` (from text or a file), feed it key tokens
through ``handle_key`` and render from ``snapshot()``/``visible_lines()``.
Every mode and action reaches the session through ``ModeContext.session``;
nothing below keeps editor state in module globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from vimcore.buffer import (
    ActionKind,
    ActionLog,
    BlockView,
    Buffer,
    BufferDelta,
    CharacterView,
    DocPos,
    LineView,
    ScreenPos,
    SelectView,
    UnsupportedSelectionError,
    selected_range,
)
from vimcore.config import EditorConfig, EditorMode
from vimcore.files import PathLike, read_document, write_document
from vimcore.keymaps.registry import KeymapRegistry
from vimcore.modes import (
    CommandMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    NormalMode,
    Task,
    VisualMode,
)
from vimcore.modes.mode_manager import ExitMode, ModeManager
from vimcore.runtime import telemetry
from vimcore.view import CursorModel, Viewport

Writer = Callable[[PathLike, str], Path]


@dataclass(frozen=True, slots=True)
class EditorSnapshot:
    """Read-only view of the session for renderers and tests."""

    mode: EditorMode
    cursor: ScreenPos
    cur_line: int
    col: int
    lower_line: int
    upper_line: int
    line_count: int
    selection: Optional[SelectView]
    task: str
    command_text: str
    path: Optional[str]
    version: int


class EditorSession:
    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        config: Optional[EditorConfig] = None,
        path: Optional[PathLike] = None,
        writer: Optional[Writer] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffer = buffer if buffer is not None else Buffer()
        self.viewport = Viewport.for_document(self.buffer.len(), self.config.text_height)
        self.cursor = CursorModel(self.buffer, self.viewport)
        self.selection: Optional[SelectView] = None
        self.actions = ActionLog()
        self.command_text = ""
        self.path: Optional[str] = str(path) if path is not None else None
        self.writer: Writer = writer or write_document
        self.logger = telemetry.get_logger("vimcore.session")

        self.bus = ModeBus()
        self.context = ModeContext(session=self, bus=self.bus)
        self.manager = ModeManager(
            self.context,
            keymap_registry=keymap_registry,
            kill_key=self.config.kill_key,
        )
        for mode_cls in (NormalMode, InsertMode, VisualMode, CommandMode, ExitMode):
            self.manager.register_mode(mode_cls)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "EditorSession":
        return cls(Buffer.from_text(text), **kwargs)

    @classmethod
    def from_file(cls, path: PathLike, **kwargs) -> "EditorSession":
        """Load ``path`` once; ``OSError`` from the read propagates."""

        return cls(read_document(path), path=path, **kwargs)

    @property
    def mode(self) -> EditorMode:
        active = self.manager.active
        return active if active is not None else EditorMode.NORMAL

    @property
    def task(self) -> Task:
        normal = self.manager.get_mode(EditorMode.NORMAL)
        return normal.task  # type: ignore[attr-defined]

    def handle_key(self, key: KeyInput | str) -> EditorMode:
        """Process one key and return the mode the editor is in afterwards."""

        if isinstance(key, str):
            key = KeyInput.parse(key)
        self.manager.handle_key(key)
        return self.mode

    # rendering

    def snapshot(self) -> EditorSnapshot:
        return EditorSnapshot(
            mode=self.mode,
            cursor=self.cursor.cur_pos,
            cur_line=self.cursor.cur_line,
            col=self.cursor.col,
            lower_line=self.viewport.lower_line,
            upper_line=self.viewport.upper_line,
            line_count=self.buffer.len(),
            selection=self.selection,
            task=str(self.task),
            command_text=self.command_text,
            path=self.path,
            version=self.buffer.version,
        )

    def line_text(self, idx: int) -> str:
        return self.buffer.line_at(idx)

    def visible_lines(self) -> List[Tuple[int, str]]:
        return [
            (idx, self.buffer.line_at(idx))
            for idx in range(self.viewport.lower_line, self.viewport.upper_line)
        ]

    def serialize(self) -> str:
        return self.buffer.to_text()

    def save(self, path: Optional[PathLike] = None) -> Path:
        target = path if path is not None else self.path
        if target is None:
            raise ValueError("no file name")
        with telemetry.span(
            "session::save", component="session", metadata={"path": str(target)}
        ):
            written = self.writer(target, self.serialize())
        self.path = str(target)
        telemetry.record_event(
            "session.save", data={"path": self.path, "lines": self.buffer.len()}
        )
        return Path(written)

    # character edits shared by actions and replay

    def cur_char(self) -> Optional[str]:
        return self.cursor.cur_char()

    def delete_cur_char(self) -> Optional[str]:
        """Delete under the cursor; past the line end the next line is joined."""

        cursor = self.cursor
        idx = cursor.cur_line - 1
        if cursor.cur_char() is None:
            if cursor.cur_line >= self.buffer.len():
                return None
            tail = cursor.delete_line_at(idx + 1)
            self.buffer.append_str_at(idx, self.buffer.len_of_line_at(idx), tail)
            return "\n"
        return self.buffer.delete_at(idx, cursor.col + 1)

    def append_char_at_cur(self, ch: str) -> None:
        cursor = self.cursor
        if ch == "\n":
            cursor.new_line()
            return
        self.buffer.insert_at(cursor.cur_line - 1, cursor.col, ch)
        cursor.inc_x()

    def delete_chars(self, count: int) -> str:
        removed: List[str] = []
        for _ in range(count):
            ch = self.delete_cur_char()
            if ch is None:
                break
            removed.append(ch)
            self.cursor.clamp_x()
        return "".join(removed)

    # selection

    def update_visual_pos(self) -> None:
        """Move the free end of the selection to the cursor."""

        selection = self.selection
        if isinstance(selection, CharacterView):
            self.selection = CharacterView(start=selection.start, end=self.cursor.doc_pos)
        elif isinstance(selection, LineView):
            self.selection = LineView(start=selection.start, end=self.cursor.cur_line - 1)
        elif isinstance(selection, BlockView):
            raise UnsupportedSelectionError(selection)

    def selection_start(self) -> Optional[DocPos]:
        bounds = selected_range(self.selection, self.buffer)
        return bounds[0] if bounds is not None else None

    def delete_selected(self) -> Optional[BufferDelta]:
        """Remove the selected text and record it as one Delete action."""

        bounds = selected_range(self.selection, self.buffer)
        if bounds is None:
            return None
        start, end = bounds
        old_count = self.buffer.len()
        delta = self.buffer.remove_span(start, end)
        cursor = self.cursor
        with cursor.allow_past_end():
            cursor.goto(start)
        cursor.reflow(old_count)
        if delta.text:
            self.actions.add_action(ActionKind.DELETE, delta.anchor.line + 1, delta.anchor)
            self.actions.append_string_to_top(delta.text)
        self.selection = None
        return delta


__all__ = ["EditorSession", "EditorSnapshot", "Writer"]
