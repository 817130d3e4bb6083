"""Visual mode: motions extend a character- or line-wise selection."""

from __future__ import annotations

from vimcore.buffer import CharacterView
from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import dispatch_token, require_keymap_registry


class VisualMode(Mode):
    name = EditorMode.VISUAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vimcore.modes.visual")
        self._registry = require_keymap_registry(context)

    def on_enter(self, previous: EditorMode | None) -> None:
        del previous
        session = self.session
        if session.selection is None:
            anchor = session.cursor.doc_pos
            session.selection = CharacterView(start=anchor, end=anchor)

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        self.session.selection = None

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = dispatch_token(self.context, self._registry, self.name, key.token)
        if result.switch_to is None and result.consumed:
            self.session.update_visual_pos()
            self.context.bus.emit("visual.selection", self.session.selection)
        return result


__all__ = ["VisualMode"]
