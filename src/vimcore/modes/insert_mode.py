"""Insert mode: typed text goes straight into the buffer."""

from __future__ import annotations

from vimcore.actions.edit import self_insert
from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import dispatch_token, require_keymap_registry


class InsertMode(Mode):
    name = EditorMode.INSERT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vimcore.modes.insert")
        self._registry = require_keymap_registry(context)

    def on_enter(self, previous: EditorMode | None) -> None:
        del previous
        self.session.cursor.past_end = True

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        cursor = self.session.cursor
        cursor.past_end = False
        cursor.clamp_x()
        self.context.extras.pop("insert_state", None)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = dispatch_token(self.context, self._registry, self.name, key.token)
        if result.status != "miss":
            return result
        if key.text and not key.modifiers:
            return self_insert(self.context, key.text)
        return result


__all__ = ["InsertMode"]
