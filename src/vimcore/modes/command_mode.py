"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import dispatch_token, require_keymap_registry


class CommandMode(Mode):
    name = EditorMode.COMMAND

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vimcore.modes.command")
        self._registry = require_keymap_registry(context)

    def on_enter(self, previous: EditorMode | None) -> None:
        del previous
        self.session.command_text = ""
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        self.context.bus.emit("command.end", self.session.command_text)
        self.session.command_text = ""

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = dispatch_token(self.context, self._registry, self.name, key.token)
        if result.status != "miss":
            return result
        if key.text and not key.modifiers:
            self.session.command_text += key.text
            return ModeResult(consumed=True, status="editing")
        return ModeResult(consumed=False, status="miss", message="unhandled")


__all__ = ["CommandMode"]
