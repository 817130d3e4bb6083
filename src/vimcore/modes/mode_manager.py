"""Mode manager owning the active mode and its transitions."""

from __future__ import annotations

from typing import Dict, Optional, Type

from vimcore.keymaps.defaults import load_default_keymaps
from vimcore.keymaps.registry import KeymapRegistry
from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult


class ExitMode(Mode):
    """Terminal state; every key is ignored."""

    name = EditorMode.EXIT

    def handle_key(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="exited")


class ModeManager:
    """Owns the active mode, handles transitions and dispatches key events."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        load_defaults: bool = True,
        kill_key: str = "CTRL+q",
    ) -> None:
        self.context = context
        self.kill_key = kill_key
        self._modes: Dict[EditorMode, Mode] = {}
        self._active: Optional[EditorMode] = None
        self.logger = telemetry.get_logger("vimcore.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vimcore.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active(self) -> Optional[EditorMode]:
        return self._active

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def get_mode(self, name: EditorMode) -> Mode:
        try:
            return self._modes[EditorMode(name)]
        except KeyError as exc:
            raise KeyError(f"Unknown mode '{name}'") from exc

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: EditorMode) -> None:
        target = self.get_mode(name)
        previous = self.active_mode
        if previous is target:
            return
        if previous is not None:
            previous.on_exit(target.name)
        self._active = target.name
        target.on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"mode": target.name.value, "from": previous.name.value if previous else None},
        )
        self.context.bus.emit("mode.switch", target.name)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        if mode.name is EditorMode.EXIT:
            return ModeResult(consumed=False, status="exited")
        if key.token == self.kill_key:
            self.switch_mode(EditorMode.EXIT)
            return ModeResult(consumed=True, switch_to=EditorMode.EXIT, status="killed")

        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={"key": key.token, "mode": mode.name.value},
        ):
            result = mode.handle_key(key)
        if result.switch_to is not None:
            self.switch_mode(result.switch_to)
        return result

    def feed(self, name: EditorMode, key: KeyInput | str) -> ModeResult:
        """Dispatch ``key`` to ``name`` directly; any requested transition is ignored."""

        if isinstance(key, str):
            key = KeyInput.parse(key)
        return self.get_mode(name).handle_key(key)


__all__ = ["ExitMode", "ModeManager"]
