"""Base classes and shared types for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from vimcore.config import EditorMode

if TYPE_CHECKING:  # pragma: no cover
    from vimcore.session import EditorSession

_NAMED_KEYS = frozenset(
    {"ESC", "ENTER", "RETURN", "BACKSPACE", "TAB", "LEFT", "RIGHT", "UP", "DOWN"}
)


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyInput":
        """Build a key from a token such as ``"j"``, ``"ESC"`` or ``"CTRL+r"``."""

        if len(token) > 1 and "+" in token:
            *modifiers, key = token.split("+")
            return cls(key=key, modifiers=tuple(m.upper() for m in modifiers))
        if token in _NAMED_KEYS:
            return cls(key=token)
        if token == "\n":
            return cls(key="ENTER")
        if token == "\t":
            return cls(key="TAB")
        return cls(key=token, text=token)


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[EditorMode] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode and action can reach."""

    session: "EditorSession"
    bus: ModeBus
    extras: Dict[str, object] = field(default_factory=dict)

    def feed(self, mode: EditorMode, key: KeyInput | str) -> ModeResult:
        """Run one key through ``mode`` without performing the transition it asks for."""

        manager = self.extras.get("mode_manager")
        if manager is None:
            raise RuntimeError("ModeContext.extras missing 'mode_manager'")
        return manager.feed(mode, key)  # type: ignore[attr-defined]


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: EditorMode = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def session(self) -> "EditorSession":
        return self.context.session

    def on_enter(
        self, previous: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[EditorMode]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError


__all__ = ["KeyInput", "Mode", "ModeBus", "ModeContext", "ModeResult", "EditorMode"]
