"""Host-agnostic controller that wires an EditorSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from vimcore.config import MODE_LABELS, EditorMode
from vimcore.modes import KeyInput, ModeResult
from vimcore.session import EditorSession, EditorSnapshot


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[EditorSnapshot], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # debug lines for hosts that surface them
    log: Callable[[str], None] = _noop


class TextualVimAdapter:
    """Bridges session key handling and bus events to a Textual-friendly surface."""

    EVENTS = (
        "mode.switch",
        "visual.selection",
        "visual.delete",
        "command.start",
        "command.end",
        "command.submit",
        "command.write",
        "command.quit",
        "command.error",
        "history.undo",
        "history.redo",
    )

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_view()
        self._refresh_command_line()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a host key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.session.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    @property
    def finished(self) -> bool:
        return self.session.mode is EditorMode.EXIT

    def status_label(self) -> str:
        label = MODE_LABELS[self.session.mode]
        snapshot = self.session.snapshot()
        name = self.session.path or "[No Name]"
        return (
            f"{label.subtitle}  {name}  {snapshot.cur_line}:{snapshot.col + 1}"
            f"  {snapshot.task}"
        ).rstrip()

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_view()
        self._refresh_command_line()

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in self.EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "command.submit" and isinstance(payload, str):
            self.hooks.update_status(f"command::{payload}")
        if name.startswith("command"):
            self._refresh_command_line()
        if name.startswith(("visual", "history")):
            self._refresh_view()

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.session.snapshot())

    def _refresh_command_line(self) -> None:
        self.hooks.show_command(self.session.command_text)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "mode": session.mode.value,
            "cursor": str(session.cursor.doc_pos),
            "selection": session.selection,
            "command": session.command_text,
            "task": str(session.task),
            "buffer_version": session.buffer.version,
            "undo_depth": len(session.actions.history()),
        }


__all__ = ["TextualUIHooks", "TextualVimAdapter"]
