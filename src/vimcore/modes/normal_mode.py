"""Normal mode: motions, single-key edits and count-prefixed tasks."""

from __future__ import annotations

from vimcore.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import dispatch_token, require_keymap_registry
from .task import Task, TaskOutcome


class NormalMode(Mode):
    name = EditorMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vimcore.modes.normal")
        self._registry = require_keymap_registry(context)
        self.task = Task()

    def on_exit(self, next_mode: EditorMode | None) -> None:
        del next_mode
        self.task.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        outcome = self.task.feed(key.token)

        if outcome.status == "pending":
            return ModeResult(consumed=True, status="pending", message=str(self.task))
        if outcome.status == "rejected":
            return ModeResult(consumed=True, status="task_dropped", message=outcome.key)
        if outcome.status == "ready":
            self.task.clear()
            return self._run_task(outcome)
        return self._dispatch(key.token)

    def _run_task(self, outcome: TaskOutcome) -> ModeResult:
        token = outcome.key or ""
        result = ModeResult(consumed=True, status="noop")
        with telemetry.span(
            "task::run",
            component="task",
            metadata={"key": token, "count": outcome.count},
        ):
            for _ in range(outcome.count):
                result = self._dispatch(token)
                if result.switch_to is not None:
                    break
        return result

    def _dispatch(self, token: str) -> ModeResult:
        return dispatch_token(self.context, self._registry, self.name, token)


__all__ = ["NormalMode"]
