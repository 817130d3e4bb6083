"""Undo/redo log of keystroke-recorded edits."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from .coords import DocPos


class ActionKind(str, Enum):
    INSERT = "insert"
    DELETE = "delete"


@dataclass(slots=True)
class EditAction:
    """One reversible edit.

    ``contents`` holds single-character keys; ``"\\n"`` stands for Enter and
    ``"\\t"`` for a literal tab. ``line`` is the 1-based logical line the
    edit started on. ``opens_line`` is ``"below"`` or ``"above"`` for inserts
    begun by opening a new line.
    """

    kind: ActionKind
    line: int
    pos: DocPos
    contents: List[str] = field(default_factory=list)
    opens_line: Optional[str] = None


class ActionLog:
    """Backward (history) and forward (redo) stacks of ``EditAction``."""

    def __init__(self) -> None:
        self._backward: List[EditAction] = []
        self._forward: List[EditAction] = []
        self._replaying = False
        self._backspace_target: Optional[EditAction] = None

    @property
    def replaying(self) -> bool:
        return self._replaying

    @contextmanager
    def replay(self) -> Iterator["ActionLog"]:
        """Suppress recording while an undo or redo re-feeds keys."""

        previous = self._replaying
        self._replaying = True
        try:
            yield self
        finally:
            self._replaying = previous

    def can_undo(self) -> bool:
        return bool(self._backward)

    def can_redo(self) -> bool:
        return bool(self._forward)

    def peek(self) -> Optional[EditAction]:
        return self._backward[-1] if self._backward else None

    def history(self) -> tuple[EditAction, ...]:
        return tuple(self._backward)

    def add_action(
        self, kind: ActionKind, line: int, pos: DocPos, *, opens_line: Optional[str] = None
    ) -> None:
        if self._replaying:
            return
        self._backward.append(EditAction(kind=kind, line=line, pos=pos, opens_line=opens_line))
        self._forward.clear()
        self._backspace_target = None

    def append_key_to_top(self, key: str) -> None:
        if self._replaying or not self._backward:
            return
        self._backward[-1].contents.append(key)

    def append_string_to_top(self, text: str) -> None:
        for key in text:
            self.append_key_to_top(key)

    def reanchor_top(self, pos: DocPos, line: int) -> None:
        if self._replaying or not self._backward:
            return
        self._backward[-1].pos = pos
        self._backward[-1].line = line
        self._backward[-1].opens_line = None

    def discard_key_on_top(self) -> None:
        if self._replaying or not self._backward:
            return
        contents = self._backward[-1].contents
        if contents:
            contents.pop()

    def record_backspace(self, key: str, pos: DocPos, line: int) -> None:
        """Fold a Backspace over pre-existing text into a Delete below the insert."""

        if self._replaying or not self._backward:
            return
        insert = self._backward.pop()
        target = self._backspace_target
        if target is not None and self._backward and self._backward[-1] is target:
            target.contents.insert(0, key)
            target.pos = pos
            target.line = line
        else:
            target = EditAction(kind=ActionKind.DELETE, line=line, pos=pos, contents=[key])
            self._backward.append(target)
            self._backspace_target = target
        insert.pos = pos
        insert.line = line
        self._backward.append(insert)

    def backward(self) -> Optional[EditAction]:
        if not self._backward:
            return None
        action = self._backward.pop()
        self._forward.append(action)
        self._backspace_target = None
        return action

    def forward(self) -> Optional[EditAction]:
        if not self._forward:
            return None
        action = self._forward.pop()
        self._backward.append(action)
        self._backspace_target = None
        return action


__all__ = ["ActionKind", "ActionLog", "EditAction"]
