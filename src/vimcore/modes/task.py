"""Count-prefixed command accumulation for Normal mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

TaskStatus = Literal["pending", "ready", "rejected", "bypass"]

MOVEMENT_KEYS = frozenset(
    {"h", "j", "k", "l", "w", "e", "b", " ", "BACKSPACE", "LEFT", "RIGHT", "UP", "DOWN"}
)
REPEATABLE_KEYS = frozenset({"x", "u", "CTRL+r", "."})
PREFIX_KEYS = frozenset({"d"})
COMPOUND_KEYS = frozenset({"dd"})


@dataclass(frozen=True, slots=True)
class TaskOutcome:
    """What the mode should do with the key it just fed.

    ``bypass`` means the key was not taken by the accumulator and should be
    dispatched directly; ``ready`` carries the token to run ``count`` times.
    """

    status: TaskStatus
    key: Optional[str] = None
    count: int = 1


class Task:
    """Pending key tokens: numeric prefix digits followed by at most one trigger."""

    def __init__(self) -> None:
        self._keys: List[str] = []

    def push(self, token: str) -> None:
        self._keys.append(token)

    def len(self) -> int:
        return len(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def last_key(self) -> Optional[str]:
        return self._keys[-1] if self._keys else None

    def last_two(self) -> Optional[str]:
        if len(self._keys) < 2:
            return None
        return "".join(self._keys[-2:])

    def has_num(self) -> bool:
        return any(_is_digit(key) for key in self._keys)

    def num(self) -> Optional[int]:
        digits = "".join(key for key in self._keys if _is_digit(key))
        return int(digits) if digits else None

    def clear(self) -> None:
        self._keys.clear()

    def feed(self, token: str) -> TaskOutcome:
        if self.last_key() in PREFIX_KEYS:
            self.push(token)
            compound = self.last_two()
            if compound in COMPOUND_KEYS:
                return TaskOutcome("ready", compound, self.num() or 1)
            self.clear()
            return TaskOutcome("rejected", compound)

        if _is_digit(token):
            if token == "0" and not self.has_num():
                return TaskOutcome("bypass", token)
            self.push(token)
            return TaskOutcome("pending", token)

        if token in PREFIX_KEYS:
            self.push(token)
            return TaskOutcome("pending", token)

        if token in MOVEMENT_KEYS or token in REPEATABLE_KEYS:
            if self.has_num():
                self.push(token)
                return TaskOutcome("ready", token, self.num() or 1)
            return TaskOutcome("bypass", token)

        # a count followed by anything else is dropped
        self.clear()
        return TaskOutcome("bypass", token)

    def __str__(self) -> str:
        return "".join(self._keys)


def _is_digit(token: str) -> bool:
    return len(token) == 1 and token.isdigit()


__all__ = [
    "COMPOUND_KEYS",
    "MOVEMENT_KEYS",
    "PREFIX_KEYS",
    "REPEATABLE_KEYS",
    "Task",
    "TaskOutcome",
]
