"""Editor modes and runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

ENV_PREFIX = "VIMCORE_"


class EditorMode(str, Enum):
    """States of the modal input machine."""

    NORMAL = "normal"
    VISUAL = "visual"
    INSERT = "insert"
    COMMAND = "command"
    EXIT = "exit"


@dataclass(frozen=True)
class ModeLabel:
    """How a host presents a mode in its status line."""

    subtitle: str
    read_only: bool
    color: str


MODE_LABELS = {
    EditorMode.NORMAL: ModeLabel("NORMAL", True, "#98C379"),
    EditorMode.INSERT: ModeLabel("INSERT", False, "#E8B86D"),
    EditorMode.VISUAL: ModeLabel("VISUAL", True, "#6EACDA"),
    EditorMode.COMMAND: ModeLabel(":", True, "#E06C75"),
    EditorMode.EXIT: ModeLabel("EXIT", True, "#5C6370"),
}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class EditorConfig:
    """Knobs for one editing session."""

    terminal_height: int = 24
    tab_width: int = 4
    kill_key: str = "CTRL+q"

    def __post_init__(self) -> None:
        if self.terminal_height < 2:
            raise ValueError("terminal_height must leave room for the status line")
        if self.tab_width < 1:
            raise ValueError("tab_width must be positive")

    @property
    def text_height(self) -> int:
        """Rows available for text; the last row belongs to the status line."""

        return self.terminal_height - 1

    @classmethod
    def from_env(cls) -> "EditorConfig":
        defaults = cls()
        return cls(
            terminal_height=max(2, _env_int("TERMINAL_HEIGHT", defaults.terminal_height)),
            tab_width=max(1, _env_int("TAB_WIDTH", defaults.tab_width)),
            kill_key=os.getenv(f"{ENV_PREFIX}KILL_KEY") or defaults.kill_key,
        )


__all__ = ["EditorConfig", "EditorMode", "MODE_LABELS", "ModeLabel"]
