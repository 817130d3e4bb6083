"""Mode state machine: one class per mode plus the count accumulator."""

from .base_mode import EditorMode, KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualMode
from .command_mode import CommandMode
from .task import Task, TaskOutcome

__all__ = [
    "EditorMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "CommandMode",
    "Task",
    "TaskOutcome",
]
