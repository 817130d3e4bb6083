"""Declarative keymap registry.

Default bindings live in ``vimcore.keymaps.defaults``; it imports the action
modules and is loaded by the mode manager.
"""

from .models import ActionRef, Binding, ResolutionMatch
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats

__all__ = [
    "ActionRef",
    "Binding",
    "ResolutionMatch",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
