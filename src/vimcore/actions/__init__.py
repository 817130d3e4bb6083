"""High-level editing verbs bound to keys by ``vimcore.keymaps.defaults``."""

from . import command, core, edit, history, motion, visual

__all__ = ["command", "core", "edit", "history", "motion", "visual"]
