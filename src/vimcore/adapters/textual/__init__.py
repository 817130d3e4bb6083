"""Textual host for the editing core."""

from .controller import TextualUIHooks, TextualVimAdapter

__all__ = ["TextualUIHooks", "TextualVimAdapter"]
