"""Cursor and viewport model, independent of rendering."""

from .cursor import CursorModel, is_word_char
from .viewport import Viewport

__all__ = ["CursorModel", "Viewport", "is_word_char"]
