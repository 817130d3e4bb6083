"""Cursor motions shared by Normal and Visual mode."""

from __future__ import annotations

from typing import Callable

from vimcore.modes.base_mode import ModeContext, ModeResult
from vimcore.view import CursorModel


def _move(context: ModeContext, step: Callable[[CursorModel], object]) -> ModeResult:
    step(context.session.cursor)
    return ModeResult(consumed=True, status="motion")


def move_left(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.dec_x)


def move_right(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.inc_x)


def move_down(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.inc_y)


def move_up(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.dec_y)


def line_start(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.move_to_start_of_line)


def line_end(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.move_to_end_of_line)


def first_char(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.move_to_first_char_of_line)


def last_line(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.move_to_last_line)


def word_start(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.forward_to_start_of_next_word)


def word_end(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.forward_to_end_of_next_word)


def word_back(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, CursorModel.backward_to_start_of_next_word)


__all__ = [
    "first_char",
    "last_line",
    "line_end",
    "line_start",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "word_back",
    "word_end",
    "word_start",
]
