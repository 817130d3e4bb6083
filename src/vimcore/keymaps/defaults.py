"""Built-in keymaps that seed each mode with the standard vi keys."""

from __future__ import annotations

from typing import Iterable, Sequence

from vimcore.actions import command as command_actions
from vimcore.actions import core as core_actions
from vimcore.actions import edit as edit_actions
from vimcore.actions import history as history_actions
from vimcore.actions import motion as motion_actions
from vimcore.actions import visual as visual_actions
from vimcore.config import EditorMode

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    # motions
    ActionRef(id="motion.left", handler=motion_actions.move_left, description="Cursor left"),
    ActionRef(id="motion.right", handler=motion_actions.move_right, description="Cursor right"),
    ActionRef(id="motion.down", handler=motion_actions.move_down, description="Cursor down"),
    ActionRef(id="motion.up", handler=motion_actions.move_up, description="Cursor up"),
    ActionRef(id="motion.line_start", handler=motion_actions.line_start, description="Start of line"),
    ActionRef(id="motion.line_end", handler=motion_actions.line_end, description="End of line"),
    ActionRef(id="motion.first_char", handler=motion_actions.first_char, description="First non-blank"),
    ActionRef(id="motion.last_line", handler=motion_actions.last_line, description="Last line"),
    ActionRef(id="motion.word_start", handler=motion_actions.word_start, description="Next word start"),
    ActionRef(id="motion.word_end", handler=motion_actions.word_end, description="Next word end"),
    ActionRef(id="motion.word_back", handler=motion_actions.word_back, description="Previous word start"),
    # mode switches
    ActionRef(id="core.enter_insert", handler=core_actions.enter_insert_mode, description="Insert before cursor"),
    ActionRef(id="core.append", handler=core_actions.append_after_cursor, description="Append after cursor"),
    ActionRef(id="core.append_end", handler=core_actions.append_at_line_end, description="Append at end of line"),
    ActionRef(id="core.insert_first_char", handler=core_actions.insert_at_first_char, description="Insert at first non-blank"),
    ActionRef(id="core.open_below", handler=core_actions.open_line_below, description="Open line below"),
    ActionRef(id="core.open_above", handler=core_actions.open_line_above, description="Open line above"),
    ActionRef(id="core.substitute_char", handler=core_actions.substitute_char, description="Substitute character"),
    ActionRef(id="core.substitute_line", handler=core_actions.substitute_line, description="Substitute line"),
    ActionRef(id="core.exit_to_normal", handler=core_actions.exit_to_normal_mode, description="Return to normal mode"),
    ActionRef(id="core.enter_visual", handler=core_actions.enter_visual_mode, description="Character-wise visual mode"),
    ActionRef(id="core.enter_visual_line", handler=core_actions.enter_visual_line_mode, description="Line-wise visual mode"),
    ActionRef(id="core.enter_command", handler=core_actions.enter_command_mode, description="Enter command-line mode"),
    # edits
    ActionRef(id="edit.delete_char", handler=edit_actions.delete_char, description="Delete character under cursor"),
    ActionRef(id="edit.delete_line", handler=edit_actions.delete_line, description="Delete current line"),
    ActionRef(id="insert.newline", handler=edit_actions.insert_newline, description="Split line"),
    ActionRef(id="insert.tab", handler=edit_actions.insert_tab, description="Insert tab-width spaces"),
    ActionRef(id="insert.backspace", handler=edit_actions.insert_backspace, description="Delete before cursor"),
    ActionRef(id="insert.finish", handler=edit_actions.finish_insert, description="Leave insert mode"),
    # history
    ActionRef(id="history.undo", handler=history_actions.undo, description="Undo"),
    ActionRef(id="history.redo", handler=history_actions.redo, description="Redo"),
    ActionRef(id="history.repeat", handler=history_actions.repeat_last, description="Repeat last change"),
    # visual
    ActionRef(id="visual.swap_anchor", handler=visual_actions.swap_anchor, description="Swap selection anchor"),
    ActionRef(id="visual.delete_selection", handler=visual_actions.delete_selection, description="Delete current selection"),
    ActionRef(id="visual.change_selection", handler=visual_actions.change_selection, description="Change current selection"),
    ActionRef(id="visual.character_wise", handler=visual_actions.toggle_character_wise, description="Character-wise or leave"),
    ActionRef(id="visual.line_wise", handler=visual_actions.toggle_line_wise, description="Line-wise or leave"),
    # command line
    ActionRef(id="command.submit_line", handler=command_actions.submit_command_line, description="Evaluate the command line"),
    ActionRef(id="command.backspace", handler=command_actions.command_backspace, description="Delete last command character"),
)

MOTION_KEYS: tuple[tuple[str, str], ...] = (
    ("h", "motion.left"),
    ("LEFT", "motion.left"),
    ("BACKSPACE", "motion.left"),
    ("l", "motion.right"),
    ("RIGHT", "motion.right"),
    (" ", "motion.right"),
    ("j", "motion.down"),
    ("DOWN", "motion.down"),
    ("k", "motion.up"),
    ("UP", "motion.up"),
    ("0", "motion.line_start"),
    ("$", "motion.line_end"),
    ("^", "motion.first_char"),
    ("G", "motion.last_line"),
    ("w", "motion.word_start"),
    ("e", "motion.word_end"),
    ("b", "motion.word_back"),
)

NORMAL_KEYS: tuple[tuple[str, str], ...] = (
    ("i", "core.enter_insert"),
    ("a", "core.append"),
    ("A", "core.append_end"),
    ("I", "core.insert_first_char"),
    ("o", "core.open_below"),
    ("O", "core.open_above"),
    ("s", "core.substitute_char"),
    ("S", "core.substitute_line"),
    ("v", "core.enter_visual"),
    ("V", "core.enter_visual_line"),
    (":", "core.enter_command"),
    ("x", "edit.delete_char"),
    ("dd", "edit.delete_line"),
    ("u", "history.undo"),
    ("CTRL+r", "history.redo"),
    (".", "history.repeat"),
)

VISUAL_KEYS: tuple[tuple[str, str], ...] = (
    ("ESC", "core.exit_to_normal"),
    ("d", "visual.delete_selection"),
    ("x", "visual.delete_selection"),
    ("c", "visual.change_selection"),
    ("o", "visual.swap_anchor"),
    ("v", "visual.character_wise"),
    ("V", "visual.line_wise"),
)

INSERT_KEYS: tuple[tuple[str, str], ...] = (
    ("ESC", "insert.finish"),
    ("ENTER", "insert.newline"),
    ("RETURN", "insert.newline"),
    ("TAB", "insert.tab"),
    ("BACKSPACE", "insert.backspace"),
)

COMMAND_KEYS: tuple[tuple[str, str], ...] = (
    ("ESC", "core.exit_to_normal"),
    ("ENTER", "command.submit_line"),
    ("RETURN", "command.submit_line"),
    ("BACKSPACE", "command.backspace"),
)


def _bindings(mode: EditorMode, table: Iterable[tuple[str, str]]) -> tuple[Binding, ...]:
    return tuple(
        Binding(
            id=f"{mode.value}.{key.strip() or 'SPACE'}",
            mode=mode,
            key=key,
            action_id=action_id,
            source="defaults",
        )
        for key, action_id in table
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bindings(EditorMode.NORMAL, MOTION_KEYS + NORMAL_KEYS)
    + _bindings(EditorMode.VISUAL, MOTION_KEYS + VISUAL_KEYS)
    + _bindings(EditorMode.INSERT, INSERT_KEYS)
    + _bindings(EditorMode.COMMAND, COMMAND_KEYS)
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    include = set(include_bindings) if include_bindings else None
    exclude = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
