"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from vimcore.config import EditorMode
from vimcore.keymaps.models import ResolutionMatch
from vimcore.keymaps.registry import KeymapRegistry
from vimcore.runtime import telemetry

from .base_mode import ModeContext, ModeResult


def require_keymap_registry(context: ModeContext) -> KeymapRegistry:
    registry = context.extras.get("keymap_registry")
    if not isinstance(registry, KeymapRegistry):
        raise RuntimeError("ModeContext.extras missing 'keymap_registry'")
    return registry


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.telemetry_name},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True)


def dispatch_token(
    context: ModeContext, registry: KeymapRegistry, mode: EditorMode, token: str
) -> ModeResult:
    match = registry.resolve(mode, token)
    if match is None:
        return ModeResult(consumed=False, status="miss", message=token)
    return execute_match(context, match)


__all__ = ["dispatch_token", "execute_match", "require_keymap_registry"]
