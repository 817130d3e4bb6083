"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional

from vimcore.config import EditorMode
from vimcore.runtime.telemetry import span

from .models import ActionRef, Binding, ResolutionMatch


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding claims a key already bound in the same mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' on "
            f"{binding.mode.value}:{binding.key}"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and per-mode key bindings."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[EditorMode, Dict[str, str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode.value},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing = self._lookup(binding.mode, binding.key)
            if existing is not None and existing.id != binding.id and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if existing is not None:
                self._drop(existing)
            previous = self._bindings.get(binding.id)
            if previous is not None:
                self._drop(previous)

            self._bindings[binding.id] = binding
            self._mode_index.setdefault(binding.mode, {})[binding.key] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def rebind(self, binding_id: str, key: str) -> Binding:
        """Move an existing binding to another key in the same mode."""

        current = self.get_binding(binding_id)
        return self.register_binding(replace(current, key=key), replace=True)

    def iter_bindings(self, mode: Optional[EditorMode] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._mode_index.get(EditorMode(mode), {}).values():
            yield self._bindings[binding_id]

    def resolve(self, mode: EditorMode, token: str) -> Optional[ResolutionMatch]:
        binding = self._lookup(EditorMode(mode), token)
        if binding is None:
            return None
        return ResolutionMatch(binding=binding, action=self._actions[binding.action_id])

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(mode.value for mode in self._mode_index)),
        )

    def _lookup(self, mode: EditorMode, key: str) -> Optional[Binding]:
        binding_id = self._mode_index.get(mode, {}).get(key)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        keys = self._mode_index.get(binding.mode)
        if keys is None:
            return
        if keys.get(binding.key) == binding.id:
            keys.pop(binding.key)
        if not keys:
            self._mode_index.pop(binding.mode, None)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
