import pytest

from vimcore.config import EditorMode
from vimcore.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
)
from vimcore.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    key: str = "g",
    action_id: str = "core.test",
) -> Binding:
    return Binding(id=binding_id, mode=mode, key=key, action_id=action_id)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="normal.g")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]
    assert binding.mode is EditorMode.NORMAL


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.g"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="normal.g.duplicate"))

    assert excinfo.value.existing.id == "normal.g"


def test_same_key_in_other_mode_does_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.g"))
    registry.register_binding(make_binding(binding_id="visual.g", mode="visual"))

    assert registry.stats().binding_count == 2
    assert registry.stats().modes == ("normal", "visual")


def test_register_binding_unknown_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.g"))


def test_register_action_twice_requires_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())

    registry.register_action(make_action(), replace=True)
    assert registry.stats().action_count == 1
    assert registry.get_action("core.test").telemetry_name == "core.test"
    with pytest.raises(KeyError):
        registry.get_action("core.missing")


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", key="q")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.resolve(EditorMode.NORMAL, "g") is None


def test_rebind_moves_key() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="binding"))
    before = registry.revision()

    updated = registry.rebind("binding", "z")

    assert updated.key == "z"
    assert registry.resolve(EditorMode.NORMAL, "g") is None
    match = registry.resolve(EditorMode.NORMAL, "z")
    assert match is not None and match.binding.id == "binding"
    assert registry.revision() == before + 1


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.unregister_binding("binding") is None


def test_binding_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        make_binding(binding_id="bogus", mode="replace")


def test_load_default_keymaps_registers_every_mode() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.stats().modes == ("command", "insert", "normal", "visual")
    match = registry.resolve(EditorMode.NORMAL, "dd")
    assert match is not None
    assert match.action.id == "edit.delete_line"
    assert registry.get_binding("normal.SPACE").key == " "


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, include_bindings=("normal.i",))

    assert registry.stats().binding_count == 1
    assert registry.get_binding("normal.i").action_id == "core.enter_insert"


def test_load_default_keymaps_exclude_and_extra_bindings() -> None:
    registry = KeymapRegistry()
    custom = Binding(
        id="normal.custom_insert",
        mode=EditorMode.NORMAL,
        key="i",
        action_id="core.append",
    )

    load_default_keymaps(registry, exclude_bindings=("normal.x",), extra_bindings=(custom,))

    assert registry.resolve(EditorMode.NORMAL, "x") is None
    match = registry.resolve(EditorMode.NORMAL, "i")
    assert match is not None and match.action.id == "core.append"
