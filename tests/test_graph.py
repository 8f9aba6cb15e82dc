"""Tests for selection normalization and dependency-graph expansion."""

from __future__ import annotations

import pytest

from compartment.core import ComponentNotFound, CyclicDependency
from compartment.registry import ManifestStore
from compartment.resolution import direct_dependencies, expand_selection, normalize_selection


def _closure(store: ManifestStore, selection: list[str]) -> set[str]:
    """Smallest key set containing ``selection`` closed under both edge kinds."""

    seen: set[str] = set()
    pending = list(selection)
    while pending:
        key = pending.pop()
        if key in seen:
            continue
        seen.add(key)
        component = store.get(key)
        pending.extend(component.requires)
        pending.extend(component.provides)
    return seen


def test_expand_places_requires_before_and_provides_after(manifest) -> None:
    """Requirements precede the node and provided keys follow it."""

    chain = expand_selection(["h"], ManifestStore(manifest))

    assert list(chain) == ["a", "b", "e", "f", "h"]


def test_expand_all_keys_appear_once(manifest) -> None:
    """Expanding every key should yield each component exactly once."""

    store = ManifestStore(manifest)
    chain = expand_selection(store.keys(), store)

    assert sorted(chain) == ["a", "b", "c", "d", "e", "f", "g", "h"]
    assert len(chain) == len(store)


@pytest.mark.parametrize("selection", [["h"], ["d"], ["e"], ["b", "g"], ["h", "a", "h"]])
def test_expand_matches_transitive_closure(manifest, selection) -> None:
    """The chain key set equals the requires/provides closure of the selection."""

    store = ManifestStore(manifest)

    assert set(expand_selection(selection, store)) == _closure(store, selection)


def test_diamond_dependency_is_inserted_once() -> None:
    """Shared requirements should not be duplicated or re-expanded."""

    store = ManifestStore(
        {
            "base": {},
            "left": {"requires": ["base"]},
            "right": {"requires": ["base"]},
            "top": {"requires": ["left", "right"]},
        }
    )

    assert list(expand_selection(["top"], store)) == ["base", "left", "right", "top"]


def test_provided_component_follows_provider_even_if_selected_later() -> None:
    """A provided key is pulled in right after its provider."""

    store = ManifestStore({"p": {"provides": ["q", "r"]}, "q": {}, "r": {}, "s": {}})

    assert list(expand_selection(["s", "p", "q"], store)) == ["s", "p", "q", "r"]


def test_expand_missing_selection_key_raises() -> None:
    """Unknown selected keys should raise ComponentNotFound."""

    with pytest.raises(ComponentNotFound, match="invalid component 'x'") as excinfo:
        expand_selection(["x"], ManifestStore({}))
    assert excinfo.value.referenced_by is None


def test_expand_missing_dependency_names_referrer() -> None:
    """Dangling requires should name the component that referenced them."""

    store = ManifestStore({"a": {"requires": ["ghost"]}})

    with pytest.raises(ComponentNotFound, match="referenced by 'a'") as excinfo:
        expand_selection(["a"], store)
    assert excinfo.value.key == "ghost"
    assert excinfo.value.referenced_by == "a"


def test_expand_missing_provided_key_raises() -> None:
    """Dangling provides should fail the whole expansion."""

    store = ManifestStore({"a": {"provides": ["ghost"]}})

    with pytest.raises(ComponentNotFound):
        expand_selection(["a"], store)


def test_requires_cycle_is_rejected() -> None:
    """A requires B and B requires A must fail instead of recursing."""

    store = ManifestStore({"a": {"requires": ["b"]}, "b": {"requires": ["a"]}})

    with pytest.raises(CyclicDependency, match="a -> b -> a") as excinfo:
        expand_selection(["a"], store)
    assert excinfo.value.cycle == ("a", "b", "a")


def test_provides_cycle_is_rejected() -> None:
    """Mutual provides should be reported as a cycle."""

    store = ManifestStore({"a": {"provides": ["b"]}, "b": {"provides": ["a"]}})

    with pytest.raises(CyclicDependency) as excinfo:
        expand_selection(["a"], store)
    assert excinfo.value.cycle == ("a", "b", "a")


def test_provided_component_may_require_its_provider() -> None:
    """A back-requirement on an already placed provider is satisfied."""

    store = ManifestStore({"e": {"provides": ["f"]}, "f": {"requires": ["e"]}})

    assert list(expand_selection(["e"], store)) == ["e", "f"]
    assert list(expand_selection(["e", "f"], store)) == ["e", "f"]


def test_requirement_reaching_open_provider_chain_is_satisfied() -> None:
    """Deeper back-requirements to an appended ancestor do not count as cycles."""

    store = ManifestStore(
        {
            "core": {"provides": ["plugin"]},
            "plugin": {"requires": ["helper"]},
            "helper": {"requires": ["core"]},
        }
    )

    assert list(expand_selection(["core"], store)) == ["core", "helper", "plugin"]


def test_provider_requiring_its_provided_component_is_rejected() -> None:
    """A requires B and B provides A is a genuine cycle."""

    store = ManifestStore({"a": {"requires": ["b"]}, "b": {"provides": ["a"]}})

    with pytest.raises(CyclicDependency) as excinfo:
        expand_selection(["a"], store)
    assert excinfo.value.cycle == ("a", "b", "a")


def test_self_requirement_is_rejected() -> None:
    """A component requiring itself is the smallest cycle."""

    store = ManifestStore({"a": {"requires": ["a"]}})

    with pytest.raises(CyclicDependency) as excinfo:
        expand_selection(["a"], store)
    assert excinfo.value.cycle == ("a", "a")


def test_long_cycle_reports_only_the_loop() -> None:
    """The reported cycle should start at the revisited key."""

    store = ManifestStore(
        {
            "root": {"requires": ["x"]},
            "x": {"requires": ["y"]},
            "y": {"requires": ["z"]},
            "z": {"requires": ["x"]},
        }
    )

    with pytest.raises(CyclicDependency) as excinfo:
        expand_selection(["root"], store)
    assert excinfo.value.cycle == ("x", "y", "z", "x")
    assert isinstance(excinfo.value, ValueError)


def test_deep_chain_does_not_hit_recursion_limit() -> None:
    """Expansion is iterative, so long requirement chains are fine."""

    depth = 5000
    manifest = {f"n{index}": {"requires": [f"n{index + 1}"]} for index in range(depth)}
    manifest[f"n{depth}"] = {}
    store = ManifestStore(manifest)

    chain = expand_selection(["n0"], store)

    assert len(chain) == depth + 1
    assert next(iter(chain)) == f"n{depth}"


def test_normalize_selection_variants() -> None:
    """None/empty select everything; strings split on commas."""

    available = ("a", "b", "c")

    assert normalize_selection(None, available) == available
    assert normalize_selection([], available) == available
    assert normalize_selection("", available) == available
    assert normalize_selection("h", available) == ("h",)
    assert normalize_selection("b, a,,c", available) == ("b", "a", "c")
    assert normalize_selection(("c", "a"), available) == ("c", "a")


def test_normalize_selection_rejects_non_string_keys() -> None:
    """Selections must contain strings."""

    with pytest.raises(TypeError):
        normalize_selection([1, 2], ())


def test_direct_dependencies_are_not_transitive(manifest) -> None:
    """Introspection returns only immediate neighbours, in declared order."""

    store = ManifestStore(manifest)

    requires = direct_dependencies("h", store, edge="requires")
    provides = direct_dependencies("e", store, edge="provides")

    assert list(requires) == ["b", "e"]
    assert requires["b"].requires == ("a",)
    assert list(provides) == ["f"]
    assert direct_dependencies("a", store, edge="requires") == {}


def test_direct_dependencies_unknown_key_raises(manifest) -> None:
    """Unknown keys and bad edge names should fail."""

    store = ManifestStore(manifest)

    with pytest.raises(ComponentNotFound):
        direct_dependencies("zzz", store, edge="requires")
    with pytest.raises(ValueError, match="edge must be"):
        direct_dependencies("a", store, edge="parents")
