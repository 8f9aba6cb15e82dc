"""End-to-end tests for the Compartment resolver facade."""

from __future__ import annotations

import pytest

from compartment import (
    BuildPhase,
    ChainNotBuilt,
    Compartment,
    Component,
    ComponentNotFound,
    CyclicDependency,
    EventRecorder,
    ManifestLoadError,
    UnknownType,
)


def test_resolve_selection_and_collect_paths(manifest_path) -> None:
    """Resolving 'h' pulls in its closure and aggregates prefixed paths."""

    builder = Compartment().load_manifest(manifest_path).register_type("js", "/js/").register_type("css", "/css/")

    chain = builder.resolve(["h"]).chain

    assert list(chain) == ["a", "b", "e", "f", "h"]
    assert chain["h"] == Component(
        key="h",
        category="tmp",
        requires=("b", "e"),
        source={"css": ("h.css",), "js": ("g.js",)},
    )
    assert builder.get_paths("css") == ["/css/a.css", "/css/b.css", "/css/e.css", "/css/f.css", "/css/h.css"]
    assert builder.get_paths("js") == ["/js/g.js"]


def test_resolve_without_selection_uses_whole_manifest(manifest) -> None:
    """No selection resolves every manifest key exactly once."""

    chain = Compartment(manifest).resolve().chain

    assert list(chain) == ["a", "b", "c", "d", "e", "f", "g", "h"]


def test_resolve_with_category_filter(manifest) -> None:
    """Filtering keeps only matching categories."""

    builder = Compartment(manifest)

    assert list(builder.resolve(["h"], "tmp").chain) == ["h"]
    assert list(builder.resolve(None, "tmp").chain) == ["g", "h"]
    assert list(builder.resolve("h", ["lib", "tmp"]).chain) == ["a", "b", "e", "f", "h"]


def test_resolve_accepts_comma_separated_selection(manifest) -> None:
    """A string selection may name several components."""

    chain = Compartment(manifest).build("d,g")

    assert list(chain) == ["c", "d", "g"]


def test_resolve_is_idempotent(manifest) -> None:
    """Same manifest and arguments yield the same keys in the same order."""

    builder = Compartment(manifest)

    first = list(builder.build(["h", "d"], ["lib", "tmp"]))
    second = list(builder.build(["h", "d"], ["lib", "tmp"]))

    assert first == second


def test_resolve_sorts_by_priority() -> None:
    """Chains come out in (priority, key) order by default."""

    builder = Compartment().add_components(
        {
            "a": {"category": "lib", "priority": 3, "source": {"css": ["a.css"]}},
            "b": {"category": "lib", "priority": 8, "require": ["a"], "source": {"css": ["b.css"]}},
            "c": {"category": "lib", "priority": 2, "source": {"css": ["c.css"]}},
        }
    )

    assert list(builder.build()) == ["c", "a", "b"]


def test_get_paths_unknown_type_raises(manifest) -> None:
    """Unregistered types fail with UnknownType."""

    builder = Compartment(manifest).resolve()

    with pytest.raises(UnknownType):
        builder.get_paths("missingType")


def test_get_paths_before_resolve_raises(manifest) -> None:
    """Paths need a resolved chain first, even for unknown types."""

    builder = Compartment(manifest)

    with pytest.raises(ChainNotBuilt):
        builder.get_paths("css")
    with pytest.raises(ChainNotBuilt):
        builder.get_paths("missingType")
    assert not builder.is_built


def test_get_paths_on_empty_resolved_chain_returns_nothing(manifest) -> None:
    """An empty but resolved chain is not an error."""

    builder = Compartment(manifest).register_type("css").resolve(None, "nothing-matches")

    assert builder.is_built
    assert builder.get_paths("css") == []


def test_get_paths_with_explicit_chain(manifest) -> None:
    """An explicit chain bypasses the cached one."""

    builder = Compartment(manifest).register_type("css")
    other = Compartment(manifest).build(["c"])

    assert builder.get_paths("css", chain=other) == ["c.css"]


def test_components_without_sources_do_not_fail() -> None:
    """Components lacking a source mapping are skipped."""

    builder = Compartment().add_components({"a": {"category": "foo"}, "b": {"category": "bar", "source": {"js": ["b.js"]}}})

    assert builder.register_type("js").resolve().get_paths("js") == ["b.js"]


def test_failed_resolution_keeps_previous_chain(manifest) -> None:
    """Errors abort the whole resolution and keep the last good chain."""

    builder = Compartment(manifest).resolve(["d"])

    with pytest.raises(ComponentNotFound):
        builder.resolve(["h", "missing"])

    assert list(builder.chain) == ["c", "d"]


def test_cycle_fails_resolution() -> None:
    """Cyclic manifests raise instead of hanging."""

    builder = Compartment({"a": {"requires": ["b"]}, "b": {"requires": ["a"]}})

    with pytest.raises(CyclicDependency):
        builder.resolve()


def test_removed_component_breaks_later_resolution(manifest) -> None:
    """Removing a required component surfaces on the next resolution."""

    builder = Compartment(manifest).resolve(["h"])
    builder.remove_component("a")

    assert "a" in builder.chain
    with pytest.raises(ComponentNotFound, match="referenced by 'b'"):
        builder.resolve(["h"])


def test_add_component_with_keyword_fields() -> None:
    """Manually added components use the documented defaults."""

    builder = Compartment().add_component("baz", "html")

    assert builder.manifest.get("baz") == Component(key="baz", category="html")
    assert builder.manifest.to_mapping() == {"baz": {"category": "html"}}

    builder.add_component("qux", "html", source={"html": ["q.html"]}, requires=["baz"], priority=1)
    assert builder.manifest.get("qux").requires == ("baz",)


def test_clear_and_set_manifest(manifest) -> None:
    """Clearing empties the store and set_manifest replaces it."""

    builder = Compartment(manifest).clear_manifest()
    assert len(builder.manifest) == 0

    builder.set_manifest({"only": {}})
    assert builder.manifest.keys() == ("only",)


def test_load_manifest_missing_file_raises(tmp_path) -> None:
    """Load errors propagate unchanged."""

    with pytest.raises(ManifestLoadError):
        Compartment().load_manifest(tmp_path / "nope.json")


def test_load_manifest_undecodable_file_raises(tmp_path) -> None:
    """Undecodable manifests fail with the load error, not a codec error."""

    path = tmp_path / "manifest.yaml"
    path.write_bytes(b"a:\n  category: \xff\n")

    with pytest.raises(ManifestLoadError, match="cannot parse file"):
        Compartment().load_manifest(path)


def test_types_property_and_register_types() -> None:
    """Registered types are visible as a copy."""

    builder = Compartment(types={"js": "/path"}).register_type("css").register_types({"foo": "/foo", "bar": "/bar"})

    types = builder.types
    types["js"] = "mutated"
    assert builder.types == {"js": "/path", "css": "", "foo": "/foo", "bar": "/bar"}


def test_direct_requires_and_provides(manifest) -> None:
    """Introspection returns immediate records only."""

    builder = Compartment(manifest)

    requires = builder.direct_requires("h")
    provides = builder.direct_provides("e")

    assert list(requires) == ["b", "e"]
    assert requires["e"].provides == ("f",)
    assert provides == {"f": builder.manifest.get("f")}
    with pytest.raises(ComponentNotFound):
        builder.direct_requires("nope")


def test_notifications_fire_around_build_and_paths(manifest) -> None:
    """preBuild, postBuild and paths fire synchronously with their payloads."""

    builder = Compartment(manifest).register_type("css", "/css/")
    recorder = EventRecorder()
    builder.subscribe(recorder)

    builder.resolve("h")
    paths = builder.get_paths("css")

    assert recorder.phases == (BuildPhase.PRE_BUILD, BuildPhase.POST_BUILD, BuildPhase.PATHS)
    assert recorder.events[0].payload == ("h",)
    assert list(recorder.events[1].payload) == ["a", "b", "e", "f", "h"]
    assert recorder.events[2].payload == paths
    assert recorder.events[2].type_name == "css"


def test_post_build_not_emitted_on_failure(manifest) -> None:
    """A failed resolution announces preBuild only."""

    builder = Compartment(manifest)
    recorder = EventRecorder()
    handle = builder.subscribe(recorder, phases=[BuildPhase.PRE_BUILD, BuildPhase.POST_BUILD])

    with pytest.raises(ComponentNotFound):
        builder.resolve("ghost")

    assert recorder.phases == (BuildPhase.PRE_BUILD,)
    builder.unsubscribe(handle)
    builder.resolve("a")
    assert len(recorder.events) == 1
