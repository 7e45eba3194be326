"""
Tests for the L1 domain — catalog lookups, plan partitioning and the
dependency graph check.
"""

import pytest

from hostprep.core.models.component import InstallMode, NativeName, Special
from hostprep.core.models.platform import Platform
from hostprep.core.services.provision.data.components import COMPONENTS, GROUPS
from hostprep.core.services.provision.domain.catalog import (
    ComponentCatalog,
    default_catalog,
    validate_catalog,
    validate_component,
)
from hostprep.core.services.provision.domain.dag import collect_graph, find_cycle_members
from hostprep.core.services.provision.domain.plan import build_plan, dedupe
from hostprep.core.services.provision.errors import ConfigurationError
from hostprep.core.services.provision.installers.registry import default_registry

ARCH = Platform(architecture="x86_64", distro="arch")
DEBIAN = Platform(architecture="arm64", distro="debian")


# ── Built-in tables ─────────────────────────────────────────────


class TestBuiltinCatalog:
    """Tests for the shipped component and group tables."""

    def test_tables_are_valid(self):
        """Built-in tables pass catalog validation."""
        problems = validate_catalog(COMPONENTS, GROUPS, default_registry().names())
        assert problems == {}

    def test_every_installer_has_a_catalog_entry(self):
        """Every registered installer backs exactly one special key."""
        catalog = default_catalog()
        assert sorted(default_registry().names()) == sorted(catalog.special_keys())

    def test_every_key_resolves_on_both_distros(self):
        """Every key resolves on Arch and Debian."""
        catalog = default_catalog()
        for platform in (ARCH, DEBIAN):
            for key in catalog.keys():
                assert catalog.resolve(key, platform).key == key

    def test_distro_specific_names(self):
        """A key maps to different package names per distro."""
        catalog = default_catalog()
        assert catalog.resolve("xrandr", ARCH).resolution == NativeName(package="xorg-xrandr")
        assert catalog.resolve("xrandr", DEBIAN).resolution == NativeName(
            package="x11-xserver-utils",
        )

    def test_groups(self):
        """Menu groups keep their order, members and labels."""
        catalog = default_catalog()
        assert catalog.groups() == ["i3", "dev"]
        assert "nvim" in catalog.group("dev")
        assert catalog.group_label("i3") == "i3wm setup packages"


# ── Lookups ─────────────────────────────────────────────────────


class TestResolve:
    """Tests for ComponentCatalog.resolve and group lookup."""

    def _catalog(self):
        return ComponentCatalog({
            "editor": {"label": "Editor", "packages": {"arch": "vim", "debian": "vim"}},
            "shell": {"label": "Shell", "packages": {"debian": "zsh"}},
            "lock": {"label": "Lock", "installer": "lock"},
        })

    def test_native(self):
        """Package-mapped keys resolve to a native name."""
        entry = self._catalog().resolve("editor", ARCH)
        assert not entry.is_special
        assert entry.resolution.package == "vim"

    def test_special_is_platform_independent(self):
        """Special keys resolve to their installer on every platform."""
        catalog = self._catalog()
        for platform in (ARCH, DEBIAN):
            assert catalog.resolve("lock", platform).resolution == Special(installer="lock")

    def test_missing_distro_mapping(self):
        """A key with no mapping for the distro is a configuration error."""
        with pytest.raises(ConfigurationError) as exc:
            self._catalog().resolve("shell", ARCH)
        assert exc.value.key == "shell"
        assert "arch" in exc.value.cause

    def test_unknown_key(self):
        """Unknown keys raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            self._catalog().resolve("nope", ARCH)

    def test_unknown_group(self):
        """Unknown groups raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            self._catalog().group("nope")

    def test_catalog_is_read_only(self):
        """The catalog table cannot be mutated after construction."""
        catalog = self._catalog()
        with pytest.raises(TypeError):
            catalog._components["new"] = {}


class TestValidate:
    """Tests for catalog table validation."""

    def test_both_packages_and_installer(self):
        """An entry needs exactly one of packages/installer."""
        errs = validate_component("x", {"label": "X", "packages": {}, "installer": "x"})
        assert any("exactly one" in e for e in errs)

    def test_partial_mapping_reported(self):
        """A missing distro mapping is reported by name."""
        errs = validate_component("x", {"label": "X", "packages": {"arch": "x"}})
        assert errs == ["no package mapping for distro 'debian'"]

    def test_unknown_distro_and_field(self):
        """Unsupported distros and unknown fields are reported."""
        errs = validate_component(
            "x", {"label": "X", "packages": {"arch": "x", "debian": "x", "gentoo": "x"}, "extra": 1},
        )
        assert "unsupported distro 'gentoo'" in errs
        assert any("unknown fields" in e for e in errs)

    def test_unregistered_installer(self):
        """Installer references must be registered."""
        problems = validate_catalog({"x": {"label": "X", "installer": "x"}}, installers=[])
        assert problems == {"x": ["installer 'x' is not registered"]}

    def test_group_with_unknown_key(self):
        """Groups may only list known keys."""
        problems = validate_catalog({}, {"g": {"label": "G", "keys": ["ghost"]}})
        assert problems == {"group:g": ["unknown component 'ghost'"]}


# ── Plan ────────────────────────────────────────────────────────


class TestBuildPlan:
    """Tests for native/special plan partitioning."""

    def test_partition_is_complete_and_disjoint(self):
        """Every requested key lands in exactly one partition."""
        catalog = default_catalog()
        requested = catalog.keys()

        plan, errors = build_plan(requested, InstallMode.CATALOG, catalog, ARCH)

        assert errors == {}
        assert set(plan.native_keys) | set(plan.special) == set(requested)
        assert not set(plan.native_keys) & set(plan.special)

    def test_special_keeps_request_order(self):
        """Special keys keep the order they were requested in."""
        catalog = default_catalog()
        plan, _ = build_plan(["rust", "tmux", "alacritty", "fzf"], InstallMode.CATALOG, catalog, ARCH)
        assert plan.special == ["rust", "alacritty", "fzf"]
        assert plan.native == ["tmux"]

    def test_errors_collected_for_every_bad_key(self):
        """Every unresolvable key is reported, not just the first."""
        catalog = default_catalog()
        _, errors = build_plan(["tmux", "nope", "zilch"], InstallMode.CATALOG, catalog, ARCH)
        assert set(errors) == {"nope", "zilch"}

    def test_direct_mode_routes_special_keys(self):
        """Direct mode sends catalog special keys to their installers."""
        catalog = default_catalog()
        plan, errors = build_plan(["cmake", "rust"], InstallMode.DIRECT, catalog, ARCH)
        assert errors == {}
        assert plan.native == ["cmake"]
        assert plan.special == ["rust"]

    def test_dedupe(self):
        """Duplicates and blanks are dropped, order kept."""
        assert dedupe(["a", " b ", "a", "", "b"]) == ["a", "b"]


# ── Dependency graph ────────────────────────────────────────────


class TestDependencyGraph:
    """Tests for dependency graph collection and cycle detection."""

    def test_collect_transitive(self):
        """Graph collection follows dependencies transitively."""
        edges = {"a": ["b"], "b": ["c"], "c": []}
        assert collect_graph(["a"], edges.__getitem__) == edges

    def test_acyclic(self):
        """An acyclic graph has no cycle members."""
        assert find_cycle_members({"a": ["b"], "b": [], "c": ["b"]}) == []

    def test_cycle_members(self):
        """Keys on a cycle are reported, sorted."""
        graph = {"a": ["b"], "b": ["a"], "c": []}
        assert find_cycle_members(graph) == ["a", "b"]

    def test_dependents_of_cycle_included(self):
        """Keys that depend on a cycle are reported too."""
        graph = {"top": ["a"], "a": ["b"], "b": ["a"]}
        assert find_cycle_members(graph) == ["a", "b", "top"]

    def test_self_loop(self):
        """A self-dependency is a cycle."""
        assert find_cycle_members({"a": ["a"]}) == ["a"]

    def test_builtin_installers_are_acyclic(self):
        """Shipped installer dependencies form a DAG."""
        catalog = default_catalog()
        registry = default_registry()

        def deps_of(key):
            deps = registry.get(key).dependencies(ARCH)
            return [d for d in deps if catalog.is_special(d)]

        graph = collect_graph(catalog.special_keys(), deps_of)
        assert find_cycle_members(graph) == []
        assert graph["betterlockscreen"] == ["i3lock_color"]
        assert graph["alacritty"] == ["rust"]
