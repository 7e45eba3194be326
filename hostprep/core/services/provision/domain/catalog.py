"""
L1 Domain — ComponentCatalog.

Pure lookup over the L0 tables: maps a ComponentKey plus a Platform
to a resolved ComponentEntry. No I/O. The catalog is read-only once
built, so it can be shared freely for the process lifetime.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from hostprep.core.models.component import ComponentEntry, NativeName, Special
from hostprep.core.models.platform import SUPPORTED_DISTROS, Platform
from hostprep.core.services.provision.errors import ConfigurationError

_KNOWN_FIELDS = {"label", "packages", "installer"}


class ComponentCatalog:
    """Read-only registry of logical components."""

    def __init__(
        self,
        components: Mapping[str, dict],
        groups: Mapping[str, dict] | None = None,
    ):
        self._components = MappingProxyType(
            {key: dict(entry) for key, entry in components.items()},
        )
        self._groups = MappingProxyType(
            {name: dict(entry) for name, entry in (groups or {}).items()},
        )

    def __contains__(self, key: object) -> bool:
        return key in self._components

    def __len__(self) -> int:
        return len(self._components)

    def keys(self) -> list[str]:
        return list(self._components)

    def is_special(self, key: str) -> bool:
        """Whether ``key`` names a special component (platform-independent)."""
        entry = self._components.get(key)
        return bool(entry and entry.get("installer"))

    def special_keys(self) -> list[str]:
        return [k for k in self._components if self.is_special(k)]

    def resolve(self, key: str, platform: Platform) -> ComponentEntry:
        """Resolve ``key`` for ``platform``.

        Raises:
            ConfigurationError: Unknown key, or a native component with
                no package mapping for ``platform.distro``.
        """
        entry = self._components.get(key)
        if entry is None:
            raise ConfigurationError(key, "unknown component")

        description = entry.get("label", "")
        installer = entry.get("installer")
        if installer:
            return ComponentEntry(
                key=key,
                description=description,
                resolution=Special(installer=installer),
            )

        package = (entry.get("packages") or {}).get(platform.distro)
        if not package:
            raise ConfigurationError(
                key, f"no package mapping for distro '{platform.distro}'",
            )
        return ComponentEntry(
            key=key,
            description=description,
            resolution=NativeName(package=package),
        )

    # ── Groups ──────────────────────────────────────────────────

    def groups(self) -> list[str]:
        return list(self._groups)

    def group_label(self, name: str) -> str:
        return self._groups.get(name, {}).get("label", name)

    def group(self, name: str) -> list[str]:
        """Component keys of a menu group.

        Raises:
            ConfigurationError: If the group does not exist.
        """
        entry = self._groups.get(name)
        if entry is None:
            raise ConfigurationError(name, "unknown component group")
        return list(entry.get("keys", []))

    def describe(self, key: str) -> str:
        return self._components.get(key, {}).get("label", "")


def validate_component(key: str, entry: dict) -> list[str]:
    """Check one catalog entry. Returns a list of problems (empty = valid)."""
    errors: list[str] = []

    unknown = set(entry) - _KNOWN_FIELDS
    if unknown:
        errors.append(f"unknown fields: {', '.join(sorted(unknown))}")

    if not entry.get("label"):
        errors.append("missing label")

    has_packages = "packages" in entry
    has_installer = "installer" in entry
    if has_packages == has_installer:
        errors.append("exactly one of 'packages' or 'installer' is required")
        return errors

    if has_packages:
        packages = entry["packages"]
        if not isinstance(packages, dict):
            errors.append("'packages' must map distro → package name")
            return errors
        for distro in SUPPORTED_DISTROS:
            if not packages.get(distro):
                errors.append(f"no package mapping for distro '{distro}'")
        for distro in packages:
            if distro not in SUPPORTED_DISTROS:
                errors.append(f"unsupported distro '{distro}'")
    elif not isinstance(entry["installer"], str) or not entry["installer"]:
        errors.append("'installer' must be a non-empty string")

    return errors


def validate_catalog(
    components: Mapping[str, dict],
    groups: Mapping[str, dict] | None = None,
    installers: Iterable[str] | None = None,
) -> dict[str, list[str]]:
    """Validate every entry (and group) of a catalog table.

    Args:
        components: The component table.
        groups: Optional menu groups; every listed key must exist.
        installers: Optional registered installer names; every special
            entry must reference one of them.

    Returns:
        Mapping of key → problems, only for keys that have problems.
    """
    problems: dict[str, list[str]] = {}
    registered = set(installers) if installers is not None else None

    for key, entry in components.items():
        errs = validate_component(key, entry)
        installer = entry.get("installer")
        if registered is not None and installer and installer not in registered:
            errs.append(f"installer '{installer}' is not registered")
        if errs:
            problems[key] = errs

    for name, entry in (groups or {}).items():
        missing = [k for k in entry.get("keys", []) if k not in components]
        if missing:
            problems[f"group:{name}"] = [
                f"unknown component '{k}'" for k in missing
            ]

    return problems


def default_catalog() -> ComponentCatalog:
    """Catalog built from the bundled L0 tables."""
    from hostprep.core.services.provision.data.components import COMPONENTS, GROUPS

    return ComponentCatalog(COMPONENTS, GROUPS)
