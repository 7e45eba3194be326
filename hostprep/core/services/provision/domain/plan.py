"""
L1 Domain — install plan partitioning (pure).

Splits a request into native package names and special components
using only each entry's resolution tag. No I/O, no subprocess.
"""

from __future__ import annotations

from collections.abc import Iterable

from hostprep.core.models.component import InstallMode, InstallPlan, NativeName
from hostprep.core.models.platform import Platform
from hostprep.core.services.provision.domain.catalog import ComponentCatalog
from hostprep.core.services.provision.errors import ConfigurationError


def dedupe(names: Iterable[str]) -> list[str]:
    """Drop duplicates and blanks, keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen[name] = None
    return list(seen)


def build_plan(
    requested: Iterable[str],
    mode: InstallMode,
    catalog: ComponentCatalog,
    platform: Platform,
) -> tuple[InstallPlan, dict[str, str]]:
    """Partition ``requested`` into native and special parts.

    In ``catalog`` mode every name must resolve through the catalog.
    In ``direct`` mode names are concrete package names; only names
    that are special ComponentKeys are routed to an installer.

    Returns:
        ``(plan, errors)`` where ``errors`` maps each unresolved name
        to its cause. Callers must not act on the plan when ``errors``
        is non-empty.
    """
    names = dedupe(requested)
    plan = InstallPlan(mode=mode, requested=names)
    errors: dict[str, str] = {}

    for name in names:
        if mode == InstallMode.DIRECT:
            if catalog.is_special(name):
                plan.special.append(name)
            else:
                plan.native.append(name)
                plan.native_keys.append(name)
            continue

        try:
            entry = catalog.resolve(name, platform)
        except ConfigurationError as e:
            errors[name] = e.cause
            continue

        if isinstance(entry.resolution, NativeName):
            plan.native.append(entry.resolution.package)
            plan.native_keys.append(name)
        else:
            plan.special.append(name)

    return plan, errors
