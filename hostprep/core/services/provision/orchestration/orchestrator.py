"""
L5 Orchestration — the Orchestrator.

Ties the layers together for one ``install`` request:

    1. Partition the request (catalog or direct mode)
    2. Abort on any unresolved name — nothing is touched
    3. Abort on dependency cycles among special components
    4. One batched package manager call for missing native packages
    5. Special installers, sequentially, in request order

Failures never propagate as exceptions; they come back in the
InstallResult, each attributed to one component key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from hostprep.core.models.component import InstallMode, InstallPlan
from hostprep.core.models.platform import Platform
from hostprep.core.models.result import InstallResult
from hostprep.core.models.settings import Settings
from hostprep.core.persistence.version_marker import VersionMarkerStore
from hostprep.core.services.provision.data.components import BASE_PACKAGES
from hostprep.core.services.provision.detection.platform_probe import detect_platform
from hostprep.core.services.provision.detection.system_deps import PresenceChecker
from hostprep.core.services.provision.detection.version_oracle import VersionOracle
from hostprep.core.services.provision.domain.catalog import ComponentCatalog, default_catalog
from hostprep.core.services.provision.domain.dag import collect_graph, find_cycle_members
from hostprep.core.services.provision.domain.plan import build_plan
from hostprep.core.services.provision.errors import ConfigurationError
from hostprep.core.services.provision.execution.package_manager import install_packages
from hostprep.core.services.provision.execution.subprocess_runner import CommandRunner
from hostprep.core.services.provision.execution.workspace import transient_dir
from hostprep.core.services.provision.installers.base import Installer, InstallerContext
from hostprep.core.services.provision.installers.registry import (
    InstallerRegistry,
    default_registry,
)

logger = logging.getLogger(__name__)


@dataclass
class ProvisionContext:
    """Collaborators shared by every install call of one run.

    Tests build this by hand with fakes; the CLI uses ``create``.
    """

    platform: Platform
    settings: Settings = field(default_factory=Settings)
    catalog: ComponentCatalog = field(default_factory=default_catalog)
    registry: InstallerRegistry = field(default_factory=default_registry)
    checker: PresenceChecker = field(default_factory=PresenceChecker)
    oracle: VersionOracle = field(default_factory=VersionOracle)
    runner: CommandRunner = field(default_factory=CommandRunner)
    markers: VersionMarkerStore | None = None

    def __post_init__(self) -> None:
        if self.markers is None:
            self.markers = VersionMarkerStore(self.settings.marker_dir)

    @classmethod
    def create(cls, settings: Settings, platform: Platform | None = None) -> ProvisionContext:
        """Real collaborators for this host.

        Raises:
            UnsupportedPlatformError: If the host can't be identified.
        """
        return cls(
            platform=platform or detect_platform(),
            settings=settings,
            oracle=VersionOracle(timeout=settings.http_timeout),
        )


class Orchestrator:
    """Public entry point of the provisioning engine."""

    def __init__(self, context: ProvisionContext):
        self.ctx = context

    # ── Lookups ─────────────────────────────────────────────────

    def installer_for(self, key: str) -> Installer:
        """The installer serving special component ``key``.

        Raises:
            ConfigurationError: Unknown key, native key, or an installer
                name nothing is registered under.
        """
        entry = self.ctx.catalog.resolve(key, self.ctx.platform)
        if not entry.is_special:
            raise ConfigurationError(key, "not a special component")
        installer = self.ctx.registry.get(entry.resolution.installer)
        if installer is None:
            raise ConfigurationError(
                key, f"installer '{entry.resolution.installer}' is not registered",
            )
        return installer

    def _special_deps(self, key: str) -> list[str]:
        installer = self.installer_for(key)
        return [
            d for d in installer.dependencies(self.ctx.platform)
            if self.ctx.catalog.is_special(d)
        ]

    def _check_specials(self, plan: InstallPlan) -> dict[str, str]:
        """Registered installers and an acyclic dependency graph, or errors."""
        errors: dict[str, str] = {}
        try:
            graph = collect_graph(plan.special, self._special_deps)
        except ConfigurationError as e:
            errors[e.key] = e.cause
            return errors

        for key in find_cycle_members(graph):
            errors[key] = "dependency cycle among special components"
        return errors

    def _installer_context(self, key: str) -> InstallerContext:
        ctx = self.ctx
        return InstallerContext(
            key=key,
            platform=ctx.platform,
            settings=ctx.settings,
            runner=ctx.runner,
            checker=ctx.checker,
            oracle=ctx.oracle,
            markers=ctx.markers,
            install_deps=lambda names: self.install(names, InstallMode.DIRECT),
            workdir=transient_dir(ctx.settings.scratch_root, key),
        )

    # ── Install ─────────────────────────────────────────────────

    def install(
        self,
        requested: list[str],
        mode: InstallMode = InstallMode.CATALOG,
    ) -> InstallResult:
        """Install ``requested`` components.

        Args:
            requested: ComponentKeys (catalog mode) or package names
                with optional special keys (direct mode).
            mode: How to interpret ``requested``.

        Returns:
            InstallResult — ``ok`` only if every component reached done.
        """
        plan, errors = build_plan(requested, mode, self.ctx.catalog, self.ctx.platform)
        if not errors and plan.special:
            errors = self._check_specials(plan)
        if errors:
            for key, cause in errors.items():
                logger.error("Invalid component '%s': %s", key, cause)
            result = InstallResult.configuration_failure(errors, mode=mode.value)
            result.not_attempted = [n for n in plan.requested if n not in errors]
            return result

        result = InstallResult(mode=mode.value)
        if plan.is_empty:
            logger.info("Nothing to install")
            return result

        self._install_native(plan, result)
        self._install_special(plan, result)

        if result.ok:
            logger.info("Install finished: %s", ", ".join(plan.requested))
        else:
            logger.error("Install finished with failures: %s", ", ".join(result.failed_keys))
        return result

    def _install_native(self, plan: InstallPlan, result: InstallResult) -> None:
        if not plan.native:
            return
        missing = set(self.ctx.checker.missing(plan.native, self.ctx.platform))
        pending = [k for k, pkg in zip(plan.native_keys, plan.native) if pkg in missing]
        present = [k for k, pkg in zip(plan.native_keys, plan.native) if pkg not in missing]

        if not missing:
            logger.info("All native packages already installed")
            result.already_current.extend(present)
            return

        packages = [pkg for pkg in plan.native if pkg in missing]
        packages = list(dict.fromkeys(packages))
        logger.info("Installing packages: %s", " ".join(packages))
        outcome = install_packages(packages, self.ctx.platform, self.ctx.runner)
        if outcome["ok"]:
            result.already_current.extend(present)
            result.native_installed.extend(pending)
            return

        # a batch reports no per-package outcome: every native key fails with it
        cause = f"package manager failed: {outcome.get('error', 'unknown error')}"
        for key in plan.native_keys:
            result.add_failure(key, cause, kind="external_tool")

    def _install_special(self, plan: InstallPlan, result: InstallResult) -> None:
        stop_on_failure = self.ctx.settings.on_failure == "stop"
        for index, key in enumerate(plan.special):
            installer = self.installer_for(key)
            outcome = installer.run(self._installer_context(key))

            if outcome.ok:
                if outcome.already_current:
                    result.already_current.append(key)
                else:
                    result.installed.append(key)
                continue

            result.add_failure(
                key,
                outcome.cause,
                kind=outcome.kind or "external_tool",
                state=outcome.failed_in.value if outcome.failed_in else None,
            )
            if stop_on_failure:
                result.not_attempted.extend(plan.special[index + 1:])
                if result.not_attempted:
                    logger.warning("Skipping after failure: %s", ", ".join(result.not_attempted))
                return

    # ── Host baseline & status ──────────────────────────────────

    def ensure_base_packages(self) -> dict[str, Any]:
        """Install the fetch/build tools every installer relies on."""
        platform = self.ctx.platform
        wanted = BASE_PACKAGES.get(platform.distro, [])
        missing = self.ctx.checker.missing(wanted, platform)
        if not missing:
            return {"ok": True, "installed": []}

        logger.info("Installing base packages: %s", " ".join(missing))
        outcome = install_packages(missing, platform, self.ctx.runner)
        if not outcome["ok"]:
            return {"ok": False, "error": outcome.get("error", ""), "packages": missing}
        return {"ok": True, "installed": missing}

    def version_report(self, *, check_latest: bool = False) -> list[dict[str, Any]]:
        """Recorded, installed and (optionally) latest version per special component."""
        rows: list[dict[str, Any]] = []
        for key in self.ctx.catalog.special_keys():
            installer = self.installer_for(key)
            ictx = self._installer_context(key)
            row: dict[str, Any] = {
                "key": key,
                "tracks_versions": installer.tracks_versions,
                "present": installer.is_present(ictx),
                "recorded": self.ctx.markers.read(key),
                "installed": (
                    installer.installed_version(ictx) if installer.tracks_versions else None
                ),
            }
            if check_latest and installer.tracks_versions:
                row["latest"] = self.ctx.oracle.latest_version(installer.release)
            rows.append(row)
        return rows
