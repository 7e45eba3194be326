"""
Installer base — the per-component install state machine.

    check_currency → install_deps → fetch → build → deploy
        → record_version → cleanup → done

with ``failed`` reachable from every non-terminal state. Subclasses
only fill in the steps; the transitions, cleanup policy and marker
write live here so every component behaves the same way:

    - already current          → straight to ``done``, nothing touched
    - failure in fetch/build   → transient directory removed
    - failure in deploy        → transient directory kept for diagnosis
    - marker written only after a successful deploy

To create a new installer:
    1. Subclass Installer, set ``key`` (and the version fields)
    2. Implement the steps it needs
    3. Register it in ``installers/registry.py``
"""

from __future__ import annotations

import logging
import os
from abc import ABC
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from hostprep.core.models.platform import Platform
from hostprep.core.models.result import InstallerOutcome, InstallResult, InstallState
from hostprep.core.models.settings import Settings
from hostprep.core.persistence.version_marker import VersionMarkerStore
from hostprep.core.services.provision.data.constants import FETCH_TIMEOUT
from hostprep.core.services.provision.detection.system_deps import PresenceChecker
from hostprep.core.services.provision.detection.tool_version import VersionProbe
from hostprep.core.services.provision.detection.version_oracle import (
    ReleaseSource,
    VersionOracle,
    is_current,
)
from hostprep.core.services.provision.errors import (
    DependencyError,
    ExternalToolError,
    ProvisionError,
)
from hostprep.core.services.provision.execution import workspace
from hostprep.core.services.provision.execution.download import download
from hostprep.core.services.provision.execution.subprocess_runner import CommandRunner

logger = logging.getLogger(__name__)


@dataclass
class InstallerContext:
    """Everything one installer run needs.

    ``install_deps`` recurses into the orchestrator (direct mode).
    The version fields are filled in as the run progresses;
    ``resolved_version`` is what gets recorded on success.
    """

    key: str
    platform: Platform
    settings: Settings
    runner: CommandRunner
    checker: PresenceChecker
    oracle: VersionOracle
    markers: VersionMarkerStore
    install_deps: Callable[[list[str]], InstallResult]
    workdir: Path
    installed_version: str | None = None
    latest_version: str | None = None
    resolved_version: str | None = None

    @property
    def home(self) -> Path:
        return Path(os.path.expanduser("~"))

    @property
    def prefix(self) -> Path:
        return self.settings.prefix

    # ── Command helpers (raise on failure) ──────────────────────

    def execute(
        self,
        cmd: list[str],
        *,
        needs_sudo: bool = False,
        cwd: Path | None = None,
        timeout: int | None = None,
        input_text: str | None = None,
    ) -> str:
        """Run ``cmd``; return stdout or raise ExternalToolError."""
        result = self.runner.run(
            cmd,
            needs_sudo=needs_sudo,
            cwd=str(cwd) if cwd else None,
            timeout=timeout or self.settings.build_timeout,
            input_text=input_text,
        )
        if not result["ok"]:
            detail = result.get("stderr", "").strip().splitlines()
            tail = f": {detail[-1]}" if detail else ""
            raise ExternalToolError(
                self.key, f"{' '.join(cmd[:3])} — {result['error']}{tail}",
            )
        return result.get("stdout", "")

    def shell(
        self,
        script: str,
        *,
        needs_sudo: bool = False,
        cwd: Path | None = None,
        timeout: int | None = None,
    ) -> str:
        """Run a bash snippet; raise ExternalToolError on failure."""
        return self.execute(
            ["bash", "-c", script], needs_sudo=needs_sudo, cwd=cwd, timeout=timeout,
        )

    def fetch_url(self, url: str, name: str) -> Path:
        """Download ``url`` into the transient directory as ``name``."""
        result = download(url, self.workdir / name)
        if not result["ok"]:
            raise ExternalToolError(self.key, result["error"])
        return Path(result["path"])

    def clone(self, repo_url: str, dest: Path | None = None, *, shallow: bool = True) -> Path:
        """Clone ``repo_url``, pinned to the resolved release tag when known.

        When no tag was resolved up front, the clone's HEAD is checked
        for an exact tag so the recorded version is never a guess.
        """
        dest = dest or self.workdir / "src"
        cmd = ["git", "clone"]
        if shallow:
            cmd += ["--depth", "1"]
        if self.resolved_version:
            cmd += ["--branch", self.resolved_version]
        self.execute([*cmd, repo_url, str(dest)], timeout=FETCH_TIMEOUT)

        if not self.resolved_version:
            result = self.runner.run(
                ["git", "-C", str(dest), "describe", "--tags", "--exact-match"],
                timeout=30,
            )
            if result["ok"] and result.get("stdout", "").strip():
                self.resolved_version = result["stdout"].strip()
        return dest


class Installer(ABC):
    """A special component's install routine.

    Class attributes:
        key: ComponentKey this installer serves.
        binary: Executable whose presence means "installed".
        version_probe: How to read the installed version.
        release: Upstream release feed for the latest version.
        tracks_versions: False for components with no release feed;
            they are current whenever ``is_present`` holds.
        deps: Per-distro dependency names, installed in direct mode.
    """

    key: str = ""
    binary: str | None = None
    version_probe: VersionProbe | None = None
    release: ReleaseSource | None = None
    tracks_versions: bool = True
    deps: dict[str, list[str]] = {}

    # ── Steps (override as needed) ──────────────────────────────

    def dependencies(self, platform: Platform) -> list[str]:
        """Dependency names for direct-mode install (packages or special keys)."""
        return list(self.deps.get(platform.distro, []))

    def fetch(self, ctx: InstallerContext) -> None:
        """Obtain sources or artifacts into ``ctx.workdir``."""

    def build(self, ctx: InstallerContext) -> None:
        """Build inside ``ctx.workdir``."""

    def deploy(self, ctx: InstallerContext) -> None:
        """Install the built result into its final location."""

    # ── Currency ────────────────────────────────────────────────

    def is_present(self, ctx: InstallerContext) -> bool:
        """Whether the component's binary exists on this host."""
        return self.binary is not None and ctx.checker.has_binary(self.binary)

    def installed_version(self, ctx: InstallerContext) -> str | None:
        """Recorded marker if the binary is still there, else a live probe."""
        present = self.binary is None or self.is_present(ctx)
        recorded = ctx.markers.read(self.key)
        if recorded and present:
            return recorded
        if not present:
            return None
        return ctx.checker.current_version(self.version_probe)

    def check_currency(self, ctx: InstallerContext) -> bool:
        """Whether the component is already installed at the latest version."""
        if not self.tracks_versions:
            present = self.is_present(ctx)
            if present:
                logger.info("%s is already installed", self.key)
            return present

        ctx.installed_version = self.installed_version(ctx)
        ctx.latest_version = ctx.oracle.latest_version(self.release)
        ctx.resolved_version = ctx.latest_version

        if is_current(ctx.installed_version, ctx.latest_version):
            logger.info("%s is up-to-date (version %s)", self.key, ctx.installed_version)
            return True
        if ctx.installed_version:
            logger.info(
                "Updating %s from %s → %s",
                self.key, ctx.installed_version, ctx.latest_version or "unknown",
            )
        return False

    # ── State machine ───────────────────────────────────────────

    def run(self, ctx: InstallerContext) -> InstallerOutcome:
        """Drive the component through its states. Never raises ProvisionError."""
        history: list[InstallState] = []

        def enter(state: InstallState) -> None:
            history.append(state)
            logger.info("%s → %s", self.key, state.value)

        try:
            enter(InstallState.CHECK_CURRENCY)
            if self.check_currency(ctx):
                enter(InstallState.DONE)
                return InstallerOutcome(
                    key=self.key,
                    state=InstallState.DONE,
                    already_current=True,
                    version=ctx.installed_version,
                    history=history,
                )

            enter(InstallState.INSTALL_DEPS)
            self._install_dependencies(ctx)

            enter(InstallState.FETCH)
            workspace.prepare(ctx.workdir)
            self.fetch(ctx)

            enter(InstallState.BUILD)
            self.build(ctx)

            enter(InstallState.DEPLOY)
            self.deploy(ctx)

            enter(InstallState.RECORD_VERSION)
            if ctx.resolved_version:
                ctx.markers.write(self.key, ctx.resolved_version)
            else:
                logger.info("%s: no version resolved — marker left untouched", self.key)

            enter(InstallState.CLEANUP)
            self._cleanup(ctx)

        except (ProvisionError, OSError) as exc:
            failed_in = history[-1]
            cause = exc.cause if isinstance(exc, ProvisionError) else str(exc)
            kind = exc.kind if isinstance(exc, ProvisionError) else "external_tool"
            if failed_in in (InstallState.FETCH, InstallState.BUILD):
                self._cleanup(ctx)
            elif failed_in == InstallState.DEPLOY:
                logger.warning("%s: keeping %s for diagnosis", self.key, ctx.workdir)
            enter(InstallState.FAILED)
            logger.error("%s failed in %s: %s", self.key, failed_in.value, cause)
            return InstallerOutcome(
                key=self.key,
                state=InstallState.FAILED,
                failed_in=failed_in,
                cause=cause,
                kind=kind,
                history=history,
            )

        enter(InstallState.DONE)
        logger.info("Installed/Updated %s", self.key)
        return InstallerOutcome(
            key=self.key,
            state=InstallState.DONE,
            version=ctx.resolved_version,
            history=history,
        )

    def _install_dependencies(self, ctx: InstallerContext) -> None:
        deps = self.dependencies(ctx.platform)
        if not deps:
            return
        logger.info("Installing dependencies for %s: %s", self.key, " ".join(deps))
        result = ctx.install_deps(deps)
        if not result.ok:
            raise DependencyError(self.key, f"dependency install failed — {result.summary()}")

    def _cleanup(self, ctx: InstallerContext) -> None:
        try:
            workspace.remove(ctx.workdir)
        except OSError as exc:
            logger.warning("%s: cleanup of %s partial: %s", self.key, ctx.workdir, exc)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} key={self.key!r}>"
