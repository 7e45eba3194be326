"""
Shared test fixtures — fakes for the host-touching collaborators.

Nothing here runs a real command, hits the network, or reads the real
package database.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from hostprep.core.models.platform import Platform
from hostprep.core.models.settings import Settings
from hostprep.core.persistence.version_marker import VersionMarkerStore
from hostprep.core.services.provision.detection.system_deps import PresenceChecker
from hostprep.core.services.provision.detection.version_oracle import (
    ReleaseSource,
    VersionOracle,
)
from hostprep.core.services.provision.domain.catalog import ComponentCatalog
from hostprep.core.services.provision.errors import ExternalToolError
from hostprep.core.services.provision.execution.subprocess_runner import CommandRunner
from hostprep.core.services.provision.installers.base import Installer
from hostprep.core.services.provision.installers.registry import InstallerRegistry
from hostprep.core.services.provision.orchestration.orchestrator import (
    Orchestrator,
    ProvisionContext,
)


class FakeRunner(CommandRunner):
    """Records commands; fails any whose first word is in ``failing``.

    ``elevated`` collects the commands run with ``needs_sudo``.
    """

    def __init__(self, failing: set[str] | None = None):
        super().__init__()
        self.failing = set(failing or ())
        self.calls: list[list[str]] = []
        self.elevated: list[list[str]] = []
        self.stdout: dict[str, str] = {}

    def run(self, cmd, *, needs_sudo=False, cwd=None, timeout=600, env=None, input_text=None):
        self.calls.append(list(cmd))
        if needs_sudo:
            self.elevated.append(list(cmd))
        if cmd[0] in self.failing:
            return {"ok": False, "error": "Command failed (exit 1)", "stderr": "boom"}
        return {"ok": True, "stdout": self.stdout.get(cmd[0], ""), "elapsed_ms": 1}


class FakeChecker(PresenceChecker):
    def __init__(self, installed=(), binaries=(), versions=None):
        self.installed = set(installed)
        self.binaries = set(binaries)
        self.versions = dict(versions or {})

    def is_installed(self, pkg, platform):
        return pkg in self.installed

    def has_binary(self, name):
        return name in self.binaries

    def current_version(self, probe):
        if probe is None:
            return None
        return self.versions.get(probe.binary)


class FakeOracle(VersionOracle):
    """Latest versions by project; missing project means "unreachable"."""

    def __init__(self, latest=None):
        super().__init__(token="")
        self.latest = dict(latest or {})
        self.queries: list[str] = []

    def latest_version(self, source):
        if source is None:
            return None
        self.queries.append(source.project)
        return self.latest.get(source.project)


class ToyInstaller(Installer):
    """Configurable installer for state-machine and orchestration tests.

    ``fail_in`` names the step ("fetch", "build", "deploy") that raises;
    ``log`` collects the keys of every installer whose steps ran.
    """

    def __init__(self, key, *, deps=None, fail_in=None, log=None, fetched_version=None):
        self.key = key
        self.binary = key
        self.release = ReleaseSource(provider="github", project=f"upstream/{key}")
        self.version_probe = None
        self.deps = {"arch": list(deps or []), "debian": list(deps or [])}
        self.fail_in = fail_in
        self.log = log if log is not None else []
        self.fetched_version = fetched_version

    def _step(self, name, ctx):
        if self.fail_in == name:
            raise ExternalToolError(self.key, f"{name} exploded")

    def fetch(self, ctx):
        self.log.append(self.key)
        (ctx.workdir / "payload").write_text("x")
        if self.fetched_version and not ctx.resolved_version:
            ctx.resolved_version = self.fetched_version
        self._step("fetch", ctx)

    def build(self, ctx):
        self._step("build", ctx)

    def deploy(self, ctx):
        self._step("deploy", ctx)


ARCH = Platform(architecture="x86_64", distro="arch")


@pytest.fixture
def arch_platform() -> Platform:
    return ARCH


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        scratch_root=tmp_path / "scratch",
        state_dir=tmp_path / "markers",
    )


@pytest.fixture
def markers(settings: Settings) -> VersionMarkerStore:
    return VersionMarkerStore(settings.marker_dir)


@pytest.fixture
def make_orchestrator(settings: Settings, markers: VersionMarkerStore):
    """Build an Orchestrator over a toy catalog and fakes."""

    def _make(
        components: dict,
        installers: list[Installer] = (),
        *,
        groups: dict | None = None,
        runner: FakeRunner | None = None,
        checker: FakeChecker | None = None,
        oracle: FakeOracle | None = None,
        on_failure: str = "stop",
    ) -> Orchestrator:
        ctx = ProvisionContext(
            platform=ARCH,
            settings=settings.model_copy(update={"on_failure": on_failure}),
            catalog=ComponentCatalog(components, groups),
            registry=InstallerRegistry(list(installers)),
            checker=checker or FakeChecker(),
            oracle=oracle or FakeOracle(),
            runner=runner or FakeRunner(),
            markers=markers,
        )
        return Orchestrator(ctx)

    return _make
