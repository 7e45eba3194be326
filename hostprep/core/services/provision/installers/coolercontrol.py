"""
CoolerControl — fan/pump control daemon, built from source and
enabled as a systemd service.
"""

from __future__ import annotations

import logging

from hostprep.core.services.provision.detection.tool_version import VersionProbe
from hostprep.core.services.provision.detection.version_oracle import ReleaseSource
from hostprep.core.services.provision.installers.base import Installer, InstallerContext

logger = logging.getLogger(__name__)


class CoolerControlInstaller(Installer):
    key = "coolercontrol"
    binary = "coolercontrold"
    version_probe = VersionProbe(
        command=["coolercontrold", "--version"], pattern=r"CoolerControlD ([0-9.]+)",
    )
    release = ReleaseSource(provider="gitlab", project="coolercontrol/coolercontrol")
    deps = {
        "arch": ["lm_sensors"],
        "debian": ["lm-sensors"],
    }

    def fetch(self, ctx: InstallerContext) -> None:
        ctx.clone("https://gitlab.com/coolercontrol/coolercontrol.git")

    def build(self, ctx: InstallerContext) -> None:
        # daemon, UI and desktop app in one target
        ctx.execute(["make", "build-source", "-j4"], cwd=ctx.workdir / "src")

    def deploy(self, ctx: InstallerContext) -> None:
        ctx.execute(["make", "install-source"], needs_sudo=True, cwd=ctx.workdir / "src")
        ctx.execute(["systemctl", "daemon-reload"], needs_sudo=True)
        ctx.execute(["systemctl", "enable", "--now", "coolercontrold"], needs_sudo=True)
        logger.warning(
            "coolercontrol: if no sensors show up in the UI, run 'sudo sensors-detect' "
            "(or disable secure boot once and run it)",
        )
