"""
L4 Execution — native package manager.

One batched invocation per request. Batched managers do not reliably
report per-package outcomes, so the caller treats any failure as a
failure of the whole batch.
"""

from __future__ import annotations

import logging
from typing import Any

from hostprep.core.models.platform import Platform
from hostprep.core.services.provision.data.constants import PKG_TIMEOUT
from hostprep.core.services.provision.execution.subprocess_runner import CommandRunner

logger = logging.getLogger(__name__)

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def install_commands(packages: list[str], platform: Platform) -> list[list[str]]:
    """The command sequence that installs ``packages`` on ``platform``."""
    if platform.distro == "arch":
        return [["pacman", "-Sy", "--noconfirm", "--needed", *packages]]
    return [
        ["apt-get", "update"],
        ["apt-get", "install", "-y", *packages],
    ]


def install_packages(
    packages: list[str],
    platform: Platform,
    runner: CommandRunner,
) -> dict[str, Any]:
    """Install ``packages`` with the platform's package manager.

    Returns:
        ``{"ok": True}`` or the failing command's result dict with a
        ``command`` key added.
    """
    if not packages:
        return {"ok": True, "skipped": True}

    env = _APT_ENV if platform.distro == "debian" else None
    for cmd in install_commands(packages, platform):
        result = runner.run(cmd, needs_sudo=True, timeout=PKG_TIMEOUT, env=env)
        if not result["ok"]:
            logger.error(
                "%s failed: %s %s",
                cmd[0], result.get("error", ""), result.get("stderr", "")[-300:],
            )
            return {**result, "command": cmd}
    return {"ok": True}
