"""
L3 Detection — PresenceChecker.

Read-only probes for package and binary availability. A failed query
(checker missing, permission error, timeout) counts as "not installed":
the goal is to compute what must be installed, not to vouch for the
health of the package database.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Iterable

from hostprep.core.models.platform import Platform
from hostprep.core.services.provision.data.constants import PROBE_TIMEOUT
from hostprep.core.services.provision.detection.tool_version import (
    VersionProbe,
    get_tool_version,
)
from hostprep.core.services.provision.errors import PresenceCheckError

logger = logging.getLogger(__name__)


def _query_package(pkg: str, distro: str) -> bool:
    """Ask the distro's package database whether ``pkg`` is installed.

      arch   → pacman -Qi PKG
      debian → dpkg-query -W -f='${Status}' PKG

    Returns:
        True if installed, False if the database says it isn't.

    Raises:
        PresenceCheckError: If the query itself could not be run.
    """
    try:
        if distro == "arch":
            r = subprocess.run(
                ["pacman", "-Qi", pkg],
                capture_output=True, timeout=PROBE_TIMEOUT,
            )
            return r.returncode == 0

        if distro == "debian":
            r = subprocess.run(
                ["dpkg-query", "-W", "-f=${Status}", pkg],
                capture_output=True, text=True, timeout=PROBE_TIMEOUT,
            )
            return "install ok installed" in r.stdout

    except FileNotFoundError as exc:
        raise PresenceCheckError(pkg, f"package checker not found for {distro}") from exc
    except subprocess.TimeoutExpired as exc:
        raise PresenceCheckError(pkg, "timeout querying package database") from exc
    except OSError as exc:
        raise PresenceCheckError(pkg, f"OS error querying package database: {exc}") from exc

    raise PresenceCheckError(pkg, f"no package checker for distro '{distro}'")


class PresenceChecker:
    """Decides which native packages and tools are already on the host."""

    def is_installed(self, pkg: str, platform: Platform) -> bool:
        """Check a single concrete package; query failures mean "missing"."""
        try:
            return _query_package(pkg, platform.distro)
        except PresenceCheckError as exc:
            logger.warning("Presence check failed for %s (%s) — assuming missing", pkg, exc.cause)
            return False

    def missing(self, packages: Iterable[str], platform: Platform) -> list[str]:
        """Return the subset of ``packages`` not installed, in input order."""
        result: list[str] = []
        for pkg in dict.fromkeys(packages):
            if not self.is_installed(pkg, platform):
                result.append(pkg)
        logger.debug("Missing packages on %s: %s", platform.describe(), result)
        return result

    def has_binary(self, name: str) -> bool:
        return shutil.which(name) is not None

    def current_version(self, probe: VersionProbe | None) -> str | None:
        """Installed version of a special component's binary, if any."""
        if probe is None:
            return None
        return get_tool_version(probe)
