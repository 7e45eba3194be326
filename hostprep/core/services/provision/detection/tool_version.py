"""
L3 Detection — installed tool version probes.

Read-only probes: runs ``--version`` style commands and parses the
output into a string comparable with upstream release tags.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess

from pydantic import BaseModel, Field

from hostprep.core.services.provision.data.constants import PROBE_TIMEOUT

logger = logging.getLogger(__name__)


class VersionProbe(BaseModel):
    """How to ask a local binary for its version.

    ``prefix`` is prepended to the captured group so the result matches
    the upstream tag format (e.g. alacritty prints ``0.15.1`` while its
    tags are ``v0.15.1``).
    """

    command: list[str] = Field(min_length=1)
    pattern: str
    prefix: str = ""

    @property
    def binary(self) -> str:
        return self.command[0]


def parse_version(output: str, probe: VersionProbe) -> str | None:
    """Extract the version from probe output, or None if it doesn't match."""
    match = re.search(probe.pattern, output, re.MULTILINE)
    if not match:
        return None
    return f"{probe.prefix}{match.group(1)}"


def get_tool_version(probe: VersionProbe) -> str | None:
    """Get the installed version of a tool.

    Returns:
        Version string (e.g. ``"v0.15.1"``) or ``None`` if the binary is
        not installed or its version can't be determined.
    """
    if not shutil.which(probe.binary):
        return None

    try:
        result = subprocess.run(
            probe.command, capture_output=True, text=True, timeout=PROBE_TIMEOUT,
        )
    except (subprocess.TimeoutExpired, OSError) as exc:
        logger.warning("Version probe %s failed: %s", probe.binary, exc)
        return None

    # Some tools write version to stderr (e.g. i3lock)
    output = (result.stdout or "") + (result.stderr or "")
    return parse_version(output, probe)
