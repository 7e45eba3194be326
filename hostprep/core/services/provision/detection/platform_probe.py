"""
L3 Detection — platform probe.

Detects CPU architecture and distro family once at startup. The
resulting Platform is passed explicitly to everything else; nothing in
the engine reads it from module state.
"""

from __future__ import annotations

import logging
import platform as _platform
from pathlib import Path

from hostprep.core.models.platform import Platform

logger = logging.getLogger(__name__)

_ARCH_MAP: dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "armv7",
    "armv7": "armv7",
}

_FAMILY_IDS: dict[str, str] = {
    "arch": "arch",
    "manjaro": "arch",
    "endeavouros": "arch",
    "debian": "debian",
    "ubuntu": "debian",
    "linuxmint": "debian",
    "pop": "debian",
    "raspbian": "debian",
}


class UnsupportedPlatformError(Exception):
    """The host's architecture or distro is not one we provision."""


def detect_architecture(machine: str | None = None) -> str:
    """Normalise ``uname -m`` output.

    Raises:
        UnsupportedPlatformError: For architectures outside the table.
    """
    raw = (machine if machine is not None else _platform.machine()).lower()
    arch = _ARCH_MAP.get(raw)
    if arch is None:
        raise UnsupportedPlatformError(f"Unsupported arch: {raw or 'unknown'}")
    return arch


def _read_os_release(root: Path) -> dict[str, str]:
    """Parse /etc/os-release into a dict (empty when unreadable)."""
    info: dict[str, str] = {}
    try:
        with open(root / "etc" / "os-release", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if "=" not in line or line.startswith("#"):
                    continue
                key, value = line.split("=", 1)
                info[key] = value.strip().strip('"')
    except (FileNotFoundError, OSError):
        pass
    return info


def detect_distro(root: Path = Path("/")) -> str:
    """Detect the distro family (``arch`` or ``debian``).

    Marker files win; ``/etc/os-release`` (ID, then ID_LIKE) is the
    fallback for derivatives that lack them.

    Raises:
        UnsupportedPlatformError: When neither family matches.
    """
    if (root / "etc" / "arch-release").exists():
        return "arch"
    if (root / "etc" / "debian_version").exists():
        return "debian"

    info = _read_os_release(root)
    candidates = [info.get("ID", "")] + info.get("ID_LIKE", "").split()
    for candidate in candidates:
        family = _FAMILY_IDS.get(candidate.lower())
        if family:
            return family

    raise UnsupportedPlatformError(
        f"Unsupported distro {info.get('PRETTY_NAME') or info.get('ID') or 'unknown'}"
    )


def detect_platform(
    machine: str | None = None,
    root: Path = Path("/"),
) -> Platform:
    """Probe the host once and return its Platform."""
    found = Platform(
        architecture=detect_architecture(machine),
        distro=detect_distro(root),
    )
    logger.info("Detected platform %s", found.describe())
    return found
