"""
Platform model — the (architecture, distribution) pair of the target host.

Computed once at process start by the platform probe and passed
explicitly into every catalog, checker and installer call.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Architecture = Literal["x86_64", "arm64", "armv7"]
Distro = Literal["arch", "debian"]

SUPPORTED_DISTROS: tuple[Distro, ...] = ("arch", "debian")


class Platform(BaseModel):
    """Immutable description of the host.

    Catalog lookups are keyed by ``distro``; ``architecture`` is only
    consulted by installers that download architecture-specific
    artifacts.
    """

    model_config = ConfigDict(frozen=True)

    architecture: Architecture
    distro: Distro

    @property
    def package_manager(self) -> str:
        """The native package manager for this distro family."""
        return "pacman" if self.distro == "arch" else "apt"

    def describe(self) -> str:
        return f"{self.distro}/{self.architecture}"
