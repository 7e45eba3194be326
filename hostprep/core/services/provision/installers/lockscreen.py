"""
Lock screen installers — i3lock-color (source build) and
betterlockscreen (script on top of i3lock-color).
"""

from __future__ import annotations

import logging
import shutil

from hostprep.core.services.provision.detection.tool_version import VersionProbe
from hostprep.core.services.provision.detection.version_oracle import ReleaseSource
from hostprep.core.services.provision.errors import ExternalToolError
from hostprep.core.services.provision.installers.base import Installer, InstallerContext

logger = logging.getLogger(__name__)


class I3lockColorInstaller(Installer):
    """Clone, run upstream's ``build.sh``, then ``make install`` from ``build/``."""

    key = "i3lock_color"
    binary = "i3lock"
    # "i3lock: version 2.13.c.5 © 2010 Michael Stapelberg, ..."
    version_probe = VersionProbe(command=["i3lock", "--version"], pattern=r"version (\S+)")
    release = ReleaseSource(provider="github", project="Raymo111/i3lock-color")
    deps = {
        "arch": [
            "autoconf", "cairo", "fontconfig", "gcc", "libev", "libjpeg-turbo",
            "libxinerama", "libxkbcommon-x11", "libxrandr", "pam", "pkgconf",
            "xcb-util-image", "xcb-util-xrm", "imagemagick", "xorg-xdpyinfo",
            "xorg-xrdb", "xorg-xset",
        ],
        "debian": [
            "autoconf", "gcc", "make", "pkg-config", "libpam0g-dev", "libcairo2-dev",
            "libfontconfig1-dev", "libxcb-composite0-dev", "libev-dev",
            "libx11-xcb-dev", "libxcb-xkb-dev", "libxcb-xinerama0-dev",
            "libxcb-randr0-dev", "libxcb-image0-dev", "libxcb-util0-dev",
            "libxcb-xrm-dev", "libxkbcommon-dev", "libxkbcommon-x11-dev",
            "libjpeg-dev", "libgif-dev", "imagemagick", "x11-utils",
        ],
    }

    def fetch(self, ctx: InstallerContext) -> None:
        ctx.clone("https://github.com/Raymo111/i3lock-color.git")

    def build(self, ctx: InstallerContext) -> None:
        ctx.execute(["./build.sh"], cwd=ctx.workdir / "src")

    def deploy(self, ctx: InstallerContext) -> None:
        ctx.execute(["make", "install"], needs_sudo=True, cwd=ctx.workdir / "src" / "build")


class BetterlockscreenInstaller(Installer):
    """Download the source archive and copy the script into ``<prefix>/bin``."""

    key = "betterlockscreen"
    binary = "betterlockscreen"
    # "Betterlockscreen: version: v4.4.0 (dunst: ..., i3lock-color: ...)"
    version_probe = VersionProbe(
        command=["betterlockscreen", "--version"],
        pattern=r"^Betterlockscreen:\s+\S+\s+(\S+)",
    )
    release = ReleaseSource(provider="github", project="betterlockscreen/betterlockscreen")
    deps = {
        "arch": ["i3lock_color"],
        "debian": ["i3lock_color"],
    }

    def _archive_url(self, ctx: InstallerContext) -> str:
        base = "https://github.com/betterlockscreen/betterlockscreen/archive/refs"
        if ctx.resolved_version:
            return f"{base}/tags/{ctx.resolved_version}.zip"
        return f"{base}/heads/main.zip"

    def fetch(self, ctx: InstallerContext) -> None:
        archive = ctx.fetch_url(self._archive_url(ctx), "betterlockscreen.zip")
        try:
            shutil.unpack_archive(archive, ctx.workdir / "src")
        except (shutil.ReadError, ValueError) as exc:
            raise ExternalToolError(self.key, f"cannot unpack {archive.name}: {exc}") from exc

    def deploy(self, ctx: InstallerContext) -> None:
        # the archive has a single top-level directory named after the ref
        scripts = sorted((ctx.workdir / "src").glob("*/betterlockscreen"))
        if not scripts:
            raise ExternalToolError(self.key, "betterlockscreen script missing from archive")
        dest = ctx.prefix / "bin" / "betterlockscreen"
        ctx.execute(
            ["install", "-Dm755", str(scripts[0]), str(dest)], needs_sudo=True,
        )
        logger.debug("Installed %s", dest)
