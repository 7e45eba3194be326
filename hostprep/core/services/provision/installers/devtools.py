"""
Developer tool installers — neovim, alacritty and fzf.

neovim and alacritty are built from source at the latest release tag;
fzf installs into ``~/.fzf`` through its own install script.
"""

from __future__ import annotations

import logging
import shutil

from hostprep.core.services.provision.data.constants import FETCH_TIMEOUT, PIXMAPS_DIR
from hostprep.core.services.provision.detection.tool_version import VersionProbe
from hostprep.core.services.provision.detection.version_oracle import ReleaseSource
from hostprep.core.services.provision.execution import workspace
from hostprep.core.services.provision.installers.base import Installer, InstallerContext

logger = logging.getLogger(__name__)


# ── neovim ──────────────────────────────────────────────────────


class NeovimInstaller(Installer):
    key = "nvim"
    binary = "nvim"
    # "NVIM v0.10.2"
    version_probe = VersionProbe(command=["nvim", "-v"], pattern=r"^NVIM (\S+)")
    release = ReleaseSource(provider="github", project="neovim/neovim")
    deps = {
        "arch": ["cmake", "ninja", "tree-sitter", "curl", "unzip", "gettext"],
        "debian": [
            "ninja-build", "gettext", "cmake", "unzip", "curl", "build-essential",
            "pkg-config", "libtool", "libtool-bin", "autoconf", "automake", "g++",
            "tree-sitter-cli",
        ],
    }

    def fetch(self, ctx: InstallerContext) -> None:
        ctx.clone("https://github.com/neovim/neovim.git")

    def build(self, ctx: InstallerContext) -> None:
        ctx.execute(
            [
                "make",
                "CMAKE_BUILD_TYPE=Release",
                f"CMAKE_INSTALL_PREFIX={ctx.prefix}",
            ],
            cwd=ctx.workdir / "src",
        )

    def deploy(self, ctx: InstallerContext) -> None:
        ctx.execute(["make", "install"], needs_sudo=True, cwd=ctx.workdir / "src")


# ── alacritty ───────────────────────────────────────────────────

_ALACRITTY_MAN_PAGES = [
    ("alacritty.1", "man1"),
    ("alacritty-msg.1", "man1"),
    ("alacritty.5", "man5"),
    ("alacritty-bindings.5", "man5"),
]


class AlacrittyInstaller(Installer):
    """Cargo release build plus icon, desktop entry and man pages."""

    key = "alacritty"
    binary = "alacritty"
    # "alacritty 0.15.1 (1a2b3c4)" — tags carry a leading "v"
    version_probe = VersionProbe(
        command=["alacritty", "--version"], pattern=r"^alacritty (\S+)", prefix="v",
    )
    release = ReleaseSource(provider="github", project="alacritty/alacritty")
    deps = {
        "arch": [
            "cmake", "freetype2", "fontconfig", "pkg-config", "make", "libxcb",
            "libxkbcommon", "python", "gzip", "scdoc", "rust",
        ],
        "debian": [
            "cmake", "g++", "pkg-config", "libfontconfig1-dev", "libxcb-xfixes0-dev",
            "libxkbcommon-dev", "python3", "gzip", "scdoc", "rust",
        ],
    }

    def fetch(self, ctx: InstallerContext) -> None:
        ctx.clone("https://github.com/alacritty/alacritty.git")

    def build(self, ctx: InstallerContext) -> None:
        ctx.execute(["cargo", "build", "--release"], cwd=ctx.workdir / "src")

    def deploy(self, ctx: InstallerContext) -> None:
        src = ctx.workdir / "src"
        ctx.execute(
            ["install", "-Dm755", "target/release/alacritty", str(ctx.prefix / "bin" / "alacritty")],
            needs_sudo=True, cwd=src,
        )
        ctx.execute(
            ["install", "-Dm644", "extra/logo/alacritty-term.svg", f"{PIXMAPS_DIR}/Alacritty.svg"],
            needs_sudo=True, cwd=src,
        )
        ctx.execute(["desktop-file-install", "extra/linux/Alacritty.desktop"], needs_sudo=True, cwd=src)
        ctx.execute(["update-desktop-database"], needs_sudo=True)

        man_root = ctx.prefix / "share" / "man"
        for page, section in _ALACRITTY_MAN_PAGES:
            # rendered unprivileged; only the install step needs root
            ctx.shell(
                f"set -o pipefail; scdoc < extra/man/{page}.scd | gzip -c > {page}.gz",
                cwd=src,
            )
            ctx.execute(
                ["install", "-Dm644", f"{page}.gz", str(man_root / section / f"{page}.gz")],
                needs_sudo=True, cwd=src,
            )


# ── fzf ─────────────────────────────────────────────────────────


class FzfInstaller(Installer):
    """Clone to scratch, move into ``~/.fzf`` and run its installer (binary + shell integration)."""

    key = "fzf"
    binary = "fzf"
    # "0.56.3 (3e7d5a4)"
    version_probe = VersionProbe(
        command=["fzf", "--version"], pattern=r"^([0-9]\S*)", prefix="v",
    )
    release = ReleaseSource(provider="github", project="junegunn/fzf")

    def _home(self, ctx: InstallerContext):
        return ctx.home / ".fzf"

    def is_present(self, ctx: InstallerContext) -> bool:
        return super().is_present(ctx) or (self._home(ctx) / "bin" / "fzf").exists()

    def fetch(self, ctx: InstallerContext) -> None:
        ctx.clone("https://github.com/junegunn/fzf.git")

    def deploy(self, ctx: InstallerContext) -> None:
        target = self._home(ctx)
        if target.exists():
            logger.info("Replacing existing %s", target)
            workspace.remove(target)
        shutil.move(str(ctx.workdir / "src"), str(target))
        ctx.execute([str(target / "install"), "--all"], timeout=FETCH_TIMEOUT)
