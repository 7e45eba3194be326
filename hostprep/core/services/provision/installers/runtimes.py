"""
Language runtime installers — rust (rustup), node (nvm) and miniconda.

None of these publish a release feed we track: they count as installed
once their entry binary exists, either on PATH or in the per-user
location their installer uses.
"""

from __future__ import annotations

import logging
from pathlib import Path

from hostprep.core.services.provision.errors import ConfigurationError
from hostprep.core.services.provision.installers.base import Installer, InstallerContext

logger = logging.getLogger(__name__)


class RustInstaller(Installer):
    """rustup into ``~/.cargo``; later build steps see cargo on PATH."""

    key = "rust"
    binary = "cargo"
    tracks_versions = False

    def _cargo_bin(self, ctx: InstallerContext) -> Path:
        return ctx.home / ".cargo" / "bin"

    def is_present(self, ctx: InstallerContext) -> bool:
        if (self._cargo_bin(ctx) / "cargo").exists():
            ctx.runner.prepend_path(str(self._cargo_bin(ctx)))
            return True
        return super().is_present(ctx)

    def fetch(self, ctx: InstallerContext) -> None:
        ctx.fetch_url("https://sh.rustup.rs", "rustup-init.sh")

    def deploy(self, ctx: InstallerContext) -> None:
        ctx.execute(["sh", str(ctx.workdir / "rustup-init.sh"), "-y"])
        ctx.runner.prepend_path(str(self._cargo_bin(ctx)))


class NodeInstaller(Installer):
    """nvm, then ``nvm install <node_major>``."""

    key = "node"
    binary = "node"
    tracks_versions = False

    def _nvm_dir(self, ctx: InstallerContext) -> Path:
        return ctx.home / ".nvm"

    def is_present(self, ctx: InstallerContext) -> bool:
        if super().is_present(ctx):
            return True
        return any(self._nvm_dir(ctx).glob("versions/node/*/bin/node"))

    def fetch(self, ctx: InstallerContext) -> None:
        version = ctx.settings.nvm_version
        ctx.fetch_url(
            f"https://raw.githubusercontent.com/nvm-sh/nvm/{version}/install.sh",
            "nvm-install.sh",
        )

    def deploy(self, ctx: InstallerContext) -> None:
        if not (self._nvm_dir(ctx) / "nvm.sh").exists():
            ctx.execute(["bash", str(ctx.workdir / "nvm-install.sh")])
        nvm_dir = self._nvm_dir(ctx)
        ctx.shell(
            f'export NVM_DIR="{nvm_dir}" && . "$NVM_DIR/nvm.sh" '
            f"&& nvm install {ctx.settings.node_major}",
        )


_MINICONDA_ARCH = {"x86_64": "x86_64", "arm64": "aarch64"}


class MinicondaInstaller(Installer):
    """Batch-mode Miniconda3 install into ``~/miniconda3``."""

    key = "miniconda"
    binary = "conda"
    tracks_versions = False

    def _root(self, ctx: InstallerContext) -> Path:
        return ctx.home / "miniconda3"

    def is_present(self, ctx: InstallerContext) -> bool:
        return super().is_present(ctx) or (self._root(ctx) / "bin" / "conda").exists()

    def fetch(self, ctx: InstallerContext) -> None:
        arch = _MINICONDA_ARCH.get(ctx.platform.architecture)
        if arch is None:
            raise ConfigurationError(
                self.key, f"no Miniconda build for {ctx.platform.architecture}",
            )
        ctx.fetch_url(
            f"https://repo.anaconda.com/miniconda/Miniconda3-latest-Linux-{arch}.sh",
            "miniconda.sh",
        )

    def deploy(self, ctx: InstallerContext) -> None:
        cmd = ["bash", str(ctx.workdir / "miniconda.sh"), "-b", "-p", str(self._root(ctx))]
        if self._root(ctx).exists():
            cmd.append("-u")
        ctx.execute(cmd)
