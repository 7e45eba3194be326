"""
Package-bundle installers.

Components that are nothing more than a distro-specific set of packages
(the application plus its plugins or helpers). All the work happens in
``install_deps``; there is no release feed and nothing to record.
"""

from __future__ import annotations

from hostprep.core.services.provision.installers.base import Installer


class PackageBundle(Installer):
    """Installs ``deps`` for the current distro and nothing else."""

    tracks_versions = False


class EasyEffectsInstaller(PackageBundle):
    key = "easyeffects"
    deps = {
        "arch": ["easyeffects", "calf", "lsp-plugins-lv2", "zam-plugins-lv2", "mda.lv2"],
        "debian": [
            "easyeffects", "lsp-plugins-lv2", "lsp-plugins",
            "calf-plugins", "mda-lv2", "zam-plugins",
        ],
    }


class ThunarInstaller(PackageBundle):
    key = "thunar"
    deps = {
        "arch": [
            "thunar", "thunar-volman", "gvfs", "gvfs-mtp", "gvfs-smb", "gvfs-afc",
            "gvfs-goa", "exo", "tumbler", "libmtp", "fuse2", "xdg-user-dirs",
        ],
        "debian": [
            "thunar", "thunar-volman", "gvfs", "gvfs-backends", "gvfs-fuse",
            "gvfs-mtp", "gvfs-smb", "gvfs-afc", "gvfs-goa", "exo-utils",
            "tumbler", "libmtp9", "fuse", "xdg-user-dirs",
        ],
    }
