"""
Installer registry — name → Installer lookup for special components.

The catalog names installers by string; the orchestrator never imports
installer classes directly, always going through the registry.
"""

from __future__ import annotations

import logging

from hostprep.core.services.provision.installers.base import Installer

logger = logging.getLogger(__name__)


class InstallerRegistry:
    """Holds one Installer per special component key."""

    def __init__(self, installers: list[Installer] | None = None):
        self._installers: dict[str, Installer] = {}
        for installer in installers or []:
            self.register(installer)

    def register(self, installer: Installer) -> None:
        """Register an installer under its ``key``."""
        name = installer.key
        if not name:
            raise ValueError(f"{installer!r} has no key")
        if name in self._installers:
            logger.warning("Overwriting existing installer: %s", name)
        self._installers[name] = installer
        logger.debug("Registered installer: %s", name)

    def unregister(self, name: str) -> None:
        self._installers.pop(name, None)

    def get(self, name: str) -> Installer | None:
        return self._installers.get(name)

    def names(self) -> list[str]:
        """All registered installer names, in registration order."""
        return list(self._installers)

    def __contains__(self, name: object) -> bool:
        return name in self._installers

    def __len__(self) -> int:
        return len(self._installers)


def default_registry() -> InstallerRegistry:
    """Registry with every built-in installer."""
    from hostprep.core.services.provision.installers.bundles import (
        EasyEffectsInstaller,
        ThunarInstaller,
    )
    from hostprep.core.services.provision.installers.coolercontrol import (
        CoolerControlInstaller,
    )
    from hostprep.core.services.provision.installers.devtools import (
        AlacrittyInstaller,
        FzfInstaller,
        NeovimInstaller,
    )
    from hostprep.core.services.provision.installers.lockscreen import (
        BetterlockscreenInstaller,
        I3lockColorInstaller,
    )
    from hostprep.core.services.provision.installers.runtimes import (
        MinicondaInstaller,
        NodeInstaller,
        RustInstaller,
    )

    return InstallerRegistry([
        I3lockColorInstaller(),
        BetterlockscreenInstaller(),
        EasyEffectsInstaller(),
        ThunarInstaller(),
        NeovimInstaller(),
        AlacrittyInstaller(),
        FzfInstaller(),
        MinicondaInstaller(),
        NodeInstaller(),
        RustInstaller(),
        CoolerControlInstaller(),
    ])
