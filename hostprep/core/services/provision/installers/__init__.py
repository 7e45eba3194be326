"""
Special-component installers.

Each installer drives one component through the install state machine
defined in ``base.py``; ``default_registry()`` returns them all.
"""

from hostprep.core.services.provision.installers.base import Installer, InstallerContext
from hostprep.core.services.provision.installers.registry import (
    InstallerRegistry,
    default_registry,
)

__all__ = [
    "Installer",
    "InstallerContext",
    "InstallerRegistry",
    "default_registry",
]
