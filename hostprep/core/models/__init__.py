"""
Domain models — Pydantic types for the provisioning engine.

All models are re-exported here for convenient access:

    from hostprep.core.models import Platform, ComponentEntry, InstallResult
"""

from hostprep.core.models.component import (
    ComponentEntry,
    InstallMode,
    InstallPlan,
    NativeName,
    Special,
)
from hostprep.core.models.platform import Platform
from hostprep.core.models.result import (
    ComponentFailure,
    InstallerOutcome,
    InstallResult,
    InstallState,
)
from hostprep.core.models.selection import SelectionSet
from hostprep.core.models.settings import Settings
from hostprep.core.models.state import VersionMarker

__all__ = [
    # component.py
    "ComponentEntry",
    "ComponentFailure",
    "InstallMode",
    "InstallPlan",
    "InstallResult",
    "InstallState",
    "InstallerOutcome",
    "NativeName",
    # platform.py
    "Platform",
    "SelectionSet",
    "Settings",
    "Special",
    # state.py
    "VersionMarker",
]
