"""
Provisioning engine — installs logical components on Arch and Debian
family hosts.

Layers (each imports only from the ones above it):

    data/           L0  component tables, constants
    domain/         L1  catalog, plan partitioning, dependency graph
    detection/      L3  platform, presence, versions (read-only)
    execution/      L4  subprocess, package manager, downloads
    installers/         special-component state machines
    orchestration/  L5  Orchestrator
"""

from hostprep.core.services.provision.errors import (  # noqa: F401
    ConfigurationError,
    DependencyError,
    ExternalToolError,
    PresenceCheckError,
    ProvisionError,
    VersionOracleError,
)
from hostprep.core.services.provision.orchestration import (  # noqa: F401
    Orchestrator,
    ProvisionContext,
)
