"""
L5 Orchestration — request-level coordination.
"""

from hostprep.core.services.provision.orchestration.orchestrator import (  # noqa: F401
    Orchestrator,
    ProvisionContext,
)
