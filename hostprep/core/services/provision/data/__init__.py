"""
L0 Data — pure tables, no logic.

    components  → COMPONENTS, GROUPS, BASE_PACKAGES
    constants   → upstream URLs, timeouts, install locations
"""

from hostprep.core.services.provision.data.components import (  # noqa: F401
    BASE_PACKAGES,
    COMPONENTS,
    GROUPS,
)
