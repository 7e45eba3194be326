"""
L1 Domain — pure logic over the catalog tables.

No I/O and no subprocess calls in this layer.
"""

from hostprep.core.services.provision.domain.catalog import (  # noqa: F401
    ComponentCatalog,
    default_catalog,
    validate_catalog,
)
from hostprep.core.services.provision.domain.dag import (  # noqa: F401
    collect_graph,
    find_cycle_members,
)
from hostprep.core.services.provision.domain.plan import build_plan  # noqa: F401
