"""
L4 Execution — the only layer that mutates the host.
"""

from hostprep.core.services.provision.execution.download import download  # noqa: F401
from hostprep.core.services.provision.execution.package_manager import (  # noqa: F401
    install_packages,
)
from hostprep.core.services.provision.execution.subprocess_runner import (  # noqa: F401
    CommandRunner,
)
