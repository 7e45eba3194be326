"""
L3 Detection — read-only probes of the host and of upstream releases.
"""

from hostprep.core.services.provision.detection.platform_probe import (  # noqa: F401
    UnsupportedPlatformError,
    detect_platform,
)
from hostprep.core.services.provision.detection.system_deps import (  # noqa: F401
    PresenceChecker,
)
from hostprep.core.services.provision.detection.tool_version import (  # noqa: F401
    VersionProbe,
    get_tool_version,
)
from hostprep.core.services.provision.detection.version_oracle import (  # noqa: F401
    ReleaseSource,
    VersionOracle,
    is_current,
)
