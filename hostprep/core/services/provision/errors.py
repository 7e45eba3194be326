"""
Provisioning error taxonomy.

Every error names the single component it is attributed to. These are
raised inside a component and converted to results at the component
boundary (installer base, orchestrator); they never escape
``Orchestrator.install``.
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Base class — carries the component key and a cause string."""

    kind = "external_tool"

    def __init__(self, key: str, cause: str):
        super().__init__(f"{key}: {cause}")
        self.key = key
        self.cause = cause


class ConfigurationError(ProvisionError):
    """Unknown key, missing distro mapping, or a dependency cycle.

    Always fatal and never retried; surfaced before any install action.
    """

    kind = "configuration"


class PresenceCheckError(ProvisionError):
    """Package database or binary version query failed."""

    kind = "presence_check"


class VersionOracleError(ProvisionError):
    """Upstream release metadata unreachable or unparsable."""

    kind = "version_oracle"


class DependencyError(ProvisionError):
    """A dependency of this component failed to install."""

    kind = "dependency"


class ExternalToolError(ProvisionError):
    """Package manager, fetch, or build command exited non-zero."""

    kind = "external_tool"
