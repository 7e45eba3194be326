"""
Result models — what the installers and the orchestrator hand back.

Installers and the orchestrator never raise across component
boundaries. Every failure is captured here, attributed to exactly
one component key, and paired with a human-readable cause.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field

FailureKind = Literal[
    "configuration",
    "dependency",
    "external_tool",
    "presence_check",
    "version_oracle",
]


class InstallState(StrEnum):
    """States of a special-component install."""

    CHECK_CURRENCY = "check_currency"
    INSTALL_DEPS = "install_deps"
    FETCH = "fetch"
    BUILD = "build"
    DEPLOY = "deploy"
    RECORD_VERSION = "record_version"
    CLEANUP = "cleanup"
    DONE = "done"
    FAILED = "failed"


class InstallerOutcome(BaseModel):
    """Terminal outcome of one installer run."""

    key: str
    state: InstallState
    failed_in: InstallState | None = None
    cause: str = ""
    kind: FailureKind | None = None
    already_current: bool = False
    version: str | None = None
    history: list[InstallState] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state == InstallState.DONE

    def reached(self, state: InstallState) -> bool:
        """Whether the run entered ``state`` at any point."""
        return state in self.history


class ComponentFailure(BaseModel):
    """One failed component, with the reason it failed."""

    key: str
    cause: str
    kind: FailureKind = "external_tool"
    state: str | None = None


class InstallResult(BaseModel):
    """Aggregate result of ``Orchestrator.install``.

    ``ok`` is true only when every requested component reached ``done``.
    """

    ok: bool = True
    mode: str = "catalog"
    installed: list[str] = Field(default_factory=list)
    already_current: list[str] = Field(default_factory=list)
    native_installed: list[str] = Field(default_factory=list)
    failures: list[ComponentFailure] = Field(default_factory=list)
    not_attempted: list[str] = Field(default_factory=list)

    @property
    def failed_keys(self) -> list[str]:
        return [f.key for f in self.failures]

    def add_failure(
        self,
        key: str,
        cause: str,
        *,
        kind: FailureKind = "external_tool",
        state: str | None = None,
    ) -> None:
        self.ok = False
        self.failures.append(
            ComponentFailure(key=key, cause=cause, kind=kind, state=state),
        )

    def summary(self) -> str:
        """Short human-readable summary line."""
        if self.ok:
            return "all requested components installed"
        return "failed: " + ", ".join(
            f"{f.key} ({f.cause})" for f in self.failures
        )

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["failed_keys"] = self.failed_keys
        return data

    @classmethod
    def configuration_failure(
        cls,
        errors: dict[str, str],
        *,
        mode: str = "catalog",
    ) -> InstallResult:
        """Result for a request aborted before any installation action."""
        result = cls(mode=mode)
        for key, cause in errors.items():
            result.add_failure(key, cause, kind="configuration")
        return result
