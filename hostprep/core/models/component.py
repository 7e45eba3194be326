"""
Component models — catalog entries and the per-invocation install plan.

A component is resolved either to a native package name (satisfied by
the distro package manager) or to a special installer routine.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class InstallMode(StrEnum):
    """How the names passed to ``Orchestrator.install`` are interpreted."""

    CATALOG = "catalog"   # names are ComponentKeys
    DIRECT = "direct"     # names are concrete distro package names


class NativeName(BaseModel):
    """Resolution to a concrete package for the current distro."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["native"] = "native"
    package: str


class Special(BaseModel):
    """Resolution to a registered installer routine."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["special"] = "special"
    installer: str


Resolution = Annotated[NativeName | Special, Field(discriminator="kind")]


class ComponentEntry(BaseModel):
    """A catalog entry resolved for one platform."""

    model_config = ConfigDict(frozen=True)

    key: str
    description: str = ""
    resolution: Resolution

    @property
    def is_special(self) -> bool:
        return isinstance(self.resolution, Special)


class InstallPlan(BaseModel):
    """Partition of a request into native packages and special components.

    Built fresh for every ``install`` call and never persisted.

    ``native`` holds concrete package names (a multiset: two keys may
    map to the same package); ``native_keys`` holds the request names
    they came from so failures can be attributed to the caller's keys.
    ``special`` keeps request order.
    """

    mode: InstallMode = InstallMode.CATALOG
    requested: list[str] = Field(default_factory=list)
    native: list[str] = Field(default_factory=list)
    native_keys: list[str] = Field(default_factory=list)
    special: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.native and not self.special
