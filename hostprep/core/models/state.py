"""
VersionMarker — the last successfully installed version of a special
component.

This is the only state the engine persists. Everything else is
derived live from the host.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class VersionMarker(BaseModel):
    """Recorded version of one special component."""

    model_config = ConfigDict(frozen=True)

    component: str
    version: str
