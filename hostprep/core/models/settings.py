"""
Settings model — validated contents of ``hostprep.yml``.

Every field has a default, so a host with no config file gets a
working setup.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


def default_state_dir() -> Path:
    """Per-user marker directory: ``$XDG_STATE_HOME/hostprep/versions``.

    Falls back to ``~/.local/state`` when XDG_STATE_HOME is unset, so
    markers survive no matter which directory hostprep runs from.
    """
    state_home = os.environ.get("XDG_STATE_HOME") or os.path.expanduser("~/.local/state")
    return Path(state_home) / "hostprep" / "versions"


class Settings(BaseModel):
    """Tunables for the provisioning engine."""

    scratch_root: Path = Path("/tmp")
    prefix: Path = Path("/usr/local")
    state_dir: Path = Field(default_factory=default_state_dir)
    on_failure: Literal["stop", "continue"] = "stop"
    http_timeout: int = Field(default=15, gt=0)
    build_timeout: int = Field(default=3600, gt=0)
    node_major: int = 22
    nvm_version: str = "v0.40.3"

    # Directory a relative ``state_dir`` from hostprep.yml is anchored to.
    base_dir: Path = Field(default_factory=Path.cwd, exclude=True)

    @property
    def marker_dir(self) -> Path:
        """Absolute directory holding the version markers."""
        if self.state_dir.is_absolute():
            return self.state_dir
        return self.base_dir / self.state_dir
