"""
L4 Execution — transient build directories.

Each special component gets ``<scratch_root>/hostprep-<key>``. A fetch
always starts from an empty directory.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def transient_dir(scratch_root: Path, key: str) -> Path:
    """Component-named scratch directory (not created)."""
    return scratch_root / f"hostprep-{key}"


def prepare(path: Path) -> Path:
    """Remove any previous contents of ``path`` and recreate it empty."""
    if path.exists():
        logger.debug("Removing stale transient directory %s", path)
        remove(path)
    path.mkdir(parents=True)
    return path


def remove(path: Path) -> None:
    """Delete ``path`` if present. Missing paths are fine."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
