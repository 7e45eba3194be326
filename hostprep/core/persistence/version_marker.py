"""
Version marker persistence — one small text file per special component.

Each marker is stored as ``<marker_dir>/<key>.version`` and contains
exactly the version string, nothing else. Writes are atomic (write to
temp file, then rename) so an interrupted run never leaves a
half-written marker that could be mistaken for a real version.
"""

from __future__ import annotations

import logging
import re
import tempfile
from pathlib import Path

from hostprep.core.models.state import VersionMarker

logger = logging.getLogger(__name__)

MARKER_SUFFIX = ".version"

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class VersionMarkerStore:
    """Read/write access to the per-component version markers."""

    def __init__(self, directory: Path):
        self.directory = directory

    def path_for(self, key: str) -> Path:
        """Deterministic marker path for a component key."""
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Unsafe component key for marker file: {key!r}")
        return self.directory / f"{key}{MARKER_SUFFIX}"

    def read(self, key: str) -> str | None:
        """Return the recorded version, or None when never recorded.

        An unreadable or empty marker counts as "never recorded".
        """
        path = self.path_for(key)
        if not path.is_file():
            return None
        try:
            version = path.read_text(encoding="utf-8").strip()
        except OSError as e:
            logger.warning("Cannot read version marker %s: %s", path, e)
            return None
        return version or None

    def write(self, key: str, version: str) -> VersionMarker:
        """Persist ``version`` for ``key`` (atomic write)."""
        marker = VersionMarker(component=key, version=version)
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        _fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".marker_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8") as fh:
                fh.write(marker.version)
            tmp.replace(path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise

        logger.debug("Version marker %s → %s", key, version)
        return marker
