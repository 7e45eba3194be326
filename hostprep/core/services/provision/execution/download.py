"""
L4 Execution — artifact download.

Plain HTTPS download of a release artifact or installer script into a
transient directory.
"""

from __future__ import annotations

import logging
import shutil
import urllib.request
from pathlib import Path
from typing import Any

from hostprep.core.services.provision.data.constants import FETCH_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def download(url: str, dest: Path, *, timeout: int = FETCH_TIMEOUT) -> dict[str, Any]:
    """Stream ``url`` to ``dest``.

    Returns:
        ``{"ok": True, "path": "...", "size_bytes": N}`` or
        ``{"ok": False, "error": "..."}``. A partial file is removed.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    logger.debug("Downloading %s → %s", url, dest)

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp, open(dest, "wb") as fh:
            shutil.copyfileobj(resp, fh)
    except OSError as exc:
        dest.unlink(missing_ok=True)
        return {"ok": False, "error": f"Download of {url} failed: {exc}"}

    return {"ok": True, "path": str(dest), "size_bytes": dest.stat().st_size}
