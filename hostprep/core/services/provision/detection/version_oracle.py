"""
L3 Detection — VersionOracle.

Fetches the latest published release tag of a special component from
its upstream (GitHub or GitLab). Results are cached per process so one
run queries each upstream at most once.

Failure to discover a version never blocks an install: network or
parse errors yield ``None`` ("unavailable") and callers take the
install path.
"""

from __future__ import annotations

import json
import logging
import os
import urllib.parse
import urllib.request
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from hostprep.core.services.provision.data.constants import (
    GITHUB_API,
    GITLAB_API,
    USER_AGENT,
)
from hostprep.core.services.provision.errors import VersionOracleError

logger = logging.getLogger(__name__)


class ReleaseSource(BaseModel):
    """Where a component publishes its releases."""

    model_config = ConfigDict(frozen=True)

    provider: Literal["github", "gitlab"]
    project: str   # "owner/repo" (GitHub) or "group/project" (GitLab)

    def api_url(self) -> str:
        if self.provider == "github":
            return f"{GITHUB_API}/repos/{self.project}/releases/latest"
        encoded = urllib.parse.quote(self.project, safe="")
        return f"{GITLAB_API}/projects/{encoded}/releases"


def is_current(installed: str | None, latest: str | None) -> bool:
    """True iff both versions are known and exactly equal.

    Release tags are compared as opaque strings; any unknown side means
    "not current" so the caller re-installs rather than skips.
    """
    if not installed or not latest:
        return False
    return installed == latest


def _extract_tag(data: Any, source: ReleaseSource) -> str:
    """Pull the tag name out of a release payload.

    GitHub's ``releases/latest`` returns one object; GitLab's
    ``releases`` returns a list, newest first.
    """
    if source.provider == "gitlab":
        if not isinstance(data, list) or not data:
            raise VersionOracleError(source.project, "no releases published")
        data = data[0]
    if not isinstance(data, dict):
        raise VersionOracleError(source.project, "unexpected release payload")
    tag = data.get("tag_name")
    if not isinstance(tag, str) or not tag.strip():
        raise VersionOracleError(source.project, "release has no tag_name")
    return tag.strip()


class VersionOracle:
    """Latest-upstream-version lookups with a per-process cache."""

    def __init__(self, timeout: int = 15, token: str | None = None):
        self.timeout = timeout
        self.token = token if token is not None else os.environ.get("GITHUB_TOKEN", "")
        self._cache: dict[ReleaseSource, str | None] = {}

    def _fetch_json(self, url: str, source: ReleaseSource) -> Any:
        headers = {"User-Agent": USER_AGENT}
        if source.provider == "github":
            headers["Accept"] = "application/vnd.github+json"
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"

        req = urllib.request.Request(url, headers=headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return json.loads(resp.read())
        except (OSError, ValueError) as exc:
            # URLError/HTTPError/timeouts are OSError; bad JSON is ValueError
            raise VersionOracleError(source.project, f"release query failed: {exc}") from exc

    def fetch_latest(self, source: ReleaseSource) -> str:
        """Query upstream, uncached.

        Raises:
            VersionOracleError: Upstream unreachable or payload unparsable.
        """
        data = self._fetch_json(source.api_url(), source)
        return _extract_tag(data, source)

    def latest_version(self, source: ReleaseSource | None) -> str | None:
        """Latest release tag, or None when unavailable."""
        if source is None:
            return None
        if source in self._cache:
            return self._cache[source]

        try:
            tag: str | None = self.fetch_latest(source)
            logger.debug("Latest %s release of %s: %s", source.provider, source.project, tag)
        except VersionOracleError as exc:
            logger.warning("Latest version of %s unavailable: %s", source.project, exc.cause)
            tag = None

        self._cache[source] = tag
        return tag
