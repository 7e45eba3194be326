"""
L0 Data — constants shared by installers and detection probes.
"""

from __future__ import annotations

# ── Upstream release metadata ─────────────────────────────────

GITHUB_API = "https://api.github.com"
GITLAB_API = "https://gitlab.com/api/v4"

USER_AGENT = "hostprep/0.1"

# ── Timeouts (seconds) ────────────────────────────────────────

PROBE_TIMEOUT = 10        # dpkg -s / pacman -Qi / --version
FETCH_TIMEOUT = 600       # git clone, archive download
PKG_TIMEOUT = 1800        # one batched package manager call

# ── Install locations ─────────────────────────────────────────

PIXMAPS_DIR = "/usr/share/pixmaps"

# Output tail kept on failures (chars)
OUTPUT_TAIL = 2000
