"""
L4 Execution — core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for install
operations (package manager, clone, build, deploy). Non-zero exits are
returned as result dicts, never raised.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any

from hostprep.core.services.provision.data.constants import OUTPUT_TAIL

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands with sudo elevation and env overrides.

    Elevation relies on sudo credentials cached at startup
    (``sudo -v``); the runner never handles passwords itself.

    ``env_overrides`` persist across calls for the whole run, so a tool
    installed earlier (e.g. cargo under ``~/.cargo/bin``) is visible
    to later build steps.
    """

    def __init__(self, env_overrides: dict[str, str] | None = None):
        self.env_overrides: dict[str, str] = dict(env_overrides or {})

    def prepend_path(self, directory: str) -> None:
        """Put ``directory`` in front of PATH for subsequent commands."""
        current = self.env_overrides.get("PATH", os.environ.get("PATH", ""))
        parts = current.split(os.pathsep) if current else []
        if directory not in parts:
            self.env_overrides["PATH"] = os.pathsep.join([directory, *parts])

    def _env(self, extra: dict[str, str] | None) -> dict[str, str]:
        env = os.environ.copy()
        for key, value in {**self.env_overrides, **(extra or {})}.items():
            env[key] = os.path.expandvars(value)
        return env

    def run(
        self,
        cmd: list[str],
        *,
        needs_sudo: bool = False,
        cwd: str | None = None,
        timeout: int = 600,
        env: dict[str, str] | None = None,
        input_text: str | None = None,
    ) -> dict[str, Any]:
        """Run a command and capture its output.

        Args:
            cmd: Command list for ``subprocess.run()``.
            needs_sudo: Whether the command requires root.
            cwd: Working directory for the command.
            timeout: Seconds before ``TimeoutExpired``.
            env: Extra env vars for this call only.
            input_text: Data piped to stdin.

        Returns:
            ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
            ``{"ok": False, "error": "...", ...}`` on failure.
        """
        if needs_sudo and os.geteuid() != 0:
            extra_env = env or {}
            if extra_env:
                # sudo resets the environment; pass call-specific vars explicitly
                cmd = ["sudo", "env", *(f"{k}={v}" for k, v in extra_env.items()), *cmd]
            else:
                cmd = ["sudo", *cmd]

        logger.debug("Executing: %s (cwd=%s)", " ".join(cmd), cwd)

        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                input=input_text,
                env=self._env(env),
                cwd=cwd,
            )
        except subprocess.TimeoutExpired:
            return {"ok": False, "error": f"Command timed out ({timeout}s)"}
        except OSError as e:
            return {"ok": False, "error": f"Cannot execute {cmd[0]}: {e}"}

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = result.stdout[-OUTPUT_TAIL:] if result.stdout else ""
        stderr = result.stderr[-OUTPUT_TAIL:] if result.stderr else ""

        if result.returncode == 0:
            return {"ok": True, "stdout": stdout, "elapsed_ms": elapsed_ms}

        return {
            "ok": False,
            "error": f"Command failed (exit {result.returncode})",
            "stderr": stderr,
            "stdout": stdout,
            "elapsed_ms": elapsed_ms,
        }

    def shell(
        self,
        script: str,
        *,
        needs_sudo: bool = False,
        cwd: str | None = None,
        timeout: int = 600,
    ) -> dict[str, Any]:
        """Run a bash snippet (pipelines, sourcing env files)."""
        return self.run(
            ["bash", "-c", script], needs_sudo=needs_sudo, cwd=cwd, timeout=timeout,
        )
