"""
Shared helpers for the CLI commands — engine construction, the
one-shot sudo/base-package bootstrap, and result rendering.
"""

from __future__ import annotations

import json
import os
import subprocess
import sys

import click

from hostprep.core.models.result import InstallResult


def get_orchestrator(ctx: click.Context):
    """The run's Orchestrator, built on first use.

    A pre-built one in ``ctx.obj["orchestrator"]`` wins (tests inject
    one wired to fakes).
    """
    from hostprep.core.services.provision import Orchestrator, ProvisionContext
    from hostprep.core.services.provision.detection.platform_probe import (
        UnsupportedPlatformError,
    )

    obj = ctx.find_root().obj
    if obj.get("orchestrator") is None:
        try:
            pctx = ProvisionContext.create(obj["settings"])
        except UnsupportedPlatformError as e:
            click.secho(f"❌ {e}", fg="red")
            sys.exit(1)
        obj["orchestrator"] = Orchestrator(pctx)
    return obj["orchestrator"]


def ensure_sudo() -> bool:
    """Cache sudo credentials once so later elevated steps don't prompt."""
    if os.geteuid() == 0:
        return True
    try:
        return subprocess.run(["sudo", "-v"], check=False).returncode == 0
    except OSError:
        return False


def bootstrap(ctx: click.Context, *, quiet: bool = False) -> None:
    """Ask for sudo once and make sure the base build tools are present."""
    obj = ctx.find_root().obj
    if obj.get("bootstrapped"):
        return

    if not ensure_sudo():
        click.secho("❌ sudo is required to install packages", fg="red")
        sys.exit(1)

    result = get_orchestrator(ctx).ensure_base_packages()
    if not result["ok"]:
        click.secho(f"❌ Base packages failed: {result['error']}", fg="red")
        sys.exit(1)
    if result["installed"] and not quiet:
        click.secho(f"📦 Base packages installed: {' '.join(result['installed'])}", fg="cyan")
    obj["bootstrapped"] = True


def render_result(result: InstallResult, as_json: bool = False) -> bool:
    """Print an InstallResult. Returns ``result.ok``."""
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return result.ok

    for key in result.native_installed + result.installed:
        click.secho(f"   ✅ {key}", fg="green")
    for key in result.already_current:
        click.echo(f"   ✓ {key} (already up to date)")
    for failure in result.failures:
        where = f" [{failure.state}]" if failure.state else ""
        click.secho(f"   ❌ {failure.key}{where}: {failure.cause}", fg="red")
    for key in result.not_attempted:
        click.secho(f"   ⏭️  {key} (not attempted)", fg="yellow")

    if result.ok:
        click.secho("✅ Done", fg="green", bold=True)
    else:
        click.secho(f"❌ {len(result.failures)} component(s) failed", fg="red", bold=True)
    return result.ok
