"""
hostprep — CLI entrypoint.

Usage:
    hostprep --help
    hostprep platform
    hostprep install nvim tmux
    hostprep group i3 --select polybar --select rofi
    hostprep menu
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from hostprep import __version__
from hostprep.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="hostprep")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to hostprep.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """hostprep — bring a bare Arch or Debian host up to a configured desktop."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )

    if "settings" not in ctx.obj:
        from hostprep.core.config.loader import ConfigError, load_settings

        try:
            ctx.obj["settings"] = load_settings(ctx.obj["config_path"])
        except ConfigError as e:
            click.secho(f"❌ {e}", fg="red")
            sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def platform(ctx: click.Context, as_json: bool) -> None:
    """Show the detected platform."""
    from hostprep.ui.cli.common import get_orchestrator

    plat = get_orchestrator(ctx).ctx.platform
    if as_json:
        click.echo(json.dumps(
            {**plat.model_dump(), "package_manager": plat.package_manager}, indent=2,
        ))
        return

    click.secho(f"🖥️  {plat.describe()}", fg="cyan", bold=True)
    click.echo(f"   Package manager: {plat.package_manager}")


@cli.command("list")
@click.option("--group", "-g", "group_name", default=None, help="Only this group.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_components(ctx: click.Context, group_name: str | None, as_json: bool) -> None:
    """List catalog components and how they install here."""
    from hostprep.core.services.provision.errors import ConfigurationError
    from hostprep.ui.cli.common import get_orchestrator

    orch = get_orchestrator(ctx)
    catalog, plat = orch.ctx.catalog, orch.ctx.platform
    try:
        keys = catalog.group(group_name) if group_name else catalog.keys()
    except ConfigurationError as e:
        click.secho(f"❌ {e.key}: {e.cause}", fg="red")
        sys.exit(1)

    rows = []
    for key in keys:
        row = {"key": key, "description": catalog.describe(key)}
        try:
            entry = catalog.resolve(key, plat)
            row["resolution"] = entry.resolution.model_dump()
        except ConfigurationError as e:
            row["error"] = e.cause
        rows.append(row)

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        res = row.get("resolution")
        if res is None:
            how = click.style(f"⚠️  {row['error']}", fg="yellow")
        elif res["kind"] == "native":
            how = f"📦 {res['package']}"
        else:
            how = "🔧 installer"
        click.echo(f"   {row['key']:<24} {how:<32} {row['description']}")


@cli.command()
@click.option("--latest", is_flag=True, help="Also query upstream for the latest release.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def versions(ctx: click.Context, latest: bool, as_json: bool) -> None:
    """Show recorded and installed versions of special components."""
    from hostprep.ui.cli.common import get_orchestrator

    rows = get_orchestrator(ctx).version_report(check_latest=latest)
    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        icon = "✅" if row["present"] else "  "
        if not row["tracks_versions"]:
            detail = "installed" if row["present"] else "-"
        else:
            detail = row["installed"] or row["recorded"] or "-"
            if latest:
                detail += f" → {row.get('latest') or '?'}"
        click.echo(f"   {icon} {row['key']:<20} {detail}")


# ── Install commands ────────────────────────────────────────────

from hostprep.ui.cli.install import group, install  # noqa: E402
from hostprep.ui.cli.menu import menu  # noqa: E402

cli.add_command(install)
cli.add_command(group)
cli.add_command(menu)


if __name__ == "__main__":
    cli()
