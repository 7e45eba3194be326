"""
CLI commands for installing components — by key, or by menu group.

Thin wrappers over ``Orchestrator.install``.
"""

from __future__ import annotations

import sys

import click

from hostprep.core.models.component import InstallMode
from hostprep.core.services.provision.errors import ConfigurationError
from hostprep.ui.cli.common import bootstrap, get_orchestrator, render_result


@click.command()
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--direct", "-d", is_flag=True,
    help="Treat names as distro package names (special keys still use their installer).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, names: tuple[str, ...], direct: bool, as_json: bool) -> None:
    """Install components by key."""
    orch = get_orchestrator(ctx)
    bootstrap(ctx, quiet=as_json)

    mode = InstallMode.DIRECT if direct else InstallMode.CATALOG
    if not as_json:
        click.secho(f"📦 Installing: {' '.join(names)}", fg="cyan", bold=True)
    if not render_result(orch.install(list(names), mode), as_json=as_json):
        sys.exit(1)


@click.command()
@click.argument("name")
@click.option(
    "--select", "-s", "selected", multiple=True,
    help="Only these keys from the group (repeatable).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def group(ctx: click.Context, name: str, selected: tuple[str, ...], as_json: bool) -> None:
    """Install a component group, or a selection from it."""
    orch = get_orchestrator(ctx)
    try:
        keys = orch.ctx.catalog.group(name)
    except ConfigurationError as e:
        click.secho(f"❌ {e.key}: {e.cause}", fg="red")
        sys.exit(1)

    if selected:
        outside = [k for k in selected if k not in keys]
        if outside:
            click.secho(f"❌ Not in group '{name}': {', '.join(outside)}", fg="red")
            sys.exit(1)
        keys = [k for k in keys if k in selected]

    bootstrap(ctx, quiet=as_json)
    if not as_json:
        click.secho(f"📦 {orch.ctx.catalog.group_label(name)}", fg="cyan", bold=True)
    if not render_result(orch.install(keys), as_json=as_json):
        sys.exit(1)
