"""
Interactive menu — numbered screens over the catalog groups.

    main  → pick a group (or quit)
    group → install all, select some, or go back

Selections accumulate in a SelectionSet; picking a key twice is a
no-op and says so.
"""

from __future__ import annotations

import click

from hostprep.core.models.selection import SelectionSet
from hostprep.ui.cli.common import bootstrap, get_orchestrator, render_result


def _parse_choices(raw: str, count: int) -> tuple[list[int], list[str]]:
    """Split "1 3,5" into valid 0-based indexes and rejected tokens."""
    picked: list[int] = []
    rejected: list[str] = []
    for token in raw.replace(",", " ").split():
        if token.isdigit() and 1 <= int(token) <= count:
            picked.append(int(token) - 1)
        else:
            rejected.append(token)
    return picked, rejected


def _select(keys: list[str], catalog) -> SelectionSet:
    selection = SelectionSet()
    for i, key in enumerate(keys, 1):
        click.echo(f"   {i:>2}) {key:<24} {catalog.describe(key)}")
    click.echo("   Enter numbers (e.g. 1 3 5); an empty line finishes.")

    while True:
        raw = click.prompt("   select", default="", show_default=False)
        if not raw.strip():
            return selection
        picked, rejected = _parse_choices(raw, len(keys))
        for token in rejected:
            click.secho(f"   ⚠️  Invalid choice: {token}", fg="yellow")
        for index in picked:
            key = keys[index]
            if selection.add(key):
                click.echo(f"   + {key}")
            else:
                click.secho(f"   ⚠️  {key} is already selected", fg="yellow")


def _run_install(ctx: click.Context, keys: list[str]) -> None:
    bootstrap(ctx)
    render_result(get_orchestrator(ctx).install(keys))
    click.prompt("   Press enter to continue", default="", show_default=False)


def _group_menu(ctx: click.Context, name: str) -> None:
    catalog = get_orchestrator(ctx).ctx.catalog
    keys = catalog.group(name)
    while True:
        click.secho(f"\n📦 {catalog.group_label(name)}", fg="cyan", bold=True)
        click.echo("   a) Install all")
        click.echo("   s) Select components")
        click.echo("   b) Back")
        choice = click.prompt("   choice", type=click.Choice(["a", "s", "b"]), show_choices=False)

        if choice == "b":
            return
        if choice == "a":
            _run_install(ctx, keys)
            continue

        selection = _select(keys, catalog)
        if not selection:
            click.echo("   Nothing selected")
            continue
        _run_install(ctx, selection.consume())


@click.command()
@click.pass_context
def menu(ctx: click.Context) -> None:
    """Interactive install menu."""
    catalog = get_orchestrator(ctx).ctx.catalog
    groups = catalog.groups()

    while True:
        click.secho("\n🛠️  hostprep", fg="cyan", bold=True)
        for i, name in enumerate(groups, 1):
            click.echo(f"   {i}) {catalog.group_label(name)}")
        click.echo("   q) Quit")
        choice = click.prompt("   choice", default="q").strip()

        if choice == "q":
            return
        picked, _ = _parse_choices(choice, len(groups))
        if len(picked) != 1:
            click.secho(f"   ⚠️  Invalid choice: {choice}", fg="yellow")
            continue
        _group_menu(ctx, groups[picked[0]])
