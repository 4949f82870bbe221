"""Catalog commands: list the emotions and synergy rules."""

from __future__ import annotations

import json as json_mod

import click

from affectfield.affect.catalog import CATALOG
from affectfield.affect.synergy import SYNERGIES
from affectfield.cli.formatters import build_table, get_console, swatch


@click.command("catalog")
@click.pass_context
def catalog_cmd(ctx: click.Context) -> None:
    """Show the ten emotions and their static dimensions."""
    if ctx.obj.get("json"):
        click.echo(json_mod.dumps([
            {
                "emotion": spec.name,
                "valence": spec.valence,
                "arousal": spec.arousal,
                "coherence": spec.coherence,
                "color": spec.color,
                "description": spec.description,
            }
            for spec in CATALOG
        ], indent=2))
        return

    rows = [
        [spec.name, f"{spec.valence:+.2f}", f"{spec.arousal:.2f}",
         f"{spec.coherence:.2f}", swatch(spec.color), spec.description]
        for spec in CATALOG
    ]
    console = get_console(no_color=ctx.obj.get("no_color", False))
    console.print(build_table(
        "Emotions",
        ["emotion", "valence", "arousal", "coherence", "color", "description"],
        rows,
    ))


@click.command("synergies")
@click.pass_context
def synergies_cmd(ctx: click.Context) -> None:
    """Show the synergy rules in precedence order."""
    if ctx.obj.get("json"):
        click.echo(json_mod.dumps([
            {
                "id": spec.id,
                "condition": spec.describe(),
                "effect": dict(spec.effect),
                "message": spec.message,
                "color": spec.color,
            }
            for spec in SYNERGIES
        ], indent=2))
        return

    rows = [
        [str(i), spec.id, spec.describe(), spec.message]
        for i, spec in enumerate(SYNERGIES, start=1)
    ]
    console = get_console(no_color=ctx.obj.get("no_color", False))
    console.print(build_table("Synergies", ["#", "id", "condition", "message"], rows))
