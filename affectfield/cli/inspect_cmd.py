"""Inspect command: read a checkpoint and show what it implies."""

from __future__ import annotations

import json as json_mod
from pathlib import Path
from typing import Optional

import click

from affectfield.checkpoint import CheckpointManager
from affectfield.cli.formatters import build_table, format_number, get_console, meter
from affectfield.config import load_affect_config
from affectfield.session import AffectSession


@click.command("inspect")
@click.argument("checkpoint", required=False,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def inspect_cmd(ctx: click.Context, checkpoint: Optional[Path]) -> None:
    """Show metrics and modifiers for CHECKPOINT (default: the latest one)."""
    try:
        config = load_affect_config()
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    manager = CheckpointManager(
        config.checkpoint.checkpoint_dir, config.checkpoint.max_checkpoints
    )
    if checkpoint is not None:
        loaded = manager.load(checkpoint)
        if loaded is None:
            raise click.ClickException(f"Could not read checkpoint: {checkpoint}")
    else:
        loaded = manager.load_latest()
        if loaded is None:
            raise click.ClickException(
                f"No checkpoints found in {manager.checkpoint_dir}"
            )

    session = AffectSession(config.affect)
    session.restore(loaded)
    summary = session.summary()
    modifiers = session.modifiers().to_dict()

    if ctx.obj.get("json"):
        click.echo(json_mod.dumps({
            "checkpoint_id": loaded.checkpoint_id,
            "timestamp": loaded.timestamp,
            "summary": summary,
            "modifiers": modifiers,
        }, indent=2))
        return

    console = get_console(no_color=ctx.obj.get("no_color", False))
    console.print(f"[bold]Checkpoint {loaded.checkpoint_id}[/bold]")
    console.print(build_table(
        "Field",
        ["emotion", "intensity", ""],
        [[name, f"{value:.2f}", meter(value)] for name, value in summary["intensities"].items()],
    ))
    console.print(
        f"distortion={summary['distortion']:.3f}  coherence={summary['coherence']:.3f}  "
        f"valence={summary['valence']:+.3f}  dominant={summary['dominant'] or '-'}  "
        f"realm={summary['realm']}  synergy={summary['active_synergy'] or '-'}"
    )
    console.print(build_table(
        "Modifiers",
        ["modifier", "value"],
        [[name, format_number(value)] for name, value in modifiers.items()],
    ))
