"""Simulate command: replay a scripted run through an AffectSession.

A script is JSON: either a list of steps or ``{"steps": [...]}``. Each step
is an object with an ``op`` and an optional ``at`` (milliseconds on the
script clock, never decreasing):

    {"at": 0,   "op": "add",     "emotion": "joy", "amount": 6}
    {"at": 120, "op": "observe", "kind": "peace_collect", "context": {"combo": 5}}
    {"at": 250, "op": "tick"}
    {"op": "decay", "rate": 0.5}
    {"op": "reset"}
"""

from __future__ import annotations

import json as json_mod
from pathlib import Path
from typing import Any, Optional

import click
import structlog

from affectfield.checkpoint import CheckpointManager
from affectfield.cli.formatters import build_table, format_number, get_console, meter
from affectfield.config import load_affect_config
from affectfield.session import AffectSession
from affectfield.types import ManualClock

logger = structlog.get_logger(__name__)


class ScriptError(ValueError):
    """A replay script step could not be understood."""


def load_script(path: Path) -> list[dict[str, Any]]:
    """Read and shape-check a replay script."""
    try:
        raw = json_mod.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ScriptError(f"cannot read script {path}: {e}") from e
    steps = raw.get("steps") if isinstance(raw, dict) else raw
    if not isinstance(steps, list):
        raise ScriptError("script must be a list of steps or an object with 'steps'")
    for i, step in enumerate(steps):
        if not isinstance(step, dict) or "op" not in step:
            raise ScriptError(f"step {i}: expected an object with an 'op' key")
    return steps


def run_script(
    session: AffectSession,
    clock: ManualClock,
    steps: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Apply each step in order; return one record per synergy activation."""
    activations: list[dict[str, Any]] = []
    for i, step in enumerate(steps):
        op = step["op"]
        if "at" in step:
            try:
                clock.set(float(step["at"]))
            except (TypeError, ValueError) as e:
                raise ScriptError(f"step {i}: bad 'at' value: {e}") from e

        if op == "add":
            session.add(str(step.get("emotion", "")), _number(step, "amount", i))
        elif op == "observe":
            context = step.get("context")
            if context is not None and not isinstance(context, dict):
                raise ScriptError(f"step {i}: 'context' must be an object")
            session.observe(str(step.get("kind", "")), context)
        elif op == "tick":
            result = session.tick()
            if result.activated is not None:
                activations.append({
                    "at_ms": clock(),
                    "synergy": result.activated.id,
                    "message": result.activated.message,
                    "effect": dict(result.activated.effect),
                })
        elif op == "decay":
            session.field.decay(_number(step, "rate", i))
        elif op == "reset":
            session.reset()
        else:
            raise ScriptError(f"step {i}: unknown op {op!r}")
    logger.debug("simulate.finished", steps=len(steps), activations=len(activations))
    return activations


def _number(step: dict[str, Any], key: str, index: int) -> float:
    try:
        return float(step[key])
    except (KeyError, TypeError, ValueError) as e:
        raise ScriptError(f"step {index}: '{key}' must be a number") from e


@click.command("simulate")
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="affectfield.toml to use")
@click.option("--save", is_flag=True, help="Write a checkpoint of the final state")
@click.pass_context
def simulate_cmd(
    ctx: click.Context,
    script: Path,
    config_path: Optional[Path],
    save: bool,
) -> None:
    """Replay SCRIPT and report activations and the final field."""
    try:
        config = load_affect_config(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    clock = ManualClock()
    session = AffectSession(config.affect, clock=clock)

    try:
        activations = run_script(session, clock, load_script(script))
    except ScriptError as e:
        raise click.ClickException(str(e)) from e

    summary = session.summary()
    modifiers = session.modifiers().to_dict()
    saved_path: Optional[Path] = None
    if save:
        manager = CheckpointManager(
            config.checkpoint.checkpoint_dir, config.checkpoint.max_checkpoints
        )
        saved_path = manager.save(session.snapshot())

    if ctx.obj.get("json"):
        click.echo(json_mod.dumps({
            "activations": activations,
            "summary": summary,
            "modifiers": modifiers,
            "checkpoint": str(saved_path) if saved_path else None,
        }, indent=2))
        return

    console = get_console(no_color=ctx.obj.get("no_color", False))
    if activations:
        console.print(build_table(
            "Synergy activations",
            ["at (ms)", "synergy", "message"],
            [[f"{a['at_ms']:.0f}", a["synergy"], a["message"]] for a in activations],
        ))
    else:
        console.print("[dim]No synergies activated.[/dim]")

    console.print(build_table(
        "Final field",
        ["emotion", "intensity", ""],
        [[name, f"{value:.2f}", meter(value)] for name, value in summary["intensities"].items()],
    ))
    console.print(
        f"distortion={summary['distortion']:.3f}  coherence={summary['coherence']:.3f}  "
        f"valence={summary['valence']:+.3f}  dominant={summary['dominant'] or '-'}  "
        f"realm={summary['realm']}"
    )
    console.print(build_table(
        "Modifiers",
        ["modifier", "value"],
        [[name, format_number(value)] for name, value in modifiers.items()],
    ))
    if saved_path:
        console.print(f"Checkpoint written to {saved_path}")
