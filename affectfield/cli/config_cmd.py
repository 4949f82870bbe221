"""Configuration commands: show, init."""

from __future__ import annotations

import json as json_mod
from pathlib import Path

import click

from affectfield.config_file import CONFIG_FILENAME, find_config, write_template


@click.group("config")
def config_group() -> None:
    """Manage affectfield configuration (affectfield.toml)."""


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration (file + environment)."""
    from affectfield.config import load_affect_config

    path = find_config()
    try:
        config = load_affect_config(path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    data = config.to_dict()
    if ctx.obj.get("json"):
        click.echo(json_mod.dumps({"file": str(path) if path else None, **data}, indent=2))
        return

    click.echo(f"TOML file: {path or '(none)'}")
    for section, values in data.items():
        for key, value in values.items():
            click.echo(f"  {section}.{key} = {value!r}")


@config_group.command("init")
def config_init() -> None:
    """Generate an affectfield.toml template in the current directory."""
    target = Path(CONFIG_FILENAME)
    try:
        write_template(target)
    except FileExistsError:
        raise click.ClickException(f"{target} already exists")
    click.echo(f"Created {target}")
