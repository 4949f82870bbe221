"""CLI application: Click-based command hierarchy for affectfield.

The main CLI group and global flags. Subcommand modules register
themselves by importing and adding to the group.
"""

from __future__ import annotations

import click

from affectfield.main import configure_logging


@click.group()
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors")
@click.pass_context
def cli(ctx: click.Context, json_output: bool, verbose: bool, no_color: bool) -> None:
    """affectfield - inspect and replay the player's emotional field."""
    configure_logging(verbose=verbose)
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    ctx.obj["verbose"] = verbose
    ctx.obj["no_color"] = no_color


# ---------------------------------------------------------------------------
# Register subcommand modules
# ---------------------------------------------------------------------------

def _register_subcommands() -> None:
    """Import and register all subcommand groups/commands."""
    from affectfield.cli.catalog_cmd import catalog_cmd, synergies_cmd
    from affectfield.cli.simulate import simulate_cmd
    from affectfield.cli.inspect_cmd import inspect_cmd
    from affectfield.cli.config_cmd import config_group

    cli.add_command(catalog_cmd)
    cli.add_command(synergies_cmd)
    cli.add_command(simulate_cmd)
    cli.add_command(inspect_cmd)
    cli.add_command(config_group)


_register_subcommands()
