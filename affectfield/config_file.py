"""TOML configuration file utilities.

Reading uses tomllib (stdlib, Python >=3.11). The template is written as
plain text so its comments survive.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "affectfield.toml"

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def find_config() -> Path | None:
    """Search for affectfield.toml in standard locations.

    Search order:
    1. Current working directory
    2. ~/.config/affectfield/affectfield.toml
    3. Project root (where the affectfield package lives)

    Returns None if not found.
    """
    cwd = Path.cwd() / CONFIG_FILENAME
    if cwd.is_file():
        return cwd

    xdg = Path.home() / ".config" / "affectfield" / CONFIG_FILENAME
    if xdg.is_file():
        return xdg

    project = _PROJECT_ROOT / CONFIG_FILENAME
    if project.is_file():
        return project

    return None


def load_config(path: Path) -> dict[str, Any]:
    """Load and parse an affectfield.toml file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def get_section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a top-level table, or an empty dict if absent or not a table."""
    section = data.get(name, {})
    return section if isinstance(section, dict) else {}


def write_template(path: Path) -> None:
    """Write the annotated template, creating parent directories.

    Refuses to overwrite an existing file.
    """
    if path.exists():
        raise FileExistsError(str(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_template(), encoding="utf-8")


def generate_template() -> str:
    """Generate an annotated affectfield.toml template with all keys commented out."""
    return '''\
# affectfield configuration
# Environment variables (AFFECT_*) override these values.

[affect]
# decay_rate = 0.05
# decay_interval_ms = 100.0
# synergy_duration_ms = 3000.0
# behavior_window_size = 20
# speed_window_ms = 1500.0

[checkpoint]
# checkpoint_dir = "./affect_data/checkpoints"
# max_checkpoints = 10
'''
