# affectfield/config.py
"""
Configuration for the affect engine.

Values are loaded from environment variables (via .env file) and validated
with Pydantic. An optional affectfield.toml supplies defaults underneath the
environment: a key set in the file and in the environment (or .env) takes
the environment value.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from affectfield.config_file import find_config, get_section, load_config

logger = structlog.get_logger(__name__)

# Resolve .env relative to the project root (one level above affectfield/),
# so the config works regardless of the current working directory.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class _LayeredSettings(BaseSettings):
    """Settings whose keyword arguments sit beneath the environment and .env.

    ``AffectFieldConfig`` passes TOML values as keyword arguments.
    """

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings


class AffectConfig(_LayeredSettings):
    """Tuning for the emotional field and the session tick."""

    # Subtracted from every emotion on each throttled decay step
    decay_rate: float = Field(0.05, alias="AFFECT_DECAY_RATE")
    # Minimum wall-clock gap between decay steps
    decay_interval_ms: float = Field(100.0, alias="AFFECT_DECAY_INTERVAL_MS")
    synergy_duration_ms: float = Field(3000.0, alias="AFFECT_SYNERGY_DURATION_MS")
    behavior_window_size: int = Field(20, alias="AFFECT_BEHAVIOR_WINDOW_SIZE")
    speed_window_ms: float = Field(1500.0, alias="AFFECT_SPEED_WINDOW_MS")

    model_config = {"env_file": _ENV_FILE, "extra": "ignore", "populate_by_name": True}

    @model_validator(mode="after")
    def normalize_limits(self) -> "AffectConfig":
        self.decay_rate = max(0.0, float(self.decay_rate))
        self.decay_interval_ms = max(0.0, float(self.decay_interval_ms))
        self.synergy_duration_ms = max(1.0, float(self.synergy_duration_ms))
        self.behavior_window_size = max(1, int(self.behavior_window_size))
        self.speed_window_ms = max(1.0, float(self.speed_window_ms))
        return self


class CheckpointConfig(_LayeredSettings):
    """Where field snapshots are written and how many are kept."""

    checkpoint_dir: Path = Field(Path("./affect_data/checkpoints"), alias="AFFECT_CHECKPOINT_DIR")
    max_checkpoints: int = Field(10, alias="AFFECT_MAX_CHECKPOINTS")

    model_config = {"env_file": _ENV_FILE, "extra": "ignore", "populate_by_name": True}

    @model_validator(mode="after")
    def normalize_limits(self) -> "CheckpointConfig":
        self.max_checkpoints = max(1, int(self.max_checkpoints))
        return self


def _file_overrides(settings_cls: type[BaseSettings], section: dict[str, Any]) -> dict[str, Any]:
    """Map a TOML section onto keyword arguments keyed by alias."""
    overrides: dict[str, Any] = {}
    for name, info in settings_cls.model_fields.items():
        if name not in section:
            continue
        overrides[info.alias or name] = section[name]
    unknown = set(section) - set(settings_cls.model_fields)
    if unknown:
        logger.warning("config.unknown_keys", keys=sorted(unknown))
    return overrides


class AffectFieldConfig:
    """
    Master configuration that composes the subsystem configs.

    Every component receives its config from here.
    """

    def __init__(self, file_data: Optional[dict[str, Any]] = None):
        data = file_data or {}
        self.affect = AffectConfig(
            **_file_overrides(AffectConfig, get_section(data, "affect"))
        )
        self.checkpoint = CheckpointConfig(
            **_file_overrides(CheckpointConfig, get_section(data, "checkpoint"))
        )
        self.checkpoint.checkpoint_dir = self._resolve(self.checkpoint.checkpoint_dir)

    @staticmethod
    def _resolve(p: Path) -> Path:
        """Resolve relative paths against the current working directory."""
        return p if p.is_absolute() else (Path.cwd() / p).resolve()

    def to_dict(self) -> dict[str, Any]:
        return {
            "affect": self.affect.model_dump(),
            "checkpoint": {
                "checkpoint_dir": str(self.checkpoint.checkpoint_dir),
                "max_checkpoints": self.checkpoint.max_checkpoints,
            },
        }

    def __repr__(self) -> str:
        return (
            f"AffectFieldConfig(decay_rate={self.affect.decay_rate}, "
            f"decay_interval_ms={self.affect.decay_interval_ms}, "
            f"synergy_duration_ms={self.affect.synergy_duration_ms})"
        )


def load_affect_config(path: Optional[Path] = None) -> AffectFieldConfig:
    """Build the config from the environment plus an optional TOML file.

    With no ``path``, the standard locations are searched.
    """
    if path is None:
        path = find_config()
    data: dict[str, Any] = {}
    if path is not None:
        data = load_config(path)
        logger.debug("config.file_loaded", path=str(path))
    return AffectFieldConfig(data)
