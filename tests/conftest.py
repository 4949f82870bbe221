"""
Shared fixtures for the affectfield test suite.

Provides a manually driven clock, fresh fields and sessions, and default
configs so individual test modules can focus on behavior rather than setup.
"""

from __future__ import annotations

import pytest

from affectfield.affect.field import EmotionalField
from affectfield.config import AffectConfig
from affectfield.session import AffectSession
from affectfield.types import ManualClock


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

_AFFECT_ENV_VARS = (
    "AFFECT_DECAY_RATE",
    "AFFECT_DECAY_INTERVAL_MS",
    "AFFECT_SYNERGY_DURATION_MS",
    "AFFECT_BEHAVIOR_WINDOW_SIZE",
    "AFFECT_SPEED_WINDOW_MS",
    "AFFECT_CHECKPOINT_DIR",
    "AFFECT_MAX_CHECKPOINTS",
)


@pytest.fixture(autouse=True)
def _clean_affect_env(monkeypatch):
    """Keep the developer's AFFECT_* variables out of the tests."""
    for name in _AFFECT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Clock and field fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def clock() -> ManualClock:
    """A clock frozen at 0 ms until a test advances it."""
    return ManualClock()


@pytest.fixture()
def field(clock) -> EmotionalField:
    """A fresh, all-zero EmotionalField reading the manual clock."""
    return EmotionalField(clock)


# ---------------------------------------------------------------------------
# Config and session fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def affect_config() -> AffectConfig:
    """AffectConfig with the stock tuning."""
    return AffectConfig(
        AFFECT_DECAY_RATE=0.05,
        AFFECT_DECAY_INTERVAL_MS=100.0,
        AFFECT_SYNERGY_DURATION_MS=3000.0,
    )


@pytest.fixture()
def session(affect_config, clock) -> AffectSession:
    """An AffectSession on the manual clock."""
    return AffectSession(affect_config, clock=clock)
