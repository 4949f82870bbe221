"""
Affect Session: the game loop's handle on the emotional field.

The field itself is a pure state container: it decays by whatever rate it is
handed and never looks at how often it is called. The session owns that
cadence. Each tick it decides whether enough time has passed to decay, then
polls the synergy state machine, in that order, so synergy predicates always
see the post-decay state for the tick.

A session reset replaces the field wholesale rather than zeroing it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import structlog

import affectfield
from affectfield.affect.catalog import Emotion
from affectfield.affect.field import ContextLike, EmotionalField
from affectfield.affect.modifiers import (
    GameplayModifiers,
    Realm,
    get_emotional_modifiers,
    infer_realm,
)
from affectfield.affect.synergy import SynergySpec
from affectfield.checkpoint import FieldCheckpoint
from affectfield.config import AffectConfig
from affectfield.types import BehaviorKind, BehaviorSample, Clock, monotonic_ms

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TickResult:
    """What happened during one session tick."""

    dt_ms: float
    decayed: bool
    activated: Optional[SynergySpec] = None


class AffectSession:
    """Owns one EmotionalField and drives its decay and synergy cadence."""

    def __init__(self, config: Optional[AffectConfig] = None, clock: Optional[Clock] = None):
        self._config = config or AffectConfig()
        self._clock: Clock = clock or monotonic_ms
        self._field = self._new_field()
        now = self._clock()
        self._last_tick_ms = now
        self._last_decay_ms = now
        self._activation_count = 0

    def _new_field(self) -> EmotionalField:
        return EmotionalField(
            self._clock,
            window_size=self._config.behavior_window_size,
            synergy_duration_ms=self._config.synergy_duration_ms,
            speed_window_ms=self._config.speed_window_ms,
        )

    @property
    def field(self) -> EmotionalField:
        return self._field

    @property
    def config(self) -> AffectConfig:
        return self._config

    @property
    def activation_count(self) -> int:
        """Synergy activations since the session (or last reset) began."""
        return self._activation_count

    # ------------------------------------------------------------------
    # Game loop
    # ------------------------------------------------------------------

    def tick(self) -> TickResult:
        """Run one tick: throttled decay first, then the synergy poll.

        Time comes from the session clock, the same one that stamps behavior
        samples. Replays drive it with a ``ManualClock``.
        """
        now = self._clock()
        dt = max(0.0, now - self._last_tick_ms)
        self._last_tick_ms = now

        decayed = False
        if now - self._last_decay_ms > self._config.decay_interval_ms:
            self._field.decay(self._config.decay_rate)
            self._last_decay_ms = now
            decayed = True

        activated = self._field.update_synergy(dt)
        if activated is not None:
            self._activation_count += 1
        return TickResult(dt_ms=dt, decayed=decayed, activated=activated)

    def add(self, emotion: Union[Emotion, str], amount: float) -> None:
        self._field.add(emotion, amount)

    def observe(
        self,
        kind: Union[BehaviorKind, str],
        context: ContextLike = None,
    ) -> Optional[BehaviorSample]:
        return self._field.observe_behavior(kind, context)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def modifiers(self) -> GameplayModifiers:
        return get_emotional_modifiers(self._field)

    def realm(self) -> Realm:
        return infer_realm(self._field)

    def summary(self) -> dict[str, Any]:
        """A plain snapshot of the derived state, for display and logging."""
        dominant = self._field.get_dominant()
        return {
            "intensities": self._field.intensities,
            "distortion": self._field.calc_distortion(),
            "coherence": self._field.calc_coherence(),
            "valence": self._field.get_valence(),
            "dominant": dominant.value if dominant else None,
            "realm": self.realm().value,
            "active_synergy": self._field.active_synergy_id,
            "activations": self._activation_count,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Start over with a brand-new field."""
        self._field = self._new_field()
        now = self._clock()
        self._last_tick_ms = now
        self._last_decay_ms = now
        self._activation_count = 0
        logger.info("session.reset")

    def snapshot(self) -> FieldCheckpoint:
        return FieldCheckpoint.from_field_dict(
            self._field.to_dict(),
            affectfield_version=affectfield.__version__,
        )

    def restore(self, checkpoint: Union[FieldCheckpoint, Mapping[str, Any]]) -> None:
        """Load a checkpoint (or a raw ``to_dict()`` snapshot) into the field."""
        if isinstance(checkpoint, FieldCheckpoint):
            data: Mapping[str, Any] = checkpoint.to_field_dict()
        else:
            data = checkpoint
        self._field.restore_from_dict(data)
        logger.info(
            "session.restored",
            active_synergy=self._field.active_synergy_id,
            distortion=round(self._field.calc_distortion(), 3),
        )
