"""
Emotional Field: the player's live emotional state.

The field holds one intensity per catalog emotion (0.0 to 10.0), the one-slot
synergy state machine, and a short window of recent behavior samples. Bad
input is ignored rather than raised.

Time is read only through the injected clock, so tests can drive it.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Any, Mapping, Optional, Union

import structlog

from affectfield.affect.catalog import (
    CATALOG,
    EMOTION_INDEX,
    MAX_INTENSITY,
    MIN_INTENSITY,
    Emotion,
    resolve_emotion,
)
from affectfield.affect import metrics
from affectfield.affect.inference import (
    BEHAVIOR_WINDOW_SIZE,
    SPEED_WINDOW_MS,
    apply_inference,
)
from affectfield.affect.synergy import (
    SYNERGY_DURATION_MS,
    SynergySpec,
    build_vector,
    find_synergy,
    get_synergy,
)
from affectfield.types import (
    BehaviorContext,
    BehaviorKind,
    BehaviorSample,
    Clock,
    monotonic_ms,
)

logger = structlog.get_logger(__name__)

ContextLike = Union[BehaviorContext, Mapping[str, Any], None]


def _clamp(value: float) -> float:
    return max(MIN_INTENSITY, min(MAX_INTENSITY, value))


class EmotionalField:
    """Mutable per-session emotional state."""

    def __init__(
        self,
        clock: Optional[Clock] = None,
        *,
        window_size: int = BEHAVIOR_WINDOW_SIZE,
        synergy_duration_ms: float = SYNERGY_DURATION_MS,
        speed_window_ms: float = SPEED_WINDOW_MS,
    ):
        self._clock: Clock = clock or monotonic_ms
        self._intensities: list[float] = [0.0] * len(CATALOG)
        self._active_synergy_id: Optional[str] = None
        self._synergy_cooldown_ms = 0.0
        self._synergy_duration_ms = float(synergy_duration_ms)
        self._window: deque[BehaviorSample] = deque(maxlen=max(1, int(window_size)))
        self.speed_window_ms = float(speed_window_ms)

    # ------------------------------------------------------------------
    # State mutation
    # ------------------------------------------------------------------

    def add(self, emotion: Union[Emotion, str], amount: float) -> None:
        """Shift one emotion by ``amount``, clamped to [0, 10].

        Names outside the catalog are ignored.
        """
        resolved = resolve_emotion(emotion)
        if resolved is None:
            logger.debug("field.unknown_emotion", emotion=str(emotion))
            return
        if not math.isfinite(amount):
            return
        idx = EMOTION_INDEX[resolved]
        self._intensities[idx] = _clamp(self._intensities[idx] + amount)

    def decay(self, rate: float) -> None:
        """Pull every emotion toward zero by ``rate``.

        A pure per-call reducer: the caller owns the cadence and scaling.
        """
        self._intensities = [max(0.0, value - rate) for value in self._intensities]

    def reset(self) -> None:
        """Return to the neutral starting state."""
        self._intensities = [0.0] * len(CATALOG)
        self._active_synergy_id = None
        self._synergy_cooldown_ms = 0.0
        self._window.clear()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get(self, emotion: Union[Emotion, str]) -> float:
        """Current intensity of one emotion; 0.0 for unknown names."""
        resolved = resolve_emotion(emotion)
        if resolved is None:
            return 0.0
        return self._intensities[EMOTION_INDEX[resolved]]

    @property
    def intensities(self) -> dict[str, float]:
        """A copy of all intensities keyed by name, in catalog order."""
        return {spec.name: value for spec, value in zip(CATALOG, self._intensities)}

    @property
    def active_synergy_id(self) -> Optional[str]:
        return self._active_synergy_id

    @property
    def active_synergy(self) -> Optional[SynergySpec]:
        return get_synergy(self._active_synergy_id)

    @property
    def synergy_cooldown_ms(self) -> float:
        return self._synergy_cooldown_ms

    @property
    def behavior_window(self) -> tuple[BehaviorSample, ...]:
        return tuple(self._window)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def calc_distortion(self) -> float:
        return metrics.calc_distortion(self._intensities)

    def calc_coherence(self) -> float:
        return metrics.calc_coherence(self._intensities)

    def get_valence(self) -> float:
        return metrics.get_valence(self._intensities)

    def get_dominant(self) -> Optional[Emotion]:
        return metrics.get_dominant(self._intensities)

    # ------------------------------------------------------------------
    # Synergy state machine
    # ------------------------------------------------------------------

    def check_synergy(self) -> Optional[SynergySpec]:
        """First matching synergy for the current state. No side effects."""
        return find_synergy(build_vector(self._intensities))

    def update_synergy(self, dt: float) -> Optional[SynergySpec]:
        """Advance the cooldown by ``dt`` ms and poll for a new synergy.

        Returns the synergy only on the tick it becomes active, so a
        sustained match fires its one-shot effects once.
        """
        # A restored id has no running cooldown and stays until another synergy wins.
        if self._synergy_cooldown_ms > 0:
            self._synergy_cooldown_ms -= dt
            if self._synergy_cooldown_ms <= 0:
                logger.debug("synergy.expired", synergy=self._active_synergy_id)
                self._active_synergy_id = None
                self._synergy_cooldown_ms = 0.0

        synergy = self.check_synergy()
        if synergy is None or synergy.id == self._active_synergy_id:
            return None

        self._active_synergy_id = synergy.id
        self._synergy_cooldown_ms = self._synergy_duration_ms
        logger.info(
            "synergy.activated",
            synergy=synergy.id,
            coherence=round(self.calc_coherence(), 3),
            distortion=round(self.calc_distortion(), 3),
        )
        return synergy

    # ------------------------------------------------------------------
    # Behavior
    # ------------------------------------------------------------------

    def observe_behavior(
        self,
        kind: Union[BehaviorKind, str],
        context: ContextLike = None,
    ) -> Optional[BehaviorSample]:
        """Record a player action and infer emotion from it.

        Returns the recorded sample, or None if ``kind`` is not recognized.
        """
        try:
            behavior = BehaviorKind(kind)
        except ValueError:
            logger.debug("field.unknown_behavior", kind=str(kind))
            return None

        if not isinstance(context, BehaviorContext):
            context = BehaviorContext.from_mapping(context)

        sample = BehaviorSample(kind=behavior, observed_at_ms=self._clock(), context=context)
        self._window.append(sample)
        apply_inference(self, sample)
        return sample

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the persistable state.

        The behavior window and cooldown are session-scoped and left out.
        """
        return {
            "intensities": self.intensities,
            "activeSynergyId": self._active_synergy_id,
        }

    def restore_from_dict(self, data: Optional[Mapping[str, Any]]) -> None:
        """Load state written by ``to_dict()``.

        Missing or malformed parts fall back to the reset state; unknown
        emotion names and synergy ids are ignored.
        """
        self.reset()
        if not isinstance(data, Mapping):
            return

        intensities = data.get("intensities")
        if isinstance(intensities, Mapping):
            for name, value in intensities.items():
                emotion = resolve_emotion(name)
                if emotion is None or isinstance(value, bool):
                    continue
                try:
                    number = float(value)
                except (TypeError, ValueError):
                    logger.debug("field.restore_bad_value", emotion=name)
                    continue
                if math.isfinite(number):
                    self._intensities[EMOTION_INDEX[emotion]] = _clamp(number)

        synergy_id = data.get("activeSynergyId")
        if isinstance(synergy_id, str) and get_synergy(synergy_id) is not None:
            self._active_synergy_id = synergy_id

    def __repr__(self) -> str:
        dominant = self.get_dominant()
        return (
            f"EmotionalField(dominant={dominant.value if dominant else None}, "
            f"distortion={self.calc_distortion():.2f}, "
            f"coherence={self.calc_coherence():.2f}, "
            f"synergy={self._active_synergy_id})"
        )
