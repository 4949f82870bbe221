"""
Behavior Inference: reading feeling from how the player moves.

The game never asks the player how they feel. Instead it reports what they do:
rushing, hesitating, brushing past hazards, collecting peace nodes. Each report
nudges the field through a fixed mapping, and three derived heuristics then
look at the recent window as a whole (movement cadence, health, combo streak).

All nudges go through EmotionalField.add(), so they clamp individually. The
heuristics are additive and order-independent except at the clamp boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from affectfield.affect.catalog import Emotion
from affectfield.types import BehaviorKind, BehaviorSample

if TYPE_CHECKING:
    from affectfield.affect.field import EmotionalField

BEHAVIOR_WINDOW_SIZE = 20
SPEED_WINDOW_MS = 1500.0

# Direct mapping from an observed action to emotion deltas.
BEHAVIOR_DELTAS: dict[BehaviorKind, tuple[tuple[Emotion, float], ...]] = {
    BehaviorKind.MOVE: (),
    # Very fast consecutive moves read as anxiety
    BehaviorKind.RAPID_MOVE: ((Emotion.FEAR, 0.15), (Emotion.JOY, -0.05)),
    # Staying still reads as calm contemplation
    BehaviorKind.IDLE: ((Emotion.HOPE, 0.10), (Emotion.FEAR, -0.05)),
    BehaviorKind.HAZARD_APPROACH: ((Emotion.FEAR, 0.12), (Emotion.CURIOSITY, 0.08)),
    BehaviorKind.HAZARD_ENTER: ((Emotion.FEAR, 0.25), (Emotion.ANGER, 0.10)),
    BehaviorKind.HAZARD_AVOID: ((Emotion.HOPE, 0.15), (Emotion.TENDER, 0.05)),
    BehaviorKind.PEACE_COLLECT: ((Emotion.JOY, 0.20), (Emotion.HOPE, 0.10)),
    # Frequent reversals read as confusion/frustration
    BehaviorKind.REVERSE: ((Emotion.ANGER, 0.08), (Emotion.CURIOSITY, 0.06)),
    BehaviorKind.EXPLORATION: ((Emotion.CURIOSITY, 0.10), (Emotion.HOPE, 0.05)),
    BehaviorKind.CIRCLING: ((Emotion.DESPAIR, 0.10), (Emotion.ANGER, 0.05)),
}

MOVEMENT_KINDS = frozenset({BehaviorKind.MOVE, BehaviorKind.RAPID_MOVE})

SPEED_BURST_MIN_MOVES = 5
CALM_MAX_MOVES = 1
CALM_MIN_SAMPLES = 5
SPEED_BURST_DELTAS = ((Emotion.FEAR, 0.06), (Emotion.ANGER, 0.04))
CALM_DELTAS = ((Emotion.HOPE, 0.04),)

DEFAULT_MAX_HP = 100.0
LOW_HP_PCT = 0.25
HIGH_HP_PCT = 0.85
LOW_HP_DELTAS = ((Emotion.DESPAIR, 0.08), (Emotion.FEAR, 0.08))
HIGH_HP_DELTAS = ((Emotion.HOPE, 0.04),)

COMBO_THRESHOLD = 5
COMBO_DELTAS = ((Emotion.JOY, 0.12), (Emotion.HOPE, 0.06))


def _apply(field: EmotionalField, deltas: tuple[tuple[Emotion, float], ...]) -> None:
    for emotion, amount in deltas:
        field.add(emotion, amount)


def count_recent_moves(field: EmotionalField, now_ms: float) -> int:
    """Movement samples in the window observed within the speed window."""
    horizon = field.speed_window_ms
    return sum(
        1
        for sample in field.behavior_window
        if sample.kind in MOVEMENT_KINDS and now_ms - sample.observed_at_ms < horizon
    )


def apply_inference(field: EmotionalField, sample: BehaviorSample) -> None:
    """Push intensities for a sample that has already entered the window."""
    _apply(field, BEHAVIOR_DELTAS.get(sample.kind, ()))

    # Speed: a burst of recent moves raises arousal; near-stillness settles it.
    recent_moves = count_recent_moves(field, sample.observed_at_ms)
    if recent_moves >= SPEED_BURST_MIN_MOVES:
        _apply(field, SPEED_BURST_DELTAS)
    elif recent_moves <= CALM_MAX_MOVES and len(field.behavior_window) >= CALM_MIN_SAMPLES:
        _apply(field, CALM_DELTAS)

    ctx = sample.context
    if ctx.hp is not None:
        hp_pct = ctx.hp / (ctx.max_hp or DEFAULT_MAX_HP)
        if hp_pct < LOW_HP_PCT:
            _apply(field, LOW_HP_DELTAS)
        elif hp_pct > HIGH_HP_PCT:
            _apply(field, HIGH_HP_DELTAS)

    if ctx.combo is not None and ctx.combo >= COMBO_THRESHOLD:
        _apply(field, COMBO_DELTAS)
