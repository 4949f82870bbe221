"""
Tests for affectfield.affect.field: state mutation, aggregates and persistence.

Covers:
- add() clamping and unknown-name tolerance
- decay() monotonicity
- reset()
- Aggregator defaults and weighted averages
- to_dict() / restore_from_dict() round trip and malformed snapshots
"""

from __future__ import annotations

import json
import random

import pytest

from affectfield.affect.catalog import CATALOG, EMOTION_NAMES, Emotion
from affectfield.affect.field import EmotionalField


# ---------------------------------------------------------------------------
# add()
# ---------------------------------------------------------------------------

class TestAdd:
    """add() shifts one emotion and keeps it within [0, 10]."""

    def test_add_increases_intensity(self, field):
        field.add("joy", 2.5)
        assert field.get("joy") == pytest.approx(2.5)

    def test_add_accepts_enum(self, field):
        field.add(Emotion.FEAR, 1.0)
        assert field.get(Emotion.FEAR) == pytest.approx(1.0)

    def test_add_clamps_at_ten(self, field):
        field.add("anger", 8)
        field.add("anger", 8)
        assert field.get("anger") == 10.0

    def test_negative_add_clamps_at_zero(self, field):
        field.add("hope", 1)
        field.add("hope", -5)
        assert field.get("hope") == 0.0

    def test_unknown_emotion_is_ignored(self, field):
        before = field.intensities
        field.add("boredom", 5)
        assert field.intensities == before

    def test_unknown_emotion_does_not_raise(self, field):
        field.add("", 1)
        field.add("JOY", 1)
        assert all(v == 0.0 for v in field.intensities.values())

    def test_non_finite_amount_is_ignored(self, field):
        field.add("joy", float("nan"))
        field.add("joy", float("inf"))
        assert field.get("joy") == 0.0

    def test_random_sequences_stay_in_bounds(self, field):
        rng = random.Random(7)
        for _ in range(500):
            field.add(rng.choice(EMOTION_NAMES), rng.uniform(-6, 6))
            for value in field.intensities.values():
                assert 0.0 <= value <= 10.0


# ---------------------------------------------------------------------------
# decay() / reset()
# ---------------------------------------------------------------------------

class TestDecay:
    def test_decay_reduces_every_emotion(self, field):
        field.add("joy", 2)
        field.add("fear", 1)
        field.decay(0.5)
        assert field.get("joy") == pytest.approx(1.5)
        assert field.get("fear") == pytest.approx(0.5)

    def test_decay_never_goes_negative(self, field):
        field.add("joy", 0.2)
        field.decay(1.0)
        assert field.get("joy") == 0.0

    def test_repeated_decay_is_monotonic_and_reaches_zero(self, field):
        for name in EMOTION_NAMES:
            field.add(name, 3.3)
        previous = field.intensities
        for _ in range(100):
            field.decay(0.05)
            current = field.intensities
            for name in EMOTION_NAMES:
                assert current[name] <= previous[name]
                assert current[name] >= 0.0
            previous = current
        assert all(v == 0.0 for v in field.intensities.values())


class TestReset:
    def test_reset_clears_everything(self, field):
        field.add("joy", 6)
        field.add("hope", 4)
        field.observe_behavior("idle")
        field.update_synergy(16)
        assert field.active_synergy_id == "resonance"

        field.reset()

        assert all(v == 0.0 for v in field.intensities.values())
        assert field.active_synergy_id is None
        assert field.synergy_cooldown_ms == 0.0
        assert field.behavior_window == ()


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

class TestAggregates:
    def test_fresh_field_defaults(self, field):
        assert field.calc_coherence() == 0.5
        assert field.get_valence() == 0.0
        assert field.calc_distortion() == 0.0
        assert field.get_dominant() is None

    def test_defaults_after_reset(self, field):
        field.add("despair", 9)
        field.reset()
        assert field.calc_coherence() == 0.5
        assert field.get_valence() == 0.0
        assert field.calc_distortion() == 0.0
        assert field.get_dominant() is None

    def test_single_emotion_coherence_is_its_static_value(self, field):
        field.add("anger", 4)
        field.add("awe", 0)
        assert field.calc_coherence() == pytest.approx(0.5)
        assert field.get_valence() == pytest.approx(-0.6)

    def test_weighted_coherence(self, field):
        field.add("joy", 6)
        field.add("hope", 4)
        assert field.calc_coherence() == pytest.approx((0.85 * 6 + 0.8 * 4) / 10)

    def test_weighted_valence(self, field):
        field.add("joy", 2)
        field.add("despair", 2)
        assert field.get_valence() == pytest.approx((0.9 - 0.9) / 2)

    def test_distortion_formula(self, field):
        field.add("anger", 4)
        assert field.calc_distortion() == pytest.approx(4 * 0.9 * 0.5 / 10)

    def test_distortion_clamped_to_one(self, field):
        for name in EMOTION_NAMES:
            field.add(name, 10)
        assert field.calc_distortion() == 1.0

    def test_distortion_bounds_random_states(self, field):
        rng = random.Random(11)
        for _ in range(200):
            field.add(rng.choice(EMOTION_NAMES), rng.uniform(-4, 8))
            assert 0.0 <= field.calc_distortion() <= 1.0
            assert 0.0 <= field.calc_coherence() <= 1.0
            assert -1.0 <= field.get_valence() <= 1.0

    def test_dominant_is_highest(self, field):
        field.add("fear", 2)
        field.add("hope", 5)
        assert field.get_dominant() is Emotion.HOPE

    def test_dominant_tie_resolves_to_catalog_order(self, field):
        field.add("hope", 3)
        field.add("grief", 3)
        assert field.get_dominant() is Emotion.GRIEF

    def test_intensities_in_catalog_order(self, field):
        assert list(field.intensities) == [spec.name for spec in CATALOG]

    def test_intensities_is_a_copy(self, field):
        snapshot = field.intensities
        snapshot["joy"] = 9
        assert field.get("joy") == 0.0


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

class TestPersistence:
    def test_to_dict_shape(self, field):
        field.add("joy", 1)
        data = field.to_dict()
        assert set(data) == {"intensities", "activeSynergyId"}
        assert set(data["intensities"]) == set(EMOTION_NAMES)
        assert data["activeSynergyId"] is None

    def test_round_trip_preserves_aggregates(self, field, clock):
        field.add("joy", 6)
        field.add("hope", 4)
        field.add("fear", 1.5)
        field.update_synergy(16)

        restored = EmotionalField(clock)
        restored.restore_from_dict(json.loads(json.dumps(field.to_dict())))

        assert restored.calc_distortion() == pytest.approx(field.calc_distortion())
        assert restored.calc_coherence() == pytest.approx(field.calc_coherence())
        assert restored.get_valence() == pytest.approx(field.get_valence())
        assert restored.get_dominant() == field.get_dominant()
        assert restored.active_synergy_id == field.active_synergy_id == "resonance"

    def test_restore_excludes_window_and_cooldown(self, field, clock):
        field.add("despair", 6)
        field.observe_behavior("move")
        field.update_synergy(0)
        data = field.to_dict()

        restored = EmotionalField(clock)
        restored.observe_behavior("idle")
        restored.restore_from_dict(data)
        assert restored.behavior_window == ()
        assert restored.synergy_cooldown_ms == 0.0
        assert restored.active_synergy_id == "dissolution"

    @pytest.mark.parametrize("snapshot", [None, {}, [], "garbage", {"intensities": None}])
    def test_restore_malformed_falls_back_to_reset(self, field, snapshot):
        field.add("joy", 4)
        field.restore_from_dict(snapshot)
        assert all(v == 0.0 for v in field.intensities.values())
        assert field.active_synergy_id is None

    def test_restore_partial_snapshot(self, field):
        field.restore_from_dict({
            "intensities": {"joy": 3, "bogus": 5, "fear": "x", "anger": 50, "hope": True},
            "activeSynergyId": "not_a_synergy",
        })
        assert field.get("joy") == pytest.approx(3.0)
        assert field.get("anger") == 10.0
        assert field.get("fear") == 0.0
        assert field.get("hope") == 0.0
        assert field.active_synergy_id is None

    def test_restore_missing_synergy_id(self, field):
        field.restore_from_dict({"intensities": {"grief": 2}})
        assert field.active_synergy_id is None
        assert field.get("grief") == pytest.approx(2.0)

    def test_restore_non_finite_values_ignored(self, field):
        field.restore_from_dict({"intensities": {"joy": float("nan"), "awe": "inf"}})
        assert field.get("joy") == 0.0
        assert field.get("awe") == 0.0
