"""
Tests for affectfield.affect.inference: behavior window and heuristics.

Covers:
- Behavior window bound and FIFO order
- Direct behavior → emotion mapping
- Speed-burst and calm detection
- HP- and combo-based inference
- Context parsing (dataclass, snake_case and camelCase mappings)
"""

from __future__ import annotations

import pytest

from affectfield.affect.inference import BEHAVIOR_DELTAS, count_recent_moves
from affectfield.types import BehaviorContext, BehaviorKind


# ---------------------------------------------------------------------------
# Window
# ---------------------------------------------------------------------------

class TestBehaviorWindow:
    def test_sample_is_recorded_with_clock_time(self, field, clock):
        clock.set(1234)
        sample = field.observe_behavior("move", {"direction": "up"})
        assert sample.kind is BehaviorKind.MOVE
        assert sample.observed_at_ms == 1234
        assert sample.context.direction == "up"
        assert field.behavior_window == (sample,)

    def test_window_keeps_twenty_most_recent(self, field, clock):
        for i in range(25):
            clock.set(i * 2000)
            field.observe_behavior("exploration")
        window = field.behavior_window
        assert len(window) == 20
        assert [s.observed_at_ms for s in window] == [i * 2000 for i in range(5, 25)]

    def test_custom_window_size(self, clock):
        from affectfield.affect.field import EmotionalField

        small = EmotionalField(clock, window_size=3)
        for _ in range(5):
            small.observe_behavior("idle")
        assert len(small.behavior_window) == 3

    def test_unknown_kind_is_ignored(self, field):
        assert field.observe_behavior("teleport") is None
        assert field.behavior_window == ()
        assert all(v == 0.0 for v in field.intensities.values())


# ---------------------------------------------------------------------------
# Direct mapping
# ---------------------------------------------------------------------------

class TestDirectMapping:
    def test_every_kind_has_an_entry(self):
        assert set(BEHAVIOR_DELTAS) == set(BehaviorKind)

    def test_move_has_no_direct_effect(self, field):
        field.observe_behavior("move")
        assert all(v == 0.0 for v in field.intensities.values())

    def test_hazard_enter(self, field):
        field.observe_behavior(BehaviorKind.HAZARD_ENTER)
        assert field.get("fear") == pytest.approx(0.25)
        assert field.get("anger") == pytest.approx(0.10)

    def test_peace_collect(self, field):
        field.observe_behavior("peace_collect")
        assert field.get("joy") == pytest.approx(0.20)
        assert field.get("hope") == pytest.approx(0.10)

    def test_rapid_move_negative_delta_clamps(self, field):
        field.observe_behavior("rapid_move")
        assert field.get("fear") == pytest.approx(0.15)
        assert field.get("joy") == 0.0

    def test_idle(self, field):
        field.add("fear", 1)
        field.observe_behavior("idle")
        assert field.get("hope") == pytest.approx(0.10)
        assert field.get("fear") == pytest.approx(0.95)

    @pytest.mark.parametrize(
        "kind,expected",
        [
            ("hazard_approach", {"fear": 0.12, "curiosity": 0.08}),
            ("hazard_avoid", {"hope": 0.15, "tender": 0.05}),
            ("reverse", {"anger": 0.08, "curiosity": 0.06}),
            ("exploration", {"curiosity": 0.10, "hope": 0.05}),
            ("circling", {"despair": 0.10, "anger": 0.05}),
        ],
    )
    def test_table_entries(self, field, kind, expected):
        field.observe_behavior(kind)
        for name, value in field.intensities.items():
            assert value == pytest.approx(expected.get(name, 0.0))


# ---------------------------------------------------------------------------
# Derived heuristics
# ---------------------------------------------------------------------------

class TestSpeedHeuristics:
    def test_speed_burst_on_fifth_recent_move(self, field):
        for _ in range(4):
            field.observe_behavior("move")
        assert field.get("fear") == 0.0
        field.observe_behavior("move")
        assert field.get("fear") == pytest.approx(0.06)
        assert field.get("anger") == pytest.approx(0.04)

    def test_speed_burst_repeats_while_rushing(self, field):
        for _ in range(6):
            field.observe_behavior("move")
        assert field.get("fear") == pytest.approx(0.12)
        assert field.get("anger") == pytest.approx(0.08)

    def test_rapid_moves_count_toward_burst(self, field):
        for _ in range(5):
            field.observe_behavior("rapid_move")
        assert field.get("fear") == pytest.approx(0.15 * 5 + 0.06)

    def test_old_moves_fall_out_of_speed_window(self, field, clock):
        for _ in range(5):
            field.observe_behavior("move")
        fear_after_burst = field.get("fear")
        clock.advance(1500)
        assert count_recent_moves(field, clock()) == 0
        field.observe_behavior("move")
        # only the new move counts, so the calm branch applies instead
        assert field.get("fear") == pytest.approx(fear_after_burst)
        assert field.get("hope") == pytest.approx(0.04)

    def test_calm_needs_five_samples(self, field, clock):
        for i in range(4):
            clock.set(i * 2000)
            field.observe_behavior("hazard_avoid")
        assert field.get("hope") == pytest.approx(0.15 * 4)
        clock.set(10000)
        field.observe_behavior("hazard_avoid")
        assert field.get("hope") == pytest.approx(0.15 * 5 + 0.04)

    def test_calm_with_one_recent_move(self, field):
        for _ in range(4):
            field.observe_behavior("exploration")
        field.observe_behavior("move")
        assert field.get("hope") == pytest.approx(0.05 * 4 + 0.04)


class TestHealthAndCombo:
    def test_low_hp_default_max(self, field):
        field.observe_behavior("move", {"hp": 20})
        assert field.get("despair") == pytest.approx(0.08)
        assert field.get("fear") == pytest.approx(0.08)

    def test_mid_hp_does_nothing(self, field):
        field.observe_behavior("move", {"hp": 20, "max_hp": 50})
        assert all(v == 0.0 for v in field.intensities.values())

    def test_high_hp_adds_hope(self, field):
        field.observe_behavior("move", BehaviorContext(hp=90))
        assert field.get("hope") == pytest.approx(0.04)

    def test_camel_case_max_hp(self, field):
        field.observe_behavior("move", {"hp": 4, "maxHp": 20})
        assert field.get("despair") == pytest.approx(0.08)

    def test_zero_max_hp_falls_back_to_hundred(self, field):
        field.observe_behavior("move", {"hp": 50, "max_hp": 0})
        assert all(v == 0.0 for v in field.intensities.values())

    def test_combo_threshold(self, field):
        field.observe_behavior("move", {"combo": 4})
        assert field.get("joy") == 0.0
        field.observe_behavior("move", {"combo": 5})
        assert field.get("joy") == pytest.approx(0.12)
        assert field.get("hope") == pytest.approx(0.06)

    def test_heuristics_stack(self, field):
        field.observe_behavior("peace_collect", {"hp": 95, "combo": 7})
        assert field.get("joy") == pytest.approx(0.20 + 0.12)
        assert field.get("hope") == pytest.approx(0.10 + 0.04 + 0.06)


# ---------------------------------------------------------------------------
# Context parsing
# ---------------------------------------------------------------------------

class TestBehaviorContext:
    def test_from_mapping_aliases_and_unknown_keys(self):
        ctx = BehaviorContext.from_mapping(
            {"intervalMs": 120, "tileType": "hazard", "maxHp": 80, "colour": "red"}
        )
        assert ctx.interval_ms == 120
        assert ctx.tile_type == "hazard"
        assert ctx.max_hp == 80

    def test_numeric_strings_are_coerced(self):
        ctx = BehaviorContext.from_mapping({"combo": "7", "hp": "10", "maxHp": "40", "intervalMs": "90"})
        assert ctx.combo == 7
        assert ctx.hp == 10.0
        assert ctx.max_hp == 40.0
        assert ctx.interval_ms == 90.0

    @pytest.mark.parametrize("bad", ["lots", float("nan"), float("inf"), True, [3], {"n": 1}])
    def test_unusable_numbers_are_dropped(self, bad):
        ctx = BehaviorContext.from_mapping({"combo": bad, "hp": bad, "tileType": "spike"})
        assert ctx.combo is None
        assert ctx.hp is None
        assert ctx.tile_type == "spike"

    def test_string_context_drives_inference(self, field):
        field.observe_behavior("peace_collect", {"combo": "7"})
        assert field.get("joy") == pytest.approx(0.20 + 0.12)
        field.observe_behavior("hazard_enter", {"hp": "10"})
        assert field.get("despair") == pytest.approx(0.08)

    def test_garbage_context_never_raises(self, field):
        sample = field.observe_behavior("peace_collect", {"combo": "many", "hp": None, "maxHp": "x"})
        assert sample is not None
        assert field.get("joy") == pytest.approx(0.20)

    def test_from_empty(self):
        assert BehaviorContext.from_mapping(None) == BehaviorContext()
        assert BehaviorContext.from_mapping({}) == BehaviorContext()

    def test_to_dict_drops_unset(self):
        assert BehaviorContext(combo=3).to_dict() == {"combo": 3}
