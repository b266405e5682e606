"""Tests for head-to-head records."""

import pytest

from pool_predictor.analysis.h2h import (
    Advantage,
    analyze_h2h,
    classify_advantage,
    get_h2h_record,
    get_squad_h2h,
)


class TestRecord:
    def test_both_sides_of_the_table(self, league):
        record = get_h2h_record("Dee", "Amy", league.frames)
        assert (record.wins, record.losses) == (1, 1)
        assert record.net == 0

    def test_perspective(self, league):
        assert get_h2h_record("Amy", "Cal", league.frames).wins == 2
        assert get_h2h_record("Cal", "Amy", league.frames).losses == 2

    def test_never_met(self, league):
        assert get_h2h_record("Amy", "Eve", league.frames).total == 0


class TestAnalysis:
    def test_strong_advantage(self, league):
        analysis = analyze_h2h("Amy", "Cal", league.frames)
        assert analysis.win_pct == 100.0
        assert analysis.advantage == Advantage.STRONG
        assert analysis.confidence == pytest.approx(0.2)
        assert [won for _, won in analysis.recent_form] == [True, True]

    def test_never_met_is_none(self, league):
        assert analyze_h2h("Amy", "Eve", league.frames) is None

    @pytest.mark.parametrize(
        "pct, advantage",
        [
            (70.0, Advantage.STRONG),
            (69.9, Advantage.MODERATE),
            (60.0, Advantage.MODERATE),
            (40.0, Advantage.EVEN),
            (39.9, Advantage.DISADVANTAGE),
        ],
    )
    def test_classification_boundaries(self, pct, advantage):
        assert classify_advantage(pct) == advantage


def test_squad_h2h(league):
    records = get_squad_h2h("Aces", "Breakers", league.frames, league.rosters)
    assert [(r.player_a, r.player_b, r.total) for r in records] == [
        ("Amy", "Cal", 2),
        ("Ben", "Cal", 2),
        ("Nia", "Cal", 1),
    ]
