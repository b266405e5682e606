"""Tests for team strength and the frame model."""

import math

import pytest
from hypothesis import given, strategies as st

from pool_predictor.data import DataSources, Division, MatchResult, PlayerStats2425
from pool_predictor.predictions.matchup import HOME_ADV, predict_frame
from pool_predictor.predictions.strength import (
    calc_prior_team_strength,
    calc_team_strength,
    current_strength,
)

# Amy: 12/20 last season, Ben: 5/10, Nia and Zed: unknown (0.45 with weight 6)
ACES_PRIOR = ((15 / 26) * 20 + 0.5 * 10 + 0.45 * 6 * 2) / 42


class TestCurrentStrength:
    def test_from_frame_diff(self):
        assert current_strength(4, 2) == pytest.approx(0.4)

    def test_no_matches_is_neutral(self):
        assert current_strength(0, 0) == 0.0


class TestPriorStrength:
    def test_weighted_squad(self, league):
        assert calc_prior_team_strength("Aces", league) == pytest.approx((ACES_PRIOR - 0.5) * 4)

    def test_no_known_players_is_neutral(self, league):
        assert calc_prior_team_strength("Falcons", league) == 0.0

    def test_prior_season_half_win_rounds_up(self):
        """0.45 over 10 frames counts as 5 wins, a neutral 8/16 smoothed rate."""
        ds = DataSources(
            players={"Hal": PlayerStats2425(win_pct=0.45, played=10)},
            rosters={"Solo": ["Hal"]},
        )
        assert calc_prior_team_strength("Solo", ds) == pytest.approx(0.0)

    def test_unknown_only_squad_is_neutral(self):
        ds = DataSources(rosters={"Rookies": ["Zed", "Yan"]})
        assert calc_prior_team_strength("Rookies", ds) == 0.0


class TestTeamStrength:
    def test_blends_prior_early_in_season(self, league):
        strengths = calc_team_strength("D1", league)
        assert set(strengths) == {"Aces", "Breakers", "Cue Ball", "Dishers"}
        expected = 0.8 * (ACES_PRIOR - 0.5) * 4 + 0.2 * current_strength(2, 2)
        assert strengths["Aces"] == pytest.approx(expected)

    def test_current_form_only_after_ten_matches(self):
        results = [
            MatchResult(date="01-10-2025", home="Hi", away="Lo", home_score=6, away_score=4)
            for _ in range(10)
        ]
        ds = DataSources(
            divisions={"X": Division(name="X", teams=["Hi", "Lo"])},
            results=results,
            rosters={"Hi": ["Amy"]},
        )
        strengths = calc_team_strength("X", ds)
        assert strengths["Hi"] == pytest.approx(0.4)
        assert strengths["Lo"] == pytest.approx(-0.4)

    def test_unknown_division(self, league):
        assert calc_team_strength("ZZ", league) == {}


class TestPredictFrame:
    """Tests for the logistic frame model."""

    def test_equal_teams_favour_home(self):
        assert predict_frame(0.0, 0.0) == pytest.approx(1 / (1 + math.exp(-HOME_ADV)))

    def test_known_value(self):
        assert predict_frame(0.3, -0.1) == pytest.approx(0.6457, abs=1e-4)

    def test_extreme_gap_stays_inside_unit_interval(self):
        assert 0.0 < predict_frame(-1e6, 1e6) < 1e-6
        assert 1 - 1e-6 < predict_frame(1e6, -1e6) < 1.0

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            predict_frame(float("nan"), 0.0)


finite = st.floats(min_value=-50, max_value=50, allow_nan=False, allow_infinity=False)


@given(a=finite, b=finite)
def test_predict_frame_symmetric_without_home_advantage(a, b):
    assert predict_frame(a, b, home_advantage=0.0) + predict_frame(b, a, home_advantage=0.0) == pytest.approx(1.0)


@given(a=finite, b=finite, delta=st.floats(min_value=0.01, max_value=5))
def test_predict_frame_monotone_in_home_strength(a, b, delta):
    assert predict_frame(a + delta, b) >= predict_frame(a, b)
