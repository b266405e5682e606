"""Tests for Monte Carlo match and season simulation."""

import pytest
from hypothesis import given, settings, strategies as st

from pool_predictor.config import SimulationSettings
from pool_predictor.data import SquadOverride, WhatIfResult
from pool_predictor.predictions.fixtures import get_remaining_fixtures
from pool_predictor.predictions.simulation import (
    MonteCarloSimulator,
    make_rng,
    predict_fixture,
    run_pred_sim,
    run_season_simulation,
    simulate_match,
)
from pool_predictor.predictions.standings import calc_standings


def _what_if(home, away, h, a):
    return WhatIfResult(home=home, away=away, home_score=h, away_score=a)


# Locks every remaining D1 fixture
ALL_LOCKED = [
    ("Aces", "Cue Ball", 7, 3),
    ("Breakers", "Dishers", 2, 8),
    ("Cue Ball", "Aces", 3, 7),
    ("Dishers", "Breakers", 5, 5),
]


class TestSimulateMatch:
    """Tests for simulate_match."""

    def test_frames_sum_to_ten(self):
        rng = make_rng(1)
        for _ in range(50):
            home, away = simulate_match(0.55, rng)
            assert home + away == 10

    def test_certain_outcomes(self):
        rng = make_rng(2)
        assert simulate_match(1.0, rng) == (10, 0)
        assert simulate_match(0.0, rng) == (0, 10)

    @pytest.mark.parametrize("p", [-0.1, 1.1])
    def test_probability_out_of_range(self, p):
        with pytest.raises(ValueError):
            simulate_match(p, make_rng(0))


class TestRunPredSim:
    """Tests for single-match prediction."""

    def test_outcome_percentages_sum_to_100(self):
        result = run_pred_sim(0.6, iterations=2000, rng=make_rng(7))
        assert result.p_home_win + result.p_draw + result.p_away_win == pytest.approx(100.0)
        assert result.expected_home + result.expected_away == pytest.approx(10.0)
        assert result.iterations == 2000

    def test_top_scores_sorted(self):
        result = run_pred_sim(0.5, iterations=5000, rng=make_rng(8))
        assert 1 <= len(result.top_scores) <= 5
        pcts = [s.pct for s in result.top_scores]
        assert pcts == sorted(pcts, reverse=True)
        assert result.top_scores[0].score == "5-5"

    def test_even_match_draw_rate(self):
        """A 5-5 split has binomial probability C(10,5)/2^10."""
        result = run_pred_sim(0.5, iterations=5000, rng=make_rng(9))
        assert result.p_draw == pytest.approx(252 / 1024 * 100, abs=3.0)
        assert result.expected_home == pytest.approx(5.0, abs=0.15)

    def test_even_match_is_symmetric(self):
        result = run_pred_sim(0.5, iterations=20000, rng=make_rng(10))
        assert result.p_home_win == pytest.approx(result.p_away_win, abs=3.0)
        assert result.expected_home == pytest.approx(result.expected_away, abs=0.2)

    def test_certain_home_win(self):
        result = run_pred_sim(1.0, iterations=100, rng=make_rng(0))
        assert result.p_home_win == 100.0
        assert [(s.score, s.pct) for s in result.top_scores] == [("10-0", 100.0)]

    def test_reproducible_with_seed(self):
        assert run_pred_sim(0.55, 500, make_rng(42)) == run_pred_sim(0.55, 500, make_rng(42))

    def test_zero_iterations_rejected(self):
        with pytest.raises(ValueError):
            run_pred_sim(0.5, iterations=0)

    def test_to_dict_formats_one_decimal(self):
        result = run_pred_sim(1.0, iterations=10, rng=make_rng(0))
        assert result.to_dict()["pHomeWin"] == "100.0"
        assert result.to_dict()["topScores"][0] == {"score": "10-0", "pct": "100.0"}


class TestSeasonSimulation:
    """Tests for run_season_simulation."""

    def test_probabilities_are_consistent(self, league):
        projections = run_season_simulation("D1", {}, None, [], league, iterations=300, rng=make_rng(3))
        assert len(projections) == 4
        assert sum(p.p_title for p in projections) == pytest.approx(100.0)
        assert sum(p.p_top2 for p in projections) == pytest.approx(200.0)
        assert sum(p.p_bot2 for p in projections) == pytest.approx(200.0)
        for p in projections:
            assert 0.0 <= p.p_title <= p.p_top2 <= 100.0
            assert sum(p.position_counts) == 300

    def test_sorted_by_average_points(self, league):
        projections = run_season_simulation("D1", {}, None, [], league, iterations=200, rng=make_rng(4))
        avg = [p.avg_pts for p in projections]
        assert avg == sorted(avg, reverse=True)

    def test_starts_from_current_standings(self, league):
        current = {s.team: s.points for s in calc_standings("D1", league)}
        projections = run_season_simulation("D1", {}, None, [], league, iterations=200, rng=make_rng(5))
        for p in projections:
            assert p.current_pts == current[p.team]
            # Two fixtures left each, worth at most 3 points
            assert current[p.team] <= p.avg_pts <= current[p.team] + 6

    def test_all_fixtures_locked_is_deterministic(self, league):
        what_ifs = [_what_if(*w) for w in ALL_LOCKED]
        projections = run_season_simulation("D1", {}, None, what_ifs, league, iterations=50, rng=make_rng(6))
        by_team = {p.team: p for p in projections}

        assert by_team["Dishers"].avg_pts == 9
        assert by_team["Aces"].avg_pts == 7
        assert by_team["Breakers"].avg_pts == 2
        assert by_team["Cue Ball"].avg_pts == 1
        assert by_team["Dishers"].p_title == 100.0
        assert by_team["Aces"].p_top2 == 100.0
        assert by_team["Aces"].p_title == 0.0
        assert by_team["Breakers"].p_bot2 == 100.0
        assert by_team["Cue Ball"].p_bot2 == 100.0

    @pytest.mark.parametrize("team", ["Aces", "Breakers", "Cue Ball", "Dishers"])
    def test_locked_wins_never_lower_points(self, league, team):
        what_ifs = [
            _what_if(f.home, f.away, 10, 0) if f.home == team else _what_if(f.home, f.away, 0, 10)
            for f in get_remaining_fixtures("D1", league)
            if team in (f.home, f.away)
        ]
        free = run_season_simulation("D1", {}, None, [], league, iterations=300, rng=make_rng(15))
        locked = run_season_simulation("D1", {}, None, what_ifs, league, iterations=300, rng=make_rng(15))
        free_pts = next(p.avg_pts for p in free if p.team == team)
        locked_pts = next(p.avg_pts for p in locked if p.team == team)
        assert locked_pts >= free_pts

    def test_locked_wins_give_maximum_points(self, league):
        what_ifs = [_what_if("Aces", "Cue Ball", 10, 0), _what_if("Cue Ball", "Aces", 0, 10)]
        projections = run_season_simulation("D1", {}, None, what_ifs, league, iterations=100, rng=make_rng(16))
        aces = next(p for p in projections if p.team == "Aces")
        # 2 points now, 2 for the home win, 3 for the away win
        assert aces.avg_pts == 7.0

    def test_single_locked_win_raises_points(self, league):
        locked_win = [_what_if("Aces", "Cue Ball", 10, 0)]
        free = run_season_simulation("D1", {}, None, [], league, iterations=300, rng=make_rng(17))
        locked = run_season_simulation("D1", {}, None, locked_win, league, iterations=300, rng=make_rng(17))
        assert next(p.avg_pts for p in locked if p.team == "Aces") > next(
            p.avg_pts for p in free if p.team == "Aces"
        )

    def test_what_if_outside_division_ignored(self, league):
        stray = [_what_if("Eagles", "Falcons", 10, 0)]
        a = run_season_simulation("D1", {}, None, stray, league, iterations=100, rng=make_rng(8))
        b = run_season_simulation("D1", {}, None, [], league, iterations=100, rng=make_rng(8))
        assert a == b

    def test_unknown_division(self, league):
        assert run_season_simulation("ZZ", {}, None, [], league, iterations=10, rng=make_rng(0)) == []

    def test_reproducible_with_seed(self, league):
        a = run_season_simulation("D1", {}, None, [], league, iterations=100, rng=make_rng(11))
        b = run_season_simulation("D1", {}, None, [], league, iterations=100, rng=make_rng(11))
        assert a == b

    def test_weaker_squad_never_gains_points(self, league):
        """Under identical draws, removing the best player cannot raise expected points."""
        overrides = {"Aces": SquadOverride(removed=["Amy"])}
        base = run_season_simulation("D1", {}, None, [], league, iterations=300, rng=make_rng(12))
        weaker = run_season_simulation("D1", overrides, None, [], league, iterations=300, rng=make_rng(12))
        base_aces = next(p for p in base if p.team == "Aces")
        weaker_aces = next(p for p in weaker if p.team == "Aces")
        assert weaker_aces.avg_pts <= base_aces.avg_pts


class TestPredictFixture:
    def test_probabilities_valid(self, league):
        result = predict_fixture("Aces", "Dishers", league, iterations=1000, rng=make_rng(13))
        assert result.p_home_win + result.p_draw + result.p_away_win == pytest.approx(100.0)

    def test_unknown_teams_are_neutral(self, league):
        result = predict_fixture("Nobody", "Nowhere", league, iterations=3000, rng=make_rng(14))
        # Neutral teams: home advantage only, so the home side is favoured
        assert result.p_home_win > result.p_away_win


class TestMonteCarloSimulator:
    def test_uses_configured_iterations(self, league):
        sim = MonteCarloSimulator(seed=1, settings=SimulationSettings(match_iterations=250, season_iterations=40))
        assert sim.predict(0.5).iterations == 250
        projections = sim.simulate_season("D1", league)
        assert all(sum(p.position_counts) == 40 for p in projections)

    def test_same_seed_same_sequence(self):
        cfg = SimulationSettings(match_iterations=300, season_iterations=10)
        a = MonteCarloSimulator(seed=99, settings=cfg)
        b = MonteCarloSimulator(seed=99, settings=cfg)
        assert [a.simulate_match(0.5) for _ in range(5)] == [b.simulate_match(0.5) for _ in range(5)]
        assert a.predict(0.6) == b.predict(0.6)


@settings(max_examples=50)
@given(
    p=st.floats(min_value=0.0, max_value=1.0, allow_nan=False),
    seed=st.integers(min_value=0, max_value=2**32 - 1),
)
def test_simulated_match_always_ten_frames(p, seed):
    home, away = simulate_match(p, make_rng(seed))
    assert home + away == 10
    assert 0 <= home <= 10
