"""Tests for Bayesian rating smoothing."""

import pytest
from hypothesis import given, strategies as st

from pool_predictor.predictions.ratings import (
    BAYESIAN_K,
    UNKNOWN_PLAYER_PRIOR,
    bayesian_pct,
    prior_season_wins,
    unknown_player_pct,
)


class TestBayesianPct:
    """Tests for bayesian_pct."""

    def test_no_games_returns_prior(self):
        assert bayesian_pct(0, 0) == pytest.approx(50.0)

    def test_small_sample_is_shrunk(self):
        """3/3 is pulled well below 100%."""
        assert bayesian_pct(3, 3) == pytest.approx(6 / 9 * 100)

    def test_large_sample_dominates(self):
        assert bayesian_pct(700, 1000) == pytest.approx((700 + 3) / 1006 * 100)

    def test_custom_prior(self):
        assert bayesian_pct(0, 0, prior=0.45) == pytest.approx(45.0)

    def test_unknown_player_prior(self):
        assert unknown_player_pct() == pytest.approx(UNKNOWN_PLAYER_PRIOR * 100)

    @pytest.mark.parametrize(
        "wins,games,prior",
        [(-1, 5, 0.5), (2, -1, 0.5), (6, 5, 0.5), (1, 5, 1.5), (1, 5, -0.1)],
    )
    def test_invalid_arguments_raise(self, wins, games, prior):
        with pytest.raises(ValueError):
            bayesian_pct(wins, games, prior=prior)


@pytest.mark.parametrize(
    "win_pct,played,wins",
    [(0.45, 10, 5), (0.5, 5, 3), (0.25, 2, 1), (0.6, 20, 12), (1.0, 7, 7), (0.0, 4, 0)],
)
def test_prior_season_wins_rounds_half_up(win_pct, played, wins):
    assert prior_season_wins(win_pct, played) == wins

@given(games=st.integers(min_value=0, max_value=2000), data=st.data())
def test_bayesian_pct_bounded(games, data):
    wins = data.draw(st.integers(min_value=0, max_value=games))
    assert 0.0 <= bayesian_pct(wins, games) <= 100.0


@given(games=st.integers(min_value=1, max_value=500), data=st.data())
def test_bayesian_pct_monotone_in_wins(games, data):
    wins = data.draw(st.integers(min_value=0, max_value=games - 1))
    assert bayesian_pct(wins + 1, games) > bayesian_pct(wins, games)


@given(wins=st.integers(min_value=0, max_value=50))
def test_bayesian_pct_between_raw_and_prior(wins):
    games = 50
    adj = bayesian_pct(wins, games)
    raw = wins / games * 100
    assert min(raw, 50.0) - 1e-9 <= adj <= max(raw, 50.0) + 1e-9
    assert BAYESIAN_K > 0
