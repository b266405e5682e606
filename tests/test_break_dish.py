"""Tests for break-and-dish statistics."""

import pytest

from pool_predictor.analysis.break_dish import BDStats, calc_bd_stats, compare_bd_stats


class TestCalcBDStats:
    def test_player_across_teams(self, league):
        stats = calc_bd_stats(league.players2526, player="Dee")
        assert (stats.games, stats.bd_for, stats.bd_against) == (16, 4, 1)
        assert stats.efficiency == pytest.approx(0.8)

    def test_player_in_division(self, league):
        stats = calc_bd_stats(league.players2526, player="Dee", division="D1")
        assert stats.games == 12
        assert stats.bd_for_rate == pytest.approx(0.25)
        assert stats.efficiency == pytest.approx(0.75)

    def test_team(self, league):
        stats = calc_bd_stats(league.players2526, team="Aces")
        assert stats.games == 18
        assert stats.net == 1
        assert stats.forfeit_rate == pytest.approx(1 / 18)

    def test_player_takes_precedence(self, league):
        stats = calc_bd_stats(league.players2526, player="Ben", team="Dishers")
        assert stats.games == 2

    def test_no_bds_has_no_efficiency(self, league):
        assert calc_bd_stats(league.players2526, player="Ben").efficiency is None

    def test_unknown_player_is_empty(self, league):
        stats = calc_bd_stats(league.players2526, player="Nobody")
        assert stats == BDStats()
        assert stats.bd_for_rate == 0.0

    def test_requires_player_or_team(self, league):
        with pytest.raises(ValueError):
            calc_bd_stats(league.players2526)


class TestCompare:
    def test_differences(self):
        first = BDStats(games=10, bd_for=5, bd_against=2)
        second = BDStats(games=20, bd_for=2, bd_against=2)
        cmp = compare_bd_stats(first, second)
        assert first.efficiency == pytest.approx(5 / 7)
        assert cmp.bd_advantage == pytest.approx(0.4)
        assert cmp.efficiency_diff == pytest.approx(5 / 7 - 0.5)
        assert cmp.net_diff == 3

    def test_undefined_efficiency(self):
        cmp = compare_bd_stats(BDStats(games=5, bd_for=1), BDStats(games=5))
        assert cmp.efficiency_diff is None
        assert cmp.net_diff == 1
