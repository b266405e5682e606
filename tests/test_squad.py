"""Tests for squad strength and override adjustments."""

import pytest

from pool_predictor.data import SquadOverride
from pool_predictor.optimizer.squad import (
    SQUAD_STRENGTH_SCALING,
    calc_modified_squad_strength,
    calc_squad_strength,
    calc_strength_adjustments,
)

# Amy 10/16, Ben 8/16 (prior season), Nia 6/12; Zed carries no weight
ACES_SQUAD = (0.625 * 10 + 0.5 * 10 + 0.5 * 6) / 26


class TestSquadStrength:
    def test_frames_weighted_mean(self, league):
        assert calc_squad_strength("Aces", league) == pytest.approx(ACES_SQUAD)

    def test_top_n(self, league):
        assert calc_squad_strength("Aces", league, top_n=1) == pytest.approx(0.625)

    def test_team_without_players(self, league):
        assert calc_squad_strength("Falcons", league) is None


class TestModifiedSquadStrength:
    def test_no_override_matches_original(self, league):
        assert calc_modified_squad_strength("Aces", {}, league) == pytest.approx(ACES_SQUAD)

    def test_removing_best_player(self, league):
        overrides = {"Aces": SquadOverride(removed=["Amy"])}
        assert calc_modified_squad_strength("Aces", overrides, league) == pytest.approx(0.5)

    def test_added_player_uses_busiest_team(self, league):
        # Dee joins with the Dishers record: 12/18 adjusted over 12 frames
        overrides = {"Aces": SquadOverride(added=["Dee"])}
        expected = (ACES_SQUAD * 26 + (12 / 18) * 12) / 38
        assert calc_modified_squad_strength("Aces", overrides, league) == pytest.approx(expected)

    def test_added_unknown_player_has_no_weight(self, league):
        overrides = {"Aces": SquadOverride(added=["Stranger"])}
        assert calc_modified_squad_strength("Aces", overrides, league) == pytest.approx(ACES_SQUAD)


class TestStrengthAdjustments:
    def test_only_teams_with_overrides(self, league):
        overrides = {"Aces": SquadOverride(removed=["Amy"])}
        adjustments = calc_strength_adjustments("D1", overrides, None, league)
        assert adjustments == pytest.approx({"Aces": (0.5 - ACES_SQUAD) * SQUAD_STRENGTH_SCALING})

    def test_override_outside_division_ignored(self, league):
        overrides = {"Eagles": SquadOverride(removed=["Dee"])}
        assert calc_strength_adjustments("D1", overrides, None, league) == {}

    def test_empty_override_is_zero(self, league):
        adjustments = calc_strength_adjustments("D1", {"Breakers": SquadOverride()}, None, league)
        assert adjustments == {"Breakers": 0.0}
