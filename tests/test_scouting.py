"""Tests for opponent scouting reports."""

import pytest

from pool_predictor.analysis.scouting import generate_scouting_report


def test_report_sections(league):
    report = generate_scouting_report("Aces", league)

    assert report.division == "D1"
    assert report.team_form == ["L", "W"]
    assert report.home_away.home.won == 1
    assert report.set_performance.bias == 50.0
    assert report.bd_stats.games == 18
    assert report.forfeit_rate == pytest.approx(1 / 18)
    assert report.predicted_lineup.likely_players == ["Amy", "Ben", "Nia"]


def test_strongest_and_weakest(league):
    report = generate_scouting_report("Aces", league)
    assert report.strongest_players[0].name == "Amy"
    assert report.strongest_players[0].adj_pct == pytest.approx(62.5)
    assert report.weakest_players[0].name == "Nia"
    assert len(report.strongest_players) == 3


def test_explicit_frames_override_snapshot(league):
    report = generate_scouting_report("Aces", league, frames=[])
    assert report.set_performance is None
    assert report.predicted_lineup.players == []


def test_unknown_team(league):
    report = generate_scouting_report("Nobody", league)
    assert report.division is None
    assert report.team_form == []
    assert report.strongest_players == []
    assert report.forfeit_rate == 0.0
