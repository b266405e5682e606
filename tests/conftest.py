"""Shared fixtures: a small hand-built league snapshot."""

import json
from datetime import date

import pytest

from pool_predictor.data import (
    DataSources,
    FrameRecord,
    FrameWinner,
    MatchFrames,
    process_data_sources,
)


def _frame(num, home, away, winner, bd=False):
    return {
        "frameNum": num,
        "homePlayer": home,
        "awayPlayer": away,
        "winner": winner,
        "breakDish": bd,
    }


RAW_LEAGUE = {
    "divisions": {
        "D1": {"name": "Division One", "teams": ["Aces", "Breakers", "Cue Ball", "Dishers"]},
        "D2": {"name": "Division Two", "teams": ["Eagles", "Falcons"]},
    },
    "results": [
        {"date": "01-10-2025", "home": "Aces", "away": "Breakers", "home_score": 7, "away_score": 3, "division": "D1"},
        {"date": "01-10-2025", "home": "Cue Ball", "away": "Dishers", "home_score": 4, "away_score": 6, "division": "D1"},
        {"date": "01-10-2025", "home": "Eagles", "away": "Falcons", "home_score": 6, "away_score": 4},
        {"date": "08-10-2025", "home": "Breakers", "away": "Cue Ball", "home_score": 5, "away_score": 5, "division": "D1"},
        {"date": "08-10-2025", "home": "Dishers", "away": "Aces", "home_score": 6, "away_score": 4, "division": "D1"},
    ],
    "fixtures": [
        {"date": "01-10-2025", "home": "Aces", "away": "Dishers", "division": "D1"},
        {"date": "15-10-2025", "home": "Aces", "away": "Cue Ball", "division": "D1"},
        {"date": "15-10-2025", "home": "Breakers", "away": "Dishers", "division": "D1"},
        {"date": "15-10-2025", "home": "Falcons", "away": "Eagles", "division": "D2"},
        {"date": "22-10-2025", "home": "Cue Ball", "away": "Aces"},
        {"date": "22-10-2025", "home": "Dishers", "away": "Breakers", "division": "D1"},
    ],
    "players": {
        "Amy": {"r": 600, "w": 0.6, "p": 20},
        "Ben": {"r": 520, "w": 0.5, "p": 10},
        "Cal": {"r": 480, "w": 0.4, "p": 10},
        "Dee": {"r": 650, "w": 0.7, "p": 30},
        "Eve": {"r": 540, "w": 0.55, "p": 20},
    },
    "rosters": {
        "D1:Aces": ["Amy", "Ben", "Zed"],
        "D1:Breakers": ["Cal"],
        "D1:Cue Ball": ["Eve"],
        "D1:Dishers": ["Dee"],
    },
    "players2526": {
        "Amy": {
            "teams": [{"team": "Aces", "div": "D1", "p": 10, "w": 7, "pct": 70.0, "bdF": 2, "bdA": 1, "forf": 0}],
            "total": {"p": 10, "w": 7, "pct": 70.0},
        },
        "Ben": {
            "teams": [{"team": "Aces", "div": "D1", "p": 2, "w": 1, "pct": 50.0}],
            "total": {"p": 2, "w": 1, "pct": 50.0},
        },
        "Nia": {
            "teams": [{"team": "Aces", "div": "D1", "p": 6, "w": 3, "pct": 50.0, "forf": 1}],
            "total": {"p": 6, "w": 3, "pct": 50.0},
        },
        "Dee": {
            "teams": [
                {"team": "Dishers", "div": "D1", "p": 12, "w": 9, "pct": 75.0, "bdF": 3, "bdA": 1},
                {"team": "Eagles", "div": "D2", "p": 4, "w": 2, "pct": 50.0, "bdF": 1, "bdA": 0},
            ],
            "total": {"p": 16, "w": 11, "pct": 68.75},
        },
        "Cal": {
            "teams": [{"team": "Breakers", "div": "D1", "p": 8, "w": 3, "pct": 37.5, "bdA": 2}],
            "total": {"p": 8, "w": 3, "pct": 37.5},
        },
    },
    "frames": [
        {
            "matchId": "m1",
            "date": "01-10-2025",
            "home": "Aces",
            "away": "Breakers",
            "division": "D1",
            "frames": [
                _frame(1, "Amy", "Cal", "home", bd=True),
                _frame(2, "Ben", "Cal", "away"),
                _frame(3, "Nia", "Cal", "home"),
                _frame(4, "Amy", "Cal", "home"),
                _frame(5, "Ben", "Cal", "home"),
            ],
        },
        {
            "matchId": "m4",
            "date": "08-10-2025",
            "home": "Dishers",
            "away": "Aces",
            "division": "D1",
            "frames": [
                _frame(1, "Dee", "Amy", "away"),
                _frame(2, "Dee", "Ben", "home"),
                _frame(3, "Dee", "Nia", "home"),
                _frame(4, "Dee", "Amy", "home"),
                _frame(5, "Dee", "Ben", "home"),
            ],
        },
    ],
}


def make_match(match_id, day, home, away, frames, division="D1"):
    """
    Build a MatchFrames from (home_player, away_player, home_won) tuples.

    Frames are numbered from 1 in the order given.
    """
    return MatchFrames(
        match_id=match_id,
        date=day,
        home=home,
        away=away,
        division=division,
        frames=[
            FrameRecord(
                frame_num=i,
                home_player=hp,
                away_player=ap,
                winner=FrameWinner.HOME if home_won else FrameWinner.AWAY,
            )
            for i, (hp, ap, home_won) in enumerate(frames, 1)
        ],
    )


@pytest.fixture
def raw_league() -> dict:
    return json.loads(json.dumps(RAW_LEAGUE))


@pytest.fixture
def league(raw_league) -> DataSources:
    return process_data_sources(raw_league)


@pytest.fixture
def league_file(tmp_path, raw_league):
    path = tmp_path / "league.json"
    path.write_text(json.dumps(raw_league), encoding="utf-8")
    return path


@pytest.fixture
def season_start() -> date:
    return date(2025, 10, 1)


@pytest.fixture
def match_factory():
    return make_match


def _squad_player(team, played, won):
    entry = {"team": team, "div": "X", "p": played, "w": won}
    return {"teams": [entry], "total": {"p": played, "w": won}}


# Twelve players for "Us": P0 won 12 of 12, each next player one win fewer
RAW_SQUAD = {
    "divisions": {"X": {"name": "Division X", "teams": ["Us", "Them"]}},
    "rosters": {"X:Us": [f"P{i}" for i in range(12)]},
    "players2526": {f"P{i}": _squad_player("Us", 12, 12 - i) for i in range(12)},
}


@pytest.fixture
def raw_squad() -> dict:
    return json.loads(json.dumps(RAW_SQUAD))


@pytest.fixture
def squad_league(raw_squad) -> DataSources:
    return process_data_sources(raw_squad)


@pytest.fixture
def squad_file(tmp_path, raw_squad):
    path = tmp_path / "squad.json"
    path.write_text(json.dumps(raw_squad), encoding="utf-8")
    return path
