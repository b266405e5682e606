"""
Fixture and result queries.

A fixture is "remaining" when it is dated after the most recent completed
result in the snapshot, which keeps point-in-time snapshots consistent
without a separate played/unplayed flag.
"""

from dataclasses import dataclass
from datetime import date
from typing import Literal

from ..data.models import DataSources, Fixture, MatchResult


@dataclass
class TeamResult:
    """A completed match from one team's point of view."""

    date: date
    home: str
    away: str
    home_score: int
    away_score: int
    division: str
    is_home: bool
    opponent: str
    team_score: int
    opp_score: int
    result: Literal["W", "D", "L"]


def get_latest_result_date(results: list[MatchResult]) -> date | None:
    """Date of the most recent completed result, or None."""
    return max((r.date for r in results), default=None)


def _is_remaining(fixture: Fixture, latest: date | None) -> bool:
    return latest is None or fixture.date > latest


def get_remaining_fixtures(division: str, ds: DataSources) -> list[Fixture]:
    """Unplayed fixtures of a division, in snapshot order."""
    latest = get_latest_result_date(ds.results)
    teams = set(ds.division_teams(division))
    return [
        f
        for f in ds.fixtures
        if (f.division == division or (not f.division and f.home in teams))
        and _is_remaining(f, latest)
    ]


def get_all_remaining_fixtures(ds: DataSources) -> list[Fixture]:
    """Unplayed fixtures across every division."""
    latest = get_latest_result_date(ds.results)
    return [f for f in ds.fixtures if _is_remaining(f, latest)]


def match_outcome(team_score: int, opp_score: int) -> Literal["W", "D", "L"]:
    """Win, draw or loss from one side's frame count."""
    if team_score > opp_score:
        return "W"
    if team_score < opp_score:
        return "L"
    return "D"


def get_team_results(team: str, ds: DataSources) -> list[TeamResult]:
    """All completed matches for a team, most recent first."""
    out = []
    for r in ds.results:
        if team not in (r.home, r.away):
            continue
        is_home = r.home == team
        team_score = r.home_score if is_home else r.away_score
        opp_score = r.away_score if is_home else r.home_score
        out.append(
            TeamResult(
                date=r.date,
                home=r.home,
                away=r.away,
                home_score=r.home_score,
                away_score=r.away_score,
                division=r.division,
                is_home=is_home,
                opponent=r.away if is_home else r.home,
                team_score=team_score,
                opp_score=opp_score,
                result=match_outcome(team_score, opp_score),
            )
        )
    out.sort(key=lambda tr: tr.date, reverse=True)
    return out
