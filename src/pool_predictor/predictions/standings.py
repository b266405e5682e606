"""
League table calculation.

Scoring is asymmetric: a home win earns 2 points, an away win 3, a draw 1
each and a loss nothing. Tables are ordered by points, then frame
difference, then the team's first-seen position in the division.
"""

import logging
from dataclasses import dataclass

from ..data.models import DataSources

logger = logging.getLogger(__name__)

HOME_WIN_POINTS = 2
AWAY_WIN_POINTS = 3
DRAW_POINTS = 1


@dataclass
class Standing:
    """One row of a league table."""

    team: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    frames_for: int = 0
    frames_against: int = 0
    points: int = 0

    @property
    def diff(self) -> int:
        """Frame differential."""
        return self.frames_for - self.frames_against

    def to_dict(self) -> dict:
        return {
            "team": self.team,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "frames_for": self.frames_for,
            "frames_against": self.frames_against,
            "diff": self.diff,
            "points": self.points,
        }


def match_points(home_score: int, away_score: int) -> tuple[int, int]:
    """Points earned by (home, away) for a final frame score."""
    if home_score > away_score:
        return HOME_WIN_POINTS, 0
    if home_score < away_score:
        return 0, AWAY_WIN_POINTS
    return DRAW_POINTS, DRAW_POINTS


def standings_sort_key(points: int, diff: int) -> tuple[int, int]:
    """Sort key for ``sorted`` (stable, so equal keys keep first-seen order)."""
    return (-points, -diff)


def get_division_for_team(team: str, ds: DataSources) -> str | None:
    """Division code a team plays in, or None."""
    for code, div in ds.divisions.items():
        if team in div.teams:
            return code
    return None


def calc_standings(division: str, ds: DataSources) -> list[Standing]:
    """
    Build the league table for a division.

    A result counts for the division when its home team belongs to it; both
    teams must be in the division's team list.

    Args:
        division: Division code
        ds: League snapshot

    Returns:
        Standings sorted by points, then frame difference. Empty for an
        unknown division or one without teams.
    """
    teams = ds.division_teams(division)
    if not teams:
        logger.debug(f"No teams for division {division!r}")
        return []

    table = {team: Standing(team=team) for team in teams}

    for r in ds.results:
        home = table.get(r.home)
        away = table.get(r.away)
        if home is None or away is None:
            continue

        home.played += 1
        away.played += 1
        home.frames_for += r.home_score
        home.frames_against += r.away_score
        away.frames_for += r.away_score
        away.frames_against += r.home_score

        home_pts, away_pts = match_points(r.home_score, r.away_score)
        home.points += home_pts
        away.points += away_pts

        if r.home_score > r.away_score:
            home.won += 1
            away.lost += 1
        elif r.home_score < r.away_score:
            away.won += 1
            home.lost += 1
        else:
            home.drawn += 1
            away.drawn += 1

    return sorted(table.values(), key=lambda s: standings_sort_key(s.points, s.diff))
