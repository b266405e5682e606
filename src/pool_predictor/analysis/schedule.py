"""
Strength of schedule.

Mean current strength of the opponents a team has already faced and of
those it still has to play. Higher means a harder schedule. Opponents
outside the division have no strength on record and are skipped.
"""

import logging
from dataclasses import dataclass

from ..data.models import DataSources
from ..predictions.fixtures import get_remaining_fixtures, get_team_results
from ..predictions.strength import calc_team_strength

logger = logging.getLogger(__name__)


@dataclass
class ScheduleStrength:
    team: str
    completed: float  # Mean strength of opponents already played
    remaining: float  # Mean strength of opponents still to play
    combined: float   # Mean over both
    rank: int = 0     # 1 = hardest remaining schedule

    def to_dict(self) -> dict:
        return {
            "team": self.team,
            "completedSOS": round(self.completed, 3),
            "remainingSOS": round(self.remaining, 3),
            "combinedSOS": round(self.combined, 3),
            "rank": self.rank,
        }


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def calc_schedule_strength(
    team: str,
    division: str,
    ds: DataSources,
    strengths: dict[str, float] | None = None,
) -> ScheduleStrength:
    """
    A team's schedule strength within its division.

    Args:
        team: Team to evaluate
        division: Division whose strengths and fixtures are used
        ds: League snapshot
        strengths: Precomputed division strengths, to share across teams

    Returns:
        ScheduleStrength (all zeros when nothing is known)
    """
    if strengths is None:
        strengths = calc_team_strength(division, ds)

    played = [strengths[r.opponent] for r in get_team_results(team, ds) if r.opponent in strengths]
    upcoming = []
    for f in get_remaining_fixtures(division, ds):
        if team not in (f.home, f.away):
            continue
        opponent = f.away if f.home == team else f.home
        if opponent in strengths:
            upcoming.append(strengths[opponent])

    return ScheduleStrength(
        team=team,
        completed=_mean(played),
        remaining=_mean(upcoming),
        combined=_mean(played + upcoming),
    )


def calc_all_schedule_strengths(division: str, ds: DataSources) -> list[ScheduleStrength]:
    """Every team in a division, hardest remaining schedule first."""
    strengths = calc_team_strength(division, ds)
    schedules = [calc_schedule_strength(t, division, ds, strengths) for t in ds.division_teams(division)]
    schedules.sort(key=lambda s: s.remaining, reverse=True)
    for rank, s in enumerate(schedules, 1):
        s.rank = rank
    logger.debug(f"{division}: schedule strength for {len(schedules)} teams")
    return schedules
