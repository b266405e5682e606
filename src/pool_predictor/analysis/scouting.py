"""
Opponent scouting report.

Pulls the team-level analytics together: recent results, venue split, set
bias, break-and-dish profile, likely lineup and the strongest and weakest
current-season players.
"""

from dataclasses import dataclass, field
from typing import Literal

from ..data.models import DataSources, MatchFrames
from ..optimizer.lineup import PredictedLineup, predict_lineup
from ..predictions.players import get_team_players
from ..predictions.ratings import bayesian_pct
from ..predictions.standings import get_division_for_team
from .break_dish import BDStats, calc_bd_stats
from .splits import SetPerformance, TeamHomeAwaySplit, calc_set_performance, calc_team_form, calc_team_home_away_split

NAMED_PLAYERS = 3


@dataclass
class ScoutedPlayer:
    name: str
    pct: float      # Raw current-season win % (0-100)
    adj_pct: float  # Bayesian-adjusted (0-100)
    played: int


@dataclass
class ScoutingReport:
    opponent: str
    division: str | None
    team_form: list[Literal["W", "D", "L"]]
    home_away: TeamHomeAwaySplit
    set_performance: SetPerformance | None
    bd_stats: BDStats
    predicted_lineup: PredictedLineup
    strongest_players: list[ScoutedPlayer] = field(default_factory=list)
    weakest_players: list[ScoutedPlayer] = field(default_factory=list)
    forfeit_rate: float = 0.0


def generate_scouting_report(
    team: str,
    ds: DataSources,
    frames: list[MatchFrames] | None = None,
) -> ScoutingReport:
    """
    Build a scouting report on a team.

    Args:
        team: Team to scout
        ds: League snapshot
        frames: Frame history (defaults to the snapshot's)

    Returns:
        ScoutingReport; sections without data are empty or None
    """
    frames = ds.frames if frames is None else frames
    division = get_division_for_team(team, ds)

    players = [
        pl for pl in get_team_players(team, ds)
        if pl.current is not None and pl.current.played > 0
    ]
    ranked = sorted(
        (
            ScoutedPlayer(
                name=pl.name,
                pct=pl.current.pct,
                adj_pct=bayesian_pct(pl.current.won, pl.current.played),
                played=pl.current.played,
            )
            for pl in players
        ),
        key=lambda p: p.adj_pct,
        reverse=True,
    )

    games = sum(pl.current.played for pl in players)
    forfeits = sum(pl.current.forfeits for pl in players)

    return ScoutingReport(
        opponent=team,
        division=division,
        team_form=calc_team_form(team, ds.results),
        home_away=calc_team_home_away_split(team, ds.results),
        set_performance=calc_set_performance(team, frames),
        bd_stats=calc_bd_stats(ds.players2526, team=team, division=division),
        predicted_lineup=predict_lineup(team, frames),
        strongest_players=ranked[:NAMED_PLAYERS],
        weakest_players=ranked[-NAMED_PLAYERS:][::-1],
        forfeit_rate=forfeits / games if games else 0.0,
    )
