"""
Player Stats Resolution.

Combines the two season records a player can have into one "effective"
win percentage:

1. Current season (2025/26) for the team, if the player has 3+ frames
2. Previous season (2024/25) otherwise
3. A pessimistic prior when neither season has data

The chosen record is always Bayesian-smoothed. Team squads are a pure
function of the snapshot, so they are memoised per resolver instance
(one resolver per DataSources snapshot).
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from ..data.models import DataSources, PlayerTeamStats2526
from .ratings import UNKNOWN_PLAYER_PRIOR, bayesian_pct, prior_season_wins, unknown_player_pct

logger = logging.getLogger(__name__)

# Minimum current-season frames before the current record is trusted
MIN_CURRENT_SEASON_GAMES = 3


class RatingSource(StrEnum):
    """Which record an effective percentage came from."""

    CURRENT = "current"
    PRIOR = "prior"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class EffectivePct:
    """Effective win rate for a player."""

    pct: float       # Raw win rate (0-1)
    adj_pct: float   # Bayesian-adjusted win rate (0-1)
    weight: int      # Frames behind the estimate
    wins: int
    source: RatingSource

    @property
    def is_known(self) -> bool:
        return self.source != RatingSource.UNKNOWN


@dataclass(frozen=True)
class TeamPlayer:
    """A player in a team context: roster membership plus both season records."""

    name: str
    rating: float | None
    win_pct: float | None          # Previous season (0-1)
    played: int | None             # Previous season frames
    current: PlayerTeamStats2526 | None
    rostered: bool


@dataclass
class LeaguePlayer:
    """League-wide player summary."""

    name: str
    rating: float | None
    teams_2526: list[str]
    total_pct_2526: float | None
    total_played_2526: int | None
    adj_pct_2526: float | None


def get_player_effective_pct(player: TeamPlayer) -> EffectivePct:
    """
    Resolve a player's effective win percentage.

    Prefers the current-season record with at least 3 frames, then the
    previous-season record, then the unknown-player prior (weight 0).
    """
    cur = player.current
    if cur is not None and cur.played >= MIN_CURRENT_SEASON_GAMES:
        return EffectivePct(
            pct=cur.won / cur.played,
            adj_pct=bayesian_pct(cur.won, cur.played) / 100,
            weight=cur.played,
            wins=cur.won,
            source=RatingSource.CURRENT,
        )
    if player.win_pct is not None and player.played:
        wins = prior_season_wins(player.win_pct, player.played)
        return EffectivePct(
            pct=player.win_pct,
            adj_pct=bayesian_pct(wins, player.played) / 100,
            weight=player.played,
            wins=wins,
            source=RatingSource.PRIOR,
        )
    return EffectivePct(
        pct=UNKNOWN_PLAYER_PRIOR,
        adj_pct=unknown_player_pct() / 100,
        weight=0,
        wins=0,
        source=RatingSource.UNKNOWN,
    )


def _sort_by_effective(players: list[TeamPlayer]) -> list[TeamPlayer]:
    def key(pl: TeamPlayer) -> tuple[int, float]:
        eff = get_player_effective_pct(pl)
        return (0 if eff.is_known else 1, -eff.adj_pct)

    return sorted(players, key=key)


def get_top_n_players(players: list[TeamPlayer], n: int) -> list[TeamPlayer]:
    """Top ``n`` players with any record, by adjusted effective percentage."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    known = [pl for pl in players if get_player_effective_pct(pl).is_known]
    known.sort(key=lambda pl: get_player_effective_pct(pl).adj_pct, reverse=True)
    return known[:n]


class PlayerStatsResolver:
    """
    Snapshot-bound player lookups with memoisation.

    Create one resolver per DataSources snapshot; never share across
    snapshots.
    """

    def __init__(self, ds: DataSources):
        self.ds = ds
        self._team_players: dict[str, list[TeamPlayer]] = {}

    def build_player(self, name: str, team: str | None = None, rostered: bool = False) -> TeamPlayer:
        """
        Assemble a TeamPlayer from both seasons.

        With ``team`` the current-season entry for that team is used;
        without it, the entry with the most frames.
        """
        prev = self.ds.players.get(name)
        data = self.ds.players2526.get(name)
        current = None
        if data is not None:
            if team is not None:
                current = data.for_team(team)
            elif data.teams:
                current = max(data.teams, key=lambda t: t.played)
        return TeamPlayer(
            name=name,
            rating=prev.rating if prev else None,
            win_pct=prev.win_pct if prev else None,
            played=prev.played if prev else None,
            current=current,
            rostered=rostered,
        )

    def get_team_players(self, team: str) -> list[TeamPlayer]:
        """
        Roster players plus anyone with current-season frames for the team.

        Sorted by adjusted effective percentage, players without any record
        last.
        """
        if team in self._team_players:
            return list(self._team_players[team])

        roster = self.ds.roster(team)
        names = list(roster)
        for name, data in self.ds.players2526.items():
            if data.for_team(team) is not None and name not in names:
                names.append(name)

        players = _sort_by_effective(
            [self.build_player(n, team=team, rostered=n in roster) for n in names]
        )
        self._team_players[team] = players
        return list(players)


# =============================================================================
# Snapshot Queries
# =============================================================================


def get_team_players(team: str, ds: DataSources) -> list[TeamPlayer]:
    """Players associated with a team (see PlayerStatsResolver.get_team_players)."""
    return PlayerStatsResolver(ds).get_team_players(team)


def get_player_stats(name: str, ds: DataSources) -> dict | None:
    """Previous-season summary, or None."""
    data = ds.players.get(name)
    if data is None:
        return None
    return {"name": name, "rating": data.rating, "win_pct": data.win_pct, "played": data.played}


def get_player_stats_2526(name: str, ds: DataSources):
    """Current-season record, or None."""
    return ds.players2526.get(name)


def get_player_teams(name: str, ds: DataSources) -> list[tuple[str | None, str]]:
    """(division, team) pairs for every roster listing the player."""
    teams = []
    for team, roster in ds.rosters.items():
        if name in roster:
            division = next(
                (code for code, div in ds.divisions.items() if team in div.teams), None
            )
            teams.append((division, team))
    return teams


def get_team_players_2526(team: str, ds: DataSources) -> list[tuple[str, PlayerTeamStats2526]]:
    """Current-season entries for a team, by adjusted win percentage (best first)."""
    entries = []
    for name, data in ds.players2526.items():
        entry = data.for_team(team)
        if entry is not None:
            entries.append((name, entry))
    entries.sort(key=lambda e: bayesian_pct(e[1].won, e[1].played), reverse=True)
    return entries


def get_all_league_players(ds: DataSources) -> list[LeaguePlayer]:
    """Every player from either season, by current-season adjusted percentage."""
    names = list(ds.players)
    names.extend(n for n in ds.players2526 if n not in ds.players)

    league = []
    for name in names:
        prev = ds.players.get(name)
        cur = ds.players2526.get(name)
        league.append(
            LeaguePlayer(
                name=name,
                rating=prev.rating if prev else None,
                teams_2526=[t.team for t in cur.teams] if cur else [],
                total_pct_2526=cur.total.pct if cur else None,
                total_played_2526=cur.total.played if cur else None,
                adj_pct_2526=bayesian_pct(cur.total.won, cur.total.played) if cur else None,
            )
        )
    league.sort(key=lambda p: p.adj_pct_2526 or 0.0, reverse=True)
    return league
