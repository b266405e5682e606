"""
Break-and-dish statistics.

A break-and-dish (BD) is a frame won straight from the break. Rates are
per frame played; efficiency is the share of all BDs in a player's or
team's frames that went their way.
"""

from dataclasses import dataclass

from ..data.models import PlayerData2526, PlayerTeamStats2526


@dataclass
class BDStats:
    """Aggregated break-and-dish counts."""

    games: int = 0
    bd_for: int = 0
    bd_against: int = 0
    forfeits: int = 0

    @property
    def bd_for_rate(self) -> float:
        return self.bd_for / self.games if self.games else 0.0

    @property
    def bd_against_rate(self) -> float:
        return self.bd_against / self.games if self.games else 0.0

    @property
    def net(self) -> int:
        return self.bd_for - self.bd_against

    @property
    def efficiency(self) -> float | None:
        """bd_for / (bd_for + bd_against); None when there were no BDs at all."""
        total = self.bd_for + self.bd_against
        return self.bd_for / total if total else None

    @property
    def forfeit_rate(self) -> float:
        return self.forfeits / self.games if self.games else 0.0

    def add(self, entry: PlayerTeamStats2526) -> None:
        self.games += entry.played
        self.bd_for += entry.bd_for
        self.bd_against += entry.bd_against
        self.forfeits += entry.forfeits


@dataclass
class BDComparison:
    """Differences between two BDStats; positive favours the first."""

    bd_advantage: float
    efficiency_diff: float | None
    net_diff: int


def calc_bd_stats(
    players2526: dict[str, PlayerData2526],
    player: str | None = None,
    team: str | None = None,
    division: str | None = None,
) -> BDStats:
    """
    Break-and-dish stats for a player (all their teams) or a team (all its players).

    Args:
        players2526: Current-season player records
        player: Player name; takes precedence over ``team``
        team: Team name
        division: Only count entries from this division

    Returns:
        BDStats (all zero when nothing matches)

    Raises:
        ValueError: If neither a player nor a team is given
    """
    if player is None and team is None:
        raise ValueError("calc_bd_stats needs a player or a team")

    stats = BDStats()
    if player is not None:
        data = players2526.get(player)
        entries = data.teams if data else []
    else:
        entries = [e for data in players2526.values() for e in data.teams if e.team == team]

    for entry in entries:
        if division is None or entry.division == division:
            stats.add(entry)
    return stats


def compare_bd_stats(first: BDStats, second: BDStats) -> BDComparison:
    """Compare two BD profiles."""
    if first.efficiency is None or second.efficiency is None:
        efficiency_diff = None
    else:
        efficiency_diff = first.efficiency - second.efficiency
    return BDComparison(
        bd_advantage=first.bd_for_rate - second.bd_for_rate,
        efficiency_diff=efficiency_diff,
        net_diff=first.net - second.net,
    )
