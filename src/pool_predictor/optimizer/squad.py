"""
Squad strength aggregation.

A squad's strength is the frames-weighted mean of its players' adjusted
effective win rates (0-1). Overrides add or remove named players to preview
a roster change; the difference is scaled onto the team-strength axis so it
can be added to a team's simulated strength.
"""

import logging

from ..data.models import DataSources, SquadOverrides
from ..predictions.players import (
    PlayerStatsResolver,
    TeamPlayer,
    get_player_effective_pct,
    get_top_n_players,
)

logger = logging.getLogger(__name__)

# Exaggerates small roster changes so they visibly move frame probabilities
SQUAD_STRENGTH_SCALING = 4.0


def _weighted_strength(players: list[TeamPlayer], top_n: int | None) -> float | None:
    pool = get_top_n_players(players, top_n) if top_n else players

    total_weight = 0
    weighted = 0.0
    for pl in pool:
        eff = get_player_effective_pct(pl)
        weighted += eff.adj_pct * eff.weight
        total_weight += eff.weight
    if total_weight == 0:
        return None
    return weighted / total_weight


def calc_squad_strength(
    team: str,
    ds: DataSources,
    top_n: int | None = None,
    resolver: PlayerStatsResolver | None = None,
) -> float | None:
    """
    Weighted mean adjusted win rate of a team's squad.

    Args:
        team: Team name
        ds: League snapshot
        top_n: Only count the N best players with a record
        resolver: Snapshot-bound resolver to reuse

    Returns:
        Strength on a 0-1 scale, or None if no player carries any weight
    """
    resolver = resolver or PlayerStatsResolver(ds)
    players = resolver.get_team_players(team)
    if not players:
        return None
    return _weighted_strength(players, top_n)


def calc_modified_squad_strength(
    team: str,
    overrides: SquadOverrides,
    ds: DataSources,
    top_n: int | None = None,
    resolver: PlayerStatsResolver | None = None,
) -> float | None:
    """
    Squad strength after applying a team's override.

    Removed players drop out of the squad; added players join with their
    previous-season record and their busiest current-season team entry.
    Without an override for ``team`` this is calc_squad_strength.
    """
    resolver = resolver or PlayerStatsResolver(ds)
    override = overrides.get(team)
    if override is None:
        return calc_squad_strength(team, ds, top_n, resolver)

    removed = set(override.removed)
    players = [pl for pl in resolver.get_team_players(team) if pl.name not in removed]
    players.extend(resolver.build_player(name) for name in override.added)
    return _weighted_strength(players, top_n)


def calc_strength_adjustments(
    division: str,
    overrides: SquadOverrides,
    top_n: int | None,
    ds: DataSources,
) -> dict[str, float]:
    """
    Team-strength deltas implied by squad overrides.

    Only teams of the division with an override get an entry, and only when
    both the original and modified squads have a defined strength.

    Returns:
        Map of team -> (modified - original) * 4.0
    """
    resolver = PlayerStatsResolver(ds)
    adjustments: dict[str, float] = {}
    for team in ds.division_teams(division):
        if team not in overrides:
            continue
        original = calc_squad_strength(team, ds, top_n, resolver)
        modified = calc_modified_squad_strength(team, overrides, ds, top_n, resolver)
        if original is None or modified is None:
            logger.debug(f"No squad strength for {team}, override ignored")
            continue
        adjustments[team] = (modified - original) * SQUAD_STRENGTH_SCALING
        logger.debug(f"{team}: squad override adjusts strength by {adjustments[team]:+.3f}")
    return adjustments
