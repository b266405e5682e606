"""
Team strength calculation.

Strength is a real-valued scalar on the logistic model's scale, meaningful
only when comparing two teams. It blends two signals:

- Current form: per-match frame differential, ``diff / played / 10 * 2``
- Prior: games-weighted, Bayesian-smoothed previous-season win rate of the
  squad, mapped onto the same scale with ``(rate - 0.5) * 4``

The prior fades out linearly over the first 10 matches.
"""

import logging

from ..data.models import FRAMES_PER_MATCH, DataSources
from .players import PlayerStatsResolver
from .ratings import BAYESIAN_K, UNKNOWN_PLAYER_PRIOR, bayesian_pct, prior_season_wins
from .standings import calc_standings

logger = logging.getLogger(__name__)

PRIOR_BLEND_MATCHES = 10

# Maps a win rate (0-1) onto the strength scale
WIN_RATE_TO_STRENGTH = 4.0


def current_strength(diff: int, played: int) -> float:
    """Strength from the season's frame differential."""
    if played <= 0:
        return 0.0
    return (diff / played / FRAMES_PER_MATCH) * 2


def calc_prior_team_strength(
    team: str,
    ds: DataSources,
    resolver: PlayerStatsResolver | None = None,
) -> float:
    """
    Strength implied by the squad's previous-season records.

    Squad = roster plus anyone who has played for the team this season.
    Players with a previous-season record contribute their smoothed win
    rate weighted by frames played; players without one contribute the
    unknown-player prior with a weight of K. A squad with no previous-season
    records at all is neutral (0).
    """
    resolver = resolver or PlayerStatsResolver(ds)
    names = [pl.name for pl in resolver.get_team_players(team)]

    total_weight = 0.0
    weighted = 0.0
    known = 0
    for name in names:
        stats = ds.players.get(name)
        if stats is not None and stats.played > 0:
            wins = prior_season_wins(stats.win_pct, stats.played)
            weighted += bayesian_pct(wins, stats.played) / 100 * stats.played
            total_weight += stats.played
            known += 1
        else:
            weighted += UNKNOWN_PLAYER_PRIOR * BAYESIAN_K
            total_weight += BAYESIAN_K

    if known == 0 or total_weight == 0:
        return 0.0
    return (weighted / total_weight - 0.5) * WIN_RATE_TO_STRENGTH


def calc_team_strength(division: str, ds: DataSources) -> dict[str, float]:
    """
    Strength of every team in a division.

    Teams with fewer than 10 matches are a linear blend of prior and
    current strength; from 10 matches only current form counts.

    Returns:
        Map of team -> strength, empty for an unknown division
    """
    resolver = PlayerStatsResolver(ds)
    strengths: dict[str, float] = {}
    for s in calc_standings(division, ds):
        current = current_strength(s.diff, s.played)
        blend = min(1.0, s.played / PRIOR_BLEND_MATCHES)
        if blend < 1.0:
            prior = calc_prior_team_strength(s.team, ds, resolver)
            strengths[s.team] = (1 - blend) * prior + blend * current
        else:
            strengths[s.team] = current
        logger.debug(f"{division} {s.team}: strength {strengths[s.team]:+.3f} ({s.played} played)")
    return strengths
