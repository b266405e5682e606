"""
Bayesian rating smoothing.

Raw win percentages from a handful of frames are noisy: a player who is 3/3
is not a 100% player. Every rate the engine uses is shrunk toward a neutral
prior with a fixed pseudo-count:

    adjusted = (wins + K * prior) / (games + K) * 100

With zero games the result equals the prior; as games grow the raw rate
dominates.
"""

import math

# Neutral prior and pseudo-count
BAYESIAN_PRIOR = 0.5
BAYESIAN_K = 6

# Pessimistic prior for players with no record in either season
UNKNOWN_PLAYER_PRIOR = 0.45


def bayesian_pct(wins: int, games: int, prior: float = BAYESIAN_PRIOR) -> float:
    """
    Confidence-adjusted win percentage on a 0-100 scale.

    Args:
        wins: Frames won
        games: Frames played
        prior: Prior win rate (0-1) the estimate is shrunk toward

    Returns:
        Adjusted percentage in [0, 100]

    Raises:
        ValueError: If counts are negative, wins exceed games, or the prior
            lies outside [0, 1]
    """
    if games < 0 or wins < 0:
        raise ValueError(f"Counts must be non-negative (wins={wins}, games={games})")
    if wins > games:
        raise ValueError(f"wins ({wins}) cannot exceed games ({games})")
    if not 0.0 <= prior <= 1.0:
        raise ValueError(f"Prior must be within [0, 1], got {prior}")
    return (wins + BAYESIAN_K * prior) / (games + BAYESIAN_K) * 100


def prior_season_wins(win_pct: float, played: int) -> int:
    """
    Whole frames won implied by a stored season win rate.

    Halves round up (0.45 over 10 frames is 5 wins), capped at ``played``.
    """
    return min(played, math.floor(win_pct * played + 0.5))


def unknown_player_pct() -> float:
    """Adjusted percentage assigned to a player with no record at all."""
    return bayesian_pct(0, 0, prior=UNKNOWN_PLAYER_PRIOR)
