"""
Full lineup optimisation for a single match.

Builds a ten-player lineup (Set 1 and Set 2) instead of just ranking
players:

1. Drop players marked unavailable
2. Pin locked players to their set and position
3. Fill the open slots best-first, Set 1 before Set 2, using the same
   per-player score as suggest_lineup

Candidates need 3+ frames this season across all teams and are rated on
their season totals.

A lineup's win probability treats the ten players as one side. Their mean
Bayesian win % is mapped onto the team-strength scale,

    strength = (mean_pct / 100 - 0.5) * 4

and played against the opponent's division strength through the frame
model and single-match simulation.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..data.models import (
    FRAMES_PER_MATCH,
    DataSources,
    LockedPosition,
    MatchFrames,
    PlayerAvailability,
    PlayerData2526,
)
from ..predictions.matchup import predict_frame
from ..predictions.players import TeamPlayer, get_team_players
from ..predictions.ratings import bayesian_pct
from ..predictions.simulation import DEFAULT_MATCH_ITERATIONS, make_rng, run_pred_sim
from ..predictions.standings import get_division_for_team
from ..predictions.strength import WIN_RATE_TO_STRENGTH, calc_team_strength
from .lineup import SET_SIZE, LineupScore, score_players

logger = logging.getLogger(__name__)

MIN_OPTIMIZER_GAMES = 3
LINEUP_SIZE = SET_SIZE * 2
DEFAULT_ALTERNATIVES = 3
MAX_SWAP_ATTEMPTS = 20


@dataclass
class LineupWinProbability:
    """Outcome chances for a lineup, from our side (0-100)."""

    p_win: float
    p_draw: float
    p_loss: float
    expected_for: float
    expected_against: float

    @property
    def confidence(self) -> float:
        """Chance of the most likely outcome."""
        return max(self.p_win, self.p_draw, self.p_loss)


@dataclass
class OptimizedLineup:
    set1: list[str]
    set2: list[str]
    win_probability: LineupWinProbability

    @property
    def players(self) -> list[str]:
        return self.set1 + self.set2


@dataclass
class LineupAlternative:
    lineup: OptimizedLineup
    rank: int
    probability_diff: float  # Optimal p_win minus this lineup's, in points


def filter_available_players(
    players: list[TeamPlayer],
    availability: list[PlayerAvailability],
) -> list[TeamPlayer]:
    """Players explicitly marked available; anyone not listed is left out."""
    available = {a.name for a in availability if a.available}
    return [p for p in players if p.name in available]


def _season_candidates(
    names: list[str],
    players2526: dict[str, PlayerData2526],
) -> list[tuple[str, float]]:
    candidates = []
    for name in names:
        data = players2526.get(name)
        if data is None or data.total.played < MIN_OPTIMIZER_GAMES:
            continue
        candidates.append((name, bayesian_pct(data.total.won, data.total.played)))
    return candidates


def _scored_squad(
    team: str,
    opponent: str,
    is_home: bool,
    ds: DataSources,
    availability: list[PlayerAvailability] | None,
    frames: list[MatchFrames] | None,
) -> tuple[list[TeamPlayer], list[LineupScore]]:
    squad = get_team_players(team, ds)
    if availability is not None:
        squad = filter_available_players(squad, availability)
    frames = ds.frames if frames is None else frames
    candidates = _season_candidates([p.name for p in squad], ds.players2526)
    return squad, score_players(candidates, opponent, is_home, frames)


def calc_lineup_win_probability(
    set1: list[str],
    set2: list[str],
    team: str,
    opponent: str,
    is_home: bool,
    ds: DataSources,
    iterations: int = DEFAULT_MATCH_ITERATIONS,
    rng: np.random.Generator | None = None,
) -> LineupWinProbability:
    """
    Chance that a specific lineup beats the opponent.

    Players without current-season frames are ignored. With fewer than five
    rated players the team's own division strength is used instead. A
    team outside every division is given no chance at all.

    Args:
        set1: Set 1 players
        set2: Set 2 players
        team: Our team
        opponent: Opposing team
        is_home: Whether we play at home
        ds: League snapshot
        iterations: Matches to simulate
        rng: Random generator

    Returns:
        LineupWinProbability from our side
    """
    pcts = []
    for name in set1 + set2:
        data = ds.players2526.get(name)
        if data is not None and data.total.played > 0:
            pcts.append(bayesian_pct(data.total.won, data.total.played))

    if len(pcts) < SET_SIZE:
        division = get_division_for_team(team, ds)
        if division is None:
            logger.debug(f"{team}: no rated lineup and no division, no chance assigned")
            return LineupWinProbability(
                p_win=0.0,
                p_draw=0.0,
                p_loss=100.0,
                expected_for=0.0,
                expected_against=float(FRAMES_PER_MATCH),
            )
        strengths = calc_team_strength(division, ds)
        ours = strengths.get(team, 0.0)
        theirs = strengths.get(opponent, 0.0)
    else:
        ours = (sum(pcts) / len(pcts) / 100 - 0.5) * WIN_RATE_TO_STRENGTH
        opp_division = get_division_for_team(opponent, ds)
        theirs = calc_team_strength(opp_division, ds).get(opponent, 0.0) if opp_division else 0.0

    p = predict_frame(ours, theirs) if is_home else predict_frame(theirs, ours)
    pred = run_pred_sim(p, iterations=iterations, rng=rng)
    if is_home:
        return LineupWinProbability(
            p_win=pred.p_home_win,
            p_draw=pred.p_draw,
            p_loss=pred.p_away_win,
            expected_for=pred.expected_home,
            expected_against=pred.expected_away,
        )
    return LineupWinProbability(
        p_win=pred.p_away_win,
        p_draw=pred.p_draw,
        p_loss=pred.p_home_win,
        expected_for=pred.expected_away,
        expected_against=pred.expected_home,
    )


def optimize_lineup_with_locks(
    team: str,
    opponent: str,
    is_home: bool,
    ds: DataSources,
    availability: list[PlayerAvailability] | None = None,
    locks: list[LockedPosition] | None = None,
    frames: list[MatchFrames] | None = None,
    iterations: int = DEFAULT_MATCH_ITERATIONS,
    rng: np.random.Generator | None = None,
) -> OptimizedLineup | None:
    """
    Best full lineup given who is available and who is locked in.

    Args:
        team: Our team
        opponent: Opposing team
        is_home: Whether we play at home
        ds: League snapshot
        availability: Availability list; None treats the whole squad as available
        locks: Players pinned to a set and position
        frames: Frame history for scoring (defaults to the snapshot's)
        iterations: Matches simulated for the win probability
        rng: Random generator

    Returns:
        OptimizedLineup, or None with fewer than ten available players or
        not enough rated players to fill every slot
    """
    squad, scored = _scored_squad(team, opponent, is_home, ds, availability, frames)
    if len(squad) < LINEUP_SIZE:
        logger.info(f"{team}: only {len(squad)} players available, need {LINEUP_SIZE}")
        return None

    slots: dict[int, list[str | None]] = {1: [None] * SET_SIZE, 2: [None] * SET_SIZE}
    locked: set[str] = set()
    for lock in locks or []:
        slots[lock.set_number][lock.position - 1] = lock.player
        locked.add(lock.player)

    pool = iter(s.name for s in scored if s.name not in locked)
    for set_number in (1, 2):
        for i, name in enumerate(slots[set_number]):
            if name is None:
                slots[set_number][i] = next(pool, None)

    if any(name is None for names in slots.values() for name in names):
        logger.info(f"{team}: {len(scored)} rated players cannot fill a lineup")
        return None

    set1, set2 = list(slots[1]), list(slots[2])
    probability = calc_lineup_win_probability(
        set1, set2, team, opponent, is_home, ds, iterations=iterations, rng=rng
    )
    logger.debug(f"Optimised {team} v {opponent}: win {probability.p_win:.1f}%")
    return OptimizedLineup(set1=set1, set2=set2, win_probability=probability)


def generate_alternative_lineups(
    optimal: OptimizedLineup,
    team: str,
    opponent: str,
    is_home: bool,
    ds: DataSources,
    availability: list[PlayerAvailability] | None = None,
    locks: list[LockedPosition] | None = None,
    frames: list[MatchFrames] | None = None,
    n: int = DEFAULT_ALTERNATIVES,
    iterations: int = DEFAULT_MATCH_ITERATIONS,
    rng: np.random.Generator | None = None,
) -> list[LineupAlternative]:
    """
    Near-optimal lineups, each one bench player swapped for one starter.

    Bench and starters are cycled in score order; locked players are never
    swapped and duplicate lineups are skipped. At most ``3 * n`` swaps
    (capped at 20) are tried.

    Returns:
        Up to ``n`` alternatives by win probability, best first
    """
    rng = rng or make_rng()
    locked = {lock.player for lock in locks or []}
    in_lineup = set(optimal.players)
    _, scored = _scored_squad(team, opponent, is_home, ds, availability, frames)

    bench = [s.name for s in scored if s.name not in in_lineup and s.name not in locked]
    starters = [s.name for s in scored if s.name in in_lineup and s.name not in locked]
    if not bench or not starters:
        return []

    seen = {frozenset(optimal.players)}
    candidates: list[OptimizedLineup] = []
    for attempt in range(1, min(n * 3, MAX_SWAP_ATTEMPTS) + 1):
        if len(candidates) >= n:
            break
        incoming = bench[attempt % len(bench)]
        outgoing = starters[attempt % len(starters)]

        set1, set2 = list(optimal.set1), list(optimal.set2)
        target = set1 if outgoing in set1 else set2
        target[target.index(outgoing)] = incoming

        key = frozenset(set1 + set2)
        if key in seen:
            continue
        seen.add(key)
        probability = calc_lineup_win_probability(
            set1, set2, team, opponent, is_home, ds, iterations=iterations, rng=rng
        )
        candidates.append(OptimizedLineup(set1=set1, set2=set2, win_probability=probability))

    candidates.sort(key=lambda c: c.win_probability.p_win, reverse=True)
    best = optimal.win_probability.p_win
    return [
        LineupAlternative(lineup=c, rank=rank, probability_diff=best - c.win_probability.p_win)
        for rank, c in enumerate(candidates[:n], 1)
    ]
