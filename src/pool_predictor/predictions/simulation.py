"""
Monte Carlo Simulation for match and season outcomes.

Everything is built on one primitive: a match is 10 independent frames, each
won by the home side when a uniform [0, 1) draw falls below the frame-win
probability. From that:

- Single-match prediction: replay one fixture 5,000 times and report
  win/draw/loss rates, expected frames and the most frequent scorelines
- Season simulation: replay the rest of a division's season 1,000 times from
  the current table, with user what-if results locked in, and report each
  team's mean final points and title / top-2 / bottom-2 frequencies

Randomness comes from an explicit ``numpy.random.Generator`` so any run can
be reproduced from its seed. Draws are vectorised across replays.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from ..config import SimulationSettings, get_settings
from ..data.models import FRAMES_PER_MATCH, DataSources, Fixture, SquadOverrides, WhatIfResult
from .fixtures import get_remaining_fixtures
from .matchup import predict_frame
from .standings import (
    AWAY_WIN_POINTS,
    DRAW_POINTS,
    HOME_WIN_POINTS,
    Standing,
    calc_standings,
    get_division_for_team,
    match_points,
)
from .strength import calc_team_strength

logger = logging.getLogger(__name__)

DEFAULT_MATCH_ITERATIONS = 5000
DEFAULT_SEASON_ITERATIONS = 1000
TOP_SCORELINES = 5


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class ScoreFrequency:
    """How often an exact scoreline came up."""

    home_frames: int
    away_frames: int
    pct: float  # 0-100

    @property
    def score(self) -> str:
        return f"{self.home_frames}-{self.away_frames}"


@dataclass
class MatchPrediction:
    """Outcome distribution for a single fixture."""

    p_home_win: float   # 0-100
    p_draw: float       # 0-100
    p_away_win: float   # 0-100
    expected_home: float
    expected_away: float
    top_scores: list[ScoreFrequency] = field(default_factory=list)
    iterations: int = 0

    def to_dict(self) -> dict:
        """Display form: percentages and frame counts as one-decimal strings."""
        return {
            "pHomeWin": f"{self.p_home_win:.1f}",
            "pDraw": f"{self.p_draw:.1f}",
            "pAwayWin": f"{self.p_away_win:.1f}",
            "expectedHome": f"{self.expected_home:.1f}",
            "expectedAway": f"{self.expected_away:.1f}",
            "topScores": [{"score": s.score, "pct": f"{s.pct:.1f}"} for s in self.top_scores],
        }


@dataclass
class SeasonProjection:
    """One team's outlook across a batch of season replays."""

    team: str
    current_pts: int
    avg_pts: float
    p_title: float  # 0-100
    p_top2: float   # 0-100
    p_bot2: float   # 0-100
    position_counts: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "team": self.team,
            "currentPts": self.current_pts,
            "avgPts": f"{self.avg_pts:.1f}",
            "pTitle": f"{self.p_title:.1f}",
            "pTop2": f"{self.p_top2:.1f}",
            "pBot2": f"{self.p_bot2:.1f}",
        }


# =============================================================================
# Primitives
# =============================================================================


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Random generator for simulations (None seeds from OS entropy)."""
    return np.random.default_rng(seed)


def _check_probability(p: float) -> None:
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Frame probability must be within [0, 1], got {p}")


def _check_iterations(iterations: int) -> None:
    if iterations < 1:
        raise ValueError(f"Iterations must be at least 1, got {iterations}")


def simulate_match(
    p: float,
    rng: np.random.Generator | None = None,
    frames: int = FRAMES_PER_MATCH,
) -> tuple[int, int]:
    """
    Simulate one match.

    Args:
        p: Probability the home side wins a frame
        rng: Random generator
        frames: Frames in the match

    Returns:
        (home_frames, away_frames), summing to ``frames``
    """
    _check_probability(p)
    rng = rng or make_rng()
    home = int(np.count_nonzero(rng.random(frames) < p))
    return home, frames - home


def run_pred_sim(
    p: float,
    iterations: int = DEFAULT_MATCH_ITERATIONS,
    rng: np.random.Generator | None = None,
) -> MatchPrediction:
    """
    Predict a single fixture by repeated match simulation.

    A draw is an equal frame split (5-5).

    Args:
        p: Probability the home side wins a frame
        iterations: Matches to simulate
        rng: Random generator

    Returns:
        MatchPrediction with percentages on a 0-100 scale
    """
    _check_probability(p)
    _check_iterations(iterations)
    rng = rng or make_rng()

    home = np.count_nonzero(rng.random((iterations, FRAMES_PER_MATCH)) < p, axis=1)
    away = FRAMES_PER_MATCH - home

    counts = np.bincount(home, minlength=FRAMES_PER_MATCH + 1)
    # Most frequent first; equal counts favour the home side
    order = sorted(
        (h for h in range(FRAMES_PER_MATCH + 1) if counts[h] > 0),
        key=lambda h: (-counts[h], -h),
    )
    top_scores = [
        ScoreFrequency(home_frames=h, away_frames=FRAMES_PER_MATCH - h, pct=float(counts[h] / iterations * 100))
        for h in order[:TOP_SCORELINES]
    ]

    return MatchPrediction(
        p_home_win=float(np.mean(home > away) * 100),
        p_draw=float(np.mean(home == away) * 100),
        p_away_win=float(np.mean(home < away) * 100),
        expected_home=float(np.mean(home)),
        expected_away=float(np.mean(away)),
        top_scores=top_scores,
        iterations=iterations,
    )


# =============================================================================
# Season Simulation
# =============================================================================


def simulate_season(
    teams: list[str],
    standings: dict[str, Standing],
    strengths: dict[str, float],
    fixtures: list[Fixture],
    what_if_results: list[WhatIfResult],
    iterations: int = DEFAULT_SEASON_ITERATIONS,
    rng: np.random.Generator | None = None,
) -> list[SeasonProjection]:
    """
    Replay the remainder of a season.

    Each replay starts from ``standings``, applies every what-if result
    verbatim, simulates the remaining fixtures that are not locked by a
    what-if, and ranks teams by points then frame difference (remaining ties
    keep ``teams`` order).

    Args:
        teams: Division teams in first-seen order
        standings: Current standings by team
        strengths: Team strengths (missing teams count as 0)
        fixtures: Remaining fixtures
        what_if_results: Locked-in results
        iterations: Season replays
        rng: Random generator

    Returns:
        Projections sorted by mean final points (highest first)
    """
    _check_iterations(iterations)
    rng = rng or make_rng()
    if not teams:
        return []

    index = {team: i for i, team in enumerate(teams)}
    n_teams = len(teams)

    base_pts = np.array([standings[t].points if t in standings else 0 for t in teams], dtype=np.int64)
    base_for = np.array([standings[t].frames_for if t in standings else 0 for t in teams], dtype=np.int64)
    base_against = np.array(
        [standings[t].frames_against if t in standings else 0 for t in teams], dtype=np.int64
    )

    # Locked results are identical in every replay
    locked: set[tuple[str, str]] = set()
    for wi in what_if_results:
        if wi.home not in index or wi.away not in index:
            logger.warning(f"Ignoring what-if {wi.home} v {wi.away}: team not in division")
            continue
        h, a = index[wi.home], index[wi.away]
        base_for[h] += wi.home_score
        base_against[h] += wi.away_score
        base_for[a] += wi.away_score
        base_against[a] += wi.home_score
        home_pts, away_pts = match_points(wi.home_score, wi.away_score)
        base_pts[h] += home_pts
        base_pts[a] += away_pts
        locked.add(wi.key)

    to_play = [
        f for f in fixtures
        if f.home in index and f.away in index and (f.home, f.away) not in locked
    ]
    logger.debug(f"Season simulation: {len(to_play)} fixtures to play, {len(locked)} locked")

    pts = np.tile(base_pts, (iterations, 1))
    frames_for = np.tile(base_for, (iterations, 1))
    frames_against = np.tile(base_against, (iterations, 1))

    if to_play:
        probs = np.array(
            [predict_frame(strengths.get(f.home, 0.0), strengths.get(f.away, 0.0)) for f in to_play]
        )
        draws = rng.random((iterations, len(to_play), FRAMES_PER_MATCH))
        home_frames = np.count_nonzero(draws < probs[None, :, None], axis=2)
        away_frames = FRAMES_PER_MATCH - home_frames

        home_pts = np.where(
            home_frames > away_frames, HOME_WIN_POINTS, np.where(home_frames == away_frames, DRAW_POINTS, 0)
        )
        away_pts = np.where(
            away_frames > home_frames, AWAY_WIN_POINTS, np.where(home_frames == away_frames, DRAW_POINTS, 0)
        )

        for j, fix in enumerate(to_play):
            h, a = index[fix.home], index[fix.away]
            pts[:, h] += home_pts[:, j]
            pts[:, a] += away_pts[:, j]
            frames_for[:, h] += home_frames[:, j]
            frames_against[:, h] += away_frames[:, j]
            frames_for[:, a] += away_frames[:, j]
            frames_against[:, a] += home_frames[:, j]

    diff = frames_for - frames_against
    positions = np.zeros((n_teams, n_teams), dtype=np.int64)
    tiebreak = np.arange(n_teams)
    for i in range(iterations):
        # lexsort: last key is primary
        ranked = np.lexsort((tiebreak, -diff[i], -pts[i]))
        positions[ranked, np.arange(n_teams)] += 1

    avg_pts = pts.mean(axis=0)
    projections = []
    for t, team in enumerate(teams):
        counts = positions[t]
        projections.append(
            SeasonProjection(
                team=team,
                current_pts=standings[team].points if team in standings else 0,
                avg_pts=float(avg_pts[t]),
                p_title=float(counts[0] / iterations * 100),
                p_top2=float(counts[:2].sum() / iterations * 100),
                p_bot2=float(counts[-2:].sum() / iterations * 100),
                position_counts=counts.tolist(),
            )
        )

    projections.sort(key=lambda p: p.avg_pts, reverse=True)
    return projections


def run_season_simulation(
    division: str,
    squad_overrides: SquadOverrides | None,
    squad_top_n: int | None,
    what_if_results: list[WhatIfResult] | None,
    ds: DataSources,
    iterations: int = DEFAULT_SEASON_ITERATIONS,
    rng: np.random.Generator | None = None,
) -> list[SeasonProjection]:
    """
    Simulate the rest of a division's season from a snapshot.

    Team strengths are adjusted by any squad overrides before simulating.

    Args:
        division: Division code
        squad_overrides: Hypothetical roster changes by team
        squad_top_n: Restrict squad strength to each team's top N players
        what_if_results: Results to lock in
        ds: League snapshot
        iterations: Season replays
        rng: Random generator

    Returns:
        Projections sorted by mean final points; empty for an unknown division
    """
    from ..optimizer.squad import calc_strength_adjustments

    teams = ds.division_teams(division)
    if not teams:
        logger.debug(f"No teams for division {division!r}, nothing to simulate")
        return []

    strengths = calc_team_strength(division, ds)
    if squad_overrides:
        for team, adj in calc_strength_adjustments(division, squad_overrides, squad_top_n, ds).items():
            if team in strengths:
                strengths[team] += adj

    standings = {s.team: s for s in calc_standings(division, ds)}
    fixtures = get_remaining_fixtures(division, ds)

    logger.info(
        f"Simulating {division}: {iterations} replays, {len(fixtures)} remaining fixtures, "
        f"{len(what_if_results or [])} what-ifs"
    )
    return simulate_season(
        teams,
        standings,
        strengths,
        fixtures,
        list(what_if_results or []),
        iterations=iterations,
        rng=rng,
    )


def predict_fixture(
    home: str,
    away: str,
    ds: DataSources,
    squad_overrides: SquadOverrides | None = None,
    squad_top_n: int | None = None,
    iterations: int = DEFAULT_MATCH_ITERATIONS,
    rng: np.random.Generator | None = None,
) -> MatchPrediction:
    """
    Predict a fixture between two teams of the snapshot.

    Strengths come from the home team's division; a team outside it counts
    as neutral.
    """
    from ..optimizer.squad import calc_strength_adjustments

    division = get_division_for_team(home, ds) or get_division_for_team(away, ds)
    strengths = calc_team_strength(division, ds) if division else {}
    if division and squad_overrides:
        for team, adj in calc_strength_adjustments(division, squad_overrides, squad_top_n, ds).items():
            if team in strengths:
                strengths[team] += adj

    p = predict_frame(strengths.get(home, 0.0), strengths.get(away, 0.0))
    logger.debug(f"{home} v {away}: frame probability {p:.3f}")
    return run_pred_sim(p, iterations=iterations, rng=rng)


# =============================================================================
# Simulator Object
# =============================================================================


class MonteCarloSimulator:
    """
    Seeded simulator bundling a generator with configured iteration counts.

    Every call draws from the same generator, so a simulator built with a
    fixed seed replays an identical sequence of calls identically.
    """

    def __init__(self, seed: int | None = None, settings: SimulationSettings | None = None):
        """
        Initialize the simulator.

        Args:
            seed: Random seed for reproducibility (None uses the configured seed)
            settings: Simulation settings (defaults to application settings)
        """
        self.settings = settings or get_settings().simulation
        self.seed = seed if seed is not None else self.settings.seed
        self.rng = make_rng(self.seed)

    def simulate_match(self, p: float) -> tuple[int, int]:
        return simulate_match(p, rng=self.rng)

    def predict(self, p: float) -> MatchPrediction:
        return run_pred_sim(p, iterations=self.settings.match_iterations, rng=self.rng)

    def predict_fixture(self, home: str, away: str, ds: DataSources, **kwargs) -> MatchPrediction:
        return predict_fixture(
            home, away, ds, iterations=self.settings.match_iterations, rng=self.rng, **kwargs
        )

    def simulate_season(
        self,
        division: str,
        ds: DataSources,
        squad_overrides: SquadOverrides | None = None,
        squad_top_n: int | None = None,
        what_if_results: list[WhatIfResult] | None = None,
    ) -> list[SeasonProjection]:
        return run_season_simulation(
            division,
            squad_overrides,
            squad_top_n,
            what_if_results,
            ds,
            iterations=self.settings.season_iterations,
            rng=self.rng,
        )
