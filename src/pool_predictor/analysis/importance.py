"""
Fixture Importance.

Ranks a team's remaining fixtures by how much their result moves the team's
chance of a top-2 finish. Each fixture is locked in as a 7-3 win and as a
3-7 loss on top of any existing what-ifs, and the full season simulation
is run for both.

Both runs of a fixture share one child seed (common random numbers), so
the swing reflects the fixture rather than sampling noise. This is the
most expensive analytics call: two season simulations per fixture.
"""

import logging
from dataclasses import dataclass
from datetime import date

import numpy as np

from ..data.models import DataSources, SquadOverrides, WhatIfResult
from ..predictions.fixtures import get_remaining_fixtures
from ..predictions.simulation import DEFAULT_SEASON_ITERATIONS, make_rng, run_season_simulation

logger = logging.getLogger(__name__)

WIN_SCORE = (7, 3)


@dataclass
class FixtureImportance:
    home: str
    away: str
    date: date
    importance: float  # |p_top2_if_win - p_top2_if_loss|, percentage points
    p_top2_if_win: float
    p_top2_if_loss: float


def _locked(home: str, away: str, team_is_home: bool, team_wins: bool) -> WhatIfResult:
    team_score, opp_score = WIN_SCORE if team_wins else WIN_SCORE[::-1]
    if team_is_home:
        return WhatIfResult(home=home, away=away, home_score=team_score, away_score=opp_score)
    return WhatIfResult(home=home, away=away, home_score=opp_score, away_score=team_score)


def calc_fixture_importance(
    division: str,
    team: str,
    squad_overrides: SquadOverrides | None,
    squad_top_n: int | None,
    what_if_results: list[WhatIfResult] | None,
    ds: DataSources,
    iterations: int = DEFAULT_SEASON_ITERATIONS,
    rng: np.random.Generator | None = None,
) -> list[FixtureImportance]:
    """
    Importance of each of a team's remaining, not-yet-locked fixtures.

    Args:
        division: Division code
        team: Team to evaluate
        squad_overrides: Passed through to the season simulation
        squad_top_n: Passed through to the season simulation
        what_if_results: Existing locked results (their fixtures are skipped)
        ds: League snapshot
        iterations: Season replays per scenario
        rng: Random generator supplying one child seed per fixture

    Returns:
        Fixtures sorted by importance (highest first)
    """
    rng = rng or make_rng()
    what_ifs = list(what_if_results or [])
    locked = {wi.key for wi in what_ifs}

    fixtures = [
        f for f in get_remaining_fixtures(division, ds)
        if team in (f.home, f.away) and (f.home, f.away) not in locked
    ]
    logger.info(f"Fixture importance for {team}: {len(fixtures)} fixtures x 2 simulations")

    results = []
    for fix in fixtures:
        is_home = fix.home == team
        seed = int(rng.integers(2**63))

        outcomes = {}
        for team_wins in (True, False):
            sim = run_season_simulation(
                division,
                squad_overrides,
                squad_top_n,
                what_ifs + [_locked(fix.home, fix.away, is_home, team_wins)],
                ds,
                iterations=iterations,
                rng=make_rng(seed),
            )
            outcomes[team_wins] = next((p for p in sim if p.team == team), None)

        if outcomes[True] is None or outcomes[False] is None:
            continue
        p_win, p_loss = outcomes[True].p_top2, outcomes[False].p_top2
        results.append(
            FixtureImportance(
                home=fix.home,
                away=fix.away,
                date=fix.date,
                importance=abs(p_win - p_loss),
                p_top2_if_win=p_win,
                p_top2_if_loss=p_loss,
            )
        )
        logger.debug(f"{fix.home} v {fix.away}: top-2 {p_loss:.1f}% -> {p_win:.1f}%")

    results.sort(key=lambda r: r.importance, reverse=True)
    return results
