"""
Lineup prediction and suggestion.

Predicting an opponent's lineup:
- Appearance rate over every recorded match classifies players as core
  (80%+), rotation (40-80%) or fringe
- The players used in the last few matches are the likely opponents

Suggesting our own lineup scores each eligible player (5+ games for the
team this season) on a 0-100 scale:

    score = adj_pct
          + 0.3 * (form_pct - adj_pct)         recent form
          + 5 * net H2H wins vs likely opponents
          + 0.2 * (venue_pct - adj_pct)        with 3+ frames at the venue

The best five go to Set 1, the next five to Set 2, unless the opponent is
clearly front-loaded (Set 1 win % more than 5 points above Set 2), in which
case the best five are saved for Set 2.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from ..analysis.form import FormAnalysis, calc_player_form
from ..analysis.h2h import get_h2h_record
from ..analysis.splits import calc_player_home_away, calc_set_performance
from ..data.models import MatchFrames, PlayerData2526
from ..predictions.ratings import bayesian_pct
from .insights import MAX_NAMED_PLAYERS, Insight, InsightEntry, InsightKind

logger = logging.getLogger(__name__)

CORE_RATE = 0.8
ROTATION_RATE = 0.4
RECENT_MATCHES = 3

MIN_LINEUP_GAMES = 5
SET_SIZE = 5
FORM_WEIGHT = 0.3
H2H_WEIGHT = 5.0
VENUE_WEIGHT = 0.2
MIN_VENUE_GAMES = 3
SET_BIAS_THRESHOLD = 5.0
H2H_EDGE_MIN = 2


class AppearanceCategory(StrEnum):
    CORE = "core"
    ROTATION = "rotation"
    FRINGE = "fringe"


@dataclass
class PlayerAppearance:
    name: str
    appearances: int
    total_matches: int
    rate: float
    category: AppearanceCategory


@dataclass
class PredictedLineup:
    players: list[PlayerAppearance]  # By appearance rate, highest first
    recent_players: list[str]        # Used in the most recent matches

    @property
    def likely_players(self) -> list[str]:
        """Core players first, then other recent players by appearance rate."""
        core = [p.name for p in self.players if p.category == AppearanceCategory.CORE]
        recent = set(self.recent_players)
        others = [p.name for p in self.players if p.name in recent and p.name not in core]
        return core + others


@dataclass
class LineupScore:
    name: str
    score: float
    adj_pct: float
    form_pct: float | None
    h2h_advantage: int
    venue_pct: float | None
    suggested_set: int = 1


@dataclass
class LineupSuggestion:
    set1: list[LineupScore] = field(default_factory=list)
    set2: list[LineupScore] = field(default_factory=list)
    insights: list[Insight] = field(default_factory=list)


def _categorize(rate: float) -> AppearanceCategory:
    if rate >= CORE_RATE:
        return AppearanceCategory.CORE
    if rate >= ROTATION_RATE:
        return AppearanceCategory.ROTATION
    return AppearanceCategory.FRINGE


def calc_appearance_rates(team: str, frames: list[MatchFrames]) -> list[PlayerAppearance]:
    """
    How often each player has turned out for a team.

    Returns:
        Appearances sorted by rate (highest first); empty with no matches
    """
    matches: set[str] = set()
    seen: dict[str, set[str]] = {}
    for match in frames:
        if not match.involves(team):
            continue
        matches.add(match.match_id)
        for fr in match.frames:
            name = fr.home_player if match.home == team else fr.away_player
            seen.setdefault(name, set()).add(match.match_id)

    total = len(matches)
    if total == 0:
        return []

    appearances = [
        PlayerAppearance(
            name=name,
            appearances=len(ids),
            total_matches=total,
            rate=len(ids) / total,
            category=_categorize(len(ids) / total),
        )
        for name, ids in seen.items()
    ]
    appearances.sort(key=lambda a: a.rate, reverse=True)
    return appearances


def predict_lineup(team: str, frames: list[MatchFrames], recent_n: int = RECENT_MATCHES) -> PredictedLineup:
    """Likely lineup from appearance rates and the last ``recent_n`` matches."""
    team_matches = sorted(
        (m for m in frames if m.involves(team)),
        key=lambda m: m.date,
        reverse=True,
    )
    recent: list[str] = []
    for match in team_matches[:recent_n]:
        for fr in match.frames:
            name = fr.home_player if match.home == team else fr.away_player
            if name not in recent:
                recent.append(name)

    return PredictedLineup(players=calc_appearance_rates(team, frames), recent_players=recent)


def _form_entry(name: str, form: FormAnalysis) -> InsightEntry:
    return InsightEntry(
        player=name,
        value=form.form_pct,
        reference=form.season_pct,
        label="L8" if form.uses_last8 else "L5",
    )


def _score_candidates(
    candidates: list[tuple[str, float]],
    opponent: str,
    is_home: bool,
    frames: list[MatchFrames],
) -> tuple[list[LineupScore], dict[str, FormAnalysis]]:
    likely_opponents = predict_lineup(opponent, frames).recent_players

    forms: dict[str, FormAnalysis] = {}
    scored: list[LineupScore] = []
    for name, adj_pct in candidates:
        form = calc_player_form(name, frames)
        form_pct = None
        if form.has_games:
            forms[name] = form
            form_pct = form.form_pct

        h2h = sum(get_h2h_record(name, opp, frames).net for opp in likely_opponents if opp != name)

        venue = calc_player_home_away(name, frames).venue(is_home)
        venue_pct = venue.pct if venue.played else None

        score = adj_pct
        if form_pct is not None:
            score += (form_pct - adj_pct) * FORM_WEIGHT
        score += h2h * H2H_WEIGHT
        if venue.played >= MIN_VENUE_GAMES:
            score += (venue.pct - adj_pct) * VENUE_WEIGHT

        scored.append(
            LineupScore(
                name=name,
                score=score,
                adj_pct=adj_pct,
                form_pct=form_pct,
                h2h_advantage=h2h,
                venue_pct=venue_pct,
            )
        )

    scored.sort(key=lambda s: s.score, reverse=True)
    return scored, forms


def score_players(
    candidates: list[tuple[str, float]],
    opponent: str,
    is_home: bool,
    frames: list[MatchFrames],
) -> list[LineupScore]:
    """
    Score players for a match against ``opponent``.

    Args:
        candidates: (name, adjusted win %) pairs on a 0-100 scale
        opponent: Opposing team, whose recent players drive the H2H term
        is_home: Whether we play at home
        frames: Frame-by-frame history

    Returns:
        Scores, best first
    """
    return _score_candidates(candidates, opponent, is_home, frames)[0]


def suggest_lineup(
    team: str,
    opponent: str,
    is_home: bool,
    frames: list[MatchFrames],
    players2526: dict[str, PlayerData2526],
    rosters: dict[str, list[str]],
) -> LineupSuggestion:
    """
    Suggest Set 1 and Set 2 lineups against an opponent.

    Args:
        team: Our team
        opponent: Opposing team
        is_home: Whether we play at home
        frames: Frame-by-frame history
        players2526: Current-season player records
        rosters: Rosters by team name

    Returns:
        Up to five scored players per set plus tactical insights
    """
    candidates: list[tuple[str, float]] = []
    excluded: list[str] = []
    for name, data in players2526.items():
        entry = data.for_team(team)
        if entry is None:
            continue
        if entry.played >= MIN_LINEUP_GAMES:
            candidates.append((name, bayesian_pct(entry.won, entry.played)))
        elif entry.played >= 1:
            excluded.append(name)

    scored, forms = _score_candidates(candidates, opponent, is_home, frames)

    opp_sets = calc_set_performance(opponent, frames)
    front_loaded = opp_sets is not None and opp_sets.bias > SET_BIAS_THRESHOLD

    best, next_best = scored[:SET_SIZE], scored[SET_SIZE : SET_SIZE * 2]
    if front_loaded and len(scored) >= SET_SIZE * 2:
        set1, set2 = next_best, best
    else:
        set1, set2 = best, next_best
    for s in set1:
        s.suggested_set = 1
    for s in set2:
        s.suggested_set = 2

    insights: list[Insight] = []
    hot = [s.name for s in scored if s.name in forms and forms[s.name].trend == "hot"]
    cold = [s.name for s in scored if s.name in forms and forms[s.name].trend == "cold"]
    if hot:
        insights.append(
            Insight(InsightKind.IN_FORM, [_form_entry(n, forms[n]) for n in hot[:MAX_NAMED_PLAYERS]])
        )
    if cold:
        insights.append(
            Insight(InsightKind.OUT_OF_FORM, [_form_entry(n, forms[n]) for n in cold[:MAX_NAMED_PLAYERS]])
        )
    if front_loaded:
        insights.append(Insight(InsightKind.SET_BIAS, value=opp_sets.bias))

    stars = [s for s in scored if s.h2h_advantage >= H2H_EDGE_MIN][:MAX_NAMED_PLAYERS]
    if stars:
        insights.append(
            Insight(InsightKind.H2H_EDGE, [InsightEntry(s.name, value=s.h2h_advantage) for s in stars])
        )
    if excluded:
        insights.append(Insight(InsightKind.EXCLUDED, [InsightEntry(n) for n in excluded]))

    unproven = []
    for name in rosters.get(team, []):
        entry = players2526[name].for_team(team) if name in players2526 else None
        if entry is None or entry.played == 0:
            unproven.append(name)
    if unproven:
        insights.append(Insight(InsightKind.UNPROVEN, [InsightEntry(n) for n in unproven]))

    logger.debug(
        f"Lineup {team} v {opponent}: {len(scored)} scored, {len(excluded)} excluded, "
        f"opponent front-loaded={front_loaded}"
    )
    return LineupSuggestion(set1=set1, set2=set2, insights=insights)
