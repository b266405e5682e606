"""
Player Form Analysis.

Rolling-window form from frame-by-frame history:
- Last 5 / 8 / 10 games
- Trend: hot (65%+ over the last 5) or cold (under 40%), once 5 games exist
- Momentum on [-1, 1], weighting the last five games 5, 4, 3, 2, 1
- Current win or loss streak
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from ..data.models import FrameWinner, MatchFrames

logger = logging.getLogger(__name__)

FORM_WINDOW_SMALL = 5
FORM_WINDOW_MEDIUM = 8
FORM_WINDOW_LARGE = 10
HOT_THRESHOLD = 65.0   # % over the small window
COLD_THRESHOLD = 40.0  # % over the small window
MIN_GAMES_FOR_TREND = 5

# Last-8 replaces last-5 as the headline form once it holds this many games
MIN_GAMES_FOR_LAST8 = 6


class FormTrend(StrEnum):
    HOT = "hot"
    COLD = "cold"
    STEADY = "steady"


class StreakType(StrEnum):
    WIN = "win"
    LOSS = "loss"
    NONE = "none"


@dataclass
class PlayerGame:
    """One frame from a player's point of view."""

    date: date
    match_id: str
    frame_num: int
    won: bool
    opponent: str
    is_home: bool
    break_dish: bool


@dataclass
class FormWindow:
    """Record over a trailing window."""

    played: int
    won: int

    @property
    def pct(self) -> float:
        """Win percentage (0-100), 0 for an empty window."""
        return self.won / self.played * 100 if self.played else 0.0

    @classmethod
    def from_games(cls, games: list[PlayerGame]) -> "FormWindow":
        return cls(played=len(games), won=sum(1 for g in games if g.won))


@dataclass
class Streak:
    type: StreakType
    count: int
    dates: list[date] = field(default_factory=list)


@dataclass
class FormAnalysis:
    """Form summary for a player."""

    player: str
    last5: FormWindow
    last8: FormWindow | None  # None when the player has no games
    last10: FormWindow
    season_pct: float
    trend: FormTrend
    streak: Streak
    momentum: float  # -1 to 1
    recent_games: list[PlayerGame] = field(default_factory=list)

    @property
    def has_games(self) -> bool:
        return self.last5.played > 0

    @property
    def uses_last8(self) -> bool:
        return self.last8 is not None and self.last8.played >= MIN_GAMES_FOR_LAST8

    @property
    def form_pct(self) -> float:
        """Headline form: last-8 when it holds 6+ games, else last-5."""
        return self.last8.pct if self.uses_last8 else self.last5.pct


def get_player_frame_history(player: str, frames: list[MatchFrames]) -> list[PlayerGame]:
    """
    Every frame a player has played, most recent first.

    Players are matched by exact name. Within a match, later frames come
    first.
    """
    history = []
    for match in frames:
        for fr in match.frames:
            if fr.home_player == player:
                is_home = True
            elif fr.away_player == player:
                is_home = False
            else:
                continue
            history.append(
                PlayerGame(
                    date=match.date,
                    match_id=match.match_id,
                    frame_num=fr.frame_num,
                    won=(fr.winner == FrameWinner.HOME) == is_home,
                    opponent=fr.away_player if is_home else fr.home_player,
                    is_home=is_home,
                    break_dish=fr.break_dish,
                )
            )
    history.sort(key=lambda g: (g.date, g.frame_num), reverse=True)
    return history


def calc_streak(games: list[PlayerGame]) -> Streak:
    """Run of identical results at the head of a most-recent-first list."""
    if not games:
        return Streak(type=StreakType.NONE, count=0)

    first = games[0].won
    dates = []
    for g in games:
        if g.won != first:
            break
        dates.append(g.date)
    return Streak(type=StreakType.WIN if first else StreakType.LOSS, count=len(dates), dates=dates)


def calc_momentum(games: list[PlayerGame]) -> float:
    """
    Recency-weighted form on [-1, 1].

    The last five games are weighted 5, 4, 3, 2, 1 (most recent heaviest);
    all wins gives 1, all losses -1, no games 0.
    """
    window = games[:FORM_WINDOW_SMALL]
    if not window:
        return 0.0
    weights = [FORM_WINDOW_SMALL - i for i in range(len(window))]
    weighted = sum(w for w, g in zip(weights, window) if g.won)
    return (weighted / sum(weights) - 0.5) * 2


def _classify(last5: FormWindow) -> FormTrend:
    if last5.played < MIN_GAMES_FOR_TREND:
        return FormTrend.STEADY
    if last5.pct >= HOT_THRESHOLD:
        return FormTrend.HOT
    if last5.pct < COLD_THRESHOLD:
        return FormTrend.COLD
    return FormTrend.STEADY


def calc_player_form(
    player: str,
    frames: list[MatchFrames],
    season_pct: float | None = None,
) -> FormAnalysis:
    """
    Analyze a player's recent form.

    Args:
        player: Player name (exact match)
        frames: Frame-by-frame match history
        season_pct: Season win % to report alongside; defaults to the
            player's win % across all of ``frames``

    Returns:
        FormAnalysis (all-zero windows and a steady trend with no games)
    """
    games = get_player_frame_history(player, frames)

    last5 = FormWindow.from_games(games[:FORM_WINDOW_SMALL])
    last8 = FormWindow.from_games(games[:FORM_WINDOW_MEDIUM])
    last10 = FormWindow.from_games(games[:FORM_WINDOW_LARGE])
    if season_pct is None:
        season_pct = FormWindow.from_games(games).pct

    form = FormAnalysis(
        player=player,
        last5=last5,
        last8=last8 if last8.played > 0 else None,
        last10=last10,
        season_pct=season_pct,
        trend=_classify(last5),
        streak=calc_streak(games),
        momentum=calc_momentum(games),
        recent_games=games[:FORM_WINDOW_LARGE],
    )
    logger.debug(f"{player}: form {form.trend} over {len(games)} games, momentum {form.momentum:+.2f}")
    return form
