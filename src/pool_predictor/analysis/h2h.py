"""
Head-to-head records between players.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from ..data.models import FrameWinner, MatchFrames

# Confidence reaches 1 at this many meetings
H2H_CONFIDENCE_GAMES = 10
RECENT_MEETINGS = 5


class Advantage(StrEnum):
    """Matchup advantage for player A, by A's win rate."""

    STRONG = "strong"              # >= 70%
    MODERATE = "moderate"          # >= 60%
    EVEN = "even"                  # >= 40%
    DISADVANTAGE = "disadvantage"  # < 40%


@dataclass
class H2HMeeting:
    date: date
    winner: str


@dataclass
class H2HRecord:
    """All frames between two players, from A's side."""

    player_a: str
    player_b: str
    wins: int = 0
    losses: int = 0
    details: list[H2HMeeting] = field(default_factory=list)  # Most recent first

    @property
    def total(self) -> int:
        return self.wins + self.losses

    @property
    def net(self) -> int:
        return self.wins - self.losses


@dataclass
class H2HAnalysis:
    record: H2HRecord
    win_pct: float  # A's win rate (0-100)
    advantage: Advantage
    confidence: float  # 0-1, from sample size
    recent_form: list[tuple[date, bool]] = field(default_factory=list)  # (date, A won)


def get_h2h_record(player_a: str, player_b: str, frames: list[MatchFrames]) -> H2HRecord:
    """Raw record between two players (exact names, either side of the table)."""
    record = H2HRecord(player_a=player_a, player_b=player_b)
    for match in frames:
        for fr in match.frames:
            if fr.home_player == player_a and fr.away_player == player_b:
                a_won = fr.winner == FrameWinner.HOME
            elif fr.home_player == player_b and fr.away_player == player_a:
                a_won = fr.winner == FrameWinner.AWAY
            else:
                continue
            if a_won:
                record.wins += 1
            else:
                record.losses += 1
            record.details.append(H2HMeeting(date=match.date, winner=player_a if a_won else player_b))
    record.details.sort(key=lambda m: m.date, reverse=True)
    return record


def classify_advantage(win_pct: float) -> Advantage:
    if win_pct >= 70:
        return Advantage.STRONG
    if win_pct >= 60:
        return Advantage.MODERATE
    if win_pct >= 40:
        return Advantage.EVEN
    return Advantage.DISADVANTAGE


def analyze_h2h(player_a: str, player_b: str, frames: list[MatchFrames]) -> H2HAnalysis | None:
    """
    Analyze the matchup between two players.

    Returns:
        H2HAnalysis from A's point of view, or None if they have never met
    """
    record = get_h2h_record(player_a, player_b, frames)
    if record.total == 0:
        return None

    win_pct = record.wins / record.total * 100
    return H2HAnalysis(
        record=record,
        win_pct=win_pct,
        advantage=classify_advantage(win_pct),
        confidence=min(1.0, record.total / H2H_CONFIDENCE_GAMES),
        recent_form=[(m.date, m.winner == player_a) for m in record.details[:RECENT_MEETINGS]],
    )


def _team_players(team: str, frames: list[MatchFrames]) -> list[str]:
    names: list[str] = []
    for match in frames:
        if not match.involves(team):
            continue
        for fr in match.frames:
            name = fr.home_player if match.home == team else fr.away_player
            if name not in names:
                names.append(name)
    return names


def get_squad_h2h(
    team_a: str,
    team_b: str,
    frames: list[MatchFrames],
    rosters: dict[str, list[str]],
) -> list[H2HRecord]:
    """
    Records for every pairing of players from two squads that has met.

    A squad is everyone who has played a frame for the team plus its roster.

    Returns:
        Records sorted by number of meetings (most first)
    """
    squad_a = _team_players(team_a, frames)
    squad_a.extend(n for n in rosters.get(team_a, []) if n not in squad_a)
    squad_b = _team_players(team_b, frames)
    squad_b.extend(n for n in rosters.get(team_b, []) if n not in squad_b)

    records = []
    for a in squad_a:
        for b in squad_b:
            if a == b:
                continue
            rec = get_h2h_record(a, b, frames)
            if rec.total > 0:
                records.append(rec)
    records.sort(key=lambda r: r.total, reverse=True)
    return records
