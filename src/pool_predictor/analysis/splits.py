"""
Venue, set and recent-result splits for players and teams.
"""

from dataclasses import dataclass, field
from typing import Literal

from ..data.models import FRAMES_PER_MATCH, FrameWinner, MatchFrames, MatchResult
from ..predictions.fixtures import match_outcome

TEAM_FORM_MATCHES = 5


@dataclass
class VenueRecord:
    """A player's frames at one venue."""

    played: int = 0
    won: int = 0

    @property
    def pct(self) -> float:
        return self.won / self.played * 100 if self.played else 0.0


@dataclass
class HomeAwaySplit:
    home: VenueRecord = field(default_factory=VenueRecord)
    away: VenueRecord = field(default_factory=VenueRecord)

    def venue(self, is_home: bool) -> VenueRecord:
        return self.home if is_home else self.away


@dataclass
class TeamVenueRecord:
    """A team's matches at one venue."""

    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    frames_for: int = 0
    frames_against: int = 0

    @property
    def win_pct(self) -> float:
        return self.won / self.played * 100 if self.played else 0.0


@dataclass
class TeamHomeAwaySplit:
    home: TeamVenueRecord = field(default_factory=TeamVenueRecord)
    away: TeamVenueRecord = field(default_factory=TeamVenueRecord)


@dataclass
class SetRecord:
    played: int = 0
    won: int = 0

    @property
    def pct(self) -> float:
        return self.won / self.played * 100 if self.played else 0.0


@dataclass
class SetPerformance:
    """Team frame record split by set (frames 1-5 and 6-10)."""

    set1: SetRecord
    set2: SetRecord

    @property
    def bias(self) -> float:
        """Set 1 win % minus Set 2 win %; positive means stronger early."""
        return self.set1.pct - self.set2.pct


def calc_player_home_away(player: str, frames: list[MatchFrames]) -> HomeAwaySplit:
    """A player's frame record at home and away."""
    split = HomeAwaySplit()
    for match in frames:
        for fr in match.frames:
            if fr.home_player == player:
                split.home.played += 1
                split.home.won += fr.winner == FrameWinner.HOME
            elif fr.away_player == player:
                split.away.played += 1
                split.away.won += fr.winner == FrameWinner.AWAY
    return split


def calc_team_home_away_split(team: str, results: list[MatchResult]) -> TeamHomeAwaySplit:
    """A team's match record at home and away."""
    split = TeamHomeAwaySplit()
    for r in results:
        if team not in (r.home, r.away):
            continue
        is_home = r.home == team
        rec = split.home if is_home else split.away
        team_score = r.home_score if is_home else r.away_score
        opp_score = r.away_score if is_home else r.home_score

        rec.played += 1
        rec.frames_for += team_score
        rec.frames_against += opp_score
        match match_outcome(team_score, opp_score):
            case "W":
                rec.won += 1
            case "D":
                rec.drawn += 1
            case "L":
                rec.lost += 1
    return split


def calc_set_performance(team: str, frames: list[MatchFrames]) -> SetPerformance | None:
    """
    A team's frame win rate in each set.

    Returns:
        SetPerformance, or None if the team has no frames on record
    """
    set1, set2 = SetRecord(), SetRecord()
    for match in frames:
        if not match.involves(team):
            continue
        is_home = match.home == team
        for fr in match.frames:
            rec = set1 if fr.frame_num <= FRAMES_PER_MATCH // 2 else set2
            rec.played += 1
            rec.won += (fr.winner == FrameWinner.HOME) == is_home

    if set1.played == 0 and set2.played == 0:
        return None
    return SetPerformance(set1=set1, set2=set2)


def calc_team_form(
    team: str,
    results: list[MatchResult],
    last_n: int = TEAM_FORM_MATCHES,
) -> list[Literal["W", "D", "L"]]:
    """Outcomes of a team's most recent matches, most recent first."""
    played = sorted(
        (r for r in results if team in (r.home, r.away)),
        key=lambda r: r.date,
        reverse=True,
    )
    form = []
    for r in played[:last_n]:
        if r.home == team:
            form.append(match_outcome(r.home_score, r.away_score))
        else:
            form.append(match_outcome(r.away_score, r.home_score))
    return form
