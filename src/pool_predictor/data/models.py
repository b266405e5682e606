"""
Pydantic data models for Pool Predictor.

These models represent the read-only league snapshot the prediction engine
works from: divisions, completed results, unplayed fixtures, previous and
current season player records, and frame-by-frame match history. They also
hold the user-supplied hypotheticals (what-if results and squad overrides).

Upstream JSON keys (``home_score``, ``bdF``, ``forf`` ...) are accepted via
aliases; attribute names are snake_case.
"""

from datetime import date, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Frames per match in this league format
FRAMES_PER_MATCH = 10


def parse_date(value: str | date | datetime) -> date:
    """
    Parse a league date.

    Accepts the upstream ``DD-MM-YYYY`` format as well as ISO ``YYYY-MM-DD``.

    Raises:
        ValueError: If the string matches neither format
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    for fmt in ("%d-%m-%Y", "%Y-%m-%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {value!r}")


class _Record(BaseModel):
    """Base for immutable snapshot records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class _Dated(_Record):
    """Record carrying a match date."""

    date: date

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> date:
        """Accept DD-MM-YYYY strings."""
        return parse_date(v)


class FrameWinner(StrEnum):
    """Which side won a frame."""

    HOME = "home"
    AWAY = "away"


# =============================================================================
# League Structure
# =============================================================================


class Division(_Record):
    """A division and the teams competing in it."""

    name: str = Field(description="Display name")
    teams: list[str] = Field(default_factory=list, description="Team names in first-seen order")


class MatchResult(_Dated):
    """A completed match."""

    home: str
    away: str
    home_score: int = Field(ge=0, description="Frames won by the home team")
    away_score: int = Field(ge=0, description="Frames won by the away team")
    division: str = Field(default="", description="Division code")
    frames: int = Field(default=FRAMES_PER_MATCH, ge=0, description="Frames played")


class Fixture(_Dated):
    """An unplayed match."""

    home: str
    away: str
    division: str = Field(default="", description="Division code")


# =============================================================================
# Player Records
# =============================================================================


class PlayerStats2425(_Record):
    """Previous-season summary for a player."""

    rating: float | None = Field(default=None, alias="r", description="League rating")
    win_pct: float = Field(alias="w", ge=0, le=1, description="Win percentage (0-1)")
    played: int = Field(alias="p", ge=0, description="Frames played")


class PlayerTeamStats2526(_Record):
    """Current-season stats for one player at one team."""

    team: str
    division: str = Field(default="", alias="div")
    played: int = Field(default=0, alias="p", ge=0)
    won: int = Field(default=0, alias="w", ge=0)
    pct: float = Field(default=0.0, ge=0, le=100, description="Raw win percentage (0-100)")
    lag: int = Field(default=0, ge=0, description="Lags won")
    bd_for: int = Field(default=0, alias="bdF", ge=0, description="Break-and-dish for")
    bd_against: int = Field(default=0, alias="bdA", ge=0, description="Break-and-dish against")
    forfeits: int = Field(default=0, alias="forf", ge=0)
    cup: bool = Field(default=False, description="Cup-only appearance")

    @model_validator(mode="after")
    def check_won_le_played(self) -> "PlayerTeamStats2526":
        if self.won > self.played:
            raise ValueError(f"won ({self.won}) exceeds played ({self.played}) for {self.team}")
        return self


class SeasonTotal(_Record):
    """Season totals across all teams."""

    played: int = Field(default=0, alias="p", ge=0)
    won: int = Field(default=0, alias="w", ge=0)
    pct: float = Field(default=0.0, ge=0, le=100)

    @model_validator(mode="after")
    def check_won_le_played(self) -> "SeasonTotal":
        if self.won > self.played:
            raise ValueError(f"won ({self.won}) exceeds played ({self.played})")
        return self


class PlayerData2526(_Record):
    """Current-season record for a player, possibly across several teams."""

    teams: list[PlayerTeamStats2526] = Field(default_factory=list)
    total: SeasonTotal = Field(default_factory=SeasonTotal)

    def for_team(self, team: str) -> PlayerTeamStats2526 | None:
        """Entry for a given team, if the player appeared for it."""
        return next((t for t in self.teams if t.team == team), None)


# =============================================================================
# Frame-by-frame History
# =============================================================================


class FrameRecord(_Record):
    """A single frame inside a match."""

    frame_num: int = Field(alias="frameNum", ge=1, description="1-based frame number")
    home_player: str = Field(alias="homePlayer")
    away_player: str = Field(alias="awayPlayer")
    winner: FrameWinner
    break_dish: bool = Field(default=False, alias="breakDish")
    forfeit: bool = Field(default=False)

    @property
    def set_number(self) -> int:
        """Set 1 is frames 1-5, Set 2 is frames 6-10."""
        return 1 if self.frame_num <= FRAMES_PER_MATCH // 2 else 2


class MatchFrames(_Dated):
    """Frame-level detail for one completed match."""

    match_id: str = Field(alias="matchId")
    home: str
    away: str
    division: str = Field(default="")
    frames: list[FrameRecord] = Field(default_factory=list)

    def involves(self, team: str) -> bool:
        return self.home == team or self.away == team


# =============================================================================
# Snapshot
# =============================================================================


class DataSources(_Record):
    """
    Immutable league snapshot passed to every engine entry point.

    Rosters are keyed by team name and hold the previous-season squad list.
    ``frames`` is optional; lineup and analytics operations take frames
    explicitly but a snapshot may carry them for convenience.
    """

    divisions: dict[str, Division] = Field(default_factory=dict)
    results: list[MatchResult] = Field(default_factory=list)
    fixtures: list[Fixture] = Field(default_factory=list)
    players: dict[str, PlayerStats2425] = Field(default_factory=dict)
    rosters: dict[str, list[str]] = Field(default_factory=dict)
    players2526: dict[str, PlayerData2526] = Field(default_factory=dict)
    frames: list[MatchFrames] = Field(default_factory=list)

    def division_teams(self, division: str) -> list[str]:
        """Teams of a division, empty for an unknown code."""
        div = self.divisions.get(division)
        return list(div.teams) if div else []

    def roster(self, team: str) -> list[str]:
        return list(self.rosters.get(team, []))


# =============================================================================
# User Hypotheticals
# =============================================================================


class WhatIfResult(_Record):
    """A user-specified result locked into season simulation."""

    home: str
    away: str
    home_score: int = Field(alias="homeScore", ge=0, le=FRAMES_PER_MATCH)
    away_score: int = Field(alias="awayScore", ge=0, le=FRAMES_PER_MATCH)

    @property
    def key(self) -> tuple[str, str]:
        return (self.home, self.away)


class SquadOverride(_Record):
    """Hypothetical roster change for one team."""

    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)


SquadOverrides = dict[str, SquadOverride]


class PlayerAvailability(_Record):
    """Whether a squad member can play in an upcoming match."""

    name: str = Field(alias="playerName")
    available: bool = True


class LockedPosition(_Record):
    """A player pinned to one slot of a lineup."""

    player: str = Field(alias="playerName")
    set_number: int = Field(alias="set", ge=1, le=2)
    position: int = Field(ge=1, le=FRAMES_PER_MATCH // 2, description="1-based slot within the set")
