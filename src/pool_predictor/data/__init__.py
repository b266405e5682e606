"""
Data Models Module.

Contains Pydantic models for league entities, snapshot loading and
point-in-time snapshot reconstruction.
"""

from .models import (
    FRAMES_PER_MATCH,
    DataSources,
    Division,
    Fixture,
    FrameRecord,
    FrameWinner,
    LockedPosition,
    MatchFrames,
    MatchResult,
    PlayerAvailability,
    PlayerData2526,
    PlayerStats2425,
    PlayerTeamStats2526,
    SeasonTotal,
    SquadOverride,
    SquadOverrides,
    WhatIfResult,
    parse_date,
)
from .processors import load_data_sources, process_data_sources, results_for_division
from .time_machine import (
    create_snapshot_as_of,
    get_available_match_dates,
    reconstruct_player_stats,
)

__all__ = [
    # Models
    "FRAMES_PER_MATCH",
    "DataSources",
    "Division",
    "Fixture",
    "FrameRecord",
    "FrameWinner",
    "LockedPosition",
    "MatchFrames",
    "MatchResult",
    "PlayerAvailability",
    "PlayerData2526",
    "PlayerStats2425",
    "PlayerTeamStats2526",
    "SeasonTotal",
    "SquadOverride",
    "SquadOverrides",
    "WhatIfResult",
    "parse_date",
    # Processors
    "load_data_sources",
    "process_data_sources",
    "results_for_division",
    # Time machine
    "create_snapshot_as_of",
    "get_available_match_dates",
    "reconstruct_player_stats",
]
