"""
Analysis Module.

Derived reports built on the frame history and the season simulation:
- Player form and streaks
- Head-to-head records
- Break-and-dish profiles
- Venue, set and recent-result splits
- Fixture importance
- Strength of schedule

The scouting report combines these with lineup prediction; import it from
``pool_predictor.analysis.scouting``.
"""

from .break_dish import BDComparison, BDStats, calc_bd_stats, compare_bd_stats
from .form import (
    FormAnalysis,
    FormTrend,
    FormWindow,
    PlayerGame,
    Streak,
    StreakType,
    calc_player_form,
    get_player_frame_history,
)
from .h2h import (
    Advantage,
    H2HAnalysis,
    H2HRecord,
    analyze_h2h,
    get_h2h_record,
    get_squad_h2h,
)
from .importance import FixtureImportance, calc_fixture_importance
from .schedule import ScheduleStrength, calc_all_schedule_strengths, calc_schedule_strength
from .splits import (
    HomeAwaySplit,
    SetPerformance,
    TeamHomeAwaySplit,
    calc_player_home_away,
    calc_set_performance,
    calc_team_form,
    calc_team_home_away_split,
)

__all__ = [
    # Form
    "FormAnalysis",
    "FormTrend",
    "FormWindow",
    "PlayerGame",
    "Streak",
    "StreakType",
    "calc_player_form",
    "get_player_frame_history",
    # Head-to-head
    "Advantage",
    "H2HAnalysis",
    "H2HRecord",
    "analyze_h2h",
    "get_h2h_record",
    "get_squad_h2h",
    # Break and dish
    "BDComparison",
    "BDStats",
    "calc_bd_stats",
    "compare_bd_stats",
    # Splits
    "HomeAwaySplit",
    "SetPerformance",
    "TeamHomeAwaySplit",
    "calc_player_home_away",
    "calc_set_performance",
    "calc_team_form",
    "calc_team_home_away_split",
    # Fixture importance
    "FixtureImportance",
    "calc_fixture_importance",
    # Strength of schedule
    "ScheduleStrength",
    "calc_all_schedule_strengths",
    "calc_schedule_strength",
]
