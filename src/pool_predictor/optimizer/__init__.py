"""
Lineup Optimization.

Squad strength under hypothetical roster changes, opponent lineup
prediction, scored Set 1 / Set 2 lineup suggestions and full lineup
optimisation with availability and locked positions.
"""

from .insights import (
    Insight,
    InsightEntry,
    InsightKind,
    format_insight,
    format_insights,
)
from .lineup import (
    AppearanceCategory,
    LineupScore,
    LineupSuggestion,
    PlayerAppearance,
    PredictedLineup,
    calc_appearance_rates,
    predict_lineup,
    score_players,
    suggest_lineup,
)
from .optimize import (
    LineupAlternative,
    LineupWinProbability,
    OptimizedLineup,
    calc_lineup_win_probability,
    filter_available_players,
    generate_alternative_lineups,
    optimize_lineup_with_locks,
)
from .squad import (
    SQUAD_STRENGTH_SCALING,
    calc_modified_squad_strength,
    calc_squad_strength,
    calc_strength_adjustments,
)

__all__ = [
    # Squad strength
    "SQUAD_STRENGTH_SCALING",
    "calc_squad_strength",
    "calc_modified_squad_strength",
    "calc_strength_adjustments",
    # Lineups
    "AppearanceCategory",
    "LineupScore",
    "LineupSuggestion",
    "PlayerAppearance",
    "PredictedLineup",
    "calc_appearance_rates",
    "predict_lineup",
    "score_players",
    "suggest_lineup",
    # Full lineup optimisation
    "LineupAlternative",
    "LineupWinProbability",
    "OptimizedLineup",
    "calc_lineup_win_probability",
    "filter_available_players",
    "generate_alternative_lineups",
    "optimize_lineup_with_locks",
    # Insights
    "Insight",
    "InsightEntry",
    "InsightKind",
    "format_insight",
    "format_insights",
]
