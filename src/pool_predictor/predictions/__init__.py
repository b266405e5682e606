"""
Predictions Module for Pool Predictor.

The rating and simulation core:
- Bayesian smoothing and effective player win rates
- League tables with asymmetric home/away scoring
- Team strength blending prior-season squads with current form
- Logistic frame model with home advantage
- Monte Carlo match and season simulation
"""

from .fixtures import (
    TeamResult,
    get_all_remaining_fixtures,
    get_latest_result_date,
    get_remaining_fixtures,
    get_team_results,
    match_outcome,
)
from .matchup import HOME_ADV, predict_frame
from .players import (
    EffectivePct,
    LeaguePlayer,
    PlayerStatsResolver,
    RatingSource,
    TeamPlayer,
    get_all_league_players,
    get_player_effective_pct,
    get_player_stats,
    get_player_stats_2526,
    get_player_teams,
    get_team_players,
    get_team_players_2526,
    get_top_n_players,
)
from .ratings import (
    BAYESIAN_K,
    BAYESIAN_PRIOR,
    UNKNOWN_PLAYER_PRIOR,
    bayesian_pct,
    prior_season_wins,
)
from .simulation import (
    MatchPrediction,
    MonteCarloSimulator,
    ScoreFrequency,
    SeasonProjection,
    make_rng,
    predict_fixture,
    run_pred_sim,
    run_season_simulation,
    simulate_match,
    simulate_season,
)
from .standings import (
    AWAY_WIN_POINTS,
    DRAW_POINTS,
    HOME_WIN_POINTS,
    Standing,
    calc_standings,
    get_division_for_team,
)
from .strength import PRIOR_BLEND_MATCHES, calc_prior_team_strength, calc_team_strength

__all__ = [
    # Ratings
    "BAYESIAN_K",
    "BAYESIAN_PRIOR",
    "UNKNOWN_PLAYER_PRIOR",
    "bayesian_pct",
    "prior_season_wins",
    # Players
    "EffectivePct",
    "LeaguePlayer",
    "PlayerStatsResolver",
    "RatingSource",
    "TeamPlayer",
    "get_all_league_players",
    "get_player_effective_pct",
    "get_player_stats",
    "get_player_stats_2526",
    "get_player_teams",
    "get_team_players",
    "get_team_players_2526",
    "get_top_n_players",
    # Standings
    "AWAY_WIN_POINTS",
    "DRAW_POINTS",
    "HOME_WIN_POINTS",
    "Standing",
    "calc_standings",
    "get_division_for_team",
    # Strength and frame model
    "HOME_ADV",
    "PRIOR_BLEND_MATCHES",
    "calc_prior_team_strength",
    "calc_team_strength",
    "predict_frame",
    # Fixtures
    "TeamResult",
    "get_all_remaining_fixtures",
    "get_latest_result_date",
    "get_remaining_fixtures",
    "get_team_results",
    "match_outcome",
    # Simulation
    "MatchPrediction",
    "MonteCarloSimulator",
    "ScoreFrequency",
    "SeasonProjection",
    "make_rng",
    "predict_fixture",
    "run_pred_sim",
    "run_season_simulation",
    "simulate_match",
    "simulate_season",
]
