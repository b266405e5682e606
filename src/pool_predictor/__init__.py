"""
Pool Predictor - league prediction engine for 10-frame pool leagues.

Bayesian-smoothed player ratings, team strengths, a logistic frame model and
Monte Carlo simulation of matches and seasons, plus lineup suggestions and
match analytics built on frame-by-frame history.
"""

__version__ = "0.1.0"

from .config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
