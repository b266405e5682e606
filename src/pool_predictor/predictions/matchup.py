"""
Frame-level win probability.

A logistic model on the strength gap, with a fixed additive home advantage
applied inside the logistic:

    p(home wins frame) = 1 / (1 + exp(-(home + HOME_ADV - away)))
"""

import math

HOME_ADV = 0.2

# Keeps probabilities strictly inside (0, 1) where floats would round to 0 or 1
_PROB_EPS = 1e-12


def _logistic(z: float) -> float:
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def predict_frame(home_strength: float, away_strength: float, home_advantage: float = HOME_ADV) -> float:
    """
    Probability that the home side wins a single frame.

    Args:
        home_strength: Home team/player strength (any real)
        away_strength: Away team/player strength (any real)
        home_advantage: Additive home bonus

    Returns:
        Probability strictly within (0, 1)

    Raises:
        ValueError: If a strength is NaN
    """
    if math.isnan(home_strength) or math.isnan(away_strength):
        raise ValueError("Strengths must be real numbers")
    p = _logistic(home_strength + home_advantage - away_strength)
    return min(1.0 - _PROB_EPS, max(_PROB_EPS, p))
