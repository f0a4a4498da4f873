"""Sampling-error estimates for Monte Carlo win probabilities.

Pure functions; no simulation state.
"""

import math

from scipy import stats

from markovsim.engine.matrices import Team
from markovsim.simulation.montecarlo import MonteCarloSummary


def win_prob_interval(
    wins: int, iterations: int, confidence: float = 0.95
) -> tuple[float, float]:
    """Wilson score interval for a win probability.

    Args:
        wins: Games won
        iterations: Games simulated (>= 1)
        confidence: Two-sided confidence level in (0, 1)

    Returns:
        (low, high) bounds within [0, 1]

    Raises:
        ValueError: On invalid counts or confidence level

    Notes:
        - Stays inside [0, 1] and is non-degenerate at 0 or all wins,
          which happens with lopsided matchups
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got: {iterations}")
    if not 0 <= wins <= iterations:
        raise ValueError(f"wins must be in [0, {iterations}], got: {wins}")
    if not 0.0 < confidence < 1.0:
        raise ValueError(f"confidence must be in (0, 1), got: {confidence}")

    z = float(stats.norm.ppf(0.5 + confidence / 2))
    p = wins / iterations
    n = iterations

    denom = 1 + z**2 / n
    center = (p + z**2 / (2 * n)) / denom
    half_width = z * math.sqrt(p * (1 - p) / n + z**2 / (4 * n**2)) / denom

    return max(0.0, center - half_width), min(1.0, center + half_width)


def summary_interval(
    summary: MonteCarloSummary, team: Team, confidence: float = 0.95
) -> tuple[float, float]:
    """Confidence interval for one team's win probability in a summary."""
    wins = summary.wins_a if team is Team.A else summary.wins_b
    return win_prob_interval(wins, summary.iterations, confidence)


def standard_error(summary: MonteCarloSummary) -> float:
    """Binomial standard error of the team A win probability."""
    p = summary.win_prob_a
    return math.sqrt(p * (1 - p) / summary.iterations)
