"""Monte Carlo simulation over complete games.

Consumes a MatrixSet and produces MonteCarloSummary batches, convergence
series, and win-probability confidence intervals.
"""

from markovsim.simulation.metrics import standard_error, summary_interval, win_prob_interval
from markovsim.simulation.montecarlo import (
    ConvergencePoint,
    ConvergenceRun,
    MonteCarloAggregator,
    MonteCarloSummary,
    merge_summaries,
    run_batch,
    run_convergence,
    run_parallel,
)

__all__ = [
    "run_batch",
    "run_parallel",
    "run_convergence",
    "merge_summaries",
    "MonteCarloAggregator",
    "MonteCarloSummary",
    "ConvergencePoint",
    "ConvergenceRun",
    "win_prob_interval",
    "summary_interval",
    "standard_error",
]
