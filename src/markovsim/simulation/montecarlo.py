"""Monte Carlo aggregation over complete simulated games.

Every game is simulated with call-local state only, so batches can be run
repeatedly, split into sequential sub-batches, or partitioned across worker
processes. Partial results are combined in exactly one place,
merge_summaries().
"""

import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, replace

import numpy as np

from markovsim.engine.game import REGULATION_INNINGS, simulate_game
from markovsim.engine.matrices import MatrixSet, Team
from markovsim.engine.sampler import DEFAULT_MAX_DRAWS, PlaySampler

logger = logging.getLogger(__name__)

DEFAULT_CONVERGENCE_BATCHES = 50


@dataclass(frozen=True)
class MonteCarloSummary:
    """Aggregate win/score statistics for a batch of games."""

    iterations: int
    wins_a: int
    wins_b: int
    total_runs_a: int
    total_runs_b: int
    extra_inning_games: int
    elapsed_seconds: float

    @property
    def win_prob_a(self) -> float:
        return self.wins_a / self.iterations

    @property
    def win_prob_b(self) -> float:
        return self.wins_b / self.iterations

    @property
    def avg_score_a(self) -> float:
        return self.total_runs_a / self.iterations

    @property
    def avg_score_b(self) -> float:
        return self.total_runs_b / self.iterations


@dataclass(frozen=True)
class ConvergencePoint:
    """Running win probability after a number of games."""

    games: int
    win_prob_a: float


@dataclass(frozen=True)
class ConvergenceRun:
    """Output of run_convergence(): the running series and the merged totals."""

    points: list[ConvergencePoint]
    summary: MonteCarloSummary


def _check_iterations(iterations: int) -> None:
    if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)):
        raise ValueError(f"iterations must be an integer, got: {iterations!r}")
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got: {iterations}")


def run_batch(
    matrices: MatrixSet,
    iterations: int,
    rng: np.random.Generator | None = None,
    regulation_innings: int = REGULATION_INNINGS,
    max_draws: int = DEFAULT_MAX_DRAWS,
) -> MonteCarloSummary:
    """Simulate `iterations` independent games and reduce them.

    Args:
        matrices: Both teams' transition tables
        iterations: Number of games (>= 1)
        rng: Random generator (None = fresh unseeded generator)
        regulation_innings: Minimum innings per game
        max_draws: Sampler redraw guard

    Returns:
        MonteCarloSummary for the batch

    Raises:
        ValueError: If iterations is not a positive integer
    """
    _check_iterations(iterations)

    if rng is None:
        rng = np.random.default_rng()

    sampler = PlaySampler(matrices, rng, max_draws=max_draws)

    wins_a = 0
    wins_b = 0
    total_runs_a = 0
    total_runs_b = 0
    extra_inning_games = 0

    start = time.perf_counter()

    for _ in range(iterations):
        result = simulate_game(sampler, regulation_innings=regulation_innings)

        if result.winner is Team.A:
            wins_a += 1
        else:
            wins_b += 1

        total_runs_a += result.score_a
        total_runs_b += result.score_b
        if result.extra_innings:
            extra_inning_games += 1

    elapsed = time.perf_counter() - start

    logger.debug(
        f"Batch of {iterations} games: {matrices.name_a} {wins_a} - "
        f"{matrices.name_b} {wins_b} ({elapsed:.3f}s)"
    )

    return MonteCarloSummary(
        iterations=int(iterations),
        wins_a=wins_a,
        wins_b=wins_b,
        total_runs_a=total_runs_a,
        total_runs_b=total_runs_b,
        extra_inning_games=extra_inning_games,
        elapsed_seconds=elapsed,
    )


def merge_summaries(parts: list[MonteCarloSummary]) -> MonteCarloSummary:
    """Reduce partial batch summaries into one.

    Elapsed time is the sum of the parts (total compute time).

    Raises:
        ValueError: If parts is empty
    """
    if not parts:
        raise ValueError("Cannot merge an empty list of summaries")

    return MonteCarloSummary(
        iterations=sum(p.iterations for p in parts),
        wins_a=sum(p.wins_a for p in parts),
        wins_b=sum(p.wins_b for p in parts),
        total_runs_a=sum(p.total_runs_a for p in parts),
        total_runs_b=sum(p.total_runs_b for p in parts),
        extra_inning_games=sum(p.extra_inning_games for p in parts),
        elapsed_seconds=sum(p.elapsed_seconds for p in parts),
    )


def _run_partition(
    matrices: MatrixSet,
    iterations: int,
    seed_seq: np.random.SeedSequence,
    regulation_innings: int,
    max_draws: int,
) -> MonteCarloSummary:
    """Worker entry point: one partition with its own random stream."""
    return run_batch(
        matrices,
        iterations,
        rng=np.random.default_rng(seed_seq),
        regulation_innings=regulation_innings,
        max_draws=max_draws,
    )


def run_parallel(
    matrices: MatrixSet,
    iterations: int,
    workers: int,
    seed: int | None = None,
    regulation_innings: int = REGULATION_INNINGS,
    max_draws: int = DEFAULT_MAX_DRAWS,
) -> MonteCarloSummary:
    """Partition a batch across worker processes.

    Each partition draws from an independent stream spawned from one
    SeedSequence, so a fixed seed and worker count reproduce the same result.
    The merged summary reports wall-clock time for the whole run.

    Raises:
        ValueError: If iterations or workers is not a positive integer
    """
    _check_iterations(iterations)
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got: {workers}")

    if workers > iterations:
        logger.warning(
            f"More workers ({workers}) than games ({iterations}); using {iterations}"
        )
        workers = iterations

    base, extra = divmod(iterations, workers)
    sizes = [base + (1 if i < extra else 0) for i in range(workers)]
    seeds = np.random.SeedSequence(seed).spawn(workers)

    start = time.perf_counter()

    if workers == 1:
        parts = [_run_partition(matrices, sizes[0], seeds[0], regulation_innings, max_draws)]
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(
                    _run_partition, matrices, size, seed_seq, regulation_innings, max_draws
                )
                for size, seed_seq in zip(sizes, seeds)
            ]
            parts = [future.result() for future in as_completed(futures)]

    elapsed = time.perf_counter() - start
    summary = replace(merge_summaries(parts), elapsed_seconds=elapsed)

    logger.info(
        f"Parallel run: {summary.iterations} games across {workers} workers "
        f"in {elapsed:.2f}s"
    )
    return summary


def run_convergence(
    matrices: MatrixSet,
    iterations: int,
    batch_count: int = DEFAULT_CONVERGENCE_BATCHES,
    rng: np.random.Generator | None = None,
    regulation_innings: int = REGULATION_INNINGS,
    max_draws: int = DEFAULT_MAX_DRAWS,
) -> ConvergenceRun:
    """Run a batch as sequential sub-batches and record the running estimate.

    Each sub-batch has iterations // batch_count games; the remainder is
    dropped, so the merged summary may cover slightly fewer games than
    requested.

    Raises:
        ValueError: If iterations < batch_count or either is not positive
    """
    _check_iterations(iterations)
    if batch_count < 1:
        raise ValueError(f"batch_count must be >= 1, got: {batch_count}")

    games_per_batch = iterations // batch_count
    if games_per_batch < 1:
        raise ValueError(
            f"iterations ({iterations}) must be >= batch_count ({batch_count})"
        )

    if rng is None:
        rng = np.random.default_rng()

    parts = []
    points = []
    wins_a = 0

    for i in range(1, batch_count + 1):
        part = run_batch(
            matrices,
            games_per_batch,
            rng=rng,
            regulation_innings=regulation_innings,
            max_draws=max_draws,
        )
        parts.append(part)
        wins_a += part.wins_a

        games = i * games_per_batch
        points.append(ConvergencePoint(games=games, win_prob_a=wins_a / games))

    return ConvergenceRun(points=points, summary=merge_summaries(parts))


class MonteCarloAggregator:
    """Binds a MatrixSet and a random generator for repeated batch calls."""

    def __init__(
        self,
        matrices: MatrixSet,
        rng: np.random.Generator | None = None,
        regulation_innings: int = REGULATION_INNINGS,
        max_draws: int = DEFAULT_MAX_DRAWS,
    ):
        self.matrices = matrices
        self.rng = rng if rng is not None else np.random.default_rng()
        self.regulation_innings = regulation_innings
        self.max_draws = max_draws

    def run_batch(self, iterations: int) -> MonteCarloSummary:
        return run_batch(
            self.matrices,
            iterations,
            rng=self.rng,
            regulation_innings=self.regulation_innings,
            max_draws=self.max_draws,
        )

    def run_convergence(
        self, iterations: int, batch_count: int = DEFAULT_CONVERGENCE_BATCHES
    ) -> ConvergenceRun:
        return run_convergence(
            self.matrices,
            iterations,
            batch_count=batch_count,
            rng=self.rng,
            regulation_innings=self.regulation_innings,
            max_draws=self.max_draws,
        )
