"""Application entry point."""

import logging
import sys

import numpy as np

from markovsim.config import get_config
from markovsim.engine.matrices import Team, load_matrix_set
from markovsim.simulation.metrics import summary_interval
from markovsim.simulation.montecarlo import (
    MonteCarloSummary,
    run_batch,
    run_convergence,
    run_parallel,
)


def run() -> MonteCarloSummary:
    """
    Run sequence: load config → load matrices → simulate → report.

    SIM_MODE=batch runs one batch (partitioned when SIM_WORKERS > 1).
    SIM_MODE=convergence runs CONVERGENCE_BATCHES sequential sub-batches and
    logs the running win probability after each one.

    Raises:
        SystemExit: On configuration or matrix errors
    """
    logger = logging.getLogger(__name__)

    try:
        config = get_config()
        logger.info(f"Configuration loaded: env={config.env}, mode={config.sim_mode}")

        if config.matrix_path is None:
            raise ValueError("MATRIX_PATH is not set")

        matrices = load_matrix_set(config.matrix_path, cdf_precision=config.cdf_precision)

        if config.sim_mode == "convergence":
            if config.sim_workers > 1:
                logger.warning("Convergence runs are sequential, ignoring SIM_WORKERS")
            convergence = run_convergence(
                matrices,
                config.default_sim_n,
                batch_count=config.convergence_batches,
                rng=np.random.default_rng(config.sim_seed),
                regulation_innings=config.regulation_innings,
                max_draws=config.sampler_max_draws,
            )
            for point in convergence.points:
                logger.info(
                    f"After {point.games} games: {matrices.name_a} {point.win_prob_a:.1%}"
                )
            summary = convergence.summary
        elif config.sim_workers > 1:
            summary = run_parallel(
                matrices,
                config.default_sim_n,
                workers=config.sim_workers,
                seed=config.sim_seed,
                regulation_innings=config.regulation_innings,
                max_draws=config.sampler_max_draws,
            )
        else:
            summary = run_batch(
                matrices,
                config.default_sim_n,
                rng=np.random.default_rng(config.sim_seed),
                regulation_innings=config.regulation_innings,
                max_draws=config.sampler_max_draws,
            )

    except Exception as e:
        logger.error(f"Simulation run failed: {e}")
        raise SystemExit(1) from e

    low, high = summary_interval(summary, Team.A)
    logger.info(
        f"{summary.iterations} games in {summary.elapsed_seconds:.2f}s: "
        f"{matrices.name_a} {summary.win_prob_a:.1%} (95% CI {low:.1%}-{high:.1%}), "
        f"{matrices.name_b} {summary.win_prob_b:.1%}"
    )
    logger.info(
        f"Average score: {matrices.name_a} {summary.avg_score_a:.2f} - "
        f"{matrices.name_b} {summary.avg_score_b:.2f} "
        f"({summary.extra_inning_games} extra-inning games)"
    )
    return summary


def main() -> None:
    """`markovsim` console script: apply LOG_LEVEL, then simulate once."""
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        run()
    except KeyboardInterrupt:
        logging.info("Simulation interrupted")
        sys.exit(0)
    except SystemExit:
        raise
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
