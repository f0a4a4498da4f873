"""Full-game orchestration over half-innings.

Team A bats in the top half and team B (home) in the bottom half. From the
final regulation inning onward the game ends as soon as the result is
decided:
- B already leads after the top half: the bottom half is not played
- B takes the lead in the bottom half: walk-off
- A leads after a complete inning: A wins
Tied games continue into extra innings with no cap.
"""

import logging
from dataclasses import dataclass

from markovsim.engine.inning import simulate_half_inning
from markovsim.engine.matrices import Team
from markovsim.engine.sampler import PlaySampler

logger = logging.getLogger(__name__)

REGULATION_INNINGS = 9


@dataclass(frozen=True)
class GameResult:
    """Final result of one simulated game."""

    winner: Team
    score_a: int
    score_b: int
    innings: int  # last inning started
    half_innings: int  # half-innings actually played
    walk_off: bool = False
    regulation_innings: int = REGULATION_INNINGS

    @property
    def extra_innings(self) -> bool:
        return self.innings > self.regulation_innings


def simulate_game(
    sampler: PlaySampler, regulation_innings: int = REGULATION_INNINGS
) -> GameResult:
    """Simulate one complete game using only local score state.

    Args:
        sampler: Play sampler bound to both teams' matrices
        regulation_innings: Minimum number of innings

    Returns:
        GameResult with a strict winner (scores are never equal)
    """
    if regulation_innings < 1:
        raise ValueError(f"regulation_innings must be >= 1, got: {regulation_innings}")

    score_a = 0
    score_b = 0
    half_innings = 0
    inning = 1

    while True:
        score_a += simulate_half_inning(sampler, Team.A).runs
        half_innings += 1

        if inning >= regulation_innings and score_b > score_a:
            return GameResult(
                Team.B, score_a, score_b, inning, half_innings,
                regulation_innings=regulation_innings,
            )

        score_b += simulate_half_inning(sampler, Team.B).runs
        half_innings += 1

        if inning >= regulation_innings:
            if score_b > score_a:
                return GameResult(
                    Team.B, score_a, score_b, inning, half_innings,
                    walk_off=True, regulation_innings=regulation_innings,
                )
            if score_a > score_b:
                return GameResult(
                    Team.A, score_a, score_b, inning, half_innings,
                    regulation_innings=regulation_innings,
                )
            logger.debug(f"Tied {score_a}-{score_b} after {inning}, playing extra innings")

        inning += 1
