"""Inverse-CDF play sampling over a team's transition matrix."""

from dataclasses import dataclass

import numpy as np

from markovsim.engine.matrices import EventKind, MatrixSet, Team
from markovsim.engine.states import is_absorbing

DEFAULT_MAX_DRAWS = 8


class SamplingError(RuntimeError):
    """Raised when no transition could be drawn from a CDF row."""


@dataclass(frozen=True)
class Transition:
    """One sampled play."""

    next_state: int
    event_label: str
    event_kind: EventKind
    probability: float  # raw matrix entry, telemetry only


class PlaySampler:
    """Draws next states for either team from precomputed CDF tables.

    Holds no game state; the only mutable dependency is the injected
    random generator.
    """

    def __init__(
        self,
        matrices: MatrixSet,
        rng: np.random.Generator,
        max_draws: int = DEFAULT_MAX_DRAWS,
    ):
        if max_draws < 1:
            raise ValueError(f"max_draws must be >= 1, got: {max_draws}")
        self.matrices = matrices
        self.rng = rng
        self.max_draws = max_draws

    def draw_index(self, cdf_row: np.ndarray) -> int:
        """Index of the first cumulative value strictly above a uniform draw.

        Linear scan in column order. Redraws when no column exceeds the draw,
        up to max_draws attempts.

        Raises:
            SamplingError: If every attempt fails to resolve
        """
        for _ in range(self.max_draws):
            u = self.rng.random()
            hits = cdf_row > u
            if hits.any():
                return int(np.argmax(hits))

        raise SamplingError(
            f"No transition resolved after {self.max_draws} draws "
            f"(row max = {float(cdf_row[-1]):.4f})"
        )

    def sample(self, team: Team, state: int) -> Transition:
        """Sample the play that follows `state` for the batting team.

        Raises:
            ValueError: If `state` is the absorbing state
        """
        if is_absorbing(state):
            raise ValueError("Cannot sample from the absorbing state")

        next_state = self.draw_index(self.matrices.cdf(team)[state])

        return Transition(
            next_state=next_state,
            event_label=self.matrices.label(state, next_state),
            event_kind=self.matrices.kind(state, next_state),
            probability=float(self.matrices.transitions(team)[state, next_state]),
        )
