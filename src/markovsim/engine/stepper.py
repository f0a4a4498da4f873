"""One-play-at-a-time engine for live observers.

The stepper owns a single mutable half-inning accumulator. Calls must be
serialized by the caller; the instance is not safe for concurrent use. After
a play ends the half-inning the caller must invoke reset_half_inning() before
stepping again, typically with the opposing team.
"""

from dataclasses import dataclass

import numpy as np

from markovsim.engine.inning import HalfInningAccumulator
from markovsim.engine.matrices import EventKind, MatrixSet, Team
from markovsim.engine.sampler import DEFAULT_MAX_DRAWS, PlaySampler
from markovsim.engine.states import outs_of


class StepperStateError(RuntimeError):
    """Raised when step() is called on a half-inning that already ended."""


@dataclass(frozen=True)
class EngineState:
    """Observer snapshot of the stepper's half-inning."""

    current_state: int
    batters_faced: int
    runners_left_on_base: int


@dataclass(frozen=True)
class PlayRecord:
    """Everything an observer needs to render one play."""

    previous_state: int
    next_state: int
    event_label: str
    event_kind: EventKind
    runs_scored: int  # 0 unless this play ended the half-inning
    inning_over: bool
    outs_after: int
    transition_probability: float


class InteractiveStepper:
    """Stateful wrapper around the play sampler."""

    def __init__(
        self,
        matrices: MatrixSet,
        rng: np.random.Generator,
        max_draws: int = DEFAULT_MAX_DRAWS,
    ):
        self.sampler = PlaySampler(matrices, rng, max_draws=max_draws)
        self._inning = HalfInningAccumulator()

    @property
    def state(self) -> EngineState:
        return EngineState(
            current_state=self._inning.state,
            batters_faced=self._inning.batters_faced,
            runners_left_on_base=self._inning.runners_left_on_base,
        )

    @property
    def current_state(self) -> int:
        return self._inning.state

    @property
    def outs(self) -> int:
        return outs_of(self._inning.state)

    @property
    def inning_over(self) -> bool:
        return self._inning.finished

    def reset_half_inning(self) -> None:
        """Return to 0 outs, bases empty, with both counters cleared."""
        self._inning = HalfInningAccumulator()

    def step(self, batting_team: Team) -> PlayRecord:
        """Advance the current half-inning by exactly one play.

        Raises:
            StepperStateError: If the half-inning is over and has not been reset
        """
        if self._inning.finished:
            raise StepperStateError(
                "Half-inning is over; call reset_half_inning() before the next step"
            )

        previous = self._inning.state
        transition = self.sampler.sample(batting_team, previous)
        self._inning.record(transition.next_state, transition.event_kind)

        return PlayRecord(
            previous_state=previous,
            next_state=transition.next_state,
            event_label=transition.event_label,
            event_kind=transition.event_kind,
            runs_scored=self._inning.runs,
            inning_over=self._inning.finished,
            outs_after=outs_of(transition.next_state),
            transition_probability=transition.probability,
        )
