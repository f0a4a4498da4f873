"""Simulation engine: state space, matrices, sampling, innings and games."""

from markovsim.engine.game import GameResult, simulate_game
from markovsim.engine.inning import (
    HalfInningAccumulator,
    HalfInningResult,
    runs_scored,
    simulate_half_inning,
)
from markovsim.engine.matrices import (
    EventKind,
    MatrixConfigError,
    MatrixSet,
    Team,
    build_cdf,
    load_matrix_set,
)
from markovsim.engine.sampler import PlaySampler, SamplingError, Transition
from markovsim.engine.states import (
    ABSORBING_STATE,
    bases_of,
    encode_state,
    outs_of,
    runners_on,
    state_label,
)
from markovsim.engine.stepper import (
    EngineState,
    InteractiveStepper,
    PlayRecord,
    StepperStateError,
)

__all__ = [
    # States
    "ABSORBING_STATE",
    "outs_of",
    "bases_of",
    "runners_on",
    "encode_state",
    "state_label",
    # Matrices
    "Team",
    "EventKind",
    "MatrixSet",
    "MatrixConfigError",
    "build_cdf",
    "load_matrix_set",
    # Sampling
    "PlaySampler",
    "Transition",
    "SamplingError",
    # Innings and games
    "HalfInningAccumulator",
    "HalfInningResult",
    "runs_scored",
    "simulate_half_inning",
    "GameResult",
    "simulate_game",
    # Stepper
    "InteractiveStepper",
    "EngineState",
    "PlayRecord",
    "StepperStateError",
]
