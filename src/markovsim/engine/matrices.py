"""Per-team transition matrices, shared event labels, and derived CDF tables.

A MatrixSet is built once and treated as immutable for the lifetime of the
engines that use it. CDF tables and event kinds are computed eagerly at
construction.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field, ValidationError

from markovsim.engine.states import ABSORBING_STATE, NUM_STATES

logger = logging.getLogger(__name__)

DEFAULT_CDF_PRECISION = 4
ROW_SUM_TOLERANCE = 1e-3
STEAL_MARKER = "Steal"


class MatrixConfigError(ValueError):
    """Raised when transition or label matrices are malformed."""


class Team(str, Enum):
    """Team identity. A bats in the top half, B bats in the bottom half."""

    A = "a"
    B = "b"


class EventKind(str, Enum):
    """Transition classification used by the batter counter."""

    PLATE_APPEARANCE = "plate_appearance"
    STEAL_ATTEMPT = "steal_attempt"


def classify_label(label: str) -> EventKind:
    """Classify an event label; anything mentioning a steal is not a PA."""
    if STEAL_MARKER in label:
        return EventKind.STEAL_ATTEMPT
    return EventKind.PLATE_APPEARANCE


def build_cdf(
    matrix: NDArray[np.float64], precision: int = DEFAULT_CDF_PRECISION
) -> NDArray[np.float64]:
    """Row-wise cumulative distribution rounded to `precision` decimals.

    For every non-absorbing row the cumulative value is pinned to exactly 1.0
    from the last column with positive probability onward, so a single draw
    in [0, 1) always resolves to a transition that can actually happen.

    Args:
        matrix: 25x25 row-stochastic transition matrix
        precision: Decimal places kept after rounding

    Returns:
        Read-only 25x25 array of cumulative probabilities
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    cdf = np.round(np.cumsum(matrix, axis=1), precision)

    for row in range(ABSORBING_STATE):
        positive = np.flatnonzero(matrix[row] > 0)
        if len(positive) > 0:
            cdf[row, positive[-1]:] = 1.0

    cdf.setflags(write=False)
    return cdf


def _as_matrix(values, team_name: str) -> NDArray[np.float64]:
    try:
        return np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MatrixConfigError(
            f"{team_name}: transition matrix is not a rectangular numeric table"
        ) from e


def validate_transition_matrix(matrix: NDArray[np.float64], team_name: str) -> None:
    """Fail fast on a transition matrix that cannot be sampled.

    Raises:
        MatrixConfigError: On wrong shape, non-finite or negative entries,
            or a non-absorbing row that does not sum to 1
    """
    if matrix.shape != (NUM_STATES, NUM_STATES):
        raise MatrixConfigError(
            f"{team_name}: transition matrix must be {NUM_STATES}x{NUM_STATES}, "
            f"got shape {matrix.shape}"
        )

    if not np.all(np.isfinite(matrix)):
        raise MatrixConfigError(f"{team_name}: transition matrix has non-finite entries")

    if np.any(matrix < 0):
        rows = sorted({int(r) for r in np.argwhere(matrix < 0)[:, 0]})
        raise MatrixConfigError(
            f"{team_name}: negative probabilities in rows {rows}"
        )

    row_sums = matrix[:ABSORBING_STATE].sum(axis=1)
    bad_rows = np.flatnonzero(np.abs(row_sums - 1.0) > ROW_SUM_TOLERANCE)
    if len(bad_rows) > 0:
        details = ", ".join(f"{int(r)}={row_sums[r]:.4f}" for r in bad_rows)
        raise MatrixConfigError(
            f"{team_name}: rows must sum to 1.0 (±{ROW_SUM_TOLERANCE}), got {details}"
        )


@dataclass(eq=False)
class MatrixSet:
    """Transition matrices for both teams plus the shared label table."""

    transitions_a: NDArray[np.float64]
    transitions_b: NDArray[np.float64]
    labels: tuple[tuple[str, ...], ...]
    name_a: str = "Team A"
    name_b: str = "Team B"
    cdf_precision: int = DEFAULT_CDF_PRECISION

    def __post_init__(self) -> None:
        self.transitions_a = _as_matrix(self.transitions_a, self.name_a)
        self.transitions_b = _as_matrix(self.transitions_b, self.name_b)
        validate_transition_matrix(self.transitions_a, self.name_a)
        validate_transition_matrix(self.transitions_b, self.name_b)
        self.transitions_a.setflags(write=False)
        self.transitions_b.setflags(write=False)

        if len(self.labels) != NUM_STATES or any(
            len(row) != NUM_STATES for row in self.labels
        ):
            raise MatrixConfigError(
                f"label matrix must be {NUM_STATES}x{NUM_STATES}"
            )
        self.labels = tuple(tuple(str(label) for label in row) for row in self.labels)

        # Derived tables, never recomputed
        self.kinds = tuple(
            tuple(classify_label(label) for label in row) for row in self.labels
        )
        self._transitions = {Team.A: self.transitions_a, Team.B: self.transitions_b}
        self._names = {Team.A: self.name_a, Team.B: self.name_b}
        self._cdfs = {
            team: build_cdf(matrix, self.cdf_precision)
            for team, matrix in self._transitions.items()
        }

    def cdf(self, team: Team) -> NDArray[np.float64]:
        return self._cdfs[team]

    def transitions(self, team: Team) -> NDArray[np.float64]:
        return self._transitions[team]

    def name(self, team: Team) -> str:
        return self._names[team]

    def label(self, from_state: int, to_state: int) -> str:
        return self.labels[from_state][to_state]

    def kind(self, from_state: int, to_state: int) -> EventKind:
        return self.kinds[from_state][to_state]


# JSON configuration schema
class TeamMatrixFile(BaseModel):
    """One team's entry in a matrix file."""

    name: str = Field(..., min_length=1, description="Display name of the team")
    transitions: list[list[float]] = Field(
        ..., description="25x25 row-stochastic transition matrix"
    )


class MatrixFile(BaseModel):
    """Top-level matrix file: both teams plus the shared label table."""

    team_a: TeamMatrixFile
    team_b: TeamMatrixFile
    labels: list[list[str]]


def load_matrix_set(path: Path | str, cdf_precision: int = DEFAULT_CDF_PRECISION) -> MatrixSet:
    """Load and validate a MatrixSet from a JSON file.

    Args:
        path: Path to the JSON matrix file
        cdf_precision: Decimal places for the derived CDF tables

    Returns:
        Validated MatrixSet

    Raises:
        MatrixConfigError: If the file is missing, unreadable, unparseable, or invalid
    """
    path = Path(path)
    if not path.exists():
        raise MatrixConfigError(f"Matrix file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MatrixConfigError(f"Cannot read matrix file {path}: {e}") from e

    try:
        parsed = MatrixFile.model_validate_json(raw)
    except ValidationError as e:
        raise MatrixConfigError(f"Invalid matrix file {path}: {e}") from e

    matrices = MatrixSet(
        transitions_a=parsed.team_a.transitions,
        transitions_b=parsed.team_b.transitions,
        labels=tuple(tuple(row) for row in parsed.labels),
        name_a=parsed.team_a.name,
        name_b=parsed.team_b.name,
        cdf_precision=cdf_precision,
    )
    logger.info(f"Loaded matrices from {path}: {matrices.name_a} vs {matrices.name_b}")
    return matrices
