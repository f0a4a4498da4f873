"""Pytest fixtures: deterministic and league-style transition matrices."""

import numpy as np
import pytest

from markovsim.engine.matrices import MatrixSet
from markovsim.engine.states import ABSORBING_STATE, NUM_STATES, encode_state


def _blank():
    matrix = np.zeros((NUM_STATES, NUM_STATES))
    labels = [["" for _ in range(NUM_STATES)] for _ in range(NUM_STATES)]
    return matrix, labels


def _out_target(state: int) -> int:
    """Same bases, one more out (or three outs)."""
    return encode_state(state // 8 + 1, state % 8)


def _scripted(path: dict[int, tuple[int, str]]):
    """Deterministic matrix: scripted rows, every other row records an out."""
    matrix, labels = _blank()
    for state in range(ABSORBING_STATE):
        target, label = path.get(state, (_out_target(state), "Out"))
        matrix[state, target] = 1.0
        labels[state][target] = label
    matrix[ABSORBING_STATE, ABSORBING_STATE] = 1.0
    return matrix, labels


# Three up, three down: 0 -> 8 -> 16 -> 24
SCORELESS_PATH: dict[int, tuple[int, str]] = {}

# Triple, sac fly, out, out: 0 -> 4 -> 8 -> 16 -> 24, one run (B=4, L=0)
ONE_RUN_PATH = {
    0: (4, "Triple"),
    4: (8, "Sac Fly"),
}


def _merge_labels(*tables):
    """Union of label tables (scripted paths never disagree on a cell)."""
    merged = [["" for _ in range(NUM_STATES)] for _ in range(NUM_STATES)]
    for table in tables:
        for i in range(NUM_STATES):
            for j in range(NUM_STATES):
                if table[i][j]:
                    merged[i][j] = table[i][j]
    return merged


def _matrix_set(path_a, path_b, name_a="Visitors", name_b="Home"):
    matrix_a, labels_a = _scripted(path_a)
    matrix_b, labels_b = _scripted(path_b)
    return MatrixSet(
        transitions_a=matrix_a,
        transitions_b=matrix_b,
        labels=tuple(tuple(row) for row in _merge_labels(labels_a, labels_b)),
        name_a=name_a,
        name_b=name_b,
    )


def league_matrix(out_prob: float = 0.68):
    """Simplified league-average chain with walks, hits, and steals.

    Probabilities of events landing on the same cell are summed; the cell
    keeps the first label assigned to it.
    """
    matrix, labels = _blank()
    on_base = 1.0 - out_prob

    def add(i, j, p, label):
        matrix[i, j] += p
        if not labels[i][j]:
            labels[i][j] = label

    for state in range(ABSORBING_STATE):
        outs, bases = divmod(state, 8)
        add(state, _out_target(state), out_prob - 0.02, "Out")

        # Runners on first and third: steal of second, otherwise folded into outs
        if bases == 0b101:
            add(state, encode_state(outs, 0b110), 0.02, "Steal 2nd")
        else:
            add(state, _out_target(state), 0.02, "Out")

        walk = bases | 0b001
        if bases & 0b001:
            walk |= 0b010 if not bases & 0b010 else 0b110
        add(state, encode_state(outs, walk), on_base * 0.30, "Walk/HBP")
        add(state, encode_state(outs, 0b001 | ((bases & 0b001) << 1)), on_base * 0.45, "Single")
        add(state, encode_state(outs, 0b010), on_base * 0.15, "Double")
        add(state, encode_state(outs, 0b000), on_base * 0.10, "Home Run")

    matrix[ABSORBING_STATE, ABSORBING_STATE] = 1.0
    return matrix, labels


@pytest.fixture
def rng():
    """Seeded generator for reproducible tests."""
    return np.random.default_rng(12345)


@pytest.fixture
def home_scores_every_inning() -> MatrixSet:
    """A never scores; B scores exactly one run per half-inning."""
    return _matrix_set(SCORELESS_PATH, ONE_RUN_PATH)


@pytest.fixture
def visitors_score_every_inning() -> MatrixSet:
    """A scores exactly one run per half-inning; B never scores."""
    return _matrix_set(ONE_RUN_PATH, SCORELESS_PATH)


@pytest.fixture
def league_matrices() -> MatrixSet:
    """Two stochastic teams, B slightly stronger at the plate."""
    matrix_a, labels = league_matrix(out_prob=0.70)
    matrix_b, _ = league_matrix(out_prob=0.66)
    return MatrixSet(
        transitions_a=matrix_a,
        transitions_b=matrix_b,
        labels=tuple(tuple(row) for row in labels),
        name_a="Red Sox",
        name_b="Yankees",
    )


@pytest.fixture
def league_table():
    """Raw (matrix, labels) pair for building custom MatrixSets."""
    return league_matrix()
