"""Unit tests for the base/out state encoding."""

import pytest

from markovsim.engine.states import (
    ABSORBING_STATE,
    NUM_STATES,
    RUNNERS_ON_BASE,
    bases_of,
    encode_state,
    is_absorbing,
    outs_of,
    runners_on,
    state_label,
)


def test_encoding_examples():
    """Bases empty, bases loaded, two outs, and the terminal marker."""
    assert bases_of(0) == 0b000
    assert bases_of(7) == 0b111
    assert outs_of(16) == 2
    assert outs_of(ABSORBING_STATE) == 3
    assert bases_of(ABSORBING_STATE) == 0


def test_outs_blocks():
    for state in range(ABSORBING_STATE):
        assert outs_of(state) == state // 8
        assert bases_of(state) == state % 8


def test_encode_is_inverse():
    for state in range(NUM_STATES):
        assert encode_state(outs_of(state), bases_of(state)) == state


def test_encode_three_outs_is_absorbing():
    assert encode_state(3, 0b101) == ABSORBING_STATE


@pytest.mark.parametrize("outs,bases", [(-1, 0), (0, 8), (1, -1)])
def test_encode_rejects_bad_input(outs, bases):
    with pytest.raises(ValueError):
        encode_state(outs, bases)


def test_runner_counts():
    """Every out block repeats the popcount pattern; three outs strands nobody."""
    pattern = [0, 1, 1, 2, 1, 2, 2, 3]
    assert list(RUNNERS_ON_BASE) == pattern * 3 + [0]
    assert runners_on(7) == 3
    assert runners_on(20) == 1  # two outs, runner on third


def test_state_labels():
    assert state_label(0) == "0_000"
    assert state_label(1) == "0_100"
    assert state_label(11) == "1_110"
    assert state_label(20) == "2_001"
    assert state_label(ABSORBING_STATE) == "3_000"


def test_absorbing_only_at_24():
    assert [s for s in range(NUM_STATES) if is_absorbing(s)] == [ABSORBING_STATE]


@pytest.mark.parametrize("state", [-1, 25, 100])
def test_out_of_range(state):
    with pytest.raises(ValueError):
        outs_of(state)
    with pytest.raises(ValueError):
        bases_of(state)
