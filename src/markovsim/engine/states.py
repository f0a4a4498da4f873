"""Base/out state space for a half-inning.

Index layout: 8 base patterns per out count, three out counts, then the
absorbing "three outs" state.

    index = outs * 8 + bases   (outs in {0, 1, 2}, bases in 0..7)
    index = 24                 (three outs)

Bases are a 3-bit mask: bit 0 = runner on 1st, bit 1 = 2nd, bit 2 = 3rd.
"""

NUM_STATES = 25
BASE_PATTERNS = 8
ABSORBING_STATE = 24
INITIAL_STATE = 0

FIRST = 0b001
SECOND = 0b010
THIRD = 0b100


def _check(state: int) -> None:
    if not 0 <= state < NUM_STATES:
        raise ValueError(f"state must be in [0, {NUM_STATES - 1}], got: {state}")


def is_absorbing(state: int) -> bool:
    """True for the three-outs state that ends a half-inning."""
    _check(state)
    return state == ABSORBING_STATE


def outs_of(state: int) -> int:
    """Number of outs for a state (3 for the absorbing state)."""
    _check(state)
    if state == ABSORBING_STATE:
        return 3
    return state // BASE_PATTERNS


def bases_of(state: int) -> int:
    """Base-occupancy mask for a state.

    The absorbing state carries no meaningful base bits and maps to 0b000.
    """
    _check(state)
    if state == ABSORBING_STATE:
        return 0
    return state % BASE_PATTERNS


def runners_on(state: int) -> int:
    """Count of runners on base (popcount of the base mask)."""
    return bin(bases_of(state)).count("1")


def encode_state(outs: int, bases: int) -> int:
    """Inverse of outs_of/bases_of. Three or more outs encode to 24."""
    if outs < 0:
        raise ValueError(f"outs must be >= 0, got: {outs}")
    if not 0 <= bases < BASE_PATTERNS:
        raise ValueError(f"bases must be a 3-bit mask, got: {bases}")
    if outs >= 3:
        return ABSORBING_STATE
    return outs * BASE_PATTERNS + bases


def state_label(state: int) -> str:
    """Display label such as '1_110' (one out, runners on 1st and 2nd)."""
    bases = bases_of(state)
    flags = "".join(
        "1" if bases & bit else "0" for bit in (FIRST, SECOND, THIRD)
    )
    return f"{outs_of(state)}_{flags}"


# Precomputed runner counts, indexed by state
RUNNERS_ON_BASE = tuple(runners_on(s) for s in range(NUM_STATES))
