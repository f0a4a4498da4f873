"""Half-inning bookkeeping and the runs-scored formula.

Runs are not tracked play by play. Every batter who comes to the plate is
either retired (exactly 3 of them), left on base, or has scored, so

    R = max(0, B - L - 3)

where B counts plate appearances and L is the number of runners on base
when the third out is recorded.
"""

from dataclasses import dataclass

from markovsim.engine.matrices import EventKind, Team
from markovsim.engine.sampler import PlaySampler
from markovsim.engine.states import (
    ABSORBING_STATE,
    INITIAL_STATE,
    RUNNERS_ON_BASE,
)

OUTS_PER_INNING = 3


def runs_scored(batters_faced: int, runners_left_on_base: int) -> int:
    """Runs for a completed half-inning."""
    return max(0, batters_faced - runners_left_on_base - OUTS_PER_INNING)


@dataclass
class HalfInningAccumulator:
    """B/L counters for one half-inning, starting from the empty-bases state."""

    state: int = INITIAL_STATE
    batters_faced: int = 0
    runners_left_on_base: int = 0
    finished: bool = False

    def record(self, next_state: int, kind: EventKind) -> None:
        """Apply one transition out of the current state.

        Raises:
            ValueError: If the half-inning already ended
        """
        if self.finished:
            raise ValueError("Half-inning already ended; start a new accumulator")

        if kind is EventKind.PLATE_APPEARANCE:
            self.batters_faced += 1

        if next_state == ABSORBING_STATE:
            # Runners stranded are those on base before the final out
            self.runners_left_on_base = RUNNERS_ON_BASE[self.state]
            self.finished = True

        self.state = next_state

    @property
    def runs(self) -> int:
        """Runs scored so far; 0 until the half-inning is over."""
        if not self.finished:
            return 0
        return runs_scored(self.batters_faced, self.runners_left_on_base)


@dataclass(frozen=True)
class HalfInningResult:
    """Outcome of a simulated half-inning."""

    runs: int
    batters_faced: int
    runners_left_on_base: int
    plays: int


def simulate_half_inning(sampler: PlaySampler, team: Team) -> HalfInningResult:
    """Play a half-inning from 0 outs, bases empty, until the third out."""
    acc = HalfInningAccumulator()
    plays = 0

    while not acc.finished:
        transition = sampler.sample(team, acc.state)
        acc.record(transition.next_state, transition.event_kind)
        plays += 1

    return HalfInningResult(
        runs=acc.runs,
        batters_faced=acc.batters_faced,
        runners_left_on_base=acc.runners_left_on_base,
        plays=plays,
    )
