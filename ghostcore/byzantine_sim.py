"""Monte Carlo model of an adversary trying to revert a conflict winner."""

from __future__ import annotations

import math
from dataclasses import dataclass

SIGMA = 2.0
ALPHA = 3.0
BYZANTINE_BOUND = 1.0 / (SIGMA * ALPHA)

_U64_MASK = (1 << 64) - 1
_U64_MAX_F = float(_U64_MASK)
_SEED = 12345


def xorshift64(x: int) -> int:
    """One step of the 64-bit xorshift generator (13, 7, 17)."""
    x &= _U64_MASK
    x ^= (x << 13) & _U64_MASK
    x ^= x >> 7
    x ^= (x << 17) & _U64_MASK
    return x


@dataclass
class SimulationParams:
    adversary_stake_fraction: float
    initial_winner_score: float = SIGMA * 3.0
    initial_loser_score: float = 3.0
    max_steps: int = 10_000
    trials: int = 1_000

    @classmethod
    def for_fraction(cls, f: float) -> "SimulationParams":
        """Default parameters for an adversary holding fraction ``f`` of stake."""
        return cls(adversary_stake_fraction=f)


@dataclass(frozen=True)
class SimulationResult:
    adversary_stake_fraction: float
    revert_probability: float
    mean_steps_to_revert: float | None
    trials: int
    reverts: int
    theoretical_bound: float

    def bound_holds(self) -> bool:
        return self.revert_probability <= self.theoretical_bound + 1e-6

    def is_safe(self) -> bool:
        return (
            self.adversary_stake_fraction < BYZANTINE_BOUND
            and self.revert_probability < 0.01
        )


def simulate_adversary(params: SimulationParams) -> SimulationResult:
    """Run the race between honest weight and adversarial weight many times.

    The generator state is seeded once and carried across trials, so the
    outcome is fully deterministic for a given set of parameters.
    """
    f = params.adversary_stake_fraction
    p_honest = 1.0 - f
    mask = _U64_MASK
    max_f = _U64_MAX_F

    reverts = 0
    steps_sum = 0.0
    x = _SEED

    for _ in range(params.trials):
        winner = params.initial_winner_score
        loser = params.initial_loser_score
        for step in range(1, params.max_steps + 1):
            x ^= (x << 13) & mask
            x ^= x >> 7
            x ^= (x << 17) & mask
            if x / max_f < p_honest:
                winner += 1.0
            else:
                loser += ALPHA
            if loser >= winner:
                reverts += 1
                steps_sum += step
                break

    revert_probability = reverts / params.trials if params.trials else math.nan
    mean_steps = steps_sum / reverts if reverts else None

    drift = p_honest - f * ALPHA
    if drift > 0.0:
        theoretical = min(params.initial_loser_score / params.initial_winner_score, 1.0)
    else:
        theoretical = 1.0

    return SimulationResult(
        adversary_stake_fraction=f,
        revert_probability=revert_probability,
        mean_steps_to_revert=mean_steps,
        trials=params.trials,
        reverts=reverts,
        theoretical_bound=theoretical,
    )