"""Count policies: how many dislocations an ensemble should hold.

Two variants are provided:

- ``BinomialCount``: each of the ``Lx * Ly`` plaquettes hosts a dislocation
  with probability ``concentration``.
- ``FixedCount``: a point mass at an even, achievable target derived from
  ``concentration * Lx * Ly`` through ``fixed_dislocation_count``.

Both wrap frozen ``scipy.stats`` distributions and draw from an explicitly
supplied ``numpy.random.Generator``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import numpy as np
from scipy import stats

from .errors import ConfigError
from .lattice import LatticeExtent, ensure_concentration

logger = logging.getLogger(__name__)

COUNT_POLICY_CAPABILITIES = ("sample",)


@runtime_checkable
class CountPolicy(Protocol):
    """Distribution over non-negative dislocation counts."""

    def sample(self, rng: np.random.Generator) -> int: ...


@dataclass(frozen=True)
class BinomialCount:
    """Random-count mode: ``Binomial(trials, p)``."""

    trials: int
    p: float
    dist: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.trials <= 0:
            raise ConfigError(f"trials must be > 0, got {self.trials}.")
        ensure_concentration(self.p)
        object.__setattr__(self, "dist", stats.binom(int(self.trials), float(self.p)))

    def sample(self, rng: np.random.Generator) -> int:
        return int(self.dist.rvs(random_state=rng))

    def mean(self) -> float:
        return float(self.dist.mean())


@dataclass(frozen=True)
class FixedCount:
    """Fixed-count mode: a point mass at ``value``."""

    value: int
    dist: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ConfigError(f"value must be >= 0, got {self.value}.")
        object.__setattr__(self, "dist", stats.randint(int(self.value), int(self.value) + 1))

    def sample(self, rng: np.random.Generator) -> int:
        return int(self.dist.rvs(random_state=rng))

    def mean(self) -> float:
        return float(self.value)


def fixed_dislocation_count(concentration: float, Lx: int, Ly: int) -> int:
    """Return the corrected, even, achievable fixed dislocation count.

    The raw target ``round(concentration * Lx * Ly)`` is corrected in order:

    1. ``target <= 1`` becomes 2;
    2. ``target >= Lx * Ly`` becomes the largest even value below capacity;
    3. an odd target is moved to the adjacent even value inside capacity.
    """
    capacity = int(Lx) * int(Ly)
    num = int(round(float(concentration) * capacity))

    if num <= 1:
        logger.warning("The requested number of (non-random) dislocations is %d <= 1. Changing to 2.", num)
        num = 2

    if num >= capacity:
        new_num = capacity - 2 if (capacity - 1) % 2 == 1 else capacity - 1
        logger.warning(
            "The requested number of (non-random) dislocations is %d >= Lx * Ly == %d. Resetting to %d.",
            num,
            capacity,
            new_num,
        )
        num = new_num

    if num % 2 == 1:
        new_num = num - 1 if num == capacity - 1 else num + 1
        logger.warning(
            "The requested number of (non-random) dislocations is %d, which is odd. Changing to %d.", num, new_num
        )
        num = new_num

    return num


def build_count_policy(
    extent: LatticeExtent,
    concentration: float,
    random_count: bool = True,
) -> BinomialCount | FixedCount:
    """Select the count policy for ``extent`` at ``concentration``."""
    c = ensure_concentration(concentration)
    if random_count:
        return BinomialCount(trials=extent.size, p=c)
    return FixedCount(fixed_dislocation_count(c, extent.Lx, extent.Ly))
