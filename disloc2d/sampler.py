"""Charge-neutral dislocation ensemble sampler.

An ensemble of ``N`` dislocations is built in two halves. The first
``H = N // 2`` dislocations draw a palette vector and a plaquette origin
independently. Dislocation ``H + i`` carries the exact negation of the
Burgers vector of dislocation ``i`` at a fresh origin, so the total Burgers
vector vanishes exactly. Origins are unique across the whole ensemble.

Both rejection loops (count selection and origin uniqueness) are bounded by
``SamplingLimits`` and raise ``SamplingExhaustedError`` when exhausted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .counts import COUNT_POLICY_CAPABILITIES, CountPolicy
from .defects import Dislocation, DislocationEnsemble, Vector2D
from .errors import ConfigError, SamplingExhaustedError, require_capabilities
from .policies import DISLOCATION_POLICY_CAPABILITIES, DislocationPolicy, draw_dislocation

logger = logging.getLogger(__name__)

MIN_ORIGIN_DRAWS = 100_000
ORIGIN_DRAWS_PER_PLAQUETTE = 50


@dataclass(frozen=True)
class SamplingLimits:
    """Attempt budgets for the rejection loops.

    ``max_origin_draws`` applies per placed dislocation. When unset it scales
    with the lattice as ``max(100_000, 50 * Lx * Ly)``, so even the last free
    plaquette of a full lattice is found with overwhelming probability.
    """

    max_count_draws: int = 10_000
    max_origin_draws: int | None = None

    def __post_init__(self) -> None:
        if int(self.max_count_draws) < 1:
            raise ConfigError(f"max_count_draws must be >= 1, got {self.max_count_draws}.")
        if self.max_origin_draws is not None and int(self.max_origin_draws) < 1:
            raise ConfigError(f"max_origin_draws must be >= 1, got {self.max_origin_draws}.")

    def origin_draw_budget(self, capacity: int) -> int:
        """Return the per-placement origin budget on a lattice of ``capacity``."""
        if self.max_origin_draws is not None:
            return int(self.max_origin_draws)
        return max(MIN_ORIGIN_DRAWS, ORIGIN_DRAWS_PER_PLAQUETTE * int(capacity))


DEFAULT_LIMITS = SamplingLimits()


def is_admissible_count(num: int, capacity: int) -> bool:
    """Return True for even, positive counts that fit on the lattice."""
    return num > 0 and num % 2 == 0 and num <= capacity


def draw_dislocation_count(
    count_policy: CountPolicy,
    capacity: int,
    rng: np.random.Generator,
    limits: SamplingLimits = DEFAULT_LIMITS,
) -> int:
    """Draw counts from ``count_policy`` until one is admissible."""
    require_capabilities(count_policy, COUNT_POLICY_CAPABILITIES)
    for attempt in range(1, limits.max_count_draws + 1):
        num = int(count_policy.sample(rng))
        if is_admissible_count(num, capacity):
            logger.debug("Accepted dislocation count %d after %d draw(s).", num, attempt)
            return num
    raise SamplingExhaustedError(
        "dislocation count selection",
        limits.max_count_draws,
        f"No even count in [2, {capacity}] was drawn from {type(count_policy).__name__}.",
    )


def unique_origin(
    origin: Vector2D,
    occupied: set[Vector2D],
    policy: DislocationPolicy,
    rng: np.random.Generator,
    limits: SamplingLimits = DEFAULT_LIMITS,
) -> Vector2D:
    """Redraw ``origin`` from ``policy`` until it is not in ``occupied``."""
    budget = limits.origin_draw_budget(int(policy.system_size()))
    attempts = 1
    while origin in occupied:
        if attempts >= budget:
            raise SamplingExhaustedError(
                "origin uniqueness search",
                attempts,
                f"{len(occupied)} of {policy.system_size()} plaquettes are occupied.",
            )
        origin = policy.draw_origin(rng)
        attempts += 1
    return origin


def collect_dislocations(
    policy: DislocationPolicy,
    num_dislocations: int,
    rng: np.random.Generator,
    limits: SamplingLimits = DEFAULT_LIMITS,
) -> DislocationEnsemble:
    """Generate ``num_dislocations`` dislocations with zero net Burgers vector.

    Only the first ``num_dislocations // 2`` Burgers vectors are drawn; the
    remaining half are their exact negations, in the same order.
    """
    require_capabilities(policy, DISLOCATION_POLICY_CAPABILITIES)
    num = int(num_dislocations)
    capacity = int(policy.system_size())
    if not is_admissible_count(num, capacity):
        raise ValueError(f"num_dislocations must be even and within [2, {capacity}], got {num}.")

    half = num // 2
    occupied: set[Vector2D] = set()
    dislocations: list[Dislocation] = []

    for _ in range(half):
        dis = draw_dislocation(policy, rng)
        origin = unique_origin(dis.origin, occupied, policy, rng, limits)
        occupied.add(origin)
        dislocations.append(Dislocation(burgers_vector=dis.burgers_vector, origin=origin))

    for idx in range(half):
        origin = unique_origin(policy.draw_origin(rng), occupied, policy, rng, limits)
        occupied.add(origin)
        dislocations.append(dislocations[idx].conjugate(origin))

    return DislocationEnsemble(tuple(dislocations))


def sample_ensemble(
    count_policy: CountPolicy,
    policy: DislocationPolicy,
    rng: np.random.Generator,
    limits: SamplingLimits = DEFAULT_LIMITS,
) -> DislocationEnsemble:
    """Draw an admissible count, then an ensemble of that size."""
    require_capabilities(policy, DISLOCATION_POLICY_CAPABILITIES)
    num = draw_dislocation_count(count_policy, int(policy.system_size()), rng, limits)
    return collect_dislocations(policy, num, rng, limits)
