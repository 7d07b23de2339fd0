"""Reusable random dislocation distribution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from .counts import COUNT_POLICY_CAPABILITIES, CountPolicy, build_count_policy
from .defects import TETRAGONAL_BURGERS_VECTORS, DislocationEnsemble
from .errors import CapabilityNotImplementedError, ConfigError, require_capabilities
from .lattice import LatticeExtent, ensure_concentration
from .policies import DISLOCATION_POLICY_CAPABILITIES, DislocationPolicy, UniformBurgersVector
from .sampler import DEFAULT_LIMITS, SamplingLimits, sample_ensemble

if TYPE_CHECKING:
    from .config.models import EnsembleConfig

logger = logging.getLogger(__name__)

RandomSource = np.random.Generator | int | None


def as_generator(rng: RandomSource) -> np.random.Generator:
    """Return ``rng`` itself, a generator seeded by an int, or a fresh one."""
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None or (isinstance(rng, (int, np.integer)) and not isinstance(rng, bool)):
        return np.random.default_rng(rng)
    raise ConfigError(f"rng must be a numpy Generator, an int seed or None, got {type(rng).__name__}.")


@dataclass(frozen=True)
class RandomDislocationDistribution:
    """Bind a random source, a count policy and a dislocation policy.

    Each ``collect_dislocations()`` call returns a fresh charge-neutral
    ensemble and advances only this instance's generator.
    """

    rng: np.random.Generator
    concentration: float
    count_policy: CountPolicy
    dislocation_policy: DislocationPolicy
    limits: SamplingLimits = DEFAULT_LIMITS

    def __post_init__(self) -> None:
        ensure_concentration(self.concentration)
        require_capabilities(self.count_policy, COUNT_POLICY_CAPABILITIES)
        require_capabilities(self.dislocation_policy, DISLOCATION_POLICY_CAPABILITIES)

    @classmethod
    def create(
        cls,
        *,
        concentration: float,
        Lx: int,
        Ly: int | None = None,
        burgers_vectors: Iterable[Any] = TETRAGONAL_BURGERS_VECTORS,
        random_defect_number: bool = True,
        rng: RandomSource = None,
        limits: SamplingLimits | None = None,
    ) -> "RandomDislocationDistribution":
        """Keyword constructor using ``UniformBurgersVector`` placement."""
        c = ensure_concentration(concentration)
        extent = LatticeExtent.from_axes(Lx, Ly)
        policy = UniformBurgersVector.from_axes(extent.Lx, extent.Ly, burgers_vectors=burgers_vectors)
        count_policy = build_count_policy(extent, c, random_count=bool(random_defect_number))
        logger.debug(
            "Created dislocation distribution on %dx%d lattice: concentration=%g, count_policy=%r",
            extent.Lx,
            extent.Ly,
            c,
            count_policy,
        )
        return cls(
            rng=as_generator(rng),
            concentration=c,
            count_policy=count_policy,
            dislocation_policy=policy,
            limits=DEFAULT_LIMITS if limits is None else limits,
        )

    @classmethod
    def from_config(cls, cfg: "EnsembleConfig", rng: RandomSource = None) -> "RandomDislocationDistribution":
        """Build from a parsed config; an explicit ``rng`` overrides ``cfg.seed``."""
        return cls.create(
            concentration=cfg.concentration,
            Lx=cfg.lattice.Lx,
            Ly=cfg.lattice.Ly,
            burgers_vectors=cfg.burgers_vectors,
            random_defect_number=cfg.random_defect_number,
            rng=cfg.seed if rng is None else rng,
            limits=SamplingLimits(
                max_count_draws=cfg.limits.max_count_draws,
                max_origin_draws=cfg.limits.max_origin_draws,
            ),
        )

    def system_size(self) -> int:
        return int(self.dislocation_policy.system_size())

    def expected_count(self) -> float:
        """Mean of the count policy before parity and capacity rejection."""
        mean = getattr(self.count_policy, "mean", None)
        if mean is None:
            raise CapabilityNotImplementedError(self.count_policy, ("mean",))
        return float(mean())

    def collect_dislocations(self) -> DislocationEnsemble:
        return sample_ensemble(self.count_policy, self.dislocation_policy, self.rng, self.limits)

    def sample(self, n_ensembles: int) -> Iterator[DislocationEnsemble]:
        """Yield ``n_ensembles`` independent ensembles."""
        if int(n_ensembles) < 0:
            raise ValueError(f"n_ensembles must be >= 0, got {n_ensembles}.")
        for _ in range(int(n_ensembles)):
            yield self.collect_dislocations()
