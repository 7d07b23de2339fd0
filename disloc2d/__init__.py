"""Random charge-neutral dislocation ensembles on periodic 2D lattices."""

from .counts import BinomialCount, CountPolicy, FixedCount, build_count_policy, fixed_dislocation_count
from .defects import TETRAGONAL_BURGERS_VECTORS, Dislocation, DislocationEnsemble, as_palette
from .distribution import RandomDislocationDistribution
from .errors import CapabilityNotImplementedError, ConfigError, SamplingExhaustedError
from .lattice import LatticeExtent
from .policies import DislocationPolicy, UniformBurgersVector
from .sampler import SamplingLimits, collect_dislocations, draw_dislocation_count, sample_ensemble

__all__ = [
    "BinomialCount",
    "CapabilityNotImplementedError",
    "ConfigError",
    "CountPolicy",
    "Dislocation",
    "DislocationEnsemble",
    "DislocationPolicy",
    "FixedCount",
    "LatticeExtent",
    "RandomDislocationDistribution",
    "SamplingExhaustedError",
    "SamplingLimits",
    "TETRAGONAL_BURGERS_VECTORS",
    "UniformBurgersVector",
    "as_palette",
    "build_count_policy",
    "collect_dislocations",
    "draw_dislocation_count",
    "fixed_dislocation_count",
    "sample_ensemble",
]
