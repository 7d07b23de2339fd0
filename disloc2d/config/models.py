"""Typed models for ensemble configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..defects import TETRAGONAL_BURGERS_VECTORS, BurgersVectorPalette


@dataclass(frozen=True)
class LatticeConfig:
    """Lattice extents in plaquettes."""

    Lx: int
    Ly: int


@dataclass(frozen=True)
class LimitsConfig:
    """Attempt budgets for the sampler rejection loops."""

    max_count_draws: int = 10_000
    max_origin_draws: int | None = None


@dataclass(frozen=True)
class EnsembleConfig:
    """Full configuration for drawing dislocation ensembles."""

    lattice: LatticeConfig
    concentration: float
    random_defect_number: bool = True
    burgers_vectors: BurgersVectorPalette = TETRAGONAL_BURGERS_VECTORS
    seed: int | None = None
    ensembles: int = 1
    limits: LimitsConfig = field(default_factory=LimitsConfig)
