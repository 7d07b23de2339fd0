"""Location/vector policies for individual dislocations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import numpy as np

from .defects import TETRAGONAL_BURGERS_VECTORS, BurgersVectorPalette, Dislocation, Vector2D, as_palette
from .lattice import LatticeExtent

DISLOCATION_POLICY_CAPABILITIES = ("system_size", "draw_vector", "draw_origin")


@runtime_checkable
class DislocationPolicy(Protocol):
    """Joint distribution of Burgers vectors and origins on a lattice."""

    def system_size(self) -> int: ...

    def draw_vector(self, rng: np.random.Generator) -> Vector2D: ...

    def draw_origin(self, rng: np.random.Generator) -> Vector2D: ...


def draw_dislocation(policy: DislocationPolicy, rng: np.random.Generator) -> Dislocation:
    """Draw a Burgers vector, then an origin, from ``policy``."""
    burgers_vector = policy.draw_vector(rng)
    origin = policy.draw_origin(rng)
    return Dislocation(burgers_vector=burgers_vector, origin=origin)


@dataclass(frozen=True)
class UniformBurgersVector:
    """Uniform palette vectors placed uniformly on plaquette centers."""

    extent: LatticeExtent
    burgers_vectors: BurgersVectorPalette = TETRAGONAL_BURGERS_VECTORS

    def __post_init__(self) -> None:
        object.__setattr__(self, "burgers_vectors", as_palette(self.burgers_vectors))

    @classmethod
    def from_axes(
        cls,
        Lx: int,
        Ly: int | None = None,
        burgers_vectors: Iterable[Any] = TETRAGONAL_BURGERS_VECTORS,
    ) -> "UniformBurgersVector":
        """Keyword constructor; ``Ly`` defaults to ``Lx``."""
        return cls(extent=LatticeExtent.from_axes(Lx, Ly), burgers_vectors=as_palette(burgers_vectors))

    def system_size(self) -> int:
        return self.extent.size

    def draw_vector(self, rng: np.random.Generator) -> Vector2D:
        """Return a palette vector chosen by a uniform index."""
        index = int(rng.integers(0, len(self.burgers_vectors)))
        return self.burgers_vectors[index]

    def draw_origin(self, rng: np.random.Generator) -> Vector2D:
        """Return the center ``(0.5 + u, 0.5 + v)`` of a uniform plaquette."""
        u = int(rng.integers(1, self.extent.Lx, endpoint=True))
        v = int(rng.integers(1, self.extent.Ly, endpoint=True))
        return (0.5 + u, 0.5 + v)

    def draw_dislocation(self, rng: np.random.Generator) -> Dislocation:
        return draw_dislocation(self, rng)
