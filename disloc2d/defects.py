"""Burgers-vector palettes and dislocation value types."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import ConfigError

Vector2D = tuple[float, float]
BurgersVectorPalette = tuple[Vector2D, ...]

TETRAGONAL_BURGERS_VECTORS: BurgersVectorPalette = (
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
)


def as_vector2d(value: Any, context: str = "vector") -> Vector2D:
    """Convert a length-2 numeric sequence into a float pair."""
    arr = np.asarray(value, dtype=float)
    if arr.shape != (2,):
        raise ConfigError(f"{context} must have exactly 2 components, got {value!r}.")
    if not np.all(np.isfinite(arr)):
        raise ConfigError(f"{context} must be finite, got {value!r}.")
    return (float(arr[0]), float(arr[1]))


def as_palette(vectors: Iterable[Any]) -> BurgersVectorPalette:
    """Normalize a Burgers-vector collection into an immutable palette."""
    try:
        items = list(vectors)
    except TypeError as exc:
        raise ConfigError(f"burgers_vectors must be a sequence of 2D vectors, got {vectors!r}.") from exc
    if not items:
        raise ConfigError("burgers_vectors must contain at least one vector.")
    return tuple(as_vector2d(v, f"burgers_vectors[{idx}]") for idx, v in enumerate(items))


def negate(vector: Vector2D) -> Vector2D:
    """Return the exact negation of a 2D vector."""
    return (-vector[0], -vector[1])


@dataclass(frozen=True)
class Dislocation:
    """Point-like lattice defect with a Burgers vector and an origin."""

    burgers_vector: Vector2D
    origin: Vector2D

    def conjugate(self, origin: Vector2D) -> "Dislocation":
        """Return the opposite-charge partner placed at ``origin``."""
        return Dislocation(burgers_vector=negate(self.burgers_vector), origin=origin)


@dataclass(frozen=True)
class DislocationEnsemble(Sequence[Dislocation]):
    """Ordered dislocations where element ``H + i`` is the conjugate of ``i``."""

    dislocations: tuple[Dislocation, ...]

    def __len__(self) -> int:
        return len(self.dislocations)

    def __iter__(self) -> Iterator[Dislocation]:
        return iter(self.dislocations)

    def __getitem__(self, idx):  # type: ignore[override]
        return self.dislocations[idx]

    @property
    def half(self) -> int:
        """Number of primary dislocations (``len // 2``)."""
        return len(self.dislocations) // 2

    def pairs(self) -> Iterator[tuple[Dislocation, Dislocation]]:
        """Yield ``(primary, conjugate)`` pairs by index ``(i, H + i)``."""
        h = self.half
        for i in range(h):
            yield self.dislocations[i], self.dislocations[h + i]

    def burgers_vectors(self) -> np.ndarray:
        """Return Burgers vectors as an ``(N, 2)`` float array."""
        return np.array([d.burgers_vector for d in self.dislocations], dtype=float).reshape(-1, 2)

    def origins(self) -> np.ndarray:
        """Return origins as an ``(N, 2)`` float array."""
        return np.array([d.origin for d in self.dislocations], dtype=float).reshape(-1, 2)

    def net_burgers_vector(self) -> Vector2D:
        """Return the correctly rounded vector sum of all Burgers vectors."""
        bx = math.fsum(d.burgers_vector[0] for d in self.dislocations)
        by = math.fsum(d.burgers_vector[1] for d in self.dislocations)
        return (bx + 0.0, by + 0.0)
