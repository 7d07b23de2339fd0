"""Rectangular lattice extents measured in unit plaquettes."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral

from .errors import ConfigError


def ensure_positive_int(name: str, value: object) -> int:
    """Validate that a scalar is a strictly positive integer."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ConfigError(f"{name} must be an integer, got {value!r}.")
    if value <= 0:
        raise ConfigError(f"{name} must be > 0, got {value}.")
    return int(value)


def ensure_concentration(value: object) -> float:
    """Validate a dislocation concentration in [0, 1]."""
    try:
        c = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"concentration must be a number, got {value!r}.") from exc
    if not 0.0 <= c <= 1.0:
        raise ConfigError(f"concentration must be within [0, 1], got {c}.")
    return c


@dataclass(frozen=True)
class LatticeExtent:
    """Periodic rectangular lattice of ``Lx * Ly`` plaquettes.

    Plaquette ``(u, v)`` with ``1 <= u <= Lx`` and ``1 <= v <= Ly`` has its
    center at ``(u + 0.5, v + 0.5)``.
    """

    Lx: int
    Ly: int

    def __post_init__(self) -> None:
        ensure_positive_int("Lx", self.Lx)
        ensure_positive_int("Ly", self.Ly)

    @classmethod
    def from_axes(cls, Lx: int, Ly: int | None = None) -> "LatticeExtent":
        """Construct an extent; ``Ly`` defaults to ``Lx``."""
        return cls(Lx=Lx, Ly=Lx if Ly is None else Ly)

    @property
    def shape(self) -> tuple[int, int]:
        """Return extents as (Lx, Ly)."""
        return (self.Lx, self.Ly)

    @property
    def size(self) -> int:
        """Return the number of plaquettes, the capacity for dislocations."""
        return self.Lx * self.Ly

    def contains_center(self, point: tuple[float, float]) -> bool:
        """Return True when ``point`` lies on a plaquette center of this lattice."""
        x, y = point
        u, v = x - 0.5, y - 0.5
        return float(u).is_integer() and float(v).is_integer() and 1 <= u <= self.Lx and 1 <= v <= self.Ly
