"""Summary statistics and invariant checks for dislocation ensembles.

Every ensemble returned by the sampler satisfies:

- an even length in ``[2, Lx * Ly]``;
- pairwise distinct origins;
- ``vector(H + i) == -vector(i)`` for ``i < H = len // 2``;
- an exactly zero net Burgers vector.
"""

from __future__ import annotations

from typing import Any

from .defects import DislocationEnsemble, negate
from .lattice import LatticeExtent


def ensemble_violations(ensemble: DislocationEnsemble, capacity: int) -> list[str]:
    """Return a description of each broken ensemble invariant."""
    problems: list[str] = []
    n = len(ensemble)
    if n < 2 or n % 2 == 1:
        problems.append(f"length {n} is not an even number >= 2")
    if n > capacity:
        problems.append(f"length {n} exceeds capacity {capacity}")

    origins = [d.origin for d in ensemble]
    duplicates = len(origins) - len(set(origins))
    if duplicates:
        problems.append(f"{duplicates} duplicated origin(s)")

    for i, (primary, partner) in enumerate(ensemble.pairs()):
        if partner.burgers_vector != negate(primary.burgers_vector):
            problems.append(f"dislocation {ensemble.half + i} is not the conjugate of dislocation {i}")

    if ensemble.net_burgers_vector() != (0.0, 0.0):
        problems.append(f"net Burgers vector is {ensemble.net_burgers_vector()}")
    return problems


def check_ensemble(ensemble: DislocationEnsemble, capacity: int) -> None:
    """Raise ValueError when any ensemble invariant is broken."""
    problems = ensemble_violations(ensemble, capacity)
    if problems:
        raise ValueError("Invalid dislocation ensemble: " + "; ".join(problems))


def ensemble_summary(ensemble: DislocationEnsemble, extent: LatticeExtent) -> dict[str, Any]:
    """Return scalar summary values for one ensemble.

    Returns
    -------
    dict
        {
          "count": int,
          "pairs": int,
          "concentration": float,  # count / (Lx * Ly)
          "net_burgers_x": float,
          "net_burgers_y": float,
          "unique_origins": int,
          "vector_counts": {(bx, by): int, ...},
        }
    """
    net_x, net_y = ensemble.net_burgers_vector()
    vector_counts: dict[tuple[float, float], int] = {}
    for d in ensemble:
        vector_counts[d.burgers_vector] = vector_counts.get(d.burgers_vector, 0) + 1
    return {
        "count": len(ensemble),
        "pairs": ensemble.half,
        "concentration": len(ensemble) / float(extent.size),
        "net_burgers_x": float(net_x),
        "net_burgers_y": float(net_y),
        "unique_origins": len({d.origin for d in ensemble}),
        "vector_counts": vector_counts,
    }
