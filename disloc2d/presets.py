from __future__ import annotations

from typing import Any


def make_default_ensemble_config(
    *,
    L: int = 16,
    concentration: float = 0.05,
    random_defect_number: bool = True,
    seed: int | None = 1234,
    ensembles: int = 1,
) -> dict[str, Any]:
    return {
        "lattice": {"Lx": int(L), "Ly": int(L)},
        "concentration": float(concentration),
        "random_defect_number": bool(random_defect_number),
        "burgers_vectors": [[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]],
        "seed": seed,
        "ensembles": int(ensembles),
    }
