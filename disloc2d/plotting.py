"""PNG plot of a dislocation ensemble on its lattice."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np

from .defects import DislocationEnsemble
from .lattice import LatticeExtent


def save_ensemble_png(
    ensemble: DislocationEnsemble,
    extent: LatticeExtent,
    path: str | Path,
    title: str | None = None,
) -> Path:
    """Save origins and Burgers-vector arrows as PNG.

    Primary dislocations are drawn in one color and their conjugates in
    another; plaquette boundaries sit on integer coordinates.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    origins = ensemble.origins()
    vectors = ensemble.burgers_vectors()
    h = ensemble.half

    fig, ax = plt.subplots(figsize=(5.0, 5.0 * extent.Ly / extent.Lx), dpi=140)
    for label, sl, color in (("primary", slice(0, h), "tab:blue"), ("conjugate", slice(h, None), "tab:red")):
        ax.quiver(
            origins[sl, 0],
            origins[sl, 1],
            vectors[sl, 0],
            vectors[sl, 1],
            color=color,
            angles="xy",
            scale_units="xy",
            scale=2.0,
            width=0.006,
            label=label,
        )
        ax.scatter(origins[sl, 0], origins[sl, 1], s=12, color=color)

    ticks_x = np.arange(1, extent.Lx + 2)
    ticks_y = np.arange(1, extent.Ly + 2)
    ax.set_xticks(ticks_x, minor=True)
    ax.set_yticks(ticks_y, minor=True)
    ax.grid(which="minor", alpha=0.25)
    ax.set_xlim(1.0, extent.Lx + 1.0)
    ax.set_ylim(1.0, extent.Ly + 1.0)
    ax.set_aspect("equal")
    ax.set_xlabel("x [plaquettes]")
    ax.set_ylabel("y [plaquettes]")
    ax.set_title(title or f"{len(ensemble)} dislocations on {extent.Lx}x{extent.Ly}")
    ax.legend(loc="upper right", fontsize="small")
    fig.tight_layout()
    fig.savefig(out)
    plt.close(fig)
    return out
