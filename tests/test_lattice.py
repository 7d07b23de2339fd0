"""Lattice extent and palette validation tests."""

from __future__ import annotations

import pytest

from disloc2d.defects import Dislocation, DislocationEnsemble, as_palette, negate
from disloc2d.errors import ConfigError
from disloc2d.lattice import LatticeExtent, ensure_concentration


pytestmark = pytest.mark.unit


def test_extent_size_and_default_ly() -> None:
    extent = LatticeExtent.from_axes(5)
    assert extent.shape == (5, 5)
    assert extent.size == 25
    assert LatticeExtent.from_axes(3, 7).size == 21


@pytest.mark.parametrize("Lx, Ly", [(0, 4), (4, -1), (2.5, 3), (True, 3)])
def test_extent_rejects_invalid_axes(Lx, Ly) -> None:
    with pytest.raises(ConfigError):
        LatticeExtent(Lx, Ly)


def test_contains_center() -> None:
    extent = LatticeExtent(3, 2)
    assert extent.contains_center((1.5, 1.5))
    assert extent.contains_center((3.5, 2.5))
    assert not extent.contains_center((0.5, 1.5))
    assert not extent.contains_center((2.0, 1.5))
    assert not extent.contains_center((1.5, 3.5))


def test_concentration_bounds() -> None:
    assert ensure_concentration(0) == 0.0
    assert ensure_concentration(1) == 1.0
    with pytest.raises(ConfigError):
        ensure_concentration(-0.01)
    with pytest.raises(ConfigError):
        ensure_concentration("dense")


def test_palette_normalization() -> None:
    palette = as_palette([[1, 0], (0.5, -0.5)])
    assert palette == ((1.0, 0.0), (0.5, -0.5))
    with pytest.raises(ConfigError, match="at least one vector"):
        as_palette([])
    with pytest.raises(ConfigError, match="finite"):
        as_palette([[float("nan"), 0.0]])


def test_ensemble_helpers() -> None:
    a = Dislocation((1.0, 0.0), (1.5, 1.5))
    b = Dislocation((0.0, -1.0), (2.5, 1.5))
    ensemble = DislocationEnsemble((a, b, a.conjugate((1.5, 2.5)), b.conjugate((2.5, 2.5))))

    assert len(ensemble) == 4
    assert ensemble.half == 2
    assert ensemble[2].burgers_vector == negate(a.burgers_vector)
    assert [p for p, _ in ensemble.pairs()] == [a, b]
    assert ensemble.burgers_vectors().shape == (4, 2)
    assert ensemble.origins()[3].tolist() == [2.5, 2.5]
    assert ensemble.net_burgers_vector() == (0.0, 0.0)
