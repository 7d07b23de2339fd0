"""Ensemble sampler tests: invariants, bounded retries and capabilities."""

from __future__ import annotations

import numpy as np
import pytest

from disloc2d.counts import BinomialCount, FixedCount
from disloc2d.defects import negate
from disloc2d.errors import CapabilityNotImplementedError, ConfigError, SamplingExhaustedError
from disloc2d.metrics import ensemble_violations
from disloc2d.policies import UniformBurgersVector
from disloc2d.sampler import (
    SamplingLimits,
    collect_dislocations,
    draw_dislocation_count,
    is_admissible_count,
    sample_ensemble,
)


pytestmark = pytest.mark.unit


class StuckPolicy:
    """Always proposes the same plaquette."""

    def system_size(self) -> int:
        return 9

    def draw_vector(self, rng: np.random.Generator) -> tuple[float, float]:
        return (1.0, 0.0)

    def draw_origin(self, rng: np.random.Generator) -> tuple[float, float]:
        return (1.5, 1.5)


class SizeOnlyPolicy:
    def system_size(self) -> int:
        return 9


class NoSampleCount:
    def mean(self) -> float:
        return 2.0


def test_collect_dislocations_invariants() -> None:
    policy = UniformBurgersVector.from_axes(6, 5)
    rng = np.random.default_rng(123)
    ensemble = collect_dislocations(policy, 12, rng)

    assert len(ensemble) == 12
    assert ensemble_violations(ensemble, policy.system_size()) == []
    for i in range(6):
        assert ensemble[6 + i].burgers_vector == negate(ensemble[i].burgers_vector)
    assert ensemble.net_burgers_vector() == (0.0, 0.0)


def test_collect_dislocations_can_fill_lattice() -> None:
    policy = UniformBurgersVector.from_axes(2)
    ensemble = collect_dislocations(policy, 4, np.random.default_rng(9))
    assert {d.origin for d in ensemble} == {(1.5, 1.5), (2.5, 1.5), (1.5, 2.5), (2.5, 2.5)}


def test_non_unit_palette_still_cancels_exactly() -> None:
    policy = UniformBurgersVector.from_axes(10, burgers_vectors=[(0.1, 0.2), (0.3, -0.7)])
    ensemble = collect_dislocations(policy, 40, np.random.default_rng(4))
    assert ensemble.net_burgers_vector() == (0.0, 0.0)


@pytest.mark.parametrize("num", [0, 3, 18])
def test_collect_dislocations_rejects_inadmissible_counts(num: int) -> None:
    policy = UniformBurgersVector.from_axes(4)
    with pytest.raises(ValueError, match="must be even"):
        collect_dislocations(policy, num, np.random.default_rng(0))


def test_admissible_counts() -> None:
    assert is_admissible_count(2, 4)
    assert is_admissible_count(4, 4)
    assert not is_admissible_count(0, 4)
    assert not is_admissible_count(3, 4)
    assert not is_admissible_count(6, 4)


def test_random_count_mode_never_inadmissible() -> None:
    policy = UniformBurgersVector.from_axes(4)
    counts = BinomialCount(trials=16, p=0.5)
    rng = np.random.default_rng(2024)
    for _ in range(200):
        ensemble = sample_ensemble(counts, policy, rng)
        assert 2 <= len(ensemble) <= 16
        assert len(ensemble) % 2 == 0


def test_count_selection_exhausts_on_zero_concentration() -> None:
    with pytest.raises(SamplingExhaustedError, match="dislocation count selection") as info:
        draw_dislocation_count(
            BinomialCount(trials=16, p=0.0),
            16,
            np.random.default_rng(0),
            SamplingLimits(max_count_draws=25),
        )
    assert info.value.attempts == 25


def test_count_selection_exhausts_above_capacity() -> None:
    with pytest.raises(SamplingExhaustedError):
        draw_dislocation_count(FixedCount(10), 8, np.random.default_rng(0), SamplingLimits(max_count_draws=5))


def test_origin_search_exhausts() -> None:
    with pytest.raises(SamplingExhaustedError, match="origin uniqueness search") as info:
        collect_dislocations(StuckPolicy(), 2, np.random.default_rng(0), SamplingLimits(max_origin_draws=50))
    assert info.value.attempts == 50


def test_incomplete_policies_raise_capability_error() -> None:
    rng = np.random.default_rng(0)
    with pytest.raises(CapabilityNotImplementedError, match="draw_vector, draw_origin") as info:
        collect_dislocations(SizeOnlyPolicy(), 2, rng)
    assert info.value.type_name == "SizeOnlyPolicy"

    with pytest.raises(CapabilityNotImplementedError, match="sample"):
        draw_dislocation_count(NoSampleCount(), 9, rng)


def test_sampling_limits_validation() -> None:
    with pytest.raises(ConfigError):
        SamplingLimits(max_count_draws=0)
    with pytest.raises(ConfigError):
        SamplingLimits(max_origin_draws=0)


class SlowToFreePolicy:
    """Proposes an occupied plaquette ``stall`` times before a free one."""

    def __init__(self, stall: int, capacity: int) -> None:
        self.stall = stall
        self.capacity = capacity
        self.calls = 0

    def system_size(self) -> int:
        return self.capacity

    def draw_vector(self, rng: np.random.Generator) -> tuple[float, float]:
        return (0.0, 1.0)

    def draw_origin(self, rng: np.random.Generator) -> tuple[float, float]:
        self.calls += 1
        if self.calls <= self.stall:
            return (1.5, 1.5)
        return (2.5, 1.5)


def test_origin_budget_scales_with_capacity() -> None:
    limits = SamplingLimits()
    assert limits.origin_draw_budget(16) == 100_000
    assert limits.origin_draw_budget(160_000) == 8_000_000
    assert SamplingLimits(max_origin_draws=50).origin_draw_budget(160_000) == 50


def test_default_budget_finds_rare_free_plaquette_on_large_lattice() -> None:
    policy = SlowToFreePolicy(stall=150_000, capacity=160_000)
    ensemble = collect_dislocations(policy, 2, np.random.default_rng(0))
    assert [d.origin for d in ensemble] == [(1.5, 1.5), (2.5, 1.5)]
    assert ensemble[1].burgers_vector == negate(ensemble[0].burgers_vector)


def test_nearly_full_lattice_with_default_limits() -> None:
    policy = UniformBurgersVector.from_axes(120)
    ensemble = collect_dislocations(policy, policy.system_size() - 2, np.random.default_rng(3))
    assert ensemble_violations(ensemble, policy.system_size()) == []
