"""YAML config loading and parsing."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from ..defects import TETRAGONAL_BURGERS_VECTORS, as_palette
from ..errors import ConfigError
from ..lattice import LatticeExtent, ensure_concentration
from ..sampler import SamplingLimits
from .models import EnsembleConfig, LatticeConfig, LimitsConfig
from .validators import as_mapping, opt_mapping, required, to_bool, to_float, to_int


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load a YAML ensemble config from file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML config: {path}") from exc

    if payload is None:
        raise ConfigError(f"Config is empty: {path}")
    try:
        return as_mapping(payload, "config")
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def parse_lattice_config(config: Mapping[str, Any]) -> LatticeConfig:
    """Extract lattice extents; ``Ly`` defaults to ``Lx``."""
    lattice = as_mapping(required(config, "lattice", "config"), "config.lattice")
    Lx = to_int(required(lattice, "Lx", "config.lattice"), "Lx", "config.lattice")
    Ly = to_int(lattice.get("Ly", Lx), "Ly", "config.lattice")
    extent = LatticeExtent(Lx=Lx, Ly=Ly)
    return LatticeConfig(Lx=extent.Lx, Ly=extent.Ly)


def parse_limits_config(config: Mapping[str, Any]) -> LimitsConfig:
    limits = opt_mapping(config.get("limits"), "config.limits")
    defaults = LimitsConfig()
    max_count = to_int(limits.get("max_count_draws", defaults.max_count_draws), "max_count_draws", "config.limits")
    raw_origin = limits.get("max_origin_draws", defaults.max_origin_draws)
    max_origin = None if raw_origin is None else to_int(raw_origin, "max_origin_draws", "config.limits")
    SamplingLimits(max_count_draws=max_count, max_origin_draws=max_origin)
    return LimitsConfig(max_count_draws=max_count, max_origin_draws=max_origin)


def _parse_ensemble_config(config: Mapping[str, Any]) -> EnsembleConfig:
    lattice = parse_lattice_config(config)
    concentration = ensure_concentration(
        to_float(required(config, "concentration", "config"), "concentration", "config")
    )
    random_count = to_bool(config.get("random_defect_number", True), "random_defect_number", "config")

    raw_vectors = config.get("burgers_vectors")
    palette = TETRAGONAL_BURGERS_VECTORS if raw_vectors is None else as_palette(raw_vectors)

    raw_seed = config.get("seed")
    seed = None if raw_seed is None else to_int(raw_seed, "seed", "config")
    if seed is not None and seed < 0:
        raise ValueError(f"config.seed must be >= 0, got {seed}.")

    ensembles = to_int(config.get("ensembles", 1), "ensembles", "config")
    if ensembles < 1:
        raise ValueError(f"config.ensembles must be >= 1, got {ensembles}.")

    return EnsembleConfig(
        lattice=lattice,
        concentration=concentration,
        random_defect_number=random_count,
        burgers_vectors=palette,
        seed=seed,
        ensembles=ensembles,
        limits=parse_limits_config(config),
    )


def parse_ensemble_config(config: Mapping[str, Any]) -> EnsembleConfig:
    """Validate a config mapping and return a typed ``EnsembleConfig``."""
    try:
        return _parse_ensemble_config(as_mapping(config, "config"))
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(str(exc)) from exc
