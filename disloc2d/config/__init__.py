"""Typed config models and parsers."""

from .models import EnsembleConfig, LatticeConfig, LimitsConfig
from .parser import load_config, parse_ensemble_config, parse_lattice_config, parse_limits_config
from .validators import as_mapping, opt_mapping, required, to_bool, to_float, to_int

__all__ = [
    "EnsembleConfig",
    "LatticeConfig",
    "LimitsConfig",
    "as_mapping",
    "load_config",
    "opt_mapping",
    "parse_ensemble_config",
    "parse_lattice_config",
    "parse_limits_config",
    "required",
    "to_bool",
    "to_float",
    "to_int",
]
