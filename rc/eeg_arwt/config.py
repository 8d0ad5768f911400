from __future__ import annotations
from dataclasses import dataclass, fields, asdict
from typing import Any, Mapping, Optional

import numpy as np
import yaml

from .errors import ConfigurationError
from .estimators import is_known_wavelet

@dataclass
class FeatureConfig:
    """
    Options of one feature extraction run.

    Each family gates a variable-width block of columns:
      AR block : ar_order columns per channel
      WT block : (#enabled of variance/std/rms) * wt_levels
                 + (wt_levels if energy) columns per channel
    """
    ar_enabled: bool = True
    ar_order: int = 4
    wt_enabled: bool = True
    wt_levels: int = 4
    wt_kernel: str = "db4"
    wt_enable_variance: bool = True
    wt_enable_std: bool = False
    wt_enable_rms: bool = False
    wt_enable_energy: bool = True
    n_jobs: Optional[int] = None

    @property
    def wt_enable(self) -> list[bool]:
        return [
            bool(self.wt_enable_variance),
            bool(self.wt_enable_std),
            bool(self.wt_enable_rms),
            bool(self.wt_enable_energy),
        ]

    def validate(self) -> "FeatureConfig":
        if self.ar_enabled:
            _check_positive_int("ar_order", self.ar_order)
        if self.wt_enabled:
            _check_positive_int("wt_levels", self.wt_levels)
            if not is_known_wavelet(self.wt_kernel):
                raise ConfigurationError(f"unknown wavelet kernel: {self.wt_kernel!r}")
        if self.n_jobs is not None and (isinstance(self.n_jobs, bool) or not isinstance(self.n_jobs, (int, np.integer)) or self.n_jobs == 0):
            raise ConfigurationError(f"n_jobs must be None or a non-zero int, got {self.n_jobs!r}")
        return self

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "FeatureConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"unknown feature options: {', '.join(unknown)}")
        return cls(**dict(options)).validate()

def _check_positive_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

def load_config(path: str) -> tuple[FeatureConfig, dict[str, Any]]:
    """
    Read a YAML file. Feature options live under a `features:` key; every
    other top-level key (eeg_dir, segment_length, output_dir, ...) is
    returned untouched for the driver script.
    """
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"{path}: expected a mapping at the top level")

    cfg = dict(cfg)
    options = cfg.pop("features", None) or {}
    if not isinstance(options, dict):
        raise ConfigurationError(f"{path}: `features` must be a mapping")
    return FeatureConfig.from_dict(options), cfg
