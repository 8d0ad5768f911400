from __future__ import annotations
from typing import Optional, Sequence
import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .ar import extract_ar_features
from .assembly import assemble_feature_matrix
from .config import FeatureConfig
from .data import as_signal_tensor
from .wavelet import STATISTICS, extract_wavelet_features

def build_feature_matrix(signals: np.ndarray, config: Optional[FeatureConfig] = None,
                         verbose: bool = False) -> np.ndarray:
    """
    signals: (sample, channel, trial)
    Returns (trial, channel * (ar_width + wt_width)) with, per family, the
    columns of channel 0 first, and the AR family before the WT family.
    """
    config = (config or FeatureConfig()).validate()
    x = as_signal_tensor(signals)

    ar = extract_ar_features(x, config.ar_order, enabled=config.ar_enabled, n_jobs=config.n_jobs)
    if verbose:
        print("[AR] tensor shape:", ar.shape)

    wt = extract_wavelet_features(
        x,
        config.wt_levels,
        wavelet=config.wt_kernel,
        enable=config.wt_enable,
        enabled=config.wt_enabled,
        n_jobs=config.n_jobs,
    )
    if verbose:
        print("[WT] tensor shape:", wt.shape)

    X = assemble_feature_matrix(ar, wt)
    if verbose:
        print("[Features] X shape:", X.shape)
    return X

def feature_names(config: FeatureConfig, n_channels: int,
                  channel_names: Optional[Sequence[str]] = None) -> list[str]:
    """Column labels in assembly order, e.g. ch0_ar1, Fz_var_d2, Fz_energy_d1."""
    if channel_names is None:
        channel_names = [f"ch{c}" for c in range(n_channels)]
    elif len(channel_names) != n_channels:
        raise ValueError(f"got {len(channel_names)} channel names for {n_channels} channels")

    ar_slots = [f"ar{i}" for i in range(1, config.ar_order + 1)] if config.ar_enabled else []

    wt_slots = []
    if config.wt_enabled:
        flags = config.wt_enable
        kinds = [s for s, on in zip(STATISTICS, flags[:3]) if on]
        if flags[3]:
            kinds.append("energy")
        wt_slots = [f"{k}_d{lvl}" for k in kinds for lvl in range(1, config.wt_levels + 1)]

    names = [f"{ch}_{s}" for ch in channel_names for s in ar_slots]
    names += [f"{ch}_{s}" for ch in channel_names for s in wt_slots]
    return names

def build_feature_frame(signals: np.ndarray, config: Optional[FeatureConfig] = None,
                        channel_names: Optional[Sequence[str]] = None,
                        verbose: bool = False) -> pd.DataFrame:
    config = config or FeatureConfig()
    X = build_feature_matrix(signals, config, verbose=verbose)
    n_channels = np.shape(signals)[1]
    return pd.DataFrame(X, columns=feature_names(config, n_channels, channel_names))

class ARWaveletFeatures(TransformerMixin, BaseEstimator):
    """
    scikit-learn wrapper around build_feature_matrix.

    X is the (sample, channel, trial) tensor; transform returns one row per
    trial. fit only records the channel count, there is nothing to learn.
    """

    def __init__(self, ar_enabled=True, ar_order=4, wt_enabled=True, wt_levels=4,
                 wt_kernel="db4", wt_enable_variance=True, wt_enable_std=False,
                 wt_enable_rms=False, wt_enable_energy=True, n_jobs=None):
        self.ar_enabled = ar_enabled
        self.ar_order = ar_order
        self.wt_enabled = wt_enabled
        self.wt_levels = wt_levels
        self.wt_kernel = wt_kernel
        self.wt_enable_variance = wt_enable_variance
        self.wt_enable_std = wt_enable_std
        self.wt_enable_rms = wt_enable_rms
        self.wt_enable_energy = wt_enable_energy
        self.n_jobs = n_jobs

    def to_config(self) -> FeatureConfig:
        return FeatureConfig(**self.get_params()).validate()

    def fit(self, X, y=None):
        self.to_config()
        self.n_channels_ = as_signal_tensor(X).shape[1]
        return self

    def transform(self, X):
        check_is_fitted(self, "n_channels_")
        x = as_signal_tensor(X)
        if x.shape[1] != self.n_channels_:
            raise ValueError(f"X has {x.shape[1]} channels, fitted on {self.n_channels_}")
        return build_feature_matrix(x, self.to_config())

    def get_feature_names_out(self, input_features=None):
        check_is_fitted(self, "n_channels_")
        return np.asarray(feature_names(self.to_config(), self.n_channels_, input_features), dtype=object)
