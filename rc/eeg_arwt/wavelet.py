from __future__ import annotations
from functools import partial
from typing import Callable, Optional, Sequence
import numpy as np

from .data import as_signal_tensor
from .errors import CollaboratorFailure, ConfigurationError
from .estimators import decompose, is_known_wavelet
from .utils import map_channels

STATISTICS = ("var", "std", "rms")

def _finite(name: str, value: float, c: np.ndarray) -> float:
    if not np.isfinite(value):
        raise FloatingPointError(f"{name} of a {c.size}-coefficient detail band is not finite")
    return value

def _variance(c: np.ndarray) -> float:
    # sample statistics need at least two coefficients
    if c.size < 2:
        raise FloatingPointError(f"variance needs at least 2 detail coefficients, got {c.size}")
    return _finite("variance", float(np.var(c, ddof=1)), c)

def _std(c: np.ndarray) -> float:
    if c.size < 2:
        raise FloatingPointError(f"std needs at least 2 detail coefficients, got {c.size}")
    return _finite("std", float(np.std(c, ddof=1)), c)

def _rms(c: np.ndarray) -> float:
    if c.size < 1:
        raise FloatingPointError("rms of an empty detail band")
    return _finite("rms", float(np.sqrt(np.mean(c ** 2))), c)

_STAT_FUNCS = (_variance, _std, _rms)

def check_enable(enable: Sequence) -> list[bool]:
    flags = list(enable)
    if len(flags) != 4:
        raise ConfigurationError(
            f"enable must have 4 entries [variance, std, rms, energy], got {len(flags)}"
        )
    return [bool(f) for f in flags]

def slot_count(levels: int, enable: Sequence) -> int:
    """Number of statistic slots per (channel, trial)."""
    flags = check_enable(enable)
    return sum(flags[:3]) * levels + (levels if flags[3] else 0)

def wavelet_slots(signal: np.ndarray, levels: int, wavelet: str, enable: Sequence,
                  decomposer: Callable = decompose) -> np.ndarray:
    """
    Statistic vector of one 1D segment:
      [var(d1..dL), std(d1..dL), rms(d1..dL), energy%(d1..dL)]
    with disabled blocks left out entirely.
    """
    flags = check_enable(enable)
    dec = decomposer(signal, levels, wavelet)

    slots = []
    for on, func in zip(flags[:3], _STAT_FUNCS):
        if on:
            slots.extend(func(dec.detail_coefficients(k)) for k in range(1, levels + 1))
    if flags[3]:
        energy = np.asarray(dec.energy_per_level(), dtype=float)
        if energy.shape != (levels,):
            raise ValueError(f"decomposer returned {energy.shape} energies, expected ({levels},)")
        slots.extend(energy)
    return np.asarray(slots, dtype=float)

def _wavelet_channel(channel: int, signals: np.ndarray, levels: int, wavelet: str,
                     enable: list[bool], n_slots: int, decomposer: Callable) -> np.ndarray:
    n_trials = signals.shape[2]
    out = np.empty((n_slots, n_trials), dtype=float)
    for trial in range(n_trials):
        try:
            out[:, trial] = wavelet_slots(signals[:, channel, trial], levels, wavelet, enable, decomposer)
        except (ValueError, ArithmeticError, IndexError) as err:
            raise CollaboratorFailure("wavelet", channel, trial, err) from err
    return out

def extract_wavelet_features(
    signals: np.ndarray,
    levels: int,
    wavelet: str = "db4",
    enable: Sequence = (True, False, False, True),
    enabled: bool = True,
    n_jobs: Optional[int] = None,
    decomposer: Callable = decompose,
) -> np.ndarray:
    """
    Wavelet statistic tensor of shape (n_slots, n_channels, n_trials).

    Statistics are taken on detail coefficients only: sample variance,
    sample standard deviation and root-mean-square per level, then the
    decomposer's per-level energy percentage. Level 1 is the finest band.
    Returns zero slots when the family is disabled or nothing is enabled.
    """
    x = as_signal_tensor(signals)
    _, n_channels, n_trials = x.shape
    flags = check_enable(enable)
    if not enabled or not any(flags):
        return np.empty((0, n_channels, n_trials), dtype=float)
    if isinstance(levels, bool) or not isinstance(levels, (int, np.integer)) or levels < 1:
        raise ConfigurationError(f"wt_levels must be a positive integer, got {levels!r}")
    if not is_known_wavelet(wavelet):
        raise ConfigurationError(f"unknown wavelet kernel: {wavelet!r}")

    levels = int(levels)
    n_slots = slot_count(levels, flags)
    per_channel = map_channels(
        partial(_wavelet_channel, signals=x, levels=levels, wavelet=wavelet,
                enable=flags, n_slots=n_slots, decomposer=decomposer),
        n_channels,
        n_jobs=n_jobs,
    )
    return np.stack(per_channel, axis=1)
