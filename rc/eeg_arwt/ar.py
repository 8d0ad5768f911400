from __future__ import annotations
from functools import partial
from typing import Callable, Optional
import numpy as np

from .data import as_signal_tensor
from .errors import CollaboratorFailure, ConfigurationError
from .estimators import ar_yule_walker
from .utils import map_channels

def _ar_channel(channel: int, signals: np.ndarray, order: int, estimator: Callable) -> np.ndarray:
    n_trials = signals.shape[2]
    out = np.empty((order, n_trials), dtype=float)
    for trial in range(n_trials):
        try:
            coeffs = np.asarray(estimator(signals[:, channel, trial], order), dtype=float)
            if coeffs.shape != (order + 1,):
                raise ValueError(f"estimator returned shape {coeffs.shape}, expected ({order + 1},)")
        except (ValueError, ArithmeticError) as err:
            raise CollaboratorFailure("ar", channel, trial, err) from err
        # index 0 is the fixed leading term
        out[:, trial] = coeffs[1:]
    return out

def extract_ar_features(
    signals: np.ndarray,
    order: int,
    enabled: bool = True,
    n_jobs: Optional[int] = None,
    estimator: Callable = ar_yule_walker,
) -> np.ndarray:
    """
    AR coefficient tensor of shape (order, n_channels, n_trials).

    Every (channel, trial) segment goes to the estimator as-is (no
    detrending, no windowing). When disabled the tensor has zero slots.
    Order is not checked against segment length; the estimator's own
    error is raised as CollaboratorFailure.
    """
    x = as_signal_tensor(signals)
    _, n_channels, n_trials = x.shape
    if not enabled:
        return np.empty((0, n_channels, n_trials), dtype=float)
    if isinstance(order, bool) or not isinstance(order, (int, np.integer)) or order < 1:
        raise ConfigurationError(f"ar_order must be a positive integer, got {order!r}")

    order = int(order)
    per_channel = map_channels(
        partial(_ar_channel, signals=x, order=order, estimator=estimator),
        n_channels,
        n_jobs=n_jobs,
    )
    return np.stack(per_channel, axis=1)
