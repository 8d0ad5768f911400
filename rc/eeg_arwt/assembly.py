from __future__ import annotations
import numpy as np

from .errors import ShapeMismatch

def flatten_block(tensor: np.ndarray) -> np.ndarray:
    """
    (slot, channel, trial) -> (trial, channel * slot).

    Channel is the outer index and slot the inner one: the columns of
    channel c are [c * n_slots, (c + 1) * n_slots).
    """
    t = np.asarray(tensor, dtype=float)
    if t.ndim != 3:
        raise ShapeMismatch(f"feature block must be 3D (slot, channel, trial), got shape {t.shape}")
    n_slots, n_channels, n_trials = t.shape
    return np.transpose(t, (2, 1, 0)).reshape(n_trials, n_channels * n_slots)

def assemble_feature_matrix(*blocks: np.ndarray) -> np.ndarray:
    """
    Flatten each block and concatenate them column-wise in the given order
    (AR block first, then WT block). Zero-slot blocks add no columns.
    """
    if not blocks:
        raise ShapeMismatch("at least one feature block is required")

    arrays = [np.asarray(b, dtype=float) for b in blocks]
    for i, b in enumerate(arrays):
        if b.ndim != 3:
            raise ShapeMismatch(f"block {i} must be 3D (slot, channel, trial), got shape {b.shape}")

    n_channels, n_trials = arrays[0].shape[1:]
    for i, b in enumerate(arrays[1:], start=1):
        if b.shape[1:] != (n_channels, n_trials):
            raise ShapeMismatch(
                f"block {i} has {b.shape[1]} channels x {b.shape[2]} trials, "
                f"expected {n_channels} x {n_trials}"
            )

    return np.concatenate([flatten_block(b) for b in arrays], axis=1)
