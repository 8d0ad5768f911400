from __future__ import annotations
import os
from typing import Optional
import numpy as np
import pandas as pd

from .errors import ConfigurationError

def as_signal_tensor(signals) -> np.ndarray:
    """
    Check a (sample, channel, trial) array and return it as float ndarray.
    The caller's array is never modified.
    """
    x = np.asarray(signals, dtype=float)
    if x.ndim != 3:
        raise ConfigurationError(
            f"signals must be 3D (sample, channel, trial), got shape {x.shape}"
        )
    n_samples, n_channels, n_trials = x.shape
    if n_samples < 1 or n_channels < 1 or n_trials < 1:
        raise ConfigurationError(f"signals has an empty axis: shape {x.shape}")
    if not np.all(np.isfinite(x)):
        raise ConfigurationError("signals contain NaN or infinite values")
    return x

def segment_dataframe(df: pd.DataFrame, segment_length: int) -> list[pd.DataFrame]:
    segments = []
    n = len(df)
    for start in range(0, n, segment_length):
        end = start + segment_length
        if end <= n:
            segments.append(df.iloc[start:end])
    return segments

def load_segments(eeg_dir: str, segment_length: int, channels: Optional[list[str]] = None):
    """
    Cut every CSV recording in eeg_dir into non-overlapping segments
    (trailing samples that do not fill a segment are dropped).

    Each CSV holds one column per channel. With `channels` given, only
    those columns are kept, in that order; a file missing one of them is an
    error. Files are read in sorted name order so trial order is stable.

    Returns (segments, recording_ids) where recording_ids = filename prefix
    before first underscore, one entry per segment.
    """
    if segment_length < 1:
        raise ConfigurationError(f"segment_length must be positive, got {segment_length}")

    all_segments = []
    recording_ids = []

    for fn in sorted(os.listdir(eeg_dir)):
        if not fn.endswith(".csv"):
            continue

        fp = os.path.join(eeg_dir, fn)
        df = pd.read_csv(fp)
        if channels is not None:
            missing = [ch for ch in channels if ch not in df.columns]
            if missing:
                raise ConfigurationError(f"{fn}: missing channels {missing}")
            df = df[list(channels)]

        rec_id = fn.split("_")[0]
        for seg in segment_dataframe(df, segment_length):
            all_segments.append(seg)
            recording_ids.append(rec_id)

    return all_segments, np.asarray(recording_ids)

def segments_to_tensor(segments: list[pd.DataFrame]) -> np.ndarray:
    """
    Stack equally shaped (sample x channel) segments into a
    (sample, channel, trial) tensor, one trial per segment.
    """
    if not segments:
        raise ConfigurationError("no segments to stack")

    columns = list(segments[0].columns)
    for i, seg in enumerate(segments[1:], start=1):
        if list(seg.columns) != columns:
            raise ConfigurationError(f"segment {i} has channels {list(seg.columns)}, expected {columns}")

    arrays = [seg.to_numpy(dtype=float) for seg in segments]
    shapes = {a.shape for a in arrays}
    if len(shapes) != 1:
        raise ConfigurationError(f"segments differ in shape: {sorted(shapes)}")
    return np.stack(arrays, axis=2)
