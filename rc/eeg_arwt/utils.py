from __future__ import annotations
import os
from typing import Callable, Optional

def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def map_channels(fn: Callable[[int], object], n_channels: int, n_jobs: Optional[int] = None) -> list:
    """
    Call fn(channel) for every channel and return the results in channel order.
    With n_jobs other than None/1 the calls are spread over joblib workers;
    each call owns its channel so no synchronisation is needed.
    """
    if n_jobs is None or n_jobs == 1 or n_channels < 2:
        return [fn(c) for c in range(n_channels)]

    from joblib import Parallel, delayed
    return Parallel(n_jobs=n_jobs)(delayed(fn)(c) for c in range(n_channels))
