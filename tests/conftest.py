import numpy as np
import pytest

@pytest.fixture
def signals():
    """2 channels x 3 trials x 100 samples of white noise, (sample, channel, trial)."""
    rng = np.random.default_rng(7)
    return rng.standard_normal((100, 2, 3))

@pytest.fixture
def ar2_signal():
    """Long AR(2) realisation: x[n] = 0.75 x[n-1] - 0.5 x[n-2] + e[n]."""
    rng = np.random.default_rng(0)
    e = rng.standard_normal(20000)
    x = np.zeros_like(e)
    for n in range(2, len(e)):
        x[n] = 0.75 * x[n - 1] - 0.5 * x[n - 2] + e[n]
    return x
