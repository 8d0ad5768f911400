from __future__ import annotations
import numpy as np
import pywt
from scipy.linalg import solve_toeplitz

def ar_yule_walker(signal: np.ndarray, order: int) -> np.ndarray:
    """
    Yule-Walker AR estimate of a 1D signal.

    Returns the AR polynomial [1, a1, ..., ap] (length order+1) for the model
      x[n] + a1*x[n-1] + ... + ap*x[n-p] = e[n]
    Element 0 is the fixed leading term. The biased autocorrelation of the
    raw signal is used; the signal is not demeaned.

    Raises ValueError when order >= len(signal) and numpy.linalg.LinAlgError
    when the autocorrelation matrix is singular (e.g. an all-zero segment).
    """
    x = np.asarray(signal, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"expected a 1D signal, got shape {x.shape}")
    n = x.size
    if order < 1:
        raise ValueError(f"AR order must be positive, got {order}")
    if order >= n:
        raise ValueError(f"AR order {order} must be less than the segment length {n}")

    r = np.array([np.dot(x[: n - k], x[k:]) for k in range(order + 1)]) / n
    a = solve_toeplitz(r[:-1], -r[1:])
    return np.concatenate(([1.0], a))

def is_known_wavelet(name: str) -> bool:
    return name in pywt.wavelist(kind="discrete")

class Decomposition:
    """
    Result of a multi-level DWT.

    Levels are numbered 1..levels, level 1 being the finest detail band.
    Energies are percentages of the total energy of all coefficients
    (approximation included), so detail energies alone sum below 100.
    """

    def __init__(self, coeffs: list[np.ndarray], wavelet: str):
        # pywt order: [cA_n, cD_n, cD_n-1, ..., cD_1]
        self.coeffs = [np.asarray(c, dtype=float) for c in coeffs]
        self.wavelet = wavelet
        self.levels = len(self.coeffs) - 1

    def approximation(self) -> np.ndarray:
        return self.coeffs[0]

    def detail_coefficients(self, level: int) -> np.ndarray:
        if not 1 <= level <= self.levels:
            raise IndexError(f"level must be in 1..{self.levels}, got {level}")
        return self.coeffs[-level]

    def _total_energy(self) -> float:
        total = float(sum(np.sum(c ** 2) for c in self.coeffs))
        if total == 0.0:
            raise FloatingPointError("signal has zero energy; energy percentages are undefined")
        return total

    def energy_per_level(self) -> np.ndarray:
        total = self._total_energy()
        return np.array([
            100.0 * np.sum(self.detail_coefficients(k) ** 2) / total
            for k in range(1, self.levels + 1)
        ])

    def approximation_energy(self) -> float:
        return 100.0 * float(np.sum(self.approximation() ** 2)) / self._total_energy()

def decompose(signal: np.ndarray, levels: int, wavelet: str = "db4") -> Decomposition:
    x = np.asarray(signal, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"expected a 1D signal, got shape {x.shape}")
    coeffs = pywt.wavedec(x, wavelet, level=levels)
    return Decomposition(coeffs, wavelet)
