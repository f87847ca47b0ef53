"""Frame windowing and buffer-size validation."""

from functools import lru_cache
from numbers import Integral

import numpy as np
from scipy.signal import get_window

from feature_stream.errors import InvalidConfigurationError

# scipy names for the windows scipy ships; "sine" and "rect" are built here.
_SCIPY_WINDOWS = {
    "hanning": "hann",
    "hamming": "hamming",
    "blackman": "blackman",
}
WINDOW_NAMES = frozenset(_SCIPY_WINDOWS) | {"sine", "rect"}


def is_power_of_two(n) -> bool:
    """True iff halving ``n`` repeatedly reaches exactly 1."""
    if isinstance(n, bool) or not isinstance(n, Integral):
        return False
    n = int(n)
    if n <= 0:
        return False
    while n % 2 == 0 and n > 1:
        n //= 2
    return n == 1


@lru_cache(maxsize=32)
def window_coefficients(name: str, size: int) -> np.ndarray:
    """Symmetric window of ``size`` points; cached per (name, size)."""
    if name not in WINDOW_NAMES:
        raise InvalidConfigurationError(
            f"Unknown windowing function {name!r}; expected one of {sorted(WINDOW_NAMES)}"
        )
    if name == "rect":
        coeffs = np.ones(size)
    elif name == "sine":
        if size == 1:
            coeffs = np.ones(1)
        else:
            coeffs = np.sin(np.pi * np.arange(size) / (size - 1))
    else:
        coeffs = get_window(_SCIPY_WINDOWS[name], size, fftbins=False)
    coeffs.setflags(write=False)
    return coeffs


def apply_window(signal: np.ndarray, name: str = "hanning") -> np.ndarray:
    """Multiply ``signal`` by the named window; returns a new array."""
    signal = np.asarray(signal, dtype=np.float64)
    if signal.size == 0:
        window_coefficients(name, 1)  # still validate the name
        return signal.copy()
    return signal * window_coefficients(name, signal.shape[0])
