"""Time-domain features computed on the raw (un-windowed) frame."""

import numpy as np

from feature_stream.errors import InvalidInputError
from feature_stream.extractors.inputs import TimeDomainInput


def rms(inp: TimeDomainInput) -> float:
    """Root mean square; 0.0 for an empty frame."""
    if inp.signal.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(inp.signal ** 2)))


def energy(inp: TimeDomainInput) -> float:
    return float(np.sum(np.abs(inp.signal) ** 2))


def zcr(inp: TimeDomainInput) -> int:
    """Zero-crossing count; 0 is treated as positive."""
    non_negative = inp.signal >= 0
    return int(np.count_nonzero(non_negative[1:] != non_negative[:-1]))


def buffer(inp: TimeDomainInput) -> np.ndarray:
    return inp.signal.copy()


def spectral_flux(inp: TimeDomainInput) -> float:
    """Half-wave rectified sum of ``|signal[i]| - |previous_signal[i]|``.

    Summed over the first ``len(signal) // 2`` samples. The first frame of
    a stream has no predecessor and reports 0.0.
    """
    previous = inp.previous_signal
    if previous is None:
        return 0.0
    current = inp.signal
    if previous.shape != current.shape:
        raise InvalidInputError(
            f"previous_signal shape {previous.shape} != signal shape {current.shape}"
        )
    half = current.shape[0] // 2
    diff = np.abs(current[:half]) - np.abs(previous[:half])
    return float(np.sum((diff + np.abs(diff)) / 2))
