"""Spectral shape statistics over the amplitude spectrum.

Moment-based values are in bin units, rolloff and slope are in Hz.
A silent (all-zero) spectrum yields 0.0 for every statistic here; an
empty spectrum raises EmptySpectrumError.
"""

import numpy as np

from feature_stream.errors import EmptySpectrumError
from feature_stream.extractors.inputs import SpectralInput
from feature_stream.extractors.spectral import is_silent, spectral_moment

# Fraction of total spectral sum kept below the rolloff frequency.
ROLLOFF_FRACTION = 0.99


def _moments(amp: np.ndarray, highest: int) -> list:
    return [spectral_moment(order, amp) for order in range(1, highest + 1)]


def spectral_centroid(inp: SpectralInput) -> float:
    if is_silent(inp.amp_spectrum):
        return 0.0
    return spectral_moment(1, inp.amp_spectrum)


def spectral_spread(inp: SpectralInput) -> float:
    if is_silent(inp.amp_spectrum):
        return 0.0
    m1, m2 = _moments(inp.amp_spectrum, 2)
    return float(np.sqrt(max(m2 - m1 ** 2, 0.0)))


def spectral_skewness(inp: SpectralInput) -> float:
    if is_silent(inp.amp_spectrum):
        return 0.0
    m1, m2, m3 = _moments(inp.amp_spectrum, 3)
    variance = m2 - m1 ** 2
    if variance <= 0:
        return 0.0
    return float((2 * m1 ** 3 - 3 * m1 * m2 + m3) / np.sqrt(variance) ** 3)


def spectral_kurtosis(inp: SpectralInput) -> float:
    if is_silent(inp.amp_spectrum):
        return 0.0
    m1, m2, m3, m4 = _moments(inp.amp_spectrum, 4)
    variance = m2 - m1 ** 2
    if variance <= 0:
        return 0.0
    return float((-3 * m1 ** 4 + 6 * m1 * m2 - 4 * m1 * m3 + m4) / np.sqrt(variance) ** 4)


def spectral_slope(inp: SpectralInput) -> float:
    """Least-squares slope of amplitude against bin frequency (per Hz)."""
    amp = inp.amp_spectrum
    n = amp.shape[0]
    if n < 2:
        raise EmptySpectrumError("spectral slope needs at least two bins")
    freqs = np.arange(n, dtype=np.float64) * inp.sample_rate / inp.buffer_size
    denominator = n * np.sum(freqs ** 2) - np.sum(freqs) ** 2
    if denominator == 0 or is_silent(amp):
        return 0.0
    numerator = n * np.sum(freqs * amp) - np.sum(freqs) * np.sum(amp)
    return float(numerator / denominator)


def spectral_rolloff(inp: SpectralInput) -> float:
    """Frequency below which ROLLOFF_FRACTION of the spectral sum lies.

    Bins are removed from the top until what remains no longer exceeds
    the threshold; the result is the first removed bin scaled by the
    Nyquist bin width ``sample_rate / (2 * (len - 1))``.
    """
    amp = inp.amp_spectrum
    n = amp.shape[0]
    if n < 2:
        raise EmptySpectrumError("spectral rolloff needs at least two bins")
    total = np.sum(amp)
    if total == 0:
        return 0.0
    nyquist_bin = inp.sample_rate / (2 * (n - 1))
    remaining = total - np.cumsum(amp[::-1])
    below = remaining <= ROLLOFF_FRACTION * total
    removed = int(np.argmax(below)) if below.any() else n - 1
    return float((n - 1 - removed) * nyquist_bin)


def spectral_flatness(inp: SpectralInput) -> float:
    """Geometric mean over arithmetic mean; 0.0 if any bin is zero."""
    amp = inp.amp_spectrum
    if is_silent(amp):
        return 0.0
    with np.errstate(divide="ignore"):
        geometric = np.exp(np.mean(np.log(amp)))
    return float(geometric / np.mean(amp))


def spectral_crest(inp: SpectralInput) -> float:
    amp = inp.amp_spectrum
    if is_silent(amp):
        return 0.0
    return float(np.max(amp) / np.sqrt(np.mean(amp ** 2)))
