"""Spectral primitives shared by the shape, cepstral and chroma extractors."""

import numpy as np

from feature_stream.errors import EmptySpectrumError, InvalidInputError
from feature_stream.extractors.inputs import SpectralInput


def power_spectrum(amp_spectrum: np.ndarray) -> np.ndarray:
    """Element-wise square of the amplitude spectrum."""
    return np.square(np.asarray(amp_spectrum, dtype=np.float64))


def spectral_moment(order: int, amp_spectrum: np.ndarray) -> float:
    """Raw bin-index moment: sum(k**order * |amp[k]|) / sum(amp[k]).

    Raises:
        EmptySpectrumError: the spectrum is empty or sums to zero.
    """
    amp = np.asarray(amp_spectrum, dtype=np.float64)
    if amp.size == 0:
        raise EmptySpectrumError("spectral moment of an empty spectrum")
    denominator = np.sum(amp)
    if denominator == 0:
        raise EmptySpectrumError("spectral moment of a zero-sum spectrum")
    k = np.arange(amp.shape[0], dtype=np.float64)
    return float(np.sum(k ** order * np.abs(amp)) / denominator)


def is_silent(amp_spectrum: np.ndarray) -> bool:
    """True for a non-empty spectrum with no energy.

    Raises:
        EmptySpectrumError: the spectrum has no bins.
    """
    if amp_spectrum.size == 0:
        raise EmptySpectrumError("empty amplitude spectrum")
    return not np.any(amp_spectrum)


def amplitude_spectrum(inp: SpectralInput) -> np.ndarray:
    return inp.amp_spectrum.copy()


def extract_power_spectrum(inp: SpectralInput) -> np.ndarray:
    return power_spectrum(inp.amp_spectrum)


def complex_spectrum(inp: SpectralInput) -> np.ndarray:
    if inp.complex_spectrum is None:
        raise InvalidInputError("Valid complex_spectrum is required")
    return inp.complex_spectrum.copy()
