"""Perceptual frequency scales: mel, Bark and octave conversions."""

from typing import Union

import numpy as np

ArrayOrFloat = Union[float, np.ndarray]


def freq_to_mel(freq: ArrayOrFloat) -> ArrayOrFloat:
    """Hz -> mel (natural-log form, 1125 * ln(1 + f/700))."""
    return 1125.0 * np.log1p(np.asarray(freq, dtype=np.float64) / 700.0)


def mel_to_freq(mel: ArrayOrFloat) -> ArrayOrFloat:
    """Mel -> Hz; exact inverse of freq_to_mel."""
    return 700.0 * np.expm1(np.asarray(mel, dtype=np.float64) / 1125.0)


def hz_to_octaves(freq: ArrayOrFloat, a440: float = 440.0) -> ArrayOrFloat:
    """Octave number relative to C0 (A440 / 16)."""
    return np.log2(16.0 * np.asarray(freq, dtype=np.float64) / a440)


def bark_scale(length: int, sample_rate: float, buffer_size: int) -> np.ndarray:
    """Bark value of each linear frequency bin ``i * sample_rate / buffer_size``."""
    freqs = np.arange(length, dtype=np.float64) * sample_rate / buffer_size
    scale = 13.0 * np.arctan(freqs / 1315.8) + 3.5 * np.arctan((freqs / 7518.0) ** 2)
    scale.setflags(write=False)
    return scale
