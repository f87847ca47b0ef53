"""Bark-band loudness, perceptual spread and perceptual sharpness."""

from dataclasses import dataclass

import numpy as np

from feature_stream.errors import EmptySpectrumError
from feature_stream.extractors.inputs import PerceptualInput

# Stevens-style compression exponent applied to each band sum.
LOUDNESS_EXPONENT = 0.23


@dataclass
class Loudness:
    """Per-band (specific) loudness and its total."""

    specific: np.ndarray
    total: float

    def to_dict(self) -> dict:
        return {"specific": self.specific.tolist(), "total": self.total}


def bark_band_limits(bark_scale: np.ndarray, n_bins: int, n_bands: int) -> np.ndarray:
    """Bin boundaries splitting ``[0, n_bins - 1)`` into ``n_bands`` equal-Bark bands.

    Band ``b`` starts at the first bin whose Bark value exceeds
    ``b * top / n_bands`` where ``top`` is the Bark value of the last bin.
    The last bin itself closes the final band and is not summed.
    """
    if n_bins < 2:
        raise EmptySpectrumError("loudness needs at least two spectrum bins")
    scale = bark_scale[:n_bins]
    top = scale[-1]
    edges = np.arange(1, n_bands) * top / n_bands
    limits = np.empty(n_bands + 1, dtype=int)
    limits[0] = 0
    limits[1:n_bands] = np.searchsorted(scale, edges, side="right")
    limits[n_bands] = n_bins - 1
    return np.minimum(limits, n_bins - 1)


def loudness(inp: PerceptualInput) -> Loudness:
    amp = inp.amp_spectrum
    limits = bark_band_limits(inp.bark_scale, amp.shape[0], inp.number_of_bark_bands)
    sums = np.array([np.sum(amp[lo:hi]) for lo, hi in zip(limits[:-1], limits[1:])])
    specific = np.power(sums, LOUDNESS_EXPONENT)
    return Loudness(specific=specific, total=float(np.sum(specific)))


def perceptual_spread(inp: PerceptualInput) -> float:
    """((total - max specific) / total) ** 2; 0.0 for zero loudness."""
    value = loudness(inp)
    if value.total == 0:
        return 0.0
    return float(((value.total - np.max(value.specific)) / value.total) ** 2)


def _sharpness_weights(n_bands: int) -> np.ndarray:
    band = np.arange(1, n_bands + 1, dtype=np.float64)
    return np.where(band <= 15, band, 0.066 * np.exp(0.171 * band))


def perceptual_sharpness(inp: PerceptualInput) -> float:
    """Weighted specific loudness scaled by 0.11 / total; 0.0 for zero loudness."""
    value = loudness(inp)
    if value.total == 0:
        return 0.0
    weighted = np.sum(value.specific * _sharpness_weights(value.specific.shape[0]))
    return float(weighted * 0.11 / value.total)
