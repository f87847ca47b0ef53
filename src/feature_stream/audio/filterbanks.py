"""Mel and chroma filter banks.

Both banks are pure functions of (filter count, sample rate, buffer size),
built once per configuration and cached. Returned arrays are read-only so
one bank can be shared by every analyzer with the same configuration.
"""

import logging
from functools import lru_cache

import numpy as np

from feature_stream.audio.scales import freq_to_mel, hz_to_octaves, mel_to_freq
from feature_stream.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def mel_filter_bank(num_filters: int, sample_rate: float, buffer_size: int) -> np.ndarray:
    """Build a triangular mel filter bank, shape (num_filters, buffer_size // 2 + 1).

    ``num_filters + 2`` points are spaced linearly in mel between 0 Hz and
    Nyquist and mapped to FFT bins with ``floor((buffer_size + 1) * f / sr)``.
    Filter ``j`` rises from 0 to 1 over ``[bin[j], bin[j+1])`` and falls
    from 1 to 0 over ``[bin[j+1], bin[j+2])``. Rows are not area-normalized.
    """
    if num_filters < 1:
        raise InvalidConfigurationError("num_filters must be >= 1")
    n_bins = buffer_size // 2 + 1
    mel_points = np.linspace(freq_to_mel(0.0), freq_to_mel(sample_rate / 2), num_filters + 2)
    hz_points = mel_to_freq(mel_points)
    bin_points = np.floor((buffer_size + 1) * hz_points / sample_rate).astype(int)
    bin_points = np.clip(bin_points, 0, n_bins - 1)

    filters = np.zeros((num_filters, n_bins))
    collapsed = 0
    for j in range(num_filters):
        left, center, right = bin_points[j], bin_points[j + 1], bin_points[j + 2]
        # Coinciding boundaries leave that slope empty.
        if center > left:
            filters[j, left:center] = (np.arange(left, center) - left) / (center - left)
        if right > center:
            filters[j, center:right] = (right - np.arange(center, right)) / (right - center)
        if right == left:
            collapsed += 1
    if collapsed:
        logger.debug(
            "mel bank (%d filters, %d Hz, %d samples): %d collapsed triangle(s)",
            num_filters, sample_rate, buffer_size, collapsed,
        )
    filters.setflags(write=False)
    return filters


def _normalize_columns(weights: np.ndarray) -> np.ndarray:
    """Scale each column to unit L2 norm; all-zero columns are left alone."""
    norms = np.sqrt(np.sum(weights ** 2, axis=0))
    norms[norms == 0] = 1.0
    return weights / norms


@lru_cache(maxsize=16)
def chroma_filter_bank(
    num_filters: int,
    sample_rate: float,
    buffer_size: int,
    center_octave: float = 5.0,
    octave_width: float = 2.0,
    base_c: bool = True,
    a440: float = 440.0,
) -> np.ndarray:
    """Build a chroma projection matrix, shape (num_filters, buffer_size // 2).

    Each FFT bin is assigned a fractional pitch class and spread onto the
    ``num_filters`` chroma rows with a gaussian whose width follows the bin
    spacing in pitch units. Columns are L2-normalized, then weighted by a
    gaussian over octaves centred on ``center_octave`` (skipped when
    ``octave_width`` is falsy). With ``base_c`` row 0 is C, otherwise A.
    """
    if num_filters < 1:
        raise InvalidConfigurationError("num_filters must be >= 1")
    if buffer_size < 2:
        raise InvalidConfigurationError("buffer_size must be >= 2 for a chroma bank")

    freqs = sample_rate * np.arange(buffer_size) / buffer_size
    with np.errstate(divide="ignore"):
        freq_bins = num_filters * hz_to_octaves(freqs, a440)
    # 0 Hz has no pitch; put it 1.5 octaves below bin 1.
    freq_bins[0] = freq_bins[1] - 1.5 * num_filters

    bin_widths = np.concatenate([np.maximum(np.diff(freq_bins), 1.0), [1.0]])
    half = int(np.floor(num_filters / 2 + 0.5))
    rows = np.arange(num_filters)[:, np.newaxis]
    peaks = np.mod(10 * num_filters + half + freq_bins[np.newaxis, :] - rows, num_filters) - half

    weights = np.exp(-0.5 * (2 * peaks / bin_widths[np.newaxis, :]) ** 2)
    weights = _normalize_columns(weights)

    if octave_width:
        octave_weights = np.exp(-0.5 * ((freq_bins / num_filters - center_octave) / octave_width) ** 2)
        weights = weights * octave_weights[np.newaxis, :]

    if base_c:
        weights = np.roll(weights, -3, axis=0)

    bank = np.ascontiguousarray(weights[:, : buffer_size // 2])
    logger.debug("chroma bank built: %s", bank.shape)
    bank.setflags(write=False)
    return bank
