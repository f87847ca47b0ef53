"""Typed input records, one per extractor family.

Each record converts its array fields with numpy on construction and
raises InvalidInputError when a required field is missing or is not
array-like, so extractors can assume clean float arrays.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from feature_stream.errors import InvalidInputError


def _as_array(value, name: str, ndim: int = 1, dtype=np.float64) -> np.ndarray:
    if value is None or isinstance(value, (str, bytes, dict)) or np.ndim(value) == 0:
        raise InvalidInputError(f"Valid {name} is required")
    try:
        arr = np.asarray(value, dtype=dtype)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be numeric: {exc}") from exc
    if arr.ndim != ndim:
        raise InvalidInputError(f"{name} must be {ndim}-D, got shape {arr.shape}")
    return arr


def _optional_array(value, name: str, dtype=np.float64) -> Optional[np.ndarray]:
    if value is None:
        return None
    return _as_array(value, name, dtype=dtype)


@dataclass
class TimeDomainInput:
    """Raw frame samples (rms, energy, zcr, buffer, flux)."""

    signal: np.ndarray
    previous_signal: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.signal = _as_array(self.signal, "signal")
        self.previous_signal = _optional_array(self.previous_signal, "previous_signal")


@dataclass
class SpectralInput:
    """Amplitude spectrum plus the sampling facts shape statistics need."""

    amp_spectrum: np.ndarray
    sample_rate: float = 44_100
    buffer_size: Optional[int] = None  # None -> 2 * len(amp_spectrum)
    complex_spectrum: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        self.amp_spectrum = _as_array(self.amp_spectrum, "amp_spectrum")
        self.complex_spectrum = _optional_array(
            self.complex_spectrum, "complex_spectrum", dtype=np.complex128
        )
        if self.buffer_size is None:
            self.buffer_size = 2 * self.amp_spectrum.shape[0]
        if self.sample_rate is None or self.sample_rate <= 0:
            raise InvalidInputError(f"sample_rate must be > 0, got {self.sample_rate!r}")


@dataclass
class PerceptualInput:
    """Amplitude spectrum and Bark scale for loudness-based features."""

    amp_spectrum: np.ndarray
    bark_scale: np.ndarray
    number_of_bark_bands: int = 24

    def __post_init__(self) -> None:
        self.amp_spectrum = _as_array(self.amp_spectrum, "amp_spectrum")
        self.bark_scale = _as_array(self.bark_scale, "bark_scale")
        if self.bark_scale.shape[0] < self.amp_spectrum.shape[0]:
            raise InvalidInputError(
                f"bark_scale has {self.bark_scale.shape[0]} entries, "
                f"need at least {self.amp_spectrum.shape[0]}"
            )
        if self.number_of_bark_bands < 1:
            raise InvalidInputError("number_of_bark_bands must be >= 1")


@dataclass
class CepstralInput:
    """Amplitude spectrum and mel filter bank (mel bands, MFCC)."""

    amp_spectrum: np.ndarray
    mel_filter_bank: np.ndarray
    number_of_mfcc_coefficients: Optional[int] = 13

    def __post_init__(self) -> None:
        self.amp_spectrum = _as_array(self.amp_spectrum, "amp_spectrum")
        self.mel_filter_bank = _as_array(self.mel_filter_bank, "mel_filter_bank", ndim=2)
        if self.mel_filter_bank.shape[1] < self.amp_spectrum.shape[0]:
            raise InvalidInputError(
                f"mel_filter_bank covers {self.mel_filter_bank.shape[1]} bins, "
                f"spectrum has {self.amp_spectrum.shape[0]}"
            )


@dataclass
class ChromaInput:
    """Amplitude spectrum and chroma projection matrix."""

    amp_spectrum: np.ndarray
    chroma_filter_bank: np.ndarray

    def __post_init__(self) -> None:
        self.amp_spectrum = _as_array(self.amp_spectrum, "amp_spectrum")
        self.chroma_filter_bank = _as_array(self.chroma_filter_bank, "chroma_filter_bank", ndim=2)
        if self.chroma_filter_bank.shape[1] < self.amp_spectrum.shape[0]:
            raise InvalidInputError(
                f"chroma_filter_bank covers {self.chroma_filter_bank.shape[1]} bins, "
                f"spectrum has {self.amp_spectrum.shape[0]}"
            )
