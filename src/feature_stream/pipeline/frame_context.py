"""Per-frame extraction: spectrum construction and feature dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import numpy as np
from scipy.fft import rfft

from feature_stream.audio.config import AnalyzerConfig
from feature_stream.audio.filterbanks import chroma_filter_bank, mel_filter_bank
from feature_stream.audio.scales import bark_scale
from feature_stream.audio.windowing import apply_window
from feature_stream.errors import FeatureStreamError, InvalidInputError
from feature_stream.extractors.inputs import (
    CepstralInput,
    ChromaInput,
    PerceptualInput,
    SpectralInput,
    TimeDomainInput,
)
from feature_stream.extractors.registry import EXTRACTORS, Feature, InputFamily

logger = logging.getLogger(__name__)

# Feature name -> scalar, vector or record; a failed feature maps to None.
FeatureSet = Dict[str, Any]


@dataclass(frozen=True)
class AnalysisResources:
    """Read-only tables derived from a config; safe to share across analyzers."""

    mel_filter_bank: np.ndarray
    chroma_filter_bank: np.ndarray
    bark_scale: np.ndarray

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> "AnalysisResources":
        return cls(
            mel_filter_bank=mel_filter_bank(
                config.mel_filter_count, config.sample_rate, config.buffer_size
            ),
            chroma_filter_bank=chroma_filter_bank(
                config.chroma_bands, config.sample_rate, config.buffer_size
            ),
            bark_scale=bark_scale(config.buffer_size, config.sample_rate, config.buffer_size),
        )


def _spectrum(signal: np.ndarray, window: str, n_bins: int):
    """(complex spectrum, amplitude spectrum truncated to ``n_bins``)."""
    complex_spectrum = rfft(apply_window(signal, window))
    return complex_spectrum, np.abs(complex_spectrum[:n_bins])


class FrameContext:
    """One frame, its predecessor, and lazily built extractor inputs.

    Spectra and input records are computed at most once per frame no
    matter how many features share them.
    """

    def __init__(
        self,
        config: AnalyzerConfig,
        resources: AnalysisResources,
        signal: np.ndarray,
        previous_signal: Optional[np.ndarray] = None,
    ):
        signal = np.asarray(signal, dtype=np.float64)
        if signal.shape != (config.buffer_size,):
            raise InvalidInputError(
                f"frame must have shape ({config.buffer_size},), got {signal.shape}"
            )
        if previous_signal is not None:
            previous_signal = np.asarray(previous_signal, dtype=np.float64)
            if previous_signal.shape != signal.shape:
                raise InvalidInputError(
                    f"previous frame shape {previous_signal.shape} != frame shape {signal.shape}"
                )
        self.config = config
        self.resources = resources
        self.signal = signal
        self.previous_signal = previous_signal
        self._spectra = None
        self._inputs: Dict[InputFamily, Any] = {}

    def _ensure_spectra(self):
        if self._spectra is None:
            n_bins = self.config.spectrum_bins
            window = self.config.windowing_function
            self._spectra = _spectrum(self.signal, window, n_bins)
        return self._spectra

    def _build_input(self, family: InputFamily):
        if family is InputFamily.TIME_DOMAIN:
            return TimeDomainInput(self.signal, self.previous_signal)
        complex_spectrum, amp = self._ensure_spectra()
        if family is InputFamily.SPECTRAL:
            return SpectralInput(
                amp,
                sample_rate=self.config.sample_rate,
                buffer_size=self.config.buffer_size,
                complex_spectrum=complex_spectrum,
            )
        if family is InputFamily.PERCEPTUAL:
            return PerceptualInput(
                amp, self.resources.bark_scale, self.config.number_of_bark_bands
            )
        if family is InputFamily.CEPSTRAL:
            return CepstralInput(
                amp, self.resources.mel_filter_bank, self.config.number_of_mfcc_coefficients
            )
        return ChromaInput(amp, self.resources.chroma_filter_bank)

    def input_for(self, family: InputFamily):
        if family not in self._inputs:
            self._inputs[family] = self._build_input(family)
        return self._inputs[family]

    def extract_one(self, feature) -> Any:
        feature = Feature.parse(feature)
        extractor = EXTRACTORS[feature]
        return extractor.func(self.input_for(extractor.family))

    def extract(self, features: Iterable, strict: bool = True) -> FeatureSet:
        """Extract ``features`` into a name -> value mapping.

        With ``strict`` any FeatureStreamError propagates. Otherwise each
        failing feature is logged and reported as None so the remaining
        features of the frame are still delivered.
        """
        results: FeatureSet = {}
        for name in features:
            feature = Feature.parse(name)
            if strict:
                results[feature.value] = self.extract_one(feature)
                continue
            try:
                results[feature.value] = self.extract_one(feature)
            except FeatureStreamError as exc:
                logger.warning("feature %s failed: %s", feature.value, exc)
                results[feature.value] = None
        return results
