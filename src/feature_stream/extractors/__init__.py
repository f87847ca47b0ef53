"""Feature extractor library: pure functions over typed input records."""

from feature_stream.extractors.inputs import (
    CepstralInput,
    ChromaInput,
    PerceptualInput,
    SpectralInput,
    TimeDomainInput,
)
from feature_stream.extractors.perceptual import Loudness
from feature_stream.extractors.registry import EXTRACTORS, Feature, InputFamily

__all__ = [
    "CepstralInput",
    "ChromaInput",
    "EXTRACTORS",
    "Feature",
    "InputFamily",
    "Loudness",
    "PerceptualInput",
    "SpectralInput",
    "TimeDomainInput",
]
