"""Closed set of feature names and their static dispatch table.

Every Feature maps to exactly one (input family, extractor) pair. Names
are snake_case; the camelCase spellings (``spectralCentroid``) are
accepted as aliases.
"""

import re
from enum import Enum
from typing import Any, Callable, Dict, NamedTuple

from feature_stream.extractors import cepstral, chroma, perceptual, shape, spectral, time_domain


class InputFamily(Enum):
    """Which input record an extractor consumes."""

    TIME_DOMAIN = "time_domain"
    SPECTRAL = "spectral"
    PERCEPTUAL = "perceptual"
    CEPSTRAL = "cepstral"
    CHROMA = "chroma"


class Feature(str, Enum):
    BUFFER = "buffer"
    RMS = "rms"
    ENERGY = "energy"
    ZCR = "zcr"
    COMPLEX_SPECTRUM = "complex_spectrum"
    AMPLITUDE_SPECTRUM = "amplitude_spectrum"
    POWER_SPECTRUM = "power_spectrum"
    SPECTRAL_CENTROID = "spectral_centroid"
    SPECTRAL_SPREAD = "spectral_spread"
    SPECTRAL_SKEWNESS = "spectral_skewness"
    SPECTRAL_KURTOSIS = "spectral_kurtosis"
    SPECTRAL_SLOPE = "spectral_slope"
    SPECTRAL_ROLLOFF = "spectral_rolloff"
    SPECTRAL_FLATNESS = "spectral_flatness"
    SPECTRAL_CREST = "spectral_crest"
    SPECTRAL_FLUX = "spectral_flux"
    LOUDNESS = "loudness"
    PERCEPTUAL_SPREAD = "perceptual_spread"
    PERCEPTUAL_SHARPNESS = "perceptual_sharpness"
    MEL_BANDS = "mel_bands"
    MFCC = "mfcc"
    CHROMA = "chroma"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            snake = re.sub(r"(?<!^)(?=[A-Z])", "_", value).lower()
            for member in cls:
                if member.value == snake:
                    return member
        return None

    @classmethod
    def parse(cls, name) -> "Feature":
        """Feature for a member, snake_case or camelCase name."""
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"Unknown feature {name!r}; expected one of {[f.value for f in cls]}"
            ) from None


class Extractor(NamedTuple):
    family: InputFamily
    func: Callable[[Any], Any]


EXTRACTORS: Dict[Feature, Extractor] = {
    Feature.BUFFER: Extractor(InputFamily.TIME_DOMAIN, time_domain.buffer),
    Feature.RMS: Extractor(InputFamily.TIME_DOMAIN, time_domain.rms),
    Feature.ENERGY: Extractor(InputFamily.TIME_DOMAIN, time_domain.energy),
    Feature.ZCR: Extractor(InputFamily.TIME_DOMAIN, time_domain.zcr),
    Feature.COMPLEX_SPECTRUM: Extractor(InputFamily.SPECTRAL, spectral.complex_spectrum),
    Feature.AMPLITUDE_SPECTRUM: Extractor(InputFamily.SPECTRAL, spectral.amplitude_spectrum),
    Feature.POWER_SPECTRUM: Extractor(InputFamily.SPECTRAL, spectral.extract_power_spectrum),
    Feature.SPECTRAL_CENTROID: Extractor(InputFamily.SPECTRAL, shape.spectral_centroid),
    Feature.SPECTRAL_SPREAD: Extractor(InputFamily.SPECTRAL, shape.spectral_spread),
    Feature.SPECTRAL_SKEWNESS: Extractor(InputFamily.SPECTRAL, shape.spectral_skewness),
    Feature.SPECTRAL_KURTOSIS: Extractor(InputFamily.SPECTRAL, shape.spectral_kurtosis),
    Feature.SPECTRAL_SLOPE: Extractor(InputFamily.SPECTRAL, shape.spectral_slope),
    Feature.SPECTRAL_ROLLOFF: Extractor(InputFamily.SPECTRAL, shape.spectral_rolloff),
    Feature.SPECTRAL_FLATNESS: Extractor(InputFamily.SPECTRAL, shape.spectral_flatness),
    Feature.SPECTRAL_CREST: Extractor(InputFamily.SPECTRAL, shape.spectral_crest),
    Feature.SPECTRAL_FLUX: Extractor(InputFamily.TIME_DOMAIN, time_domain.spectral_flux),
    Feature.LOUDNESS: Extractor(InputFamily.PERCEPTUAL, perceptual.loudness),
    Feature.PERCEPTUAL_SPREAD: Extractor(InputFamily.PERCEPTUAL, perceptual.perceptual_spread),
    Feature.PERCEPTUAL_SHARPNESS: Extractor(InputFamily.PERCEPTUAL, perceptual.perceptual_sharpness),
    Feature.MEL_BANDS: Extractor(InputFamily.CEPSTRAL, cepstral.mel_bands),
    Feature.MFCC: Extractor(InputFamily.CEPSTRAL, cepstral.mfcc),
    Feature.CHROMA: Extractor(InputFamily.CHROMA, chroma.chroma),
}

_missing = set(Feature) - set(EXTRACTORS)
if _missing:
    raise RuntimeError(f"features without an extractor: {sorted(f.value for f in _missing)}")
