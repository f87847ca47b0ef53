"""Centralized analyzer configuration.

Defaults:
- Audio: mono 44.1 kHz blocks
- Frames: 512 samples, hop = frame size (no overlap), Hann window
- Filter banks: 26 mel bands, 12 chroma bands, 24 Bark bands
- Cepstrum: 13 MFCC coefficients

The config is immutable; a different frame or hop size means a new
analyzer (filter banks are derived from it once).
"""

from dataclasses import dataclass, replace
from numbers import Integral
from typing import Iterable, Optional, Tuple

from feature_stream.audio.windowing import WINDOW_NAMES, is_power_of_two
from feature_stream.errors import InvalidConfigurationError
from feature_stream.extractors.registry import Feature


@dataclass(frozen=True)
class AnalyzerConfig:
    """Streaming analyzer configuration."""

    # Input
    sample_rate: int = 44_100
    channel: int = 0
    inputs: int = 1  # channels per incoming block

    # Framing
    buffer_size: int = 512
    hop_size: Optional[int] = None  # None -> buffer_size
    windowing_function: str = "hanning"

    # Requested features (names or Feature members)
    features: Tuple[str, ...] = ()

    # Filter banks
    mel_bands: int = 26
    chroma_bands: int = 12
    number_of_bark_bands: int = 24
    number_of_mfcc_coefficients: int = 13

    start_immediately: bool = False

    def __post_init__(self) -> None:
        if self.sample_rate is None or self.sample_rate <= 0:
            raise InvalidConfigurationError(
                f"sample_rate must be > 0, got {self.sample_rate!r}"
            )
        if not is_power_of_two(self.buffer_size):
            raise InvalidConfigurationError(
                f"buffer_size must be a power of two, got {self.buffer_size!r}"
            )
        for name in ("hop_size", "channel", "inputs", "mel_bands", "chroma_bands",
                     "number_of_bark_bands", "number_of_mfcc_coefficients"):
            value = getattr(self, name)
            if name == "hop_size" and value is None:
                continue
            if not _is_int(value):
                raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.hop_size is not None and not 1 <= self.hop_size <= self.buffer_size:
            raise InvalidConfigurationError(
                f"hop_size must be in [1, {self.buffer_size}], got {self.hop_size!r}"
            )
        if self.windowing_function not in WINDOW_NAMES:
            raise InvalidConfigurationError(
                f"Unknown windowing function {self.windowing_function!r}; "
                f"expected one of {sorted(WINDOW_NAMES)}"
            )
        if self.inputs < 1:
            raise InvalidConfigurationError("inputs must be >= 1")
        if not 0 <= self.channel < self.inputs:
            raise InvalidConfigurationError(
                f"channel {self.channel} does not exist for {self.inputs} input(s)"
            )
        for name in ("mel_bands", "chroma_bands", "number_of_bark_bands", "number_of_mfcc_coefficients"):
            if getattr(self, name) < 1:
                raise InvalidConfigurationError(f"{name} must be >= 1")
        # Normalize names early so typos fail at construction, not per frame.
        object.__setattr__(self, "features", _parse_features(self.features))

    @property
    def hop_length(self) -> int:
        """Samples between consecutive frame starts."""
        return self.hop_size if self.hop_size is not None else self.buffer_size

    @property
    def spectrum_bins(self) -> int:
        """Length of the amplitude spectrum."""
        return self.buffer_size // 2

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2

    @property
    def frames_per_second(self) -> float:
        """Number of analysis frames per second of audio."""
        return self.sample_rate / self.hop_length

    @property
    def mel_filter_count(self) -> int:
        """Rows in the mel bank; always enough for the requested MFCCs."""
        return max(self.mel_bands, self.number_of_mfcc_coefficients)

    def with_features(self, features: Iterable[str]) -> "AnalyzerConfig":
        """Copy of this config extracting a different feature list."""
        if isinstance(features, (str, Feature)):
            features = (features,)
        return replace(self, features=tuple(features))


def _is_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _parse_features(features) -> Tuple[str, ...]:
    if isinstance(features, (str, Feature)):
        features = (features,)
    parsed = []
    for name in features:
        try:
            parsed.append(Feature.parse(name).value)
        except ValueError as exc:
            raise InvalidConfigurationError(str(exc)) from exc
    return tuple(parsed)
