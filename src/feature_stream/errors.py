"""Error taxonomy for configuration, framing and feature extraction."""


class FeatureStreamError(Exception):
    """Base class for every error raised by feature_stream."""


class InvalidConfigurationError(FeatureStreamError, ValueError):
    """Bad construction parameters (window, buffer size, hop, features...)."""


class InvalidInputError(FeatureStreamError, TypeError):
    """An extractor received a missing or non array-like input."""


class BufferTooShortError(FeatureStreamError, ValueError):
    """Not enough samples buffered to slice a single frame."""


class InsufficientFilterBankError(FeatureStreamError, ValueError):
    """The mel filter bank has fewer rows than requested MFCC coefficients."""


class EmptySpectrumError(FeatureStreamError, ZeroDivisionError):
    """A spectral statistic was requested over an empty or zero-sum spectrum."""
