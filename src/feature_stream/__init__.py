"""Streaming audio feature extraction - framing, filter banks, extractors, analyzer."""

from typing import Optional, Sequence

import numpy as np

from feature_stream.audio.config import AnalyzerConfig
from feature_stream.extractors.registry import Feature
from feature_stream.pipeline import AnalysisResources, FeatureSet, FrameContext, StreamingAnalyzer

__version__ = "0.1.0"
__all__ = [
    "AnalyzerConfig",
    "Feature",
    "FeatureSet",
    "StreamingAnalyzer",
    "extract",
]


def extract(
    features: Sequence[str],
    signal: np.ndarray,
    previous_signal: Optional[np.ndarray] = None,
    **config_kwargs,
) -> FeatureSet:
    """Extract features from a single frame without a streaming analyzer.

    ``buffer_size`` defaults to ``len(signal)`` (must be a power of two);
    other keyword arguments are passed to AnalyzerConfig.
    """
    signal = np.asarray(signal, dtype=np.float64)
    config_kwargs.setdefault("buffer_size", signal.shape[0] if signal.ndim == 1 else 0)
    config = AnalyzerConfig(features=features, **config_kwargs)
    context = FrameContext(config, AnalysisResources.from_config(config), signal, previous_signal)
    return context.extract(config.features, strict=True)
