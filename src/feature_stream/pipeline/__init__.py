"""Streaming frame analysis."""

from feature_stream.pipeline.analyzer import StreamingAnalyzer
from feature_stream.pipeline.frame_context import AnalysisResources, FeatureSet, FrameContext
from feature_stream.pipeline.framing import RollingBuffer, frame

__all__ = [
    "AnalysisResources",
    "FeatureSet",
    "FrameContext",
    "RollingBuffer",
    "StreamingAnalyzer",
    "frame",
]
