"""Streaming frame analyzer: audio blocks -> hop-spaced frames -> features -> callback.

Blocks of any size are appended to a rolling buffer; every time it holds a
full frame, frames are sliced at hop stride, the requested extractors run
on (frame, previous frame), and the result is handed to the callback while
the analyzer is running. Framing does not depend on where block boundaries
fall.

Interface:
  analyzer = StreamingAnalyzer(
      AnalyzerConfig(sample_rate=44_100, buffer_size=512, hop_size=256,
                     features=("rms", "spectral_centroid")),
      callback=print,
  )
  analyzer.start()
  analyzer.process_chunk(block)   # once per block from the audio source
  analyzer.get(["mfcc"])          # on demand, latest frame
"""

from __future__ import annotations

import logging
from numbers import Integral
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from feature_stream.audio.config import AnalyzerConfig
from feature_stream.errors import (
    BufferTooShortError,
    InvalidConfigurationError,
    InvalidInputError,
)
from feature_stream.pipeline.frame_context import AnalysisResources, FeatureSet, FrameContext
from feature_stream.pipeline.framing import RollingBuffer, frame

logger = logging.getLogger(__name__)

FeatureCallback = Callable[[FeatureSet], None]


class StreamingAnalyzer:
    """Owns the rolling buffer, previous-frame state and start/stop control.

    Single-threaded: process_chunk() extracts and delivers every frame it
    produces before returning, in temporal order.
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        callback: Optional[FeatureCallback] = None,
        source: Optional[Iterable[np.ndarray]] = None,
        resources: Optional[AnalysisResources] = None,
    ):
        self.config = config or AnalyzerConfig()
        if callback is not None and not callable(callback):
            raise InvalidConfigurationError("callback must be callable")
        self.callback = callback
        self.resources = resources or AnalysisResources.from_config(self.config)

        self._features = self.config.features
        self._channel = self.config.channel
        self._running = self.config.start_immediately
        # Room for one frame plus a typical block minus a hop; grows if needed.
        self._buffer = RollingBuffer(2 * self.config.buffer_size, dtype=np.float64)
        self._frame: Optional[np.ndarray] = None
        self._previous_frame: Optional[np.ndarray] = None
        self._source: Optional[Iterable[np.ndarray]] = None
        if source is not None:
            self.set_source(source)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def features(self) -> tuple:
        return self._features

    @property
    def channel(self) -> int:
        return self._channel

    @property
    def frame(self) -> Optional[np.ndarray]:
        """Most recently completed frame."""
        return None if self._frame is None else self._frame.copy()

    @property
    def previous_frame(self) -> Optional[np.ndarray]:
        """Frame completed just before ``frame``."""
        return None if self._previous_frame is None else self._previous_frame.copy()

    @property
    def buffered_samples(self) -> int:
        """Samples waiting for enough data to complete the next frame."""
        return len(self._buffer)

    def _parse_features(self, features) -> tuple:
        return self.config.with_features(features).features

    def start(self, features: Optional[Sequence[str]] = None) -> None:
        """Begin delivering features to the callback, optionally changing the list."""
        if features is not None:
            self._features = self._parse_features(features)
        self._running = True
        logger.info("analyzer started: %s", ", ".join(self._features) or "(no features)")

    def stop(self) -> None:
        """Suppress callback delivery; framing and state updates continue."""
        self._running = False
        logger.info("analyzer stopped")

    def set_channel(self, channel: int) -> bool:
        """Select the input channel; out-of-range values are logged and ignored."""
        if isinstance(channel, Integral) and not isinstance(channel, bool) and 0 <= channel < self.config.inputs:
            self._channel = int(channel)
            return True
        logger.warning(
            "Channel %s does not exist. Make sure 'inputs' is greater than %s "
            "when constructing the analyzer (inputs=%d).",
            channel, channel, self.config.inputs,
        )
        return False

    def set_source(self, source: Iterable[np.ndarray]) -> None:
        """Bind the upstream block provider drained by run()."""
        self._source = source
        logger.info("source set: %s", type(source).__name__)

    def run(self) -> int:
        """Feed every block of the bound source through process_chunk().

        Returns:
            Number of frames produced.
        """
        if self._source is None:
            raise InvalidConfigurationError("no source bound; call set_source() first")
        produced = 0
        for block in self._source:
            produced += len(self.process_chunk(block))
        return produced

    def _select_channel(self, chunk) -> np.ndarray:
        samples = np.asarray(chunk, dtype=np.float64)
        if samples.ndim == 1:
            return samples
        if samples.ndim == 2:
            if samples.shape[1] <= self._channel:
                raise InvalidInputError(
                    f"block has {samples.shape[1]} channel(s), channel {self._channel} requested"
                )
            return samples[:, self._channel]
        raise InvalidInputError(f"block must be 1-D or 2-D, got shape {samples.shape}")

    def process_chunk(self, chunk: np.ndarray) -> List[FeatureSet]:
        """Buffer one block and extract every frame it completes.

        Args:
            chunk: (n_samples,) or (n_samples, inputs) float samples.

        Returns:
            Feature sets of the frames produced, in order (also delivered
            to the callback while running). Empty while a frame is still
            incomplete.

        An exception raised by the callback propagates. Frames after the
        one being delivered stay buffered and come out of the next call.
        """
        self._buffer.push(self._select_channel(chunk))
        try:
            frames = frame(self._buffer.get_all(), self.config.buffer_size, self.config.hop_length)
        except BufferTooShortError:
            logger.debug(
                "buffered %d/%d samples, no frame yet", len(self._buffer), self.config.buffer_size
            )
            return []
        results: List[FeatureSet] = []
        for current in frames:
            context = FrameContext(self.config, self.resources, current, self._frame)
            features = context.extract(self._features, strict=False)
            # Frame state and buffer advance before the callback runs.
            self._previous_frame = self._frame
            self._frame = current
            self._buffer.consume(self.config.hop_length)
            results.append(features)
            if self._running and self.callback is not None:
                self.callback(features)
        return results

    def get(self, features: Optional[Sequence[str]] = None) -> Optional[FeatureSet]:
        """Extract features from the latest frame; None before the first frame."""
        if self._frame is None:
            return None
        names = self._features if features is None else self._parse_features(features)
        context = FrameContext(self.config, self.resources, self._frame, self._previous_frame)
        return context.extract(names, strict=True)

    def extract(
        self,
        features: Sequence[str],
        signal: np.ndarray,
        previous_signal: Optional[np.ndarray] = None,
    ) -> FeatureSet:
        """One-shot extraction on an arbitrary frame; stream state is untouched."""
        context = FrameContext(self.config, self.resources, signal, previous_signal)
        return context.extract(self._parse_features(features), strict=True)

    def reset(self) -> None:
        """Drop buffered samples and frame history."""
        self._buffer.clear()
        self._frame = None
        self._previous_frame = None
