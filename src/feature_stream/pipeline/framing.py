"""Frame slicing and the rolling sample buffer behind the streaming analyzer."""

from typing import List

import numpy as np

from feature_stream.errors import BufferTooShortError, InvalidConfigurationError


def frame(buffer: np.ndarray, frame_length: int, hop_length: int) -> List[np.ndarray]:
    """Slice ``buffer`` into ``1 + (len - frame_length) // hop_length`` frames.

    Raises:
        BufferTooShortError: fewer samples than one frame.
        InvalidConfigurationError: frame or hop length below 1.
    """
    if hop_length < 1:
        raise InvalidConfigurationError("hop_length cannot be less than 1")
    if frame_length < 1:
        raise InvalidConfigurationError("frame_length cannot be less than 1")
    if len(buffer) < frame_length:
        raise BufferTooShortError(
            f"buffer of {len(buffer)} samples is too short for frame length {frame_length}"
        )
    n_frames = 1 + (len(buffer) - frame_length) // hop_length
    return [
        np.array(buffer[i * hop_length : i * hop_length + frame_length])
        for i in range(n_frames)
    ]


class RollingBuffer:
    """Growable FIFO of samples not yet consumed by hop advancement."""

    def __init__(self, capacity: int, dtype: type = np.float32):
        self.dtype = dtype
        self._data = np.zeros(max(1, capacity), dtype=dtype)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return self._data.shape[0]

    def push(self, chunk: np.ndarray) -> None:
        """Append a chunk, growing the backing array when needed."""
        n = len(chunk)
        needed = self._count + n
        if needed > self.capacity:
            grown = np.zeros(max(needed, 2 * self.capacity), dtype=self.dtype)
            grown[: self._count] = self._data[: self._count]
            self._data = grown
        self._data[self._count : needed] = np.asarray(chunk, dtype=self.dtype)
        self._count = needed

    def consume(self, n: int) -> None:
        """Drop the oldest ``n`` samples."""
        n = min(max(n, 0), self._count)
        remaining = self._count - n
        self._data[:remaining] = self._data[n : self._count]
        self._count = remaining

    def get_all(self) -> np.ndarray:
        """Return all buffered samples in chronological order."""
        return self._data[: self._count].copy()

    def clear(self) -> None:
        self._count = 0
