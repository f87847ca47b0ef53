"""Block sources that feed the analyzer from audio already on disk."""

from pathlib import Path
from typing import Iterator, Tuple, Union

import numpy as np
import scipy.io.wavfile as wavfile


def read_wav(path: Union[str, Path]) -> Tuple[int, np.ndarray]:
    """Load a WAV file as float32 in [-1, 1].

    Returns:
        (sample_rate, audio) with audio shaped (n_samples,) for mono or
        (n_samples, n_channels) otherwise.
    """
    sr, audio = wavfile.read(str(path))
    if audio.dtype == np.int16:
        audio = audio.astype(np.float32) / 32768.0
    elif audio.dtype == np.int32:
        audio = audio.astype(np.float32) / 2147483648.0
    elif audio.dtype == np.uint8:
        audio = (audio.astype(np.float32) - 128.0) / 128.0
    else:
        audio = audio.astype(np.float32)
    return sr, audio


def iter_blocks(audio: np.ndarray, block_size: int) -> Iterator[np.ndarray]:
    """Yield consecutive blocks of ``block_size`` samples (last may be short)."""
    if block_size < 1:
        raise ValueError("block_size must be >= 1")
    for i in range(0, len(audio), block_size):
        block = audio[i : i + block_size]
        if len(block) > 0:
            yield block


def read_wav_blocks(
    path: Union[str, Path], block_size: int
) -> Tuple[int, int, Iterator[np.ndarray]]:
    """(sample_rate, channels, block iterator) for ``path``.

    The file is read eagerly, so a missing or malformed file raises here
    rather than on the first block.
    """
    sr, audio = read_wav(path)
    channels = 1 if audio.ndim == 1 else audio.shape[1]
    return sr, channels, iter_blocks(audio, block_size)
