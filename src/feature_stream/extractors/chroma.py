"""Chromagram: spectral energy folded onto pitch classes."""

import numpy as np

from feature_stream.extractors.inputs import ChromaInput


def chroma(inp: ChromaInput) -> np.ndarray:
    """Project the spectrum on each chroma row, normalized to a peak of 1."""
    bank = inp.chroma_filter_bank[:, : inp.amp_spectrum.shape[0]]
    chromagram = bank @ inp.amp_spectrum
    peak = np.max(chromagram) if chromagram.size else 0.0
    if not peak:
        return chromagram
    return chromagram / peak
