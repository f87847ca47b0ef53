"""Unit tests for Bark-band loudness, perceptual spread and sharpness."""

from __future__ import annotations

import unittest

import numpy as np

from feature_stream.audio.scales import bark_scale
from feature_stream.errors import EmptySpectrumError, InvalidInputError
from feature_stream.extractors import Loudness, PerceptualInput
from feature_stream.extractors.perceptual import (
    bark_band_limits,
    loudness,
    perceptual_sharpness,
    perceptual_spread,
)

SR = 44100
SIZE = 512
BARK = bark_scale(SIZE, SR, SIZE)


def _input(amp, bands: int = 24) -> PerceptualInput:
    return PerceptualInput(np.asarray(amp, dtype=float), BARK, bands)


class TestBarkBandLimits(unittest.TestCase):
    """Tests for bark_band_limits."""

    def test_limits(self) -> None:
        limits = bark_band_limits(BARK, SIZE // 2, 24)
        self.assertEqual(len(limits), 25)
        self.assertEqual(limits[0], 0)
        self.assertEqual(limits[-1], SIZE // 2 - 1)
        self.assertTrue(np.all(np.diff(limits) >= 0))

    def test_low_bands_are_narrow(self) -> None:
        limits = bark_band_limits(BARK, SIZE // 2, 24)
        widths = np.diff(limits)
        self.assertLess(widths[0], widths[-1])

    def test_too_few_bins(self) -> None:
        with self.assertRaises(EmptySpectrumError):
            bark_band_limits(BARK, 1, 24)


class TestLoudness(unittest.TestCase):
    """Tests for loudness and the features derived from it."""

    def test_loudness_record(self) -> None:
        value = loudness(_input(np.ones(SIZE // 2)))
        self.assertIsInstance(value, Loudness)
        self.assertEqual(value.specific.shape, (24,))
        self.assertTrue(np.all(value.specific >= 0))
        self.assertAlmostEqual(value.total, float(np.sum(value.specific)))
        self.assertEqual(value.to_dict()["total"], value.total)

    def test_band_count(self) -> None:
        self.assertEqual(loudness(_input(np.ones(SIZE // 2), bands=12)).specific.shape, (12,))

    def test_band_compression(self) -> None:
        amp = np.zeros(SIZE // 2)
        amp[1] = 16.0  # first band holds bins 0 and 1
        value = loudness(_input(amp))
        self.assertAlmostEqual(value.specific[0], 16.0 ** 0.23)
        self.assertAlmostEqual(value.total, 16.0 ** 0.23)

    def test_silence(self) -> None:
        inp = _input(np.zeros(SIZE // 2))
        self.assertEqual(loudness(inp).total, 0.0)
        self.assertEqual(perceptual_spread(inp), 0.0)
        self.assertEqual(perceptual_sharpness(inp), 0.0)

    def test_spread_single_band(self) -> None:
        amp = np.zeros(SIZE // 2)
        amp[1] = 1.0
        self.assertAlmostEqual(perceptual_spread(_input(amp)), 0.0)

    def test_spread_two_bands(self) -> None:
        amp = np.zeros(SIZE // 2)
        amp[1] = 1.0
        amp[100] = 1.0
        self.assertAlmostEqual(perceptual_spread(_input(amp)), 0.25)

    def test_sharpness_first_band(self) -> None:
        amp = np.zeros(SIZE // 2)
        amp[1] = 1.0
        self.assertAlmostEqual(perceptual_sharpness(_input(amp)), 0.11)

    def _single_band(self, band: int) -> np.ndarray:
        limits = bark_band_limits(BARK, SIZE // 2, 24)
        self.assertLess(limits[band - 1], limits[band])
        amp = np.zeros(SIZE // 2)
        amp[limits[band - 1]] = 1.0
        return amp

    def test_sharpness_linear_weights_up_to_band_15(self) -> None:
        for band in (3, 10, 15):
            with self.subTest(band=band):
                value = perceptual_sharpness(_input(self._single_band(band)))
                self.assertAlmostEqual(value, 0.11 * band)
        low = perceptual_sharpness(_input(self._single_band(3)))
        high = perceptual_sharpness(_input(self._single_band(10)))
        self.assertGreater(high, low)

    def test_sharpness_exponential_weight_above_band_15(self) -> None:
        value = perceptual_sharpness(_input(self._single_band(24)))
        self.assertAlmostEqual(value, 0.11 * 0.066 * np.exp(0.171 * 24))

    def test_invalid_input(self) -> None:
        with self.assertRaises(InvalidInputError):
            PerceptualInput(np.ones(8), None)
        with self.assertRaises(InvalidInputError):
            PerceptualInput(np.ones(8), np.ones(4))


if __name__ == "__main__":
    unittest.main()
