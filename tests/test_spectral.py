"""Unit tests for spectral primitives and spectral shape statistics."""

from __future__ import annotations

import math
import unittest

import numpy as np

from feature_stream.errors import EmptySpectrumError, InvalidInputError
from feature_stream.extractors import SpectralInput
from feature_stream.extractors import shape
from feature_stream.extractors.spectral import (
    amplitude_spectrum,
    complex_spectrum,
    extract_power_spectrum,
    power_spectrum,
    spectral_moment,
)

SILENCE_FEATURES = (
    shape.spectral_centroid,
    shape.spectral_spread,
    shape.spectral_skewness,
    shape.spectral_kurtosis,
    shape.spectral_slope,
    shape.spectral_rolloff,
    shape.spectral_flatness,
    shape.spectral_crest,
)


def _delta(n: int, k: int) -> np.ndarray:
    amp = np.zeros(n)
    amp[k] = 1.0
    return amp


class TestPrimitives(unittest.TestCase):
    """Tests for power_spectrum and spectral_moment."""

    def test_power_spectrum(self) -> None:
        np.testing.assert_allclose(power_spectrum([1.0, 2.0, 0.5]), [1.0, 4.0, 0.25])
        np.testing.assert_allclose(extract_power_spectrum(SpectralInput([3.0, 0.0])), [9.0, 0.0])

    def test_moment_of_delta(self) -> None:
        amp = _delta(16, 5)
        self.assertAlmostEqual(spectral_moment(1, amp), 5.0)
        self.assertAlmostEqual(spectral_moment(2, amp), 25.0)

    def test_moment_zero_sum(self) -> None:
        with self.assertRaises(EmptySpectrumError):
            spectral_moment(1, np.zeros(8))
        with self.assertRaises(EmptySpectrumError):
            spectral_moment(1, np.array([]))

    def test_zero_division_family(self) -> None:
        with self.assertRaises(ZeroDivisionError):
            spectral_moment(2, np.zeros(4))

    def test_passthrough(self) -> None:
        amp = np.arange(4.0)
        np.testing.assert_array_equal(amplitude_spectrum(SpectralInput(amp)), amp)
        values = np.array([1 + 1j, 2 - 1j, 0j])
        np.testing.assert_array_equal(complex_spectrum(SpectralInput(amp, complex_spectrum=values)), values)
        with self.assertRaises(InvalidInputError):
            complex_spectrum(SpectralInput(amp))


class TestShape(unittest.TestCase):
    """Tests for centroid, spread, skewness, kurtosis, slope, rolloff, flatness, crest."""

    def test_centroid_of_delta(self) -> None:
        self.assertAlmostEqual(shape.spectral_centroid(SpectralInput(_delta(32, 7))), 7.0)

    def test_delta_has_no_spread(self) -> None:
        inp = SpectralInput(_delta(32, 7))
        self.assertAlmostEqual(shape.spectral_spread(inp), 0.0, places=6)
        self.assertEqual(shape.spectral_skewness(inp), 0.0)
        self.assertEqual(shape.spectral_kurtosis(inp), 0.0)

    def test_two_bins(self) -> None:
        amp = np.zeros(8)
        amp[0] = amp[2] = 1.0
        inp = SpectralInput(amp)
        self.assertAlmostEqual(shape.spectral_centroid(inp), 1.0)
        self.assertAlmostEqual(shape.spectral_spread(inp), 1.0)
        self.assertAlmostEqual(shape.spectral_skewness(inp), 0.0)
        self.assertAlmostEqual(shape.spectral_kurtosis(inp), 1.0)

    def test_silence_is_zero(self) -> None:
        inp = SpectralInput(np.zeros(64))
        for extractor in SILENCE_FEATURES:
            with self.subTest(extractor=extractor.__name__):
                self.assertEqual(extractor(inp), 0.0)

    def test_empty_spectrum_raises(self) -> None:
        inp = SpectralInput(np.array([]), buffer_size=2)
        for extractor in SILENCE_FEATURES:
            with self.subTest(extractor=extractor.__name__):
                with self.assertRaises(EmptySpectrumError):
                    extractor(inp)

    def test_slope_of_line(self) -> None:
        # sample_rate == buffer_size makes bin frequency == bin index
        inp = SpectralInput([1.0, 3.0, 5.0, 7.0], sample_rate=8, buffer_size=8)
        self.assertAlmostEqual(shape.spectral_slope(inp), 2.0)

    def test_slope_flat(self) -> None:
        self.assertAlmostEqual(shape.spectral_slope(SpectralInput(np.ones(32))), 0.0)

    def test_rolloff_flat(self) -> None:
        n, sr = 256, 44100
        nyquist_bin = sr / (2 * (n - 1))
        rolloff = shape.spectral_rolloff(SpectralInput(np.ones(n), sample_rate=sr))
        self.assertLessEqual(abs(rolloff / nyquist_bin - 0.99 * (n - 1)), 1.0)

    def test_rolloff_delta(self) -> None:
        n, sr = 64, 44100
        rolloff = shape.spectral_rolloff(SpectralInput(_delta(n, 10), sample_rate=sr))
        self.assertAlmostEqual(rolloff, 10 * sr / (2 * (n - 1)))

    def test_flatness(self) -> None:
        self.assertAlmostEqual(shape.spectral_flatness(SpectralInput(np.full(16, 0.3))), 1.0)
        self.assertEqual(shape.spectral_flatness(SpectralInput(_delta(16, 3))), 0.0)
        peaky = np.ones(16)
        peaky[4] = 10.0
        self.assertLess(shape.spectral_flatness(SpectralInput(peaky)), 1.0)

    def test_crest(self) -> None:
        self.assertAlmostEqual(shape.spectral_crest(SpectralInput(np.ones(16))), 1.0)
        self.assertAlmostEqual(shape.spectral_crest(SpectralInput(_delta(16, 2))), math.sqrt(16))

    def test_invalid_input(self) -> None:
        for bad in (None, "spectrum", 3.0):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidInputError):
                    SpectralInput(bad)
        with self.assertRaises(InvalidInputError):
            SpectralInput(np.ones(4), sample_rate=0)


if __name__ == "__main__":
    unittest.main()
