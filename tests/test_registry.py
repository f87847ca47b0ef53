"""Unit tests for the feature name registry."""

from __future__ import annotations

import unittest

from feature_stream.extractors import EXTRACTORS, Feature, InputFamily


class TestFeatureRegistry(unittest.TestCase):
    """Tests for Feature and EXTRACTORS."""

    def test_every_feature_has_extractor(self) -> None:
        self.assertEqual(set(EXTRACTORS), set(Feature))
        for extractor in EXTRACTORS.values():
            self.assertIsInstance(extractor.family, InputFamily)
            self.assertTrue(callable(extractor.func))

    def test_parse_names(self) -> None:
        self.assertIs(Feature.parse("spectral_centroid"), Feature.SPECTRAL_CENTROID)
        self.assertIs(Feature.parse("spectralCentroid"), Feature.SPECTRAL_CENTROID)
        self.assertIs(Feature.parse("perceptualSharpness"), Feature.PERCEPTUAL_SHARPNESS)
        self.assertIs(Feature.parse("mfcc"), Feature.MFCC)
        self.assertIs(Feature.parse(Feature.ZCR), Feature.ZCR)

    def test_unknown_name(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            Feature.parse("brightness")
        self.assertIn("brightness", str(ctx.exception))

    def test_families(self) -> None:
        self.assertIs(EXTRACTORS[Feature.RMS].family, InputFamily.TIME_DOMAIN)
        self.assertIs(EXTRACTORS[Feature.SPECTRAL_CENTROID].family, InputFamily.SPECTRAL)
        self.assertIs(EXTRACTORS[Feature.SPECTRAL_FLUX].family, InputFamily.TIME_DOMAIN)
        self.assertIs(EXTRACTORS[Feature.LOUDNESS].family, InputFamily.PERCEPTUAL)
        self.assertIs(EXTRACTORS[Feature.MFCC].family, InputFamily.CEPSTRAL)
        self.assertIs(EXTRACTORS[Feature.CHROMA].family, InputFamily.CHROMA)


if __name__ == "__main__":
    unittest.main()
