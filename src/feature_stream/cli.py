"""CLI: stream a WAV file through the analyzer and print one JSON line per frame."""

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

from feature_stream.audio.config import AnalyzerConfig
from feature_stream.audio.source import read_wav_blocks
from feature_stream.errors import FeatureStreamError
from feature_stream.extractors.perceptual import Loudness
from feature_stream.extractors.registry import Feature
from feature_stream.pipeline import StreamingAnalyzer

DEFAULT_FEATURES = ("rms", "zcr", "spectral_centroid")


def to_jsonable(value):
    """Convert a feature value to plain JSON types."""
    if isinstance(value, Loudness):
        return value.to_dict()
    if isinstance(value, np.ndarray):
        if np.iscomplexobj(value):
            return [[float(v.real), float(v.imag)] for v in value]
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feature-stream",
        description="Extract audio features frame by frame from a WAV file",
    )
    parser.add_argument("input", type=Path, nargs="?", help="Input WAV file")
    parser.add_argument(
        "--features",
        "-f",
        nargs="+",
        default=list(DEFAULT_FEATURES),
        help=f"Features to extract (default: {' '.join(DEFAULT_FEATURES)})",
    )
    parser.add_argument("--buffer-size", type=int, default=512, help="Frame size, power of two (default: 512)")
    parser.add_argument("--hop-size", type=int, default=None, help="Hop size in samples (default: frame size)")
    parser.add_argument(
        "--block-size",
        type=int,
        default=None,
        help="Samples per block fed to the analyzer (default: frame size)",
    )
    parser.add_argument("--window", default="hanning", help="Windowing function (default: hanning)")
    parser.add_argument("--channel", type=int, default=0, help="Channel to analyze (default: 0)")
    parser.add_argument("--mfcc", type=int, default=13, help="Number of MFCC coefficients (default: 13)")
    parser.add_argument("--bark-bands", type=int, default=24, help="Number of Bark bands (default: 24)")
    parser.add_argument("--output", "-o", type=Path, default=None, help="Write JSON lines here instead of stdout")
    parser.add_argument("--list-features", action="store_true", help="List feature names and exit")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="-v for info, -vv for debug logs")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.list_features:
        for feature in Feature:
            print(feature.value)
        return 0
    if args.input is None:
        print("input WAV file is required", file=sys.stderr)
        return 2
    if not args.input.exists():
        print(f"File not found: {args.input}", file=sys.stderr)
        return 1

    block_size = args.block_size or args.buffer_size
    if block_size < 1:
        print(f"--block-size must be >= 1, got {block_size}", file=sys.stderr)
        return 2
    try:
        sample_rate, inputs, blocks = read_wav_blocks(args.input, block_size)
    except ValueError as exc:
        print(f"Cannot read {args.input}: {exc}", file=sys.stderr)
        return 1
    try:
        config = AnalyzerConfig(
            sample_rate=sample_rate,
            buffer_size=args.buffer_size,
            hop_size=args.hop_size,
            channel=args.channel,
            inputs=inputs,
            windowing_function=args.window,
            features=tuple(args.features),
            number_of_mfcc_coefficients=args.mfcc,
            number_of_bark_bands=args.bark_bands,
            start_immediately=True,
        )
    except FeatureStreamError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    out = args.output.open("w", encoding="utf-8") if args.output else sys.stdout
    frame_index = [0]

    def emit(features):
        record = {"frame": frame_index[0], "time_sec": frame_index[0] * config.hop_length / sample_rate}
        record.update({name: to_jsonable(value) for name, value in features.items()})
        out.write(json.dumps(record) + "\n")
        frame_index[0] += 1

    try:
        analyzer = StreamingAnalyzer(config, callback=emit)
        analyzer.set_source(blocks)
        produced = analyzer.run()
    finally:
        if out is not sys.stdout:
            out.close()

    print(f"Analyzed {produced} frames from {args.input} ({sample_rate} Hz, {inputs} ch)", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
