"""Configuration, windowing, scales and filter banks."""

from feature_stream.audio.config import AnalyzerConfig
from feature_stream.audio.filterbanks import chroma_filter_bank, mel_filter_bank
from feature_stream.audio.scales import bark_scale, freq_to_mel, mel_to_freq
from feature_stream.audio.windowing import apply_window, is_power_of_two

__all__ = [
    "AnalyzerConfig",
    "apply_window",
    "bark_scale",
    "chroma_filter_bank",
    "freq_to_mel",
    "is_power_of_two",
    "mel_filter_bank",
    "mel_to_freq",
]
