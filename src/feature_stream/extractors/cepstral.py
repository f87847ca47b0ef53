"""Log mel bands and MFCC."""

import numpy as np
from scipy.fft import dct

from feature_stream.errors import InsufficientFilterBankError
from feature_stream.extractors.inputs import CepstralInput
from feature_stream.extractors.spectral import power_spectrum

MIN_MFCC_COEFFICIENTS = 1
MAX_MFCC_COEFFICIENTS = 40
DEFAULT_MFCC_COEFFICIENTS = 13


def mel_bands(inp: CepstralInput) -> np.ndarray:
    """log(1 + sum(filter * power)) for every mel filter row."""
    power = power_spectrum(inp.amp_spectrum)
    bank = inp.mel_filter_bank[:, : power.shape[0]]
    return np.log1p(bank @ power)


def mfcc_coefficient_count(requested) -> int:
    """Requested count clamped to [1, 40]; a falsy request means 13."""
    return min(MAX_MFCC_COEFFICIENTS, max(MIN_MFCC_COEFFICIENTS, requested or DEFAULT_MFCC_COEFFICIENTS))


def mfcc(inp: CepstralInput) -> np.ndarray:
    """Unnormalized DCT-II of the log mel bands, truncated.

    Raises:
        InsufficientFilterBankError: fewer mel filters than coefficients.
    """
    n_coefficients = mfcc_coefficient_count(inp.number_of_mfcc_coefficients)
    n_filters = inp.mel_filter_bank.shape[0]
    if n_filters < n_coefficients:
        raise InsufficientFilterBankError(
            f"{n_filters} mel filters cannot produce {n_coefficients} MFCC coefficients"
        )
    return dct(mel_bands(inp), type=2)[:n_coefficients]
