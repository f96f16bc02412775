"""
Mel scale conversions and the triangular mel filter bank.

Mel formula (same as Praat's "mel" unit):
    mel = 1127 × ln(1 + f / 700)
"""

import logging
from functools import lru_cache

import numpy as np

logger = logging.getLogger(__name__)


def hz_to_mel(hz):
    """Convert frequency in Hz to mels (scalar or array)."""
    return 1127.0 * np.log(1.0 + np.asarray(hz, dtype=np.float64) / 700.0)


def mel_to_hz(mel):
    """Convert mels to frequency in Hz (scalar or array)."""
    return 700.0 * (np.exp(np.asarray(mel, dtype=np.float64) / 1127.0) - 1.0)


def mel_bin_points(num_filters: int, fft_size: int, sample_rate: float) -> np.ndarray:
    """
    FFT bin index of each of the num_filters + 2 filter boundaries.

    Boundaries are evenly spaced in mel between 0 Hz and Nyquist and mapped
    to bins with round(hz / (sample_rate / fft_size)), halves rounding away
    from zero.
    """
    mel_points = np.linspace(hz_to_mel(0.0), hz_to_mel(sample_rate / 2.0), num_filters + 2)
    hz_points = mel_to_hz(mel_points)
    bins = np.floor(hz_points / (sample_rate / fft_size) + 0.5)
    return np.maximum(bins, 0).astype(int)


@lru_cache(maxsize=32)
def _filter_bank(num_filters: int, fft_size: int, sample_rate: float) -> np.ndarray:
    """Build the filter bank once per parameter set (read-only result)."""
    n_cols = fft_size // 2
    bank = np.zeros((num_filters, n_cols))
    if n_cols == 0:
        bank.flags.writeable = False
        return bank

    bins = mel_bin_points(num_filters, fft_size, sample_rate)
    collapsed = 0

    for i in range(num_filters):
        left, center, right = bins[i], bins[i + 1], bins[i + 2]

        # Zero-width ramps contribute no bins; the clamp keeps the
        # denominator non-zero for the ones that do.
        rise = max(center - left, 1)
        fall = max(right - center, 1)
        if center == left or right == center:
            collapsed += 1

        f = np.arange(left, min(center, n_cols))
        bank[i, f] = (f - left) / rise

        f = np.arange(min(center, n_cols), min(right, n_cols))
        bank[i, f] = 1.0 - (f - center) / fall

    if collapsed:
        logger.debug(
            "Mel filter bank (%d filters, fft_size %d, %g Hz) has %d filters with "
            "a zero-width edge", num_filters, fft_size, sample_rate, collapsed
        )

    bank.flags.writeable = False
    return bank


def build_mel_filter_bank(num_filters: int, fft_size: int, sample_rate: float) -> np.ndarray:
    """
    Build overlapping triangular filters over the first fft_size // 2 bins.

    Filter i rises linearly from 0 at bin[i] to 1 at bin[i+1] and falls back
    to 0 at bin[i+2]; it is zero everywhere else.

    When two adjacent boundaries round to the same bin, that ramp is empty.
    If the falling edge collapses (bin[i+1] == bin[i+2]) the filter never
    reaches 1.0; this is the only case in which a row has no 1.0 weight.

    Args:
        num_filters: Number of filters (>= 1)
        fft_size: Transform size
        sample_rate: Sample rate in Hz

    Returns:
        Array of shape (num_filters, fft_size // 2)

    Raises:
        ValueError: If num_filters < 1, fft_size < 0 or sample_rate <= 0
    """
    if num_filters < 1:
        raise ValueError(f"num_filters must be >= 1, got {num_filters}")
    if fft_size < 0:
        raise ValueError(f"fft_size must be >= 0, got {fft_size}")
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")

    return _filter_bank(int(num_filters), int(fft_size), float(sample_rate)).copy()
