"""
MFCC - Mel-frequency cepstral coefficients of a single frame.

Pipeline:
    power spectrum → mel filter bank energies → ln(max(energy, floor))
    → DCT-II → first num_cepstrals coefficients
"""

import numpy as np
from typing import Optional

from .config import MfccConfig, get_config
from .dct import dct_ii
from .fft import as_frame
from .mel import _filter_bank
from .spectrum import compute_power_spectrum


def _fit_to_fft_size(samples: np.ndarray, fft_size: int) -> np.ndarray:
    """Zero-pad or truncate samples to exactly fft_size."""
    if len(samples) >= fft_size:
        return samples[:fft_size]

    padded = np.zeros(fft_size)
    padded[:len(samples)] = samples
    return padded


def compute_mfcc(samples, num_cepstrals: int, config: Optional[MfccConfig] = None) -> np.ndarray:
    """
    Compute MFCCs of a frame.

    The frame is zero-padded or truncated to config.fft_size so that its
    power spectrum lines up with the filter bank columns.

    Args:
        samples: Real-valued frame
        num_cepstrals: Number of coefficients to keep (capped at num_filters)
        config: Filter bank parameters (default: get_config().mfcc)

    Returns:
        Array of min(num_cepstrals, config.num_filters) coefficients

    Raises:
        ValueError: If num_cepstrals is negative
    """
    if num_cepstrals < 0:
        raise ValueError(f"num_cepstrals must be >= 0, got {num_cepstrals}")
    if config is None:
        config = get_config().mfcc

    samples = _fit_to_fft_size(as_frame(samples), config.fft_size)
    power = compute_power_spectrum(samples)

    bank = _filter_bank(config.num_filters, config.fft_size, float(config.sample_rate))
    energies = bank @ power

    log_energies = np.log(np.maximum(energies, config.log_floor))
    cepstra = dct_ii(log_energies)

    return cepstra[:min(int(num_cepstrals), config.num_filters)].copy()
