"""
Reductions over a frame or an already computed spectrum.

Temporal:
    rms, zero_crossing_rate

Spectral (consume an amplitude spectrum and its bin frequencies):
    spectral_centroid, spectral_bandwidth, spectral_flatness,
    spectral_rolloff, spectral_contrast

Degenerate input (empty arrays, zero energy, empty bands) returns 0.0.
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple

from .fft import as_frame


DEFAULT_CONTRAST_BANDS: Tuple[Tuple[int, int], ...] = ((0, 2), (2, 4), (4, 7))


def rms(samples) -> float:
    """Root-mean-square amplitude of a frame."""
    samples = as_frame(samples)
    if len(samples) == 0:
        return 0.0
    return float(np.sqrt(np.mean(samples * samples)))


def zero_crossing_rate(samples) -> float:
    """
    Count sign changes between consecutive samples.

    Signs are taken from the sign bit, so +0.0 counts as positive and -0.0
    as negative.
    """
    samples = as_frame(samples)
    if len(samples) < 2:
        return 0.0
    negative = np.signbit(samples)
    return float(np.count_nonzero(negative[1:] != negative[:-1]))


def spectral_centroid(amplitude: np.ndarray, frequencies: np.ndarray) -> float:
    """
    Amplitude-weighted mean frequency.

        f_c = Σ f_k × |A_k| / Σ A_k
    """
    amplitude = np.asarray(amplitude, dtype=np.float64)
    frequencies = np.asarray(frequencies, dtype=np.float64)

    denominator = np.sum(amplitude)
    if len(amplitude) == 0 or denominator == 0:
        return 0.0

    return float(np.sum(frequencies * np.abs(amplitude)) / denominator)


def spectral_bandwidth(amplitude: np.ndarray, frequencies: np.ndarray,
                       order: float = 2.0) -> float:
    """
    Spread of the spectrum around its centroid.

        B = (Σ A_k × |f_k - f_c|^p)^(1/p)

    Args:
        amplitude: Amplitude spectrum
        frequencies: Bin frequencies in Hz
        order: Exponent p (default 2)
    """
    amplitude = np.asarray(amplitude, dtype=np.float64)
    frequencies = np.asarray(frequencies, dtype=np.float64)
    if len(amplitude) == 0:
        return 0.0

    centroid = spectral_centroid(amplitude, frequencies)
    deviation = np.abs(frequencies - centroid) ** order

    return float(np.dot(amplitude, deviation) ** (1.0 / order))


def spectral_flatness(amplitude: np.ndarray) -> float:
    """
    Geometric mean over arithmetic mean (1 for white noise, near 0 for tones).

    Any zero bin makes the geometric mean zero.
    """
    amplitude = np.asarray(amplitude, dtype=np.float64)
    if len(amplitude) == 0:
        return 0.0

    mean = np.mean(amplitude)
    if mean <= 0 or np.any(amplitude <= 0):
        return 0.0

    from scipy import stats

    return float(stats.gmean(amplitude) / mean)


def spectral_rolloff(amplitude: np.ndarray, frequencies: np.ndarray,
                     rolloff_point: float = 0.99) -> float:
    """
    Frequency below which rolloff_point of the total amplitude lies.

    Args:
        amplitude: Amplitude spectrum
        frequencies: Bin frequencies in Hz
        rolloff_point: Fraction of the total (default 0.99)
    """
    amplitude = np.asarray(amplitude, dtype=np.float64)
    frequencies = np.asarray(frequencies, dtype=np.float64)

    total = np.sum(amplitude)
    if len(amplitude) == 0 or total <= 0:
        return 0.0

    cumulative = np.cumsum(amplitude)
    index = int(np.searchsorted(cumulative, rolloff_point * total))
    index = min(index, len(amplitude) - 1)

    return float(frequencies[index])


def spectral_contrast(amplitude: np.ndarray,
                      bands: Optional[Sequence[Tuple[int, int]]] = None) -> List[float]:
    """
    Peak minus valley of the amplitude in each sub-band.

    Args:
        amplitude: Amplitude spectrum
        bands: Half-open [start, end) bin ranges (default [0:2), [2:4), [4:7))

    Returns:
        One value per band; bands falling outside the spectrum give 0.0
    """
    amplitude = np.asarray(amplitude, dtype=np.float64)
    if bands is None:
        bands = DEFAULT_CONTRAST_BANDS

    values = []
    for start, end in bands:
        band = amplitude[max(0, start):max(0, end)]
        if len(band) == 0:
            values.append(0.0)
        else:
            values.append(float(np.max(band) - np.min(band)))

    return values
