"""
Pitch - Fundamental frequency (F0) estimate of a single frame.

Three independent estimators, selected through PitchAlgorithm:

- AUTOCORRELATION: peak of the raw autocorrelation inside the lag range of
  [min_pitch, max_pitch], refined by parabolic interpolation.
- YIN: running-sum difference function walked upward from tau_min.
- HPS: harmonic product spectrum over downsampled power spectra.

Every estimator returns a frequency in Hz, with 0.0 reserved for "no voiced
pitch detected". Degenerate input (silence, frames too short for the search
window, empty spectra) returns 0.0 rather than raising.

Note on the YIN recurrence:
    yin[τ] = difference[τ] + yin[τ-1]
is a running sum, not the cumulative-mean-normalized difference of de
Cheveigné & Kawahara (2002). Existing fixtures depend on it; do not
"correct" it here. Entries below tau_min (including yin[0]) are never
filled in, so the stopping threshold yin_threshold × yin[0] is zero.
"""

import logging
from enum import Enum

import numpy as np
from typing import Optional, Union

from .config import PitchConfig, get_config
from .correlation import autocorrelate
from .fft import as_frame
from .spectrum import compute_power_spectrum

logger = logging.getLogger(__name__)


class PitchAlgorithm(Enum):
    """Pitch estimation method."""
    AUTOCORRELATION = "autocorrelation"
    YIN = "yin"
    HPS = "hps"


def _parabolic_offset(y1: float, y2: float, y3: float) -> float:
    """
    Vertex offset of the parabola through (-1, y1), (0, y2), (1, y3).

        δ = 0.5 × (y1 - y3) / (y1 - 2·y2 + y3)

    Returns 0 when the three points are collinear or the vertex falls
    outside (-1, 1), i.e. y2 is not a local maximum.
    """
    denom = y1 - 2.0 * y2 + y3
    if denom == 0:
        return 0.0

    delta = 0.5 * (y1 - y3) / denom
    if not abs(delta) < 1:
        return 0.0
    return delta


def extract_pitch_autocorrelation(samples, sample_rate: float,
                                  config: Optional[PitchConfig] = None) -> float:
    """
    Estimate pitch from the autocorrelation peak.

    The autocorrelation window covers one period of min_pitch
    (sample_rate / min_pitch lags). The peak is searched over the lags
    whose periods lie in [max_pitch, min_pitch]:

        lags [sample_rate / max_pitch, sample_rate / min_pitch)

    The first maximum wins ties. The peak lag is refined by parabolic
    interpolation over its two neighbours.

    Args:
        samples: Real-valued frame
        sample_rate: Sample rate in Hz
        config: Search bounds (default: get_config().pitch)

    Returns:
        Pitch in Hz, or 0.0 if no positive peak lies in range
    """
    if config is None:
        config = get_config().pitch
    samples = as_frame(samples)

    if sample_rate <= 0:
        return 0.0

    window_size = int(sample_rate / config.min_pitch)
    r = autocorrelate(samples, window_size)

    min_lag = max(1, int(sample_rate / config.max_pitch))
    max_lag = window_size

    if min_lag >= len(r) or max_lag > len(r) or min_lag >= max_lag:
        logger.debug(
            "Autocorrelation search range [%d, %d) outside %d lags",
            min_lag, max_lag, len(r)
        )
        return 0.0

    # argmax returns the first occurrence on ties
    peak_lag = min_lag + int(np.argmax(r[min_lag:max_lag]))
    peak = r[peak_lag]

    if peak <= 0.0:
        return 0.0

    delta = 0.0
    if peak_lag + 1 < len(r):
        delta = _parabolic_offset(r[peak_lag - 1], peak, r[peak_lag + 1])

    return float(sample_rate / (peak_lag + delta))


def extract_pitch_yin(samples, sample_rate: float,
                      config: Optional[PitchConfig] = None) -> float:
    """
    Estimate pitch with the running-sum YIN variant.

    For τ in [tau_min, tau_max):
        difference[τ] = Σⱼ (x[j] - x[j+τ])²
        yin[τ] = difference[τ] + yin[τ-1]

    τ walks upward from tau_min while yin[τ] > yin_threshold × yin[0] and
    stops at the first τ failing the test or at tau_max - 1. The stopping
    τ is refined with

        interp = 0.5 × (s2 - s0) / (2·s1 - s2 - s0)

    over s0, s1, s2 = yin[τ-1], yin[τ], yin[τ+1] (NaN counts as 0).

    Args:
        samples: Real-valued frame
        sample_rate: Sample rate in Hz
        config: tau bounds and threshold (default: get_config().pitch)

    Returns:
        sample_rate / (τ + interp), or 0.0 when the walk reaches
        tau_max - 1 or the difference function is zero everywhere
    """
    if config is None:
        config = get_config().pitch
    samples = as_frame(samples)

    if sample_rate <= 0:
        return 0.0

    n = len(samples)
    tau_min = int(sample_rate / config.yin_max_frequency)
    tau_max = int(sample_rate / config.yin_min_frequency)

    if tau_max < 2 or tau_min >= tau_max - 1:
        logger.debug("YIN lag range [%d, %d) too small to search", tau_min, tau_max)
        return 0.0

    difference = np.zeros(tau_max)
    yin = np.zeros(tau_max)

    for tau in range(tau_min, tau_max):
        if tau < n:
            d = samples[:n-tau] - samples[tau:]
            difference[tau] = np.dot(d, d)

        yin[tau] = difference[tau]
        if tau > 0:
            yin[tau] += yin[tau - 1]

    # Silence or a constant frame: no lag differs from any other
    if not np.any(yin[tau_min:]):
        return 0.0

    threshold = config.yin_threshold * yin[0]
    tau = tau_min
    while tau < tau_max - 1 and yin[tau] > threshold:
        tau += 1

    if tau == tau_max - 1:
        return 0.0

    if tau < 1 or tau + 1 >= len(yin):
        return 0.0

    s0 = yin[tau - 1]
    s1 = yin[tau]
    s2 = yin[tau + 1]

    with np.errstate(divide="ignore", invalid="ignore"):
        interp = np.float64(0.5) * (s2 - s0) / (2.0 * s1 - s2 - s0)

    if np.isnan(interp):
        interp = 0.0

    period = tau + interp
    if not np.isfinite(period) or period <= 0:
        return 0.0

    return float(sample_rate / period)


def extract_pitch_hps(samples, sample_rate: float,
                      config: Optional[PitchConfig] = None) -> float:
    """
    Estimate pitch with the harmonic product spectrum.

    For each harmonic h, the power spectrum is downsampled by summing h
    consecutive bins, and the accumulator is multiplied elementwise:

        hps[i] *= resampled_h[i // h]

    The accumulator starts at hps_seed (1.0); a zero seed would wipe out
    every product. Only bins covered by every harmonic are kept, so no
    resampled index leaves the power spectrum.

    Args:
        samples: Real-valued frame
        sample_rate: Sample rate in Hz
        config: Harmonics and seed (default: get_config().pitch)

    Returns:
        argmax(hps) × sample_rate / (sample_rate // 2); 0.0 for an empty
        accumulator
    """
    if config is None:
        config = get_config().pitch

    max_frequency = int(sample_rate // 2)
    if max_frequency <= 0:
        return 0.0

    power = compute_power_spectrum(samples)
    usable = min(max_frequency, len(power))

    harmonics = config.hps_harmonics
    span = min((usable // h) * h for h in harmonics) if harmonics else usable
    if span <= 0:
        logger.debug("HPS accumulator empty (%d power bins)", len(power))
        return 0.0

    hps = np.full(span, config.hps_seed, dtype=np.float64)

    for h in harmonics:
        n_resampled = usable // h
        resampled = power[:n_resampled * h].reshape(n_resampled, h).sum(axis=1)
        hps *= np.repeat(resampled, h)[:span]

    max_index = int(np.argmax(hps))

    return float(max_index * sample_rate / max_frequency)


def extract_pitch(
    samples,
    sample_rate: float,
    algorithm: Union[PitchAlgorithm, str, None] = PitchAlgorithm.AUTOCORRELATION,
    config: Optional[PitchConfig] = None
) -> float:
    """
    Estimate the pitch of a frame.

    Args:
        samples: Real-valued frame
        sample_rate: Sample rate in Hz
        algorithm: PitchAlgorithm or its name ("autocorrelation", "yin",
            "hps"); None selects AUTOCORRELATION
        config: Estimator parameters (default: get_config().pitch)

    Returns:
        Pitch in Hz, 0.0 if no voiced pitch was detected

    Raises:
        ValueError: If algorithm is not a known method
    """
    if algorithm is None:
        algorithm = PitchAlgorithm.AUTOCORRELATION
    elif not isinstance(algorithm, PitchAlgorithm):
        algorithm = PitchAlgorithm(str(algorithm).lower())

    if algorithm is PitchAlgorithm.AUTOCORRELATION:
        return extract_pitch_autocorrelation(samples, sample_rate, config)
    elif algorithm is PitchAlgorithm.YIN:
        return extract_pitch_yin(samples, sample_rate, config)
    elif algorithm is PitchAlgorithm.HPS:
        return extract_pitch_hps(samples, sample_rate, config)
    raise ValueError(f"Unknown pitch algorithm: {algorithm}")
