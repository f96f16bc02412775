"""
Lagged autocorrelation of a time-domain frame.

Computed directly in the time domain, O(window_size × len) per frame. Meant
for offline batch analysis of one frame at a time, not per-sample streaming.
"""

import numpy as np

from .fft import as_frame


def autocorrelate(samples, window_size: int) -> np.ndarray:
    """
    Compute the raw (biased, unnormalized) autocorrelation for lags 0..window_size-1.

        r[τ] = Σ_{j=0}^{len-τ-1} x[j] × x[j+τ]

    Lags at or beyond the frame length have no overlapping samples and are 0.

    Args:
        samples: Real-valued frame
        window_size: Number of lags to compute

    Returns:
        Array of window_size autocorrelation values

    Raises:
        ValueError: If window_size is negative
    """
    if window_size < 0:
        raise ValueError(f"window_size must be >= 0, got {window_size}")

    samples = as_frame(samples)
    n = len(samples)
    r = np.zeros(int(window_size))

    for lag in range(min(int(window_size), n)):
        r[lag] = np.dot(samples[:n-lag], samples[lag:])

    return r
