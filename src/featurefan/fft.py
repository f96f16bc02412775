"""
Forward transform of a real-valued frame.

numpy's pocketfft plans arbitrary lengths (mixed radix, Bluestein for large
prime factors), so frames are transformed at their own length with no
zero-padding.
"""

import numpy as np


def as_frame(samples) -> np.ndarray:
    """
    Convert samples to a 1D float64 array.

    Raises:
        ValueError: If samples is not 1D (mono only supported)
    """
    samples = np.asarray(samples, dtype=np.float64)
    if samples.ndim != 1:
        raise ValueError("Only mono frames supported. Got shape: {}".format(samples.shape))
    return samples


def compute_fft(samples) -> np.ndarray:
    """
    Compute the discrete Fourier transform of a real frame.

        X[k] = Σₙ x[n] × e^(-2πikn/N)

    Args:
        samples: Real-valued frame of length N

    Returns:
        N complex values (empty for an empty frame)
    """
    samples = as_frame(samples)
    if len(samples) == 0:
        return np.zeros(0, dtype=np.complex128)

    return np.fft.fft(samples)
