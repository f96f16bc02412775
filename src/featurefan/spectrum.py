"""
Spectrum - Amplitude and power spectra of a single frame.

Documentation sources:
- Standard DFT definition
- Spectral descriptors as used for music-information retrieval

Only the first N // 2 bins are kept. For real input the remaining bins are
the conjugate mirror image; for odd N the floor division drops the last
non-mirrored bin, with no special casing.
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple

from . import features
from .fft import as_frame, compute_fft


class Spectrum:
    """
    Half spectrum of a real frame.

    Attributes:
        real: Real parts of spectrum bins
        imag: Imaginary parts of spectrum bins
        sample_rate: Sample rate of the analysed frame in Hz
        n_fft: Length of the transformed frame
    """

    def __init__(
        self,
        real: np.ndarray,
        imag: np.ndarray,
        sample_rate: float,
        n_fft: int
    ):
        """
        Create a Spectrum.

        Args:
            real: Real parts of spectrum bins
            imag: Imaginary parts of spectrum bins
            sample_rate: Sample rate in Hz
            n_fft: Transform length the bins came from
        """
        self._real = np.asarray(real, dtype=np.float64)
        self._imag = np.asarray(imag, dtype=np.float64)
        self._sample_rate = float(sample_rate)
        self._n_fft = int(n_fft)

    @property
    def real(self) -> np.ndarray:
        """Real parts of spectrum bins."""
        return self._real

    @property
    def imag(self) -> np.ndarray:
        """Imaginary parts of spectrum bins."""
        return self._imag

    @property
    def sample_rate(self) -> float:
        """Sample rate in Hz."""
        return self._sample_rate

    @property
    def n_fft(self) -> int:
        """Transform length."""
        return self._n_fft

    @property
    def df(self) -> float:
        """Frequency resolution (bin width) in Hz."""
        if self._n_fft == 0:
            return 0.0
        return self._sample_rate / self._n_fft

    @property
    def n_bins(self) -> int:
        """Number of frequency bins."""
        return len(self._real)

    def get_frequency(self, bin_index: int) -> float:
        """Get frequency for a bin index."""
        return bin_index * self.df

    def frequencies(self) -> np.ndarray:
        """Frequency of every bin in Hz."""
        return np.arange(self.n_bins) * self.df

    def amplitude(self) -> np.ndarray:
        """Magnitude of every bin."""
        return np.sqrt(self._real**2 + self._imag**2)

    def power(self) -> np.ndarray:
        """Squared magnitude of every bin."""
        return self.amplitude() ** 2

    def __repr__(self) -> str:
        return f"Spectrum({self.n_bins} bins, df={self.df:.3f} Hz)"

    # Descriptors

    def get_centroid(self) -> float:
        """Amplitude-weighted mean frequency in Hz."""
        return features.spectral_centroid(self.amplitude(), self.frequencies())

    def get_bandwidth(self, order: float = 2.0) -> float:
        """Spread around the centroid."""
        return features.spectral_bandwidth(self.amplitude(), self.frequencies(), order)

    def get_flatness(self) -> float:
        """Geometric over arithmetic mean of the amplitude."""
        return features.spectral_flatness(self.amplitude())

    def get_rolloff(self, rolloff_point: float = 0.99) -> float:
        """Frequency below which rolloff_point of the amplitude lies."""
        return features.spectral_rolloff(self.amplitude(), self.frequencies(), rolloff_point)

    def get_contrast(self, bands: Optional[Sequence[Tuple[int, int]]] = None) -> List[float]:
        """Peak minus valley per sub-band."""
        return features.spectral_contrast(self.amplitude(), bands)


def frame_to_spectrum(samples, sample_rate: float) -> Spectrum:
    """
    Compute the half spectrum of a frame.

    Args:
        samples: Real-valued frame
        sample_rate: Sample rate in Hz

    Returns:
        Spectrum with N // 2 bins
    """
    samples = as_frame(samples)
    n_fft = len(samples)
    transform = compute_fft(samples)

    n_half = n_fft // 2
    real_part = transform[:n_half].real.copy()
    imag_part = transform[:n_half].imag.copy()

    return Spectrum(real_part, imag_part, sample_rate, n_fft)


def compute_amplitude_spectrum(samples) -> np.ndarray:
    """
    Amplitude spectrum of a frame.

        amplitude[i] = sqrt(re[i]² + im[i]²),  i in [0, N // 2)

    Args:
        samples: Real-valued frame

    Returns:
        N // 2 magnitudes (empty for frames shorter than 2 samples)
    """
    transform = compute_fft(samples)
    half = transform[:len(transform) // 2]
    return np.sqrt(half.real**2 + half.imag**2)


def compute_power_spectrum(samples) -> np.ndarray:
    """
    Power spectrum of a frame: the squared amplitude spectrum.

    Args:
        samples: Real-valued frame

    Returns:
        N // 2 power values
    """
    return compute_amplitude_spectrum(samples) ** 2
