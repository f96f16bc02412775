"""
Frame - A window of audio samples with its sample rate.

A Frame is the unit every analysis in featurefan works on. Analyses never
mutate the samples and keep no state between calls, so independent frames
can be analysed in any order or in parallel.

Design Principles:
------------------
1. Mono only: Multi-channel audio is not supported. Use from_file_channel()
   to select a specific channel from multi-channel files.

2. Float64 samples: Audio is stored as 64-bit floating point, normalized
   to the range [-1, 1] for PCM formats.

3. Thin wrappers: Frame methods delegate to the module-level functions
   (compute_power_spectrum, compute_mfcc, extract_pitch, ...), which accept
   plain arrays as well.

Usage:
------
    from featurefan import Frame, PitchAlgorithm

    frame = Frame.from_file("note.wav")
    f0 = frame.get_pitch(PitchAlgorithm.YIN)
    mfcc = frame.to_mfcc(13)

    # Batch analysis of a longer signal
    for part in split_frames(samples, 44100, frame_length=2048, hop_length=512):
        print(part.get_pitch())
"""

import numpy as np
from dataclasses import replace
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .config import MfccConfig, PitchConfig, get_config
from .correlation import autocorrelate
from .features import rms, zero_crossing_rate
from .fft import as_frame
from .mfcc import compute_mfcc
from .pitch import PitchAlgorithm, extract_pitch
from .spectrum import (
    Spectrum,
    compute_amplitude_spectrum,
    compute_power_spectrum,
    frame_to_spectrum,
)


class Frame:
    """
    Audio samples with sample rate.

    Attributes:
        samples: 1D numpy array of audio samples (mono only)
        sample_rate: Sample rate in Hz

    Properties:
        duration: Total duration in seconds
        n_samples: Number of samples
    """

    def __init__(self, samples: np.ndarray, sample_rate: float):
        """
        Create a Frame from samples and sample rate.

        Args:
            samples: 1D numpy array of audio samples
            sample_rate: Sample rate in Hz

        Raises:
            ValueError: If samples is not 1D or sample_rate is not positive
        """
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")

        self._samples = as_frame(samples)
        self._sample_rate = float(sample_rate)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Frame":
        """
        Load audio from a file.

        Supported formats (via soundfile/libsndfile): WAV, FLAC, OGG Vorbis,
        AIFF and others.

        Args:
            path: Path to audio file

        Returns:
            Frame holding the whole file

        Raises:
            ValueError: If file has multiple channels
        """
        import soundfile as sf

        data, sample_rate = sf.read(path, dtype='float64')

        if data.ndim > 1:
            raise ValueError(
                f"Only mono audio supported. File has {data.shape[1]} channels. "
                "Use Frame.from_file_channel() to select a specific channel."
            )

        return cls(data, sample_rate)

    @classmethod
    def from_file_channel(cls, path: Union[str, Path], channel: int = 0) -> "Frame":
        """
        Load a specific channel from an audio file.

        Args:
            path: Path to audio file
            channel: Channel index (0-based)

        Returns:
            Frame with the specified channel
        """
        import soundfile as sf

        data, sample_rate = sf.read(path, dtype='float64')

        if data.ndim == 1:
            if channel != 0:
                raise ValueError(f"File is mono, channel {channel} does not exist")
            return cls(data, sample_rate)

        if channel >= data.shape[1]:
            raise ValueError(f"Channel {channel} does not exist. File has {data.shape[1]} channels.")

        return cls(data[:, channel], sample_rate)

    @property
    def samples(self) -> np.ndarray:
        """Audio samples as 1D numpy array."""
        return self._samples

    @property
    def sample_rate(self) -> float:
        """Sample rate in Hz."""
        return self._sample_rate

    @property
    def n_samples(self) -> int:
        """Number of samples."""
        return len(self._samples)

    @property
    def duration(self) -> float:
        """Total duration in seconds."""
        return self.n_samples / self._sample_rate

    def __len__(self) -> int:
        return self.n_samples

    def __repr__(self) -> str:
        return f"Frame({self.n_samples} samples, {self.sample_rate} Hz, {self.duration:.3f}s)"

    def extract_part(self, start_time: float, end_time: float) -> "Frame":
        """
        Extract a portion of the frame.

        Args:
            start_time: Start time in seconds
            end_time: End time in seconds

        Returns:
            New Frame containing the extracted portion
        """
        start_sample = int(round(start_time * self._sample_rate))
        end_sample = int(round(end_time * self._sample_rate))

        # Clamp to valid range
        start_sample = max(0, start_sample)
        end_sample = min(len(self._samples), end_sample)

        extracted = self._samples[start_sample:end_sample].copy()
        return Frame(extracted, self._sample_rate)

    # Spectra

    def to_spectrum(self) -> Spectrum:
        """Half spectrum of the frame."""
        return frame_to_spectrum(self._samples, self._sample_rate)

    def amplitude_spectrum(self) -> np.ndarray:
        """Amplitude spectrum (N // 2 bins)."""
        return compute_amplitude_spectrum(self._samples)

    def power_spectrum(self) -> np.ndarray:
        """Power spectrum (N // 2 bins)."""
        return compute_power_spectrum(self._samples)

    def autocorrelate(self, window_size: int) -> np.ndarray:
        """Raw autocorrelation for lags 0..window_size-1."""
        return autocorrelate(self._samples, window_size)

    # Features

    def to_mfcc(self, num_cepstrals: int = 13, config: Optional[MfccConfig] = None) -> np.ndarray:
        """
        Compute MFCCs with the filter bank placed at this frame's sample rate.

        Args:
            num_cepstrals: Number of coefficients to keep
            config: Filter bank parameters (default: get_config().mfcc); its
                sample_rate is replaced by the frame's

        Returns:
            Array of min(num_cepstrals, num_filters) coefficients
        """
        if config is None:
            config = get_config().mfcc
        config = replace(config, sample_rate=int(round(self._sample_rate)))
        return compute_mfcc(self._samples, num_cepstrals, config)

    def get_pitch(
        self,
        algorithm: Union[PitchAlgorithm, str, None] = PitchAlgorithm.AUTOCORRELATION,
        config: Optional[PitchConfig] = None
    ) -> float:
        """
        Estimate the pitch of the frame.

        Args:
            algorithm: Estimation method (default autocorrelation)
            config: Estimator parameters (default: get_config().pitch)

        Returns:
            Pitch in Hz, 0.0 if unvoiced
        """
        return extract_pitch(self._samples, self._sample_rate, algorithm, config)

    def get_rms(self) -> float:
        """Root-mean-square amplitude."""
        return rms(self._samples)

    def get_zero_crossing_rate(self) -> float:
        """Number of sign changes between consecutive samples."""
        return zero_crossing_rate(self._samples)


def split_frames(samples, sample_rate: float, frame_length: int,
                 hop_length: Optional[int] = None) -> Iterator[Frame]:
    """
    Slice a signal into consecutive frames.

    Only complete frames are produced; a trailing remainder shorter than
    frame_length is dropped.

    Args:
        samples: 1D signal
        sample_rate: Sample rate in Hz
        frame_length: Samples per frame
        hop_length: Samples between frame starts (default frame_length)

    Yields:
        Frame objects, each holding its own copy of the samples
    """
    if frame_length < 1:
        raise ValueError(f"frame_length must be >= 1, got {frame_length}")
    if hop_length is None:
        hop_length = frame_length
    if hop_length < 1:
        raise ValueError(f"hop_length must be >= 1, got {hop_length}")

    samples = as_frame(samples)
    for start in range(0, len(samples) - frame_length + 1, hop_length):
        yield Frame(samples[start:start + frame_length].copy(), sample_rate)


def extract_pitch_track(
    samples,
    sample_rate: float,
    frame_length: int,
    hop_length: Optional[int] = None,
    algorithm: Union[PitchAlgorithm, str, None] = PitchAlgorithm.AUTOCORRELATION,
    config: Optional[PitchConfig] = None
) -> List[float]:
    """
    Estimate pitch independently for every frame of a signal.

    No state is carried from one frame to the next.

    Returns:
        One pitch value (Hz, 0.0 if unvoiced) per frame
    """
    return [
        frame.get_pitch(algorithm, config)
        for frame in split_frames(samples, sample_rate, frame_length, hop_length)
    ]
