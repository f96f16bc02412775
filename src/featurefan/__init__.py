"""
featurefan - Spectral descriptors and pitch estimates for single audio frames.

Every function works on one in-memory frame at a time and returns plain
numpy arrays or floats. Nothing is cached between calls except the mel
filter bank, which is a pure function of its parameters.

Usage:
    import numpy as np
    from featurefan import extract_pitch, compute_mfcc, PitchAlgorithm

    t = np.arange(44100) / 44100
    frame = np.sin(2 * np.pi * 440 * t)

    f0 = extract_pitch(frame, 44100)                      # ~440.0
    f0_hps = extract_pitch(frame, 44100, PitchAlgorithm.HPS)
    mfcc = compute_mfcc(frame[:512], 13)

    # Object-oriented wrapper, also loads audio files
    from featurefan import Frame
    frame = Frame.from_file("note.wav")
    print(frame.get_pitch(), frame.to_spectrum().get_centroid())

Configuration (in order of preference):
    1. Explicit config arguments
    2. FEATUREFAN_CONFIG environment variable (path to a TOML file)
    3. Config file (./featurefan.toml or ~/.featurefan/config.toml)
    4. Built-in defaults
"""

from .config import (
    FeatureConfig,
    MfccConfig,
    PitchConfig,
    get_config,
    load_config,
    reset_config,
    set_config,
)
from .correlation import autocorrelate
from .dct import dct_ii
from .features import (
    rms,
    spectral_bandwidth,
    spectral_centroid,
    spectral_contrast,
    spectral_flatness,
    spectral_rolloff,
    zero_crossing_rate,
)
from .fft import compute_fft
from .frame import Frame, extract_pitch_track, split_frames
from .mel import build_mel_filter_bank, hz_to_mel, mel_to_hz
from .mfcc import compute_mfcc
from .pitch import (
    PitchAlgorithm,
    extract_pitch,
    extract_pitch_autocorrelation,
    extract_pitch_hps,
    extract_pitch_yin,
)
from .spectrum import (
    Spectrum,
    compute_amplitude_spectrum,
    compute_power_spectrum,
    frame_to_spectrum,
)

__version__ = "0.1.0"
__all__ = [
    "Frame",
    "Spectrum",
    "PitchAlgorithm",
    "FeatureConfig",
    "MfccConfig",
    "PitchConfig",
    "get_config",
    "set_config",
    "reset_config",
    "load_config",
    "compute_fft",
    "compute_amplitude_spectrum",
    "compute_power_spectrum",
    "frame_to_spectrum",
    "autocorrelate",
    "build_mel_filter_bank",
    "hz_to_mel",
    "mel_to_hz",
    "dct_ii",
    "compute_mfcc",
    "extract_pitch",
    "extract_pitch_autocorrelation",
    "extract_pitch_yin",
    "extract_pitch_hps",
    "extract_pitch_track",
    "split_frames",
    "rms",
    "zero_crossing_rate",
    "spectral_centroid",
    "spectral_bandwidth",
    "spectral_flatness",
    "spectral_rolloff",
    "spectral_contrast",
]
