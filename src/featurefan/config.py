"""
Configuration - analysis parameters for the MFCC and pitch pipelines.

Every constant the analyses depend on (FFT size, filter count, pitch search
bounds, ...) lives here as an explicit, documented default instead of a
literal buried inside an algorithm.

Lookup order for get_config():
    1. FEATUREFAN_CONFIG environment variable (path to a TOML file)
    2. Config file (./featurefan.toml or ~/.featurefan/config.toml)
    3. Built-in defaults

Config file format:

    [mfcc]
    num_filters = 40
    fft_size = 512
    sample_rate = 44100

    [pitch]
    min_pitch = 80.0
    max_pitch = 1000.0
"""

import os
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class MfccConfig:
    """
    Parameters of the mel filter bank and MFCC pipeline.

    Attributes:
        num_filters: Number of triangular mel filters
        fft_size: Transform size; frames are padded or truncated to it
        sample_rate: Sample rate in Hz used to place the filters
        log_floor: Energies are clamped to this before taking the log
    """
    num_filters: int = 40
    fft_size: int = 512
    sample_rate: int = 44100
    log_floor: float = 1e-10

    def __post_init__(self):
        if self.num_filters < 1:
            raise ValueError(f"num_filters must be >= 1, got {self.num_filters}")
        if self.fft_size < 0:
            raise ValueError(f"fft_size must be >= 0, got {self.fft_size}")
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.log_floor <= 0:
            raise ValueError(f"log_floor must be positive, got {self.log_floor}")


@dataclass(frozen=True)
class PitchConfig:
    """
    Parameters of the three pitch estimators.

    Attributes:
        min_pitch: Lowest pitch searched by the autocorrelation method (Hz)
        max_pitch: Highest pitch searched by the autocorrelation method (Hz)
        yin_max_frequency: YIN tau_min is sample_rate / yin_max_frequency
        yin_min_frequency: YIN tau_max is sample_rate / yin_min_frequency
        yin_threshold: Fraction of yin[0] that stops the YIN lag walk
        hps_harmonics: Downsampling factors multiplied into the HPS
        hps_seed: Initial value of every HPS accumulator bin
    """
    min_pitch: float = 80.0
    max_pitch: float = 1000.0
    yin_max_frequency: float = 500.0
    yin_min_frequency: float = 50.0
    yin_threshold: float = 0.1
    hps_harmonics: Tuple[int, ...] = (2, 3, 4)
    hps_seed: float = 1.0

    def __post_init__(self):
        if self.min_pitch <= 0 or self.max_pitch <= 0:
            raise ValueError("min_pitch and max_pitch must be positive")
        if self.min_pitch > self.max_pitch:
            raise ValueError(
                f"min_pitch ({self.min_pitch}) must not exceed max_pitch ({self.max_pitch})"
            )
        if self.yin_min_frequency <= 0 or self.yin_max_frequency <= 0:
            raise ValueError("yin_min_frequency and yin_max_frequency must be positive")
        if self.yin_min_frequency > self.yin_max_frequency:
            raise ValueError("yin_min_frequency must not exceed yin_max_frequency")
        # Lists come in from TOML
        object.__setattr__(self, "hps_harmonics", tuple(int(h) for h in self.hps_harmonics))
        if any(h < 1 for h in self.hps_harmonics):
            raise ValueError(f"hps_harmonics must be >= 1, got {self.hps_harmonics}")
        if self.hps_seed == 0:
            raise ValueError("hps_seed must be non-zero")


@dataclass(frozen=True)
class FeatureConfig:
    """Complete analysis configuration."""
    mfcc: MfccConfig = field(default_factory=MfccConfig)
    pitch: PitchConfig = field(default_factory=PitchConfig)


# =============================================================================
# Config files
# =============================================================================

_current_config: Optional[FeatureConfig] = None


def _find_config_file() -> Optional[Path]:
    """Locate the config file to use, if any."""
    env_path = os.environ.get("FEATUREFAN_CONFIG")
    if env_path:
        path = Path(env_path)
        if not path.exists():
            raise FileNotFoundError(f"FEATUREFAN_CONFIG points to a missing file: {path}")
        return path

    # Try local config first
    local_config = Path("featurefan.toml")
    if local_config.exists():
        return local_config

    user_config = Path.home() / ".featurefan" / "config.toml"
    if user_config.exists():
        return user_config

    return None


def _load_toml(path: Path) -> dict:
    """Parse a TOML file with tomllib (Python 3.11+) or tomli."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib

    with open(path, "rb") as f:
        return tomllib.load(f)


def _section(cls, table: dict, name: str, path: Path):
    """Build one config dataclass from a TOML table, dropping unknown keys."""
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(table) - known)
    if unknown:
        warnings.warn(f"Ignoring unknown [{name}] keys in {path}: {', '.join(unknown)}")
    return cls(**{k: v for k, v in table.items() if k in known})


def load_config(path: Union[str, Path]) -> FeatureConfig:
    """
    Load a FeatureConfig from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        FeatureConfig with defaults for anything the file leaves out

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a value is out of range
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = _load_toml(path)
    except ValueError as e:
        # TOMLDecodeError subclasses ValueError
        warnings.warn(f"Could not parse config file {path}: {e}. Using defaults.")
        return FeatureConfig()

    mfcc = _section(MfccConfig, data.get("mfcc", {}), "mfcc", path)
    pitch = _section(PitchConfig, data.get("pitch", {}), "pitch", path)
    return FeatureConfig(mfcc=mfcc, pitch=pitch)


def get_config() -> FeatureConfig:
    """Get the active configuration, reading config files on first use."""
    global _current_config

    if _current_config is not None:
        return _current_config

    path = _find_config_file()
    _current_config = load_config(path) if path is not None else FeatureConfig()
    return _current_config


def set_config(config: FeatureConfig) -> None:
    """
    Set the configuration used when callers pass no explicit config.

    Args:
        config: FeatureConfig to install
    """
    global _current_config

    if not isinstance(config, FeatureConfig):
        raise TypeError(f"Expected FeatureConfig, got {type(config).__name__}")
    _current_config = config


def reset_config() -> None:
    """Forget the active configuration so the next get_config() re-reads files."""
    global _current_config
    _current_config = None
