"""Tests for configuration defaults, validation and config files."""

import numpy as np
import pytest

from featurefan import (
    FeatureConfig,
    MfccConfig,
    PitchConfig,
    compute_mfcc,
    get_config,
    load_config,
    set_config,
)


CONFIG_TEXT = """
[mfcc]
num_filters = 26
fft_size = 1024

[pitch]
min_pitch = 60.0
hps_harmonics = [2, 3]
"""


class TestDefaults:
    """Test the built-in defaults."""

    def test_mfcc_defaults(self):
        config = MfccConfig()
        assert config.num_filters == 40
        assert config.fft_size == 512
        assert config.sample_rate == 44100

    def test_pitch_defaults(self):
        config = PitchConfig()
        assert config.min_pitch == 80.0
        assert config.max_pitch == 1000.0
        assert config.yin_max_frequency == 500.0
        assert config.yin_min_frequency == 50.0
        assert config.yin_threshold == 0.1
        assert config.hps_harmonics == (2, 3, 4)
        assert config.hps_seed == 1.0

    def test_get_config_without_files(self):
        assert get_config() == FeatureConfig()


class TestValidation:
    """Test that impossible values are rejected."""

    @pytest.mark.parametrize("kwargs", [
        {"num_filters": 0},
        {"fft_size": -1},
        {"sample_rate": 0},
        {"log_floor": 0.0},
    ])
    def test_mfcc(self, kwargs):
        with pytest.raises(ValueError):
            MfccConfig(**kwargs)

    @pytest.mark.parametrize("kwargs", [
        {"min_pitch": 0.0},
        {"min_pitch": 500.0, "max_pitch": 100.0},
        {"yin_min_frequency": 600.0},
        {"hps_harmonics": (0, 2)},
        {"hps_seed": 0.0},
    ])
    def test_pitch(self, kwargs):
        with pytest.raises(ValueError):
            PitchConfig(**kwargs)

    def test_set_config_type_checked(self):
        with pytest.raises(TypeError):
            set_config(MfccConfig())


class TestConfigFiles:
    """Test TOML loading and lookup order."""

    def test_load_config(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(CONFIG_TEXT)

        config = load_config(path)
        assert config.mfcc.num_filters == 26
        assert config.mfcc.fft_size == 1024
        assert config.mfcc.sample_rate == 44100
        assert config.pitch.min_pitch == 60.0
        assert config.pitch.hps_harmonics == (2, 3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.toml")

    def test_unknown_keys_warn(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[mfcc]\nnum_filters = 20\nwindow = 'hann'\n")

        with pytest.warns(UserWarning, match="window"):
            config = load_config(path)
        assert config.mfcc.num_filters == 20

    def test_malformed_file_warns(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[mfcc\nnum_filters = ")

        with pytest.warns(UserWarning):
            config = load_config(path)
        assert config == FeatureConfig()

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[pitch]\nmin_pitch = -5.0\n")

        with pytest.raises(ValueError):
            load_config(path)

    def test_environment_variable(self, tmp_path, monkeypatch):
        path = tmp_path / "env.toml"
        path.write_text(CONFIG_TEXT)
        monkeypatch.setenv("FEATUREFAN_CONFIG", str(path))

        assert get_config().mfcc.num_filters == 26

    def test_environment_variable_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FEATUREFAN_CONFIG", str(tmp_path / "nope.toml"))

        with pytest.raises(FileNotFoundError):
            get_config()

    def test_local_file(self, tmp_path):
        (tmp_path / "featurefan.toml").write_text(CONFIG_TEXT)
        assert get_config().pitch.min_pitch == 60.0

    def test_user_file(self, tmp_path):
        user_dir = tmp_path / "home" / ".featurefan"
        user_dir.mkdir(parents=True)
        (user_dir / "config.toml").write_text("[mfcc]\nnum_filters = 12\n")

        assert get_config().mfcc.num_filters == 12

    def test_local_file_wins_over_user_file(self, tmp_path):
        user_dir = tmp_path / "home" / ".featurefan"
        user_dir.mkdir(parents=True)
        (user_dir / "config.toml").write_text("[mfcc]\nnum_filters = 12\n")
        (tmp_path / "featurefan.toml").write_text("[mfcc]\nnum_filters = 30\n")

        assert get_config().mfcc.num_filters == 30


class TestActiveConfig:
    """Test that analyses pick up the active configuration."""

    def test_set_config_changes_defaults(self):
        set_config(FeatureConfig(mfcc=MfccConfig(num_filters=10)))
        assert len(compute_mfcc(np.ones(512), 13)) == 10

    def test_explicit_config_wins(self):
        set_config(FeatureConfig(mfcc=MfccConfig(num_filters=10)))
        assert len(compute_mfcc(np.ones(512), 13, MfccConfig())) == 13
