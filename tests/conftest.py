"""Shared fixtures for featurefan tests."""

import numpy as np
import pytest

from featurefan.config import reset_config


def make_sine(frequency, sample_rate, duration=1.0, amplitude=0.5):
    """Pure sine tone starting at phase 0."""
    n = int(sample_rate * duration)
    t = np.arange(n) / sample_rate
    return amplitude * np.sin(2 * np.pi * frequency * t)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files out of every test."""
    monkeypatch.delenv("FEATUREFAN_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sine_440():
    """One second of a 440 Hz sine at 44100 Hz."""
    return make_sine(440.0, 44100)


@pytest.fixture
def noise():
    """Reproducible white noise frame."""
    rng = np.random.default_rng(1234)
    return rng.standard_normal(1000)
