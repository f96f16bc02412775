"""Tests for temporal and spectral reductions."""

import numpy as np
import pytest

from featurefan import (
    rms,
    spectral_bandwidth,
    spectral_centroid,
    spectral_contrast,
    spectral_flatness,
    spectral_rolloff,
    zero_crossing_rate,
)


class TestTemporal:
    """Test rms() and zero_crossing_rate()."""

    def test_rms(self):
        assert rms([3.0, 4.0]) == pytest.approx(np.sqrt(12.5))

    def test_rms_empty(self):
        assert rms([]) == 0.0

    def test_zero_crossings(self):
        assert zero_crossing_rate([1.0, 2.0, -1.0, -2.0, 3.0]) == 2.0

    def test_zero_counts_as_positive(self):
        assert zero_crossing_rate([0.0, 1.0, 0.0]) == 0.0
        assert zero_crossing_rate([-1.0, 0.0]) == 1.0

    def test_zero_crossings_short(self):
        assert zero_crossing_rate([]) == 0.0
        assert zero_crossing_rate([1.0]) == 0.0


class TestSpectralDescriptors:
    """Test the spectrum reductions."""

    @pytest.fixture
    def freqs(self):
        return np.array([0.0, 100.0, 200.0])

    def test_centroid(self, freqs):
        assert spectral_centroid([0.0, 1.0, 0.0], freqs) == pytest.approx(100.0)
        assert spectral_centroid([1.0, 0.0, 1.0], freqs) == pytest.approx(100.0)

    def test_centroid_zero_energy(self, freqs):
        assert spectral_centroid([0.0, 0.0, 0.0], freqs) == 0.0

    def test_bandwidth(self, freqs):
        # centroid 100, deviations 100 and 100
        assert spectral_bandwidth([1.0, 0.0, 1.0], freqs) == pytest.approx(np.sqrt(2e4))

    def test_bandwidth_single_bin(self, freqs):
        assert spectral_bandwidth([0.0, 3.0, 0.0], freqs) == pytest.approx(0.0)

    def test_flatness_of_flat_spectrum(self):
        assert spectral_flatness(np.full(16, 0.25)) == pytest.approx(1.0)

    def test_flatness_of_peaky_spectrum(self):
        amplitude = np.full(16, 1e-3)
        amplitude[3] = 10.0
        assert spectral_flatness(amplitude) < 0.1

    def test_flatness_with_zero_bin(self):
        assert spectral_flatness([1.0, 0.0, 1.0]) == 0.0

    def test_rolloff(self):
        amplitude = np.ones(4)
        freqs = np.array([0.0, 10.0, 20.0, 30.0])
        assert spectral_rolloff(amplitude, freqs, 0.5) == pytest.approx(10.0)
        assert spectral_rolloff(amplitude, freqs) == pytest.approx(30.0)

    def test_rolloff_zero_energy(self):
        assert spectral_rolloff(np.zeros(4), np.arange(4.0)) == 0.0

    def test_contrast_reference_bands(self):
        """Peak minus valley over [0:2), [2:4), [4:7)."""
        amplitude = [1, 2, 4, 8, 10, 20, 30]
        assert spectral_contrast(amplitude) == [1.0, 4.0, 20.0]

    def test_contrast_custom_bands(self):
        amplitude = [5.0, 1.0, 3.0, 9.0]
        assert spectral_contrast(amplitude, [(0, 4)]) == [8.0]

    def test_contrast_band_past_end(self):
        """Bands outside the spectrum contribute 0.0."""
        assert spectral_contrast([1.0, 2.0, 4.0]) == [1.0, 0.0, 0.0]
