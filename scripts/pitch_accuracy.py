"""
Pitch accuracy sweep: estimate pure tones with every algorithm and report the error.

Usage:
    python scripts/pitch_accuracy.py [sample_rate] [duration]

Autocorrelation should stay within 1 Hz across its search range. YIN reports
0.0 for voiced tones because of its running-sum recurrence, and HPS reports
the tone's bin index scaled by sample_rate / (sample_rate // 2); both are
printed as-is so changes to either show up here.
"""
import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from featurefan import PitchAlgorithm, extract_pitch


FREQUENCIES = [82.41, 110.0, 146.83, 220.0, 261.63, 329.63, 440.0, 659.26, 880.0]


def main():
    sample_rate = int(sys.argv[1]) if len(sys.argv) > 1 else 44100
    duration = float(sys.argv[2]) if len(sys.argv) > 2 else 1.0

    n = int(sample_rate * duration)
    t = np.arange(n) / sample_rate

    print("=" * 70)
    print(f"PITCH ACCURACY: {sample_rate} Hz, {duration:.3f} s pure tones")
    print("=" * 70)

    header = f"{'f0':>9}"
    for algorithm in PitchAlgorithm:
        header += f"  {algorithm.value:>16}"
    print(header)

    worst = {algorithm: 0.0 for algorithm in PitchAlgorithm}

    for frequency in FREQUENCIES:
        samples = 0.5 * np.sin(2 * np.pi * frequency * t)
        row = f"{frequency:9.2f}"
        for algorithm in PitchAlgorithm:
            estimate = extract_pitch(samples, sample_rate, algorithm)
            error = estimate - frequency
            worst[algorithm] = max(worst[algorithm], abs(error))
            row += f"  {estimate:9.2f} ({error:+5.1f})"
        print(row)

    print()
    for algorithm, error in worst.items():
        print(f"  max |error| {algorithm.value:>16}: {error:8.2f} Hz")

    return 0 if worst[PitchAlgorithm.AUTOCORRELATION] <= 1.0 else 1


if __name__ == "__main__":
    sys.exit(main())
