from __future__ import annotations

import numpy as np

from .core import Noise2D

LACUNARITY = 2.0


class OctaveNoise:
    """Sum of noise sources at doubling frequency and geometric amplitude.

    Octave `i` (in the order added) is sampled at `2**i` times the input
    coordinates and scaled by `persistence**i`. The sum is not renormalized.
    Same-seed octaves with persistence 0.5 give the usual pink/fractal noise.
    """

    def __init__(self, persistence: float = 0.5):
        self.persistence = float(persistence)
        self.octaves: list[Noise2D] = []

    def add_octave(self, noise: Noise2D) -> None:
        self.octaves.append(noise)

    def __len__(self) -> int:
        return len(self.octaves)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        amp = 1.0
        freq = 1.0
        total = np.zeros(np.broadcast_shapes(x.shape, y.shape), dtype=np.float64)
        for octave in self.octaves:
            total = total + octave.noise(x * freq, y * freq) * amp
            amp *= self.persistence
            freq *= LACUNARITY
        return total
