from __future__ import annotations

import logging
import math

import numpy as np

from noisefield.core import Noise2D
from noisefield.octave import OctaveNoise
from noisefield.perlin import Perlin2D
from noisefield.perlin_spline import DEFAULT_SPLINE_CACHE_SIZE, PerlinCatmullRom2D
from noisefield.simplex import Simplex2D

logger = logging.getLogger(__name__)

BASES = ("perlin", "perlin_spline", "simplex")


def _make_basis(basis: str, *, seed: int, spline_cache_size: int) -> Noise2D:
    if basis == "perlin":
        return Perlin2D(seed=seed)
    if basis == "perlin_spline":
        return PerlinCatmullRom2D(spline_cache_size=spline_cache_size, seed=seed)
    if basis == "simplex":
        return Simplex2D(seed=seed)
    raise ValueError(f"unknown basis: {basis}")


def make_noise(
    *,
    basis: str,
    seed: int,
    octaves: int = 1,
    persistence: float = 0.5,
    spline_cache_size: int = DEFAULT_SPLINE_CACHE_SIZE,
) -> Noise2D:
    """Build a configured noise source.

    With `octaves > 1` the result is an `OctaveNoise` of that many same-seed
    instances of `basis`; a single octave returns the bare generator.
    """

    basis = str(basis)
    seed = int(seed)
    octaves = int(octaves)
    persistence = float(persistence)
    spline_cache_size = int(spline_cache_size)

    if basis not in BASES:
        raise ValueError(f"unknown basis: {basis}")
    if octaves < 1:
        raise ValueError("octaves must be >= 1")
    if not math.isfinite(persistence):
        raise ValueError("persistence must be finite")

    if octaves == 1:
        return _make_basis(basis, seed=seed, spline_cache_size=spline_cache_size)

    composed = OctaveNoise(persistence)
    for _ in range(octaves):
        composed.add_octave(
            _make_basis(basis, seed=seed, spline_cache_size=spline_cache_size)
        )
    return composed


def noise_map_2d(
    *,
    seed: int,
    basis: str,
    width: int,
    height: int,
    step: float,
    octaves: int = 1,
    persistence: float = 0.5,
    spline_cache_size: int = DEFAULT_SPLINE_CACHE_SIZE,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    normalize: bool = False,
    dtype: np.dtype | None = None,
) -> np.ndarray:
    """Sample a configured noise source on a regular grid.

    Row `k`, column `j` holds the noise at
    `(offset_x + j * step, offset_y + k * step)`. With `normalize` the map
    is min/max scaled into [0, 1]; a constant map becomes all zeros.
    """

    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")

    step = float(step)
    if not step > 0.0:
        raise ValueError("step must be > 0")

    noise = make_noise(
        basis=basis,
        seed=seed,
        octaves=octaves,
        persistence=persistence,
        spline_cache_size=spline_cache_size,
    )

    xs = float(offset_x) + np.arange(width, dtype=np.float64) * step
    ys = float(offset_y) + np.arange(height, dtype=np.float64) * step
    xg, yg = np.meshgrid(xs, ys)
    z = noise.noise(xg, yg)

    if dtype is not None:
        z = np.asarray(z, dtype=dtype)

    if not bool(normalize):
        return z

    z = np.asarray(z, dtype=np.float64)
    zmin = float(np.min(z))
    zmax = float(np.max(z))
    if math.isclose(zmin, zmax):
        logger.warning("noise map is constant (%g); normalizing to zeros", zmin)
        return np.zeros_like(z)
    return (z - zmin) / (zmax - zmin)
