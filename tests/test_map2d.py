from __future__ import annotations

import numpy as np
import pytest

from noisefield.map2d import make_noise, noise_map_2d
from noisefield.octave import OctaveNoise
from noisefield.perlin import Perlin2D
from noisefield.perlin_spline import PerlinCatmullRom2D
from noisefield.simplex import Simplex2D


def test_make_noise_single_octave_returns_bare_generator() -> None:
    assert isinstance(make_noise(basis="perlin", seed=1), Perlin2D)
    assert isinstance(make_noise(basis="simplex", seed=1), Simplex2D)
    n = make_noise(basis="perlin_spline", seed=1, spline_cache_size=2)
    assert isinstance(n, PerlinCatmullRom2D)
    assert n.spline_cache_size == 3


def test_make_noise_octaves_share_seed() -> None:
    n = make_noise(basis="simplex", seed=42, octaves=4, persistence=0.5)
    assert isinstance(n, OctaveNoise)
    assert len(n) == 4
    assert n.persistence == 0.5
    assert all(o.seed == 42 for o in n.octaves)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(basis="worley", seed=0),
        dict(basis="perlin", seed=0, octaves=0),
        dict(basis="perlin", seed=0, persistence=float("nan")),
    ],
)
def test_make_noise_rejects_bad_config(kwargs) -> None:
    with pytest.raises(ValueError):
        make_noise(**kwargs)


def test_noise_map_2d_shape_and_deterministic() -> None:
    kwargs = dict(
        seed=42,
        basis="perlin",
        width=64,
        height=48,
        step=0.037,
        octaves=4,
        persistence=0.5,
        offset_x=-3.0,
        offset_y=1.5,
    )
    z1 = noise_map_2d(**kwargs)
    z2 = noise_map_2d(**kwargs)
    assert z1.shape == (48, 64)
    assert np.array_equal(z1, z2)


def test_noise_map_2d_grid_coordinates() -> None:
    z = noise_map_2d(
        seed=3, basis="simplex", width=5, height=4, step=0.25, offset_x=2.0
    )
    xg, yg = np.meshgrid(2.0 + 0.25 * np.arange(5), 0.25 * np.arange(4))
    assert np.allclose(z, Simplex2D(seed=3).noise(xg, yg))


def test_noise_map_2d_normalize_bounds() -> None:
    z = noise_map_2d(
        seed=1,
        basis="perlin_spline",
        width=24,
        height=24,
        step=0.11,
        spline_cache_size=6,
        normalize=True,
    )
    assert float(np.min(z)) == 0.0
    assert float(np.max(z)) == 1.0


def test_noise_map_2d_constant_map_normalizes_to_zeros() -> None:
    # Every sample lands on an integer lattice point, where Perlin noise is 0.
    z = noise_map_2d(
        seed=0, basis="perlin", width=8, height=8, step=1.0, normalize=True
    )
    assert np.all(z == 0.0)


@pytest.mark.parametrize(
    "width, height, step", [(0, 8, 0.1), (8, -1, 0.1), (8, 8, 0.0), (8, 8, -0.5)]
)
def test_noise_map_2d_rejects_bad_grid(width, height, step) -> None:
    with pytest.raises(ValueError):
        noise_map_2d(seed=0, basis="perlin", width=width, height=height, step=step)
