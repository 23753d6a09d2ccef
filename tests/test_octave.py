import numpy as np
import pytest

from noisefield.octave import OctaveNoise
from noisefield.perlin import Perlin2D
from noisefield.simplex import Simplex2D

X = np.array([0.1, 1.25, 10.5, -3.7])
Y = np.array([0.2, 2.75, 9.0, 4.4])


@pytest.mark.parametrize("persistence", [0.0, 0.5, 1.0, 3.0])
def test_single_octave_is_identity(persistence):
    child = Perlin2D(seed=42)
    octaves = OctaveNoise(persistence)
    octaves.add_octave(child)
    assert np.array_equal(octaves.noise(X, Y), child.noise(X, Y))


def test_octaves_scale_frequency_and_amplitude():
    a = Perlin2D(seed=1)
    b = Simplex2D(seed=2)
    c = Perlin2D(seed=3)
    octaves = OctaveNoise(0.25)
    for n in (a, b, c):
        octaves.add_octave(n)
    assert len(octaves) == 3

    expected = (
        a.noise(X, Y)
        + 0.25 * b.noise(2 * X, 2 * Y)
        + 0.0625 * c.noise(4 * X, 4 * Y)
    )
    assert np.allclose(octaves.noise(X, Y), expected)


def test_octave_order_matters():
    p = Perlin2D(seed=5)
    s = Simplex2D(seed=5)
    first = OctaveNoise(0.5)
    first.add_octave(p)
    first.add_octave(s)
    second = OctaveNoise(0.5)
    second.add_octave(s)
    second.add_octave(p)
    assert not np.allclose(first.noise(X, Y), second.noise(X, Y))


def test_octaves_are_not_renormalized():
    p = Perlin2D(seed=0)
    octaves = OctaveNoise(1.0)
    for _ in range(4):
        octaves.add_octave(p)
    expected = sum(p.noise(X * 2**i, Y * 2**i) for i in range(4))
    assert np.allclose(octaves.noise(X, Y), expected)


def test_empty_octaves_give_zeros():
    octaves = OctaveNoise(0.5)
    out = octaves.noise(X, 1.0)
    assert out.shape == X.shape
    assert np.all(out == 0.0)
