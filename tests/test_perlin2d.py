import numpy as np
import pytest

from noisefield.core import HASH_SIZE
from noisefield.perlin import Perlin2D


def _with_table(values) -> Perlin2D:
    p = Perlin2D(seed=0)
    p.perm = np.asarray(values, dtype=np.int64)
    return p


def test_perlin2d_deterministic_for_seed():
    p1 = Perlin2D(seed=123)
    p2 = Perlin2D(seed=123)
    x = np.array([0.1, 1.25, 10.5, -3.3])
    y = np.array([0.2, 2.75, 9.0, -7.9])
    assert np.array_equal(p1.noise(x, y), p2.noise(x, y))
    assert np.array_equal(p1.noise(x, y), p1.noise(x, y))


def test_perlin2d_changes_with_seed():
    p1 = Perlin2D(seed=1)
    p2 = Perlin2D(seed=2)
    x = np.array([0.1, 1.25, 10.5])
    y = np.array([0.2, 2.75, 9.0])
    assert not np.allclose(p1.noise(x, y), p2.noise(x, y))


def test_perlin2d_zero_on_lattice():
    p = Perlin2D(seed=42)
    ii, jj = np.meshgrid(
        np.arange(-20, 21, dtype=np.float64), np.arange(-20, 21, dtype=np.float64)
    )
    assert np.all(p.noise(ii, jj) == 0.0)
    far = np.array([HASH_SIZE, -HASH_SIZE - 1, 3 * HASH_SIZE + 5], dtype=np.float64)
    assert np.all(p.noise(far, far[::-1]) == 0.0)


def test_perlin2d_scalar_input():
    p = Perlin2D(seed=42)
    out = p.noise(0.5, 0.5)
    assert np.ndim(out) == 0
    assert np.isfinite(float(out))


def test_perlin2d_repeats_with_hash_period():
    p = Perlin2D(seed=5)
    x = np.array([0.3, 4.7, -2.1])
    y = np.array([1.9, -0.4, 6.6])
    assert np.allclose(p.noise(x, y), p.noise(x + HASH_SIZE, y - HASH_SIZE))


def test_perlin2d_reasonable_range():
    p = Perlin2D(seed=0)
    xg, yg = np.meshgrid(np.linspace(-5, 5, 96), np.linspace(-5, 5, 96))
    z = p.noise(xg, yg)
    assert float(np.max(np.abs(z))) <= 1.0


def test_perlin2d_continuity_small_step():
    p = Perlin2D(seed=0)
    xg, yg = np.meshgrid(np.linspace(0, 5, 64), np.linspace(0, 5, 64))
    d = 1e-4
    z0 = p.noise(xg, yg)
    z1 = p.noise(xg + d, yg)
    assert float(np.max(np.abs(z1 - z0))) < 0.01


def test_perlin2d_golden_constant_gradient():
    # Every corner gets gradient (1, 0): noise = xf - fade(xf).
    p = _with_table(np.zeros(2 * HASH_SIZE))
    out = p.noise(np.array([0.25, 0.5, 3.25]), np.array([0.5, 0.5, -7.5]))
    assert out.tolist() == [0.146484375, 0.0, 0.146484375]


def test_perlin2d_golden_identity_table():
    # Identity table: gradient index (ix + iy) mod 12.
    table = np.arange(HASH_SIZE)
    p = _with_table(np.concatenate([table, table]))
    assert float(p.noise(0.25, 0.5)) == pytest.approx(0.034548078206587, abs=1e-10)


def test_perlin2d_debug_point_matches_noise():
    p = Perlin2D(seed=0)
    for x, y in [(2.25, 3.75), (-1.6, 0.35), (0.5, 0.5)]:
        dbg = p.debug_point(x, y)
        out = float(p.noise(np.array(x), np.array(y)))
        assert np.allclose(dbg["noise"], out)
        assert set(dbg["corners"]) == {"c00", "c10", "c01", "c11"}
        assert "x_lerp0" in dbg["interpolation"]
        assert "x_lerp1" in dbg["interpolation"]


def test_perlin2d_golden_seed42():
    p = Perlin2D(seed=42)
    assert float(p.noise(0.5, 0.5)) == pytest.approx(0.12499999999999994, abs=1e-12)


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf")])
def test_perlin2d_rejects_non_finite_coordinates(bad):
    p = Perlin2D(seed=0)
    with pytest.raises(ValueError, match="finite"):
        p.noise(np.array([0.5, bad]), np.array([0.5, 0.5]))
    with pytest.raises(ValueError, match="finite"):
        p.noise(0.5, bad)
