from __future__ import annotations

import math

import numpy as np

from .core import as_coords, grad2_from_hash, hash2, make_permutation, wrap_cell

# F2 skews input into simplex cell space, G2 unskews a cell origin back out.
F2 = (math.sqrt(3.0) - 1.0) / 2.0
G2 = (1.0 / math.sqrt(3.0) - 1.0) / 2.0


def _corner(t: np.ndarray, gx: np.ndarray, gy: np.ndarray, dx, dy) -> np.ndarray:
    t4 = t * t * t * t
    return np.where(t > 0.0, t4 * (gx * dx + gy * dy), 0.0)


class Simplex2D:
    """2D simplex noise over a triangulated, skewed lattice."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x, y = as_coords(x, y)

        s = (x + y) * F2
        i = np.floor(x + s)
        j = np.floor(y + s)

        t = (i + j) * G2
        x0 = x - (i + t)
        y0 = y - (j + t)

        # Lower triangle steps along x first, upper along y.
        lower = x0 > y0
        i1 = lower.astype(np.int64)
        j1 = 1 - i1

        x1 = x0 - i1 - G2
        y1 = y0 - j1 - G2
        x2 = x0 - 1.0 - 2.0 * G2
        y2 = y0 - 1.0 - 2.0 * G2

        ii = wrap_cell(i)
        jj = wrap_cell(j)

        p = self.perm
        gx0, gy0 = grad2_from_hash(hash2(p, ii, jj))
        gx1, gy1 = grad2_from_hash(hash2(p, ii + i1, jj + j1))
        gx2, gy2 = grad2_from_hash(hash2(p, ii + 1, jj + 1))

        t0 = 0.5 - x0 * x0 - y0 * y0
        t1 = 0.5 - x1 * x1 - y1 * y1
        t2 = 0.5 - x2 * x2 - y2 * y2

        return (
            _corner(t0, gx0, gy0, x0, y0)
            + _corner(t1, gx1, gy1, x1, y1)
            + _corner(t2, gx2, gy2, x2, y2)
        )
