from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .core import (
    HASH_SIZE,
    as_coords,
    fade,
    grad2_from_hash,
    hash2,
    lerp,
    make_permutation,
    wrap_cell,
)


@dataclass(frozen=True)
class Corner2D:
    gx: float
    gy: float
    dx: float
    dy: float
    dot: float


class Perlin2D:
    """Gradient noise with 4-point interpolation through a quintic fade.

    Fast, and zero at every integer lattice point. The square lattice can
    show through as faint axis-aligned artifacts.
    """

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x, y = as_coords(x, y)

        xfl = np.floor(x)
        yfl = np.floor(y)
        xf = x - xfl
        yf = y - yfl

        xi0 = wrap_cell(xfl)
        yi0 = wrap_cell(yfl)
        xi1 = xi0 + 1
        yi1 = yi0 + 1

        p = self.perm
        gx00, gy00 = grad2_from_hash(hash2(p, xi0, yi0))
        gx10, gy10 = grad2_from_hash(hash2(p, xi1, yi0))
        gx01, gy01 = grad2_from_hash(hash2(p, xi0, yi1))
        gx11, gy11 = grad2_from_hash(hash2(p, xi1, yi1))

        d00 = gx00 * xf + gy00 * yf
        d10 = gx10 * (xf - 1.0) + gy10 * yf
        d01 = gx01 * xf + gy01 * (yf - 1.0)
        d11 = gx11 * (xf - 1.0) + gy11 * (yf - 1.0)

        u = fade(xf)
        v = fade(yf)
        x_lerp0 = lerp(d00, d10, u)
        x_lerp1 = lerp(d01, d11, u)
        return lerp(x_lerp0, x_lerp1, v)

    def debug_point(self, x: float, y: float) -> dict:
        # Scalar breakdown for inspection; mirrors noise() step by step.
        xf = float(x)
        yf = float(y)
        xi0 = int(math.floor(xf)) % HASH_SIZE
        yi0 = int(math.floor(yf)) % HASH_SIZE
        xi1 = xi0 + 1
        yi1 = yi0 + 1

        xrel = xf - math.floor(xf)
        yrel = yf - math.floor(yf)

        u = float(fade(np.array(xrel, dtype=np.float64)))
        v = float(fade(np.array(yrel, dtype=np.float64)))

        p = self.perm
        h00 = int(hash2(p, xi0, yi0))
        h10 = int(hash2(p, xi1, yi0))
        h01 = int(hash2(p, xi0, yi1))
        h11 = int(hash2(p, xi1, yi1))

        def corner(h: int, dx: float, dy: float) -> Corner2D:
            gx, gy = grad2_from_hash(np.array(h, dtype=np.int64))
            gx = float(gx)
            gy = float(gy)
            return Corner2D(gx=gx, gy=gy, dx=dx, dy=dy, dot=(gx * dx + gy * dy))

        c00 = corner(h00, xrel, yrel)
        c10 = corner(h10, xrel - 1.0, yrel)
        c01 = corner(h01, xrel, yrel - 1.0)
        c11 = corner(h11, xrel - 1.0, yrel - 1.0)

        x_lerp0 = lerp(np.array(c00.dot), np.array(c10.dot), np.array(u))
        x_lerp1 = lerp(np.array(c01.dot), np.array(c11.dot), np.array(u))
        n = float(lerp(x_lerp0, x_lerp1, np.array(v)))

        return {
            "seed": self.seed,
            "input": {"x": xf, "y": yf},
            "cell": {"xi0": xi0, "yi0": yi0, "xi1": xi1, "yi1": yi1},
            "relative": {"xf": xrel, "yf": yrel},
            "fade": {"u": u, "v": v},
            "hash": {"h00": h00, "h10": h10, "h01": h01, "h11": h11},
            "corners": {
                "c00": c00.__dict__,
                "c10": c10.__dict__,
                "c01": c01.__dict__,
                "c11": c11.__dict__,
            },
            "interpolation": {
                "x_lerp0": float(x_lerp0),
                "x_lerp1": float(x_lerp1),
            },
            "noise": n,
        }
