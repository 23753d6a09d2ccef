from __future__ import annotations

import logging
from typing import Protocol

import numpy as np

logger = logging.getLogger(__name__)

# Size of the per-instance gradient hash. Tables hold two copies.
HASH_SIZE = 2048 * 4


class Noise2D(Protocol):
    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve; zero first and second derivative at 0 and 1."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def as_coords(x, y) -> tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise ValueError("coordinates must be finite")
    return x, y


def make_permutation(seed: int, *, size: int = HASH_SIZE) -> np.ndarray:
    """Seeded hash table of `2 * size` entries, each in [0, size).

    The second half repeats the first so `p[i]` and `p[i + size]` agree and
    offset lookups up to `size` need no wraparound.
    """

    size = int(size)
    if size <= 0:
        raise ValueError("size must be > 0")
    rng = np.random.default_rng(int(seed))
    p = rng.integers(0, size, size=size, dtype=np.int64)
    p = np.concatenate([p, p])
    p.flags.writeable = False
    logger.debug("built permutation table seed=%d size=%d", int(seed), size)
    return p


def wrap_cell(i: np.ndarray, size: int = HASH_SIZE) -> np.ndarray:
    # np.mod keeps the sign of the divisor, so negative cells wrap upward.
    return np.mod(i, size).astype(np.int64)


def hash2(
    perm: np.ndarray, ix: np.ndarray, iy: np.ndarray, *, wrap: bool = False
) -> np.ndarray:
    """Double lookup `perm[ix + perm[iy]]`.

    With `wrap=True` both indices are reduced modulo the table length first,
    which the 4x4 spline neighbourhood needs since its offsets reach +3.
    """

    if wrap:
        n = int(perm.shape[0])
        return perm[np.mod(ix + perm[np.mod(iy, n)], n)]
    return perm[ix + perm[iy]]


_UNIT_CIRCLE_DELTA = np.pi / 6.0

GRADIENTS = np.stack(
    [
        np.cos(np.arange(12, dtype=np.float64) * _UNIT_CIRCLE_DELTA),
        np.sin(np.arange(12, dtype=np.float64) * _UNIT_CIRCLE_DELTA),
    ],
    axis=1,
)
GRADIENTS.flags.writeable = False


def grad2_from_hash(h: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    n = int(GRADIENTS.shape[0])
    idx = np.mod(h, n).astype(np.int64)
    g = GRADIENTS[idx]
    return g[..., 0], g[..., 1]
