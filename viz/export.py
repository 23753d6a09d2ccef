from __future__ import annotations

import io
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import BinaryIO

import numpy as np
from PIL import Image

from noisefield.core import Noise2D

logger = logging.getLogger(__name__)

_GRAY16_MAX = 65535.0


def _sample_row(
    noise: Noise2D, xs: np.ndarray, y: float, row: int
) -> tuple[int, np.ndarray, float, float]:
    values = np.asarray(noise.noise(xs, np.full_like(xs, y)), dtype=np.float64)
    return row, values, float(np.min(values)), float(np.max(values))


def sample_grid(
    noise: Noise2D,
    *,
    min_x: float,
    min_y: float,
    samples_x: int,
    samples_y: int,
    step: float,
    max_workers: int | None = None,
) -> tuple[np.ndarray, float, float]:
    """Sample `noise` on a `samples_y x samples_x` grid, one worker per row.

    Row `k` is `y = min_y + k * step`; column `j` is `x = min_x + j * step`.
    Each row reports its own min/max; they are merged once every row has
    finished. Returns `(grid, zmin, zmax)`.
    """

    samples_x = int(samples_x)
    samples_y = int(samples_y)
    if samples_x <= 0 or samples_y <= 0:
        raise ValueError("samples_x and samples_y must be > 0")
    step = float(step)
    if not step > 0.0:
        raise ValueError("step must be > 0")

    xs = float(min_x) + np.arange(samples_x, dtype=np.float64) * step
    grid = np.empty((samples_y, samples_x), dtype=np.float64)
    zmin = np.inf
    zmax = -np.inf

    t0 = time.perf_counter()
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [
            pool.submit(_sample_row, noise, xs, float(min_y) + k * step, k)
            for k in range(samples_y)
        ]
        for future in as_completed(futures):
            row, values, rmin, rmax = future.result()
            grid[row] = values
            zmin = min(zmin, rmin)
            zmax = max(zmax, rmax)

    logger.debug(
        "sampled %dx%d grid in %.2f ms",
        samples_x,
        samples_y,
        (time.perf_counter() - t0) * 1000.0,
    )
    return grid, float(zmin), float(zmax)


def array_to_png_bytes(
    z: np.ndarray, *, zmin: float | None = None, zmax: float | None = None
) -> bytes:
    """Convert a 2D array to a 16-bit grayscale PNG.

    Values are min/max normalized to [0, 65535]. Row 0 holds the lowest y
    and is written as the bottom of the image. Degenerate (constant) arrays
    become all zeros.
    """

    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")

    zmin = float(np.min(z)) if zmin is None else float(zmin)
    zmax = float(np.max(z)) if zmax is None else float(zmax)
    if zmax == zmin:
        img = np.zeros(z.shape, dtype=np.uint16)
    else:
        zn = (z - zmin) / (zmax - zmin)
        img = np.clip(zn * _GRAY16_MAX, 0.0, _GRAY16_MAX).astype(np.uint16)

    out = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(img[::-1])).save(out, format="PNG")
    return out.getvalue()


def write_grey_png(
    fp: str | os.PathLike | BinaryIO,
    noise: Noise2D,
    *,
    min_x: float,
    min_y: float,
    samples_x: int,
    samples_y: int,
    step: float,
) -> None:
    """Sample `noise` and write it to `fp` as a normalized grayscale PNG."""

    grid, zmin, zmax = sample_grid(
        noise,
        min_x=min_x,
        min_y=min_y,
        samples_x=samples_x,
        samples_y=samples_y,
        step=step,
    )
    data = array_to_png_bytes(grid, zmin=zmin, zmax=zmax)
    if isinstance(fp, (str, os.PathLike)):
        with open(fp, "wb") as f:
            f.write(data)
    else:
        fp.write(data)
