from __future__ import annotations

import logging
import time

from noisefield.map2d import make_noise, noise_map_2d
from viz.export import sample_grid


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark.

    The spline basis builds five spline caches per query, so expect it to be
    one to two orders of magnitude slower than the others.
    """

    logging.basicConfig(level=logging.INFO)
    seed = 42

    for basis, size in [("perlin", 512), ("simplex", 512), ("perlin_spline", 128)]:
        _timeit(
            f"noise_map_2d {basis} {size}x{size}",
            lambda basis=basis, size=size: noise_map_2d(
                seed=seed,
                basis=basis,
                width=size,
                height=size,
                step=0.037,
                octaves=4,
                persistence=0.5,
            ),
        )

    noise = make_noise(basis="perlin", seed=seed, octaves=8, persistence=0.5)
    _timeit(
        "sample_grid perlin x8 octaves 512x512 (row workers)",
        lambda: sample_grid(
            noise, min_x=-100.0, min_y=-100.0, samples_x=512, samples_y=512, step=0.137
        ),
    )


if __name__ == "__main__":
    main()
