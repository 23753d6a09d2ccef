from __future__ import annotations

import logging
import sys
from pathlib import Path

SEED = 42
START_CORNER = -100.0
IMAGE_DIMENSION = 200
SPLINE_CACHE_SIZE = 2
SAMPLE_STEP = 0.137


def main() -> None:
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))

    from noisefield import OctaveNoise, Perlin2D, PerlinCatmullRom2D, Simplex2D
    from viz.export import write_grey_png

    logging.basicConfig(level=logging.DEBUG)

    out_dir = root / "assets"
    out_dir.mkdir(parents=True, exist_ok=True)

    def perlin():
        return Perlin2D(seed=SEED)

    def perlin_spline():
        return PerlinCatmullRom2D(spline_cache_size=SPLINE_CACHE_SIZE, seed=SEED)

    def simplex():
        return Simplex2D(seed=SEED)

    def pink(factory):
        octaves = OctaveNoise(0.5)
        for _ in range(8):
            octaves.add_octave(factory())
        return octaves

    scenes = {
        "perlin.png": perlin(),
        "perlin_spline.png": perlin_spline(),
        "simplex.png": simplex(),
        "octave_perlin.png": pink(perlin),
        "octave_perlin_spline.png": pink(perlin_spline),
        "octave_simplex.png": pink(simplex),
    }
    for name, noise in scenes.items():
        write_grey_png(
            str(out_dir / name),
            noise,
            min_x=START_CORNER,
            min_y=START_CORNER,
            samples_x=IMAGE_DIMENSION,
            samples_y=IMAGE_DIMENSION,
            step=SAMPLE_STEP,
        )
        print(f"wrote {out_dir / name}")


if __name__ == "__main__":
    main()
