from .core import Noise2D
from .octave import OctaveNoise
from .perlin import Perlin2D
from .perlin_spline import PerlinCatmullRom2D
from .simplex import Simplex2D
from .spline import CatmullRomSpline, DegenerateSplineError, SplineSampleCache

__all__ = [
    "CatmullRomSpline",
    "DegenerateSplineError",
    "Noise2D",
    "OctaveNoise",
    "Perlin2D",
    "PerlinCatmullRom2D",
    "Simplex2D",
    "SplineSampleCache",
]
