from __future__ import annotations

import math

import numpy as np

CENTRIPETAL = 0.5
UNIFORM = 0.0
CHORDAL = 1.0

MIN_CACHE_POINTS = 3


class DegenerateSplineError(ValueError):
    """Two consecutive control points produce a zero-length knot interval."""


def _as_points(p) -> np.ndarray:
    p = np.asarray(p, dtype=np.float64)
    if p.ndim == 0 or p.shape[-1] != 2:
        raise ValueError("control points must have a trailing axis of length 2")
    return p


def _take(a: np.ndarray, idx) -> np.ndarray:
    # a[..., idx] per element of the leading (batch) axes.
    idx = np.expand_dims(np.asarray(idx, dtype=np.int64), -1)
    return np.take_along_axis(a, idx, axis=-1)[..., 0]


def _weights(lo, hi, t) -> tuple[np.ndarray, np.ndarray]:
    span = hi - lo
    return (hi - t) / span, (t - lo) / span


class CatmullRomSpline:
    """Generic Catmull-Rom spline through four control points.

    `alpha` picks the knot parameterization: 0.5 is centripetal, 0 uniform,
    1 chordal. Control points may carry leading batch dimensions, shape
    `(..., 2)`, in which case every batch element is an independent spline
    and `at()` evaluates all of them together.

    Only `t` in `[lower_t, upper_t]` (the p1..p2 segment) is meaningful.
    """

    def __init__(self, p0, p1, p2, p3, *, alpha: float = CENTRIPETAL):
        self.alpha = float(alpha)
        p0, p1, p2, p3 = np.broadcast_arrays(
            _as_points(p0), _as_points(p1), _as_points(p2), _as_points(p3)
        )
        self.p0 = p0
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3

        d1 = self._knot_step(p0, p1)
        d2 = self._knot_step(p1, p2)
        d3 = self._knot_step(p2, p3)
        if np.any(d1 <= 0.0) or np.any(d2 <= 0.0) or np.any(d3 <= 0.0):
            raise DegenerateSplineError(
                "coincident consecutive control points give a zero knot interval"
            )
        self.t1 = np.asarray(d1)
        self.t2 = np.asarray(d1 + d2)
        self.t3 = np.asarray(d1 + d2 + d3)

    def _knot_step(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        d = np.hypot(b[..., 0] - a[..., 0], b[..., 1] - a[..., 1])
        return np.power(d, self.alpha)

    @property
    def batch_shape(self) -> tuple[int, ...]:
        return tuple(self.t1.shape)

    @property
    def lower_t(self) -> np.ndarray:
        return self.t1

    @property
    def upper_t(self) -> np.ndarray:
        return self.t2

    def at(self, t) -> np.ndarray:
        """Point(s) on the spline at parameter `t`.

        `t` may have extra trailing axes beyond the batch shape (e.g. one
        row of parameters per spline); the result has shape
        `t.shape + (2,)` after broadcasting.
        """

        t = np.asarray(t, dtype=np.float64)
        extra = max(t.ndim - self.t1.ndim, 0)

        def knot(k: np.ndarray) -> np.ndarray:
            return k.reshape(k.shape + (1,) * extra)

        def point(p: np.ndarray) -> np.ndarray:
            return p.reshape(p.shape[:-1] + (1,) * extra + (2,))

        t0 = 0.0
        t1 = knot(self.t1)
        t2 = knot(self.t2)
        t3 = knot(self.t3)
        p0, p1, p2, p3 = (point(p) for p in (self.p0, self.p1, self.p2, self.p3))

        def blend(a, b, lo, hi):
            w_lo, w_hi = _weights(lo, hi, t)
            return a * np.expand_dims(w_lo, -1) + b * np.expand_dims(w_hi, -1)

        a1 = blend(p0, p1, t0, t1)
        a2 = blend(p1, p2, t1, t2)
        a3 = blend(p2, p3, t2, t3)

        b1 = blend(a1, a2, t0, t2)
        b2 = blend(a2, a3, t1, t3)

        return blend(b1, b2, t1, t2)


def centripetal(p0, p1, p2, p3) -> CatmullRomSpline:
    return CatmullRomSpline(p0, p1, p2, p3, alpha=CENTRIPETAL)


def uniform(p0, p1, p2, p3) -> CatmullRomSpline:
    return CatmullRomSpline(p0, p1, p2, p3, alpha=UNIFORM)


def chordal(p0, p1, p2, p3) -> CatmullRomSpline:
    return CatmullRomSpline(p0, p1, p2, p3, alpha=CHORDAL)


class SplineSampleCache:
    """Evenly-t-spaced samples of a spline's p1..p2 segment, looked up by x.

    Lookup is a binary search plus a local linear interpolation. It is only
    correct when the sampled segment is a function of x (x non-decreasing
    across samples); loops or vertical runs are not detected.
    """

    def __init__(self, spline: CatmullRomSpline, n_points: int):
        n = max(int(n_points), MIN_CACHE_POINTS)
        ts = np.linspace(spline.lower_t, spline.upper_t, n, axis=-1)
        samples = spline.at(ts)
        self.n_points = n
        self.xs = samples[..., 0]
        self.ys = samples[..., 1]

    def __len__(self) -> int:
        return self.n_points

    @property
    def samples(self) -> np.ndarray:
        return np.stack([self.xs, self.ys], axis=-1)

    def interpolate_x(self, x) -> np.ndarray:
        """Estimated y at `x`, clamped to the first/last sample outside."""

        x = np.asarray(x, dtype=np.float64)
        n = self.n_points
        shape = np.broadcast_shapes(self.xs.shape[:-1], x.shape)
        xs = np.broadcast_to(self.xs, shape + (n,))
        ys = np.broadcast_to(self.ys, shape + (n,))
        xq = np.broadcast_to(x, shape)

        # Lock-step bisection: `lo` ends as the number of samples with x <= xq.
        lo = np.zeros(shape, dtype=np.int64)
        hi = np.full(shape, n, dtype=np.int64)
        for _ in range(math.ceil(math.log2(n + 1))):
            active = lo < hi
            if not np.any(active):
                break
            mid = (lo + hi) // 2
            xm = _take(xs, np.minimum(mid, n - 1))
            right = xm <= xq
            lo = np.where(active & right, mid + 1, lo)
            hi = np.where(active & ~right, mid, hi)

        i = lo - 1
        k = np.clip(i, 0, n - 2)
        x0 = _take(xs, k)
        x1 = _take(xs, k + 1)
        y0 = _take(ys, k)
        y1 = _take(ys, k + 1)

        with np.errstate(divide="ignore", invalid="ignore"):
            inside = y0 + (y1 - y0) * (xq - x0) / (x1 - x0)

        out = np.where(i < 0, ys[..., 0], inside)
        return np.where(i >= n - 1, ys[..., -1], out)
