from __future__ import annotations

import json
import time

import numpy as np
import streamlit as st

from noisefield.map2d import BASES, noise_map_2d
from noisefield.perlin import Perlin2D
from noisefield.spline import CatmullRomSpline, SplineSampleCache
from viz.export import array_to_png_bytes
from viz.figures import perlin_cell_figure, spline_cache_figure

st.set_page_config(
    page_title="Noise Field",
    page_icon="~",
    layout="wide",
)


def _qp_get(name: str, default: str) -> str:
    raw = st.query_params.get(name)
    if raw is None:
        return default
    if isinstance(raw, list):
        return str(raw[0]) if raw else default
    return str(raw)


def _qp_int(name: str, default: int, *, min_value: int, max_value: int) -> int:
    try:
        v = int(float(_qp_get(name, str(default))))
    except ValueError:
        v = default
    return max(min_value, min(max_value, v))


def _qp_float(
    name: str, default: float, *, min_value: float, max_value: float
) -> float:
    try:
        v = float(_qp_get(name, str(default)))
    except ValueError:
        v = default
    return max(min_value, min(max_value, v))


@st.cache_data(show_spinner=False)
def _noise_map(
    *,
    seed: int,
    basis: str,
    width: int,
    height: int,
    step: float,
    octaves: int,
    persistence: float,
    spline_cache_size: int,
    offset_x: float,
    offset_y: float,
) -> np.ndarray:
    return noise_map_2d(
        seed=int(seed),
        basis=str(basis),
        width=int(width),
        height=int(height),
        step=float(step),
        octaves=int(octaves),
        persistence=float(persistence),
        spline_cache_size=int(spline_cache_size),
        offset_x=float(offset_x),
        offset_y=float(offset_y),
        normalize=False,
    )


default_basis = _qp_get("basis", "perlin")
if default_basis not in BASES:
    default_basis = "perlin"

with st.sidebar:
    st.header("Navigation")
    page = st.radio("Page", ["Explore", "Learn"], label_visibility="collapsed")

    st.divider()
    basis = st.selectbox("Basis", BASES, index=BASES.index(default_basis))
    seed = st.number_input(
        "Seed", value=_qp_int("seed", 42, min_value=0, max_value=2**31 - 1), step=1
    )
    octaves = st.slider(
        "Octaves", 1, 10, _qp_int("octaves", 1, min_value=1, max_value=10)
    )
    persistence = st.slider(
        "Persistence",
        0.0,
        1.0,
        _qp_float("persistence", 0.5, min_value=0.0, max_value=1.0),
        step=0.05,
    )
    spline_cache_size = st.slider(
        "Spline cache size",
        3,
        64,
        _qp_int("cache", 8, min_value=3, max_value=64),
        disabled=basis != "perlin_spline",
    )

    st.divider()
    width = st.slider(
        "Width", 32, 1024, _qp_int("w", 256, min_value=32, max_value=1024)
    )
    height = st.slider(
        "Height", 32, 1024, _qp_int("h", 256, min_value=32, max_value=1024)
    )
    step = st.number_input(
        "Sample step",
        min_value=0.001,
        value=_qp_float("step", 0.037, min_value=0.001, max_value=10.0),
        step=0.005,
        format="%.3f",
    )
    offset_x = st.number_input(
        "Origin x", value=_qp_float("x", 0.0, min_value=-1e6, max_value=1e6)
    )
    offset_y = st.number_input(
        "Origin y", value=_qp_float("y", 0.0, min_value=-1e6, max_value=1e6)
    )

    params = {
        "basis": str(basis),
        "seed": int(seed),
        "octaves": int(octaves),
        "persistence": float(persistence),
        "cache": int(spline_cache_size),
        "w": int(width),
        "h": int(height),
        "step": float(step),
        "x": float(offset_x),
        "y": float(offset_y),
    }
    if st.button("Update URL with current settings"):
        st.query_params.clear()
        st.query_params.update({k: str(v) for k, v in params.items()})


if page == "Explore":
    st.title("Noise Field")

    t0 = time.perf_counter()
    z = _noise_map(
        seed=int(seed),
        basis=str(basis),
        width=int(width),
        height=int(height),
        step=float(step),
        octaves=int(octaves),
        persistence=float(persistence),
        spline_cache_size=int(spline_cache_size),
        offset_x=float(offset_x),
        offset_y=float(offset_y),
    )
    elapsed_ms = (time.perf_counter() - t0) * 1000.0

    zmin = float(np.min(z))
    zmax = float(np.max(z))
    z01 = np.zeros_like(z) if zmax == zmin else (z - zmin) / (zmax - zmin)

    # Row 0 is the lowest y; show it at the bottom.
    st.image(z01[::-1], clamp=True, caption=f"{basis}, seed={int(seed)}")
    st.caption(f"min={zmin:.4f}  max={zmax:.4f}  compute={elapsed_ms:.1f} ms")

    base_name = f"{basis}_{int(seed)}"
    st.download_button(
        "Download PNG (16-bit)",
        data=array_to_png_bytes(z, zmin=zmin, zmax=zmax),
        file_name=f"{base_name}.png",
        mime="image/png",
    )
    st.download_button(
        "Download params.json",
        data=json.dumps(params, indent=2, sort_keys=True),
        file_name=f"{base_name}.params.json",
        mime="application/json",
    )

else:
    st.title("Learn")
    t_cell, t_spline = st.tabs(["Gradient cell", "Spline cache"])

    with t_cell:
        px = st.slider("x", 0.0, 10.0, 2.25, step=0.05, key="learn_px")
        py = st.slider("y", 0.0, 10.0, 3.75, step=0.05, key="learn_py")
        debug = Perlin2D(seed=int(seed)).debug_point(px, py)
        st.plotly_chart(perlin_cell_figure(debug), key="learn_cell")
        st.json(debug)

    with t_spline:
        alpha = st.select_slider(
            "alpha", options=[0.0, 0.25, 0.5, 0.75, 1.0], value=0.5
        )
        cols = st.columns(4)
        ys = [
            col.slider(f"p{i}.y", -1.0, 1.0, v, step=0.05, key=f"learn_p{i}")
            for i, (col, v) in enumerate(zip(cols, [0.2, -0.4, 0.6, 0.1]))
        ]
        spline = CatmullRomSpline(
            *[(float(i), float(v)) for i, v in enumerate(ys)], alpha=float(alpha)
        )
        cache = SplineSampleCache(spline, int(spline_cache_size))
        st.plotly_chart(spline_cache_figure(spline, cache), key="learn_spline")
