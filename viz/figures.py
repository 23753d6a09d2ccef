from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from noisefield.spline import CatmullRomSpline, SplineSampleCache

_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
)


def perlin_cell_figure(debug: dict) -> go.Figure:
    """Lattice cell, query point and corner gradients from `Perlin2D.debug_point`."""

    xf = float(debug["relative"]["xf"])
    yf = float(debug["relative"]["yf"])
    corners = debug["corners"]
    corners_xy = {
        "c00": (0.0, 0.0),
        "c10": (1.0, 0.0),
        "c01": (0.0, 1.0),
        "c11": (1.0, 1.0),
    }

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=[0, 1, 1, 0, 0],
            y=[0, 0, 1, 1, 0],
            mode="lines",
            line=dict(color="rgba(255,255,255,0.6)", width=2),
            showlegend=False,
            hoverinfo="skip",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[xf],
            y=[yf],
            mode="markers+text",
            marker=dict(size=12, color="#ffb000"),
            text=[f"(x={xf:.3f}, y={yf:.3f})"],
            textposition="bottom center",
            showlegend=False,
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[cx + 0.05 for cx, _ in corners_xy.values()],
            y=[cy + 0.05 for _, cy in corners_xy.values()],
            mode="text",
            text=[f"{k}: dot={float(corners[k]['dot']):.3f}" for k in corners_xy],
            showlegend=False,
            hoverinfo="skip",
        )
    )

    arrow_scale = 0.35
    annotations = []
    for key, (cx, cy) in corners_xy.items():
        c = corners[key]
        annotations.append(
            dict(
                x=cx + float(c["gx"]) * arrow_scale,
                y=cy + float(c["gy"]) * arrow_scale,
                ax=cx,
                ay=cy,
                xref="x",
                yref="y",
                axref="x",
                ayref="y",
                showarrow=True,
                arrowhead=2,
                arrowwidth=2,
                arrowcolor="rgba(0, 200, 255, 0.9)",
                text="",
            )
        )

    fig.update_layout(
        annotations=annotations, margin=dict(l=0, r=0, t=0, b=0), height=420, **_LAYOUT
    )
    fig.update_xaxes(range=[-0.45, 1.45], visible=False)
    fig.update_yaxes(range=[-0.45, 1.45], visible=False, scaleanchor="x")
    return fig


def spline_cache_figure(
    spline: CatmullRomSpline, cache: SplineSampleCache, *, steps: int = 256
) -> go.Figure:
    """Exact p1..p2 segment against the cache's piecewise-linear lookup."""

    if spline.batch_shape:
        raise ValueError("expected a single (unbatched) spline")
    steps = max(int(steps), 8)

    exact = spline.at(np.linspace(float(spline.lower_t), float(spline.upper_t), steps))
    controls = np.stack([spline.p0, spline.p1, spline.p2, spline.p3])
    xq = np.linspace(float(controls[0, 0]), float(controls[-1, 0]), steps)
    yq = cache.interpolate_x(xq)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=controls[:, 0],
            y=controls[:, 1],
            mode="markers+lines",
            line=dict(color="rgba(255,255,255,0.35)", dash="dot"),
            marker=dict(size=10, color="rgba(255,255,255,0.9)"),
            name="control points",
        )
    )
    fig.add_trace(
        go.Scatter(x=exact[:, 0], y=exact[:, 1], mode="lines", name="spline")
    )
    fig.add_trace(go.Scatter(x=xq, y=yq, mode="lines", name="cache lookup"))
    fig.add_trace(
        go.Scatter(
            x=cache.xs,
            y=cache.ys,
            mode="markers",
            marker=dict(size=7, color="#ffb000"),
            name="cached samples",
        )
    )

    fig.update_layout(
        title=f"Catmull-Rom (alpha={spline.alpha:g}) with {len(cache)} cached samples",
        margin=dict(l=0, r=0, t=40, b=0),
        height=320,
        legend=dict(orientation="h"),
        **_LAYOUT,
    )
    return fig
