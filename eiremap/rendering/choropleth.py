"""Plotly choropleth with one hover label per shape."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import plotly.graph_objects as go

from eiremap.features import FeatureCollection
from eiremap.rendering.styles import MapStyle

logger = logging.getLogger(__name__)


def build_choropleth(
    collection: FeatureCollection,
    labels: Sequence[str],
    style: MapStyle | None = None,
    fill_attribute: str | None = None,
    title: str | None = None,
) -> go.Figure:
    """Draw *collection* and attach ``labels[i]`` as hover text of shape i.

    Without *fill_attribute* every shape gets ``style.fill_color``; with it,
    the attribute's values drive ``style.colorscale``.
    """
    if len(labels) != len(collection):
        raise ValueError(
            f"Got {len(labels)} labels for {len(collection)} features"
        )
    style = style or MapStyle()
    geojson = collection.to_geojson()
    locations = [f["id"] for f in geojson["features"]]

    if fill_attribute is None:
        z = [0] * len(collection)
        colorscale = [[0, style.fill_color], [1, style.fill_color]]
        showscale = False
    else:
        z = collection.to_frame()[fill_attribute].tolist()
        colorscale = style.colorscale
        showscale = True

    fig = go.Figure(go.Choropleth(
        geojson=geojson,
        locations=locations,
        z=z,
        colorscale=colorscale,
        showscale=showscale,
        colorbar=dict(title=fill_attribute) if showscale else None,
        marker_line_color=style.stroke_color,
        marker_line_width=style.stroke_weight,
        marker_opacity=style.fill_opacity,
        hovertext=list(labels),
        hovertemplate="%{hovertext}<extra></extra>",
    ))
    fig.update_geos(
        fitbounds="locations",
        visible=False,
        projection_type="mercator",
    )
    fig.update_layout(
        title=title,
        margin=dict(l=0, r=0, t=40 if title else 0, b=0),
        height=600,
        template="plotly_white",
    )
    logger.debug("Built choropleth with %d shapes", len(collection))
    return fig
