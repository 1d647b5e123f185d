"""Styling values handed to the renderer unchanged."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MapStyle:
    stroke_color: str = "#444444"
    stroke_weight: float = 1.0
    fill_color: str = "#2b8cbe"
    fill_opacity: float = 0.7
    # Only used when the fill is driven by an attribute.
    colorscale: str = "Viridis"
