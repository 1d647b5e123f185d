"""Dashboard defaults for Irish boundary maps."""

from __future__ import annotations

from eiremap.ingestion.geojson import GEOJSON_URL

DEFAULT_GEOJSON_URL = GEOJSON_URL or ""

DEFAULT_TEMPLATE = "<b>%s</b><br>Pop: %s"

# Plotly hover text only understands a small HTML subset.
SUPPORTED_TAGS = "<b>, <i>, <br>, <sup>, <sub>, <span>, <a>"
