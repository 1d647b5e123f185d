"""eiremap — Streamlit choropleth of Irish administrative regions."""

from __future__ import annotations

import httpx
import pandas as pd
import streamlit as st

from dashboard.geo import DEFAULT_GEOJSON_URL, DEFAULT_TEMPLATE, SUPPORTED_TAGS
from eiremap.features import FeatureCollection
from eiremap.ingestion.geojson import fetch_geojson
from eiremap.labels import Field, LabelError, format_labels, grouped
from eiremap.processing.cleaner import (
    NAME_CANDIDATES,
    POPULATION_CANDIDATES,
    find_attribute,
    prepare_attributes,
)
from eiremap.rendering.choropleth import build_choropleth
from eiremap.rendering.styles import MapStyle

st.set_page_config(
    page_title="eiremap — Irish regions",
    page_icon="🗺️",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_data(ttl=600)
def load_geojson(url: str):
    """Fetch the boundary GeoJSON (cached 10 min)."""
    return fetch_geojson(url)


def _index_of(options: list[str], value: str | None) -> int:
    return options.index(value) if value in options else 0


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

st.sidebar.title("🗺️ eiremap")
st.sidebar.markdown("**Irish administrative regions**  \nGeoJSON → hover labels → map")
st.sidebar.markdown("---")

url = st.sidebar.text_input("GeoJSON URL", value=DEFAULT_GEOJSON_URL)

st.title("🗺️ Irish regions — choropleth")

if not url:
    st.info("Enter a GeoJSON URL in the sidebar (or set EIREMAP_GEOJSON_URL).")
    st.stop()

try:
    geojson = load_geojson(url)
except (httpx.HTTPError, ValueError) as exc:
    st.error(f"Could not load the GeoJSON: {exc}")
    st.stop()

try:
    raw = FeatureCollection.from_geojson(geojson)
except ValueError as exc:
    st.error(f"Malformed GeoJSON: {exc}")
    st.stop()
attrs = raw.to_frame()
if attrs.empty:
    st.warning("The GeoJSON has no features.")
    st.stop()

columns = list(attrs.columns)
numeric_columns = [c for c in columns if pd.to_numeric(attrs[c], errors="coerce").notna().any()]

name_attr = st.sidebar.selectbox(
    "Name attribute", columns, index=_index_of(columns, find_attribute(attrs, NAME_CANDIDATES)),
)
value_attr = st.sidebar.selectbox(
    "Value attribute", numeric_columns or columns,
    index=_index_of(numeric_columns or columns, find_attribute(attrs, POPULATION_CANDIDATES)),
)
digits = st.sidebar.number_input("Decimals", min_value=0, max_value=6, value=0, step=1)
template = st.sidebar.text_input("Label template", value=DEFAULT_TEMPLATE)
st.sidebar.caption(f"Two `%s` placeholders: name, then value. Tags: {SUPPORTED_TAGS}")

st.sidebar.markdown("---")
st.sidebar.subheader("Style")
style = MapStyle(
    stroke_color=st.sidebar.color_picker("Stroke colour", MapStyle.stroke_color),
    stroke_weight=st.sidebar.slider("Stroke weight", 0.0, 5.0, MapStyle.stroke_weight, 0.5),
    fill_color=st.sidebar.color_picker("Fill colour", MapStyle.fill_color),
    fill_opacity=st.sidebar.slider("Fill opacity", 0.0, 1.0, MapStyle.fill_opacity, 0.05),
)
fill_by = st.sidebar.selectbox("Fill by", ["(single colour)"] + numeric_columns)
fill_attribute = None if fill_by == "(single colour)" else fill_by

# ---------------------------------------------------------------------------
# Labels + map
# ---------------------------------------------------------------------------

prepared = prepare_attributes(attrs, numeric=[value_attr] + ([fill_attribute] if fill_attribute else []))
collection = FeatureCollection.from_frame(prepared.assign(geometry=[f.geometry for f in raw]))

try:
    labels = format_labels(
        prepared,
        template,
        [Field(name_attr), Field(value_attr, transform=grouped(int(digits)))],
    )
except LabelError as exc:
    st.error(f"{type(exc).__name__}: {exc}")
    st.stop()

fig = build_choropleth(
    collection,
    labels,
    style=style,
    fill_attribute=fill_attribute,
    title=f"{name_attr} — {value_attr}",
)
st.plotly_chart(fig, use_container_width=True)

st.subheader("Labels")
st.dataframe(
    pd.DataFrame({name_attr: prepared[name_attr], value_attr: prepared[value_attr], "label": labels}),
    use_container_width=True,
    hide_index=True,
)
