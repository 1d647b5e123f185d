"""Tests for the plotly choropleth builder."""

from __future__ import annotations

import pytest

from eiremap.features import Feature, FeatureCollection
from eiremap.labels import Field, format_labels, grouped
from eiremap.rendering.choropleth import build_choropleth
from eiremap.rendering.styles import MapStyle


@pytest.fixture
def collection() -> FeatureCollection:
    rows = [
        ("Dublin South", 12345, -6.3),
        ("Galway City East", 26012, -9.0),
        ("Letterkenny", 30000, -7.7),
    ]
    return FeatureCollection(tuple(
        Feature(
            {"LEA": name, "Pop2016": pop},
            geometry={"type": "Polygon", "coordinates": [[[x, 53], [x + 0.1, 53], [x + 0.1, 53.1], [x, 53]]]},
        )
        for name, pop, x in rows
    ))


@pytest.fixture
def labels(collection) -> list[str]:
    return format_labels(collection, "<b>%s</b><br>Pop: %s", [Field("LEA"), Field("Pop2016", transform=grouped())])


class TestBuildChoropleth:
    def test_labels_aligned_with_locations(self, collection, labels):
        fig = build_choropleth(collection, labels)
        trace = fig.data[0]
        assert list(trace.locations) == ["0", "1", "2"]
        assert list(trace.hovertext) == labels
        assert trace.hovertext[1] == "<b>Galway City East</b><br>Pop: 26,012"
        assert [f["id"] for f in trace.geojson["features"]] == ["0", "1", "2"]

    def test_hover_shows_label_only(self, collection, labels):
        trace = build_choropleth(collection, labels).data[0]
        assert trace.hovertemplate == "%{hovertext}<extra></extra>"

    def test_style_passed_through(self, collection, labels):
        style = MapStyle(stroke_color="#ffffff", stroke_weight=2.5, fill_color="#ff0000", fill_opacity=0.4)
        trace = build_choropleth(collection, labels, style=style).data[0]
        assert trace.marker.line.color == "#ffffff"
        assert trace.marker.line.width == 2.5
        assert trace.marker.opacity == 0.4
        assert trace.showscale is False
        assert all(color == "#ff0000" for _, color in trace.colorscale)

    def test_fill_by_attribute(self, collection, labels):
        trace = build_choropleth(collection, labels, fill_attribute="Pop2016").data[0]
        assert list(trace.z) == [12345, 26012, 30000]
        assert trace.showscale is True

    def test_label_count_must_match(self, collection, labels):
        with pytest.raises(ValueError):
            build_choropleth(collection, labels[:-1])

    def test_title(self, collection, labels):
        fig = build_choropleth(collection, labels, title="LEAs")
        assert fig.layout.title.text == "LEAs"
