"""Tests for label formatting: templates, grouped numbers and the formatter."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from eiremap.features import Feature, FeatureCollection
from eiremap.labels import (
    Field,
    Kind,
    LabelError,
    MissingAttribute,
    Template,
    TemplateMismatch,
    TypeMismatch,
    format_grouped,
    format_labels,
    grouped,
)

TEMPLATE = "<strong>%s</strong><br>Pop: %s"


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def lea_rows() -> list[dict]:
    """A few Local Electoral Areas, in map order."""
    return [
        {"LEA": "Dublin South", "Pop2016": 12345},
        {"LEA": "Ballyfermot-Drimnagh", "Pop2016": 51620},
        {"LEA": "Conamara Theas", "Pop2016": 9871},
        {"LEA": "Cork City South East", "Pop2016": 1000000},
    ]


@pytest.fixture
def lea_fields() -> list[Field]:
    return [Field("LEA"), Field("Pop2016", transform=grouped(0))]


# ── Template parsing ──────────────────────────────────────────────────────

class TestTemplate:
    def test_placeholder_kinds(self):
        tpl = Template.parse("%s has %d areas, %.2f%% urban, density %f")
        assert [p.kind for p in tpl.placeholders] == [Kind.STRING, Kind.INTEGER, Kind.FLOAT, Kind.FLOAT]
        assert tpl.placeholders[2].digits == 2
        assert tpl.placeholders[3].digits is None

    def test_percent_escape_is_literal(self):
        tpl = Template.parse("100%% of %s")
        assert len(tpl) == 1
        assert tpl.render(["Kerry"]) == "100% of Kerry"

    def test_markup_kept_verbatim(self):
        tpl = Template.parse("<em>%s</em><br/>")
        assert tpl.render(["x"]) == "<em>x</em><br/>"

    def test_no_placeholders(self):
        tpl = Template.parse("<b>static</b>")
        assert len(tpl) == 0
        assert tpl.render([]) == "<b>static</b>"

    def test_string_precision_truncates(self):
        tpl = Template.parse("%.5s")
        assert tpl.placeholders[0].render("Ballyfermot") == "Bally"
        assert tpl.placeholders[0].render("Cobh") == "Cobh"

    def test_integer_precision_zero_pads(self):
        placeholder = Template.parse("%.3d").placeholders[0]
        assert placeholder.render(7) == "007"
        assert placeholder.render(-7) == "-007"
        assert placeholder.render(12345) == "12345"

    def test_unknown_directive_is_literal(self):
        tpl = Template.parse("50% off %s")
        assert len(tpl) == 1
        assert tpl.render(["Sligo"]) == "50% off Sligo"


# ── Grouped numbers ───────────────────────────────────────────────────────

class TestFormatGrouped:
    def test_million(self):
        assert format_grouped(1000000) == "1,000,000"

    def test_zero_digits_rounds(self):
        assert format_grouped(12345.7) == "12,346"

    def test_digits(self):
        assert format_grouped(12345.678, digits=2) == "12,345.68"
        assert format_grouped(1234, digits=1) == "1,234.0"

    def test_small_and_negative(self):
        assert format_grouped(999) == "999"
        assert format_grouped(-1234567) == "-1,234,567"

    def test_numpy_values(self):
        assert format_grouped(np.int64(51620)) == "51,620"
        assert format_grouped(np.float64(2500.5), digits=1) == "2,500.5"

    def test_locale_independent(self):
        import locale
        try:
            locale.setlocale(locale.LC_ALL, "de_DE.UTF-8")
        except locale.Error:
            pytest.skip("de_DE locale not available")
        try:
            assert format_grouped(1234.5, digits=1) == "1,234.5"
        finally:
            locale.setlocale(locale.LC_ALL, "C")

    def test_non_numeric_raises(self):
        with pytest.raises(TypeMismatch):
            format_grouped("12345")
        with pytest.raises(TypeMismatch):
            format_grouped(True)

    def test_negative_digits_rejected(self):
        with pytest.raises(ValueError):
            format_grouped(1, digits=-1)

    def test_large_integers_exact(self):
        assert format_grouped(2**60 + 1, digits=1) == f"{2**60 + 1:,}.0"
        assert format_grouped(2**60 + 1) == f"{2**60 + 1:,}"

    def test_grouped_transform(self):
        assert grouped()(12345) == "12,345"
        assert grouped(2)(0.5) == "0.50"


# ── format_labels ─────────────────────────────────────────────────────────

class TestFormatLabels:
    def test_reference_label(self, lea_fields):
        labels = format_labels([{"LEA": "Dublin South", "Pop2016": 12345}], TEMPLATE, lea_fields)
        assert labels == ["<strong>Dublin South</strong><br>Pop: 12,345"]

    def test_one_label_per_feature_in_order(self, lea_rows, lea_fields):
        labels = format_labels(lea_rows, TEMPLATE, lea_fields)
        assert len(labels) == len(lea_rows)
        for row, label in zip(lea_rows, labels):
            assert label.startswith(f"<strong>{row['LEA']}</strong>")
        assert labels[3].endswith("Pop: 1,000,000")

    def test_idempotent(self, lea_rows, lea_fields):
        assert format_labels(lea_rows, TEMPLATE, lea_fields) == format_labels(lea_rows, TEMPLATE, lea_fields)

    def test_inputs_not_mutated(self, lea_rows, lea_fields):
        before = [dict(r) for r in lea_rows]
        format_labels(lea_rows, TEMPLATE, lea_fields)
        assert lea_rows == before

    def test_empty_collection(self, lea_fields):
        assert format_labels([], TEMPLATE, lea_fields) == []

    def test_dataframe_input(self, lea_rows, lea_fields):
        df = pd.DataFrame(lea_rows)
        assert format_labels(df, TEMPLATE, lea_fields) == format_labels(lea_rows, TEMPLATE, lea_fields)

    def test_geojson_input(self, lea_rows, lea_fields):
        geojson = {
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "properties": row, "geometry": None} for row in lea_rows
            ],
        }
        assert format_labels(geojson, TEMPLATE, lea_fields) == format_labels(lea_rows, TEMPLATE, lea_fields)

    def test_feature_collection_input(self, lea_rows, lea_fields):
        fc = FeatureCollection(tuple(Feature(row) for row in lea_rows))
        assert format_labels(fc, TEMPLATE, lea_fields)[0] == "<strong>Dublin South</strong><br>Pop: 12,345"

    def test_typed_placeholders(self):
        labels = format_labels(
            [{"LEA": "Tralee", "Seats": 7, "Area": 512.345}],
            "%s: %d seats, %.1f km²",
            [Field("LEA"), Field("Seats"), Field("Area")],
        )
        assert labels == ["Tralee: 7 seats, 512.3 km²"]

    def test_integral_float_for_integer(self):
        labels = format_labels([{"n": 6.0}], "%d", [Field("n")])
        assert labels == ["6"]

    def test_string_placeholder_accepts_numbers(self):
        assert format_labels([{"n": 42}], "%s", [Field("n")]) == ["42"]

    def test_markup_not_escaped_by_default(self):
        labels = format_labels([{"LEA": "A & B <x>"}], "<b>%s</b>", [Field("LEA")])
        assert labels == ["<b>A & B <x></b>"]

    def test_escape_values(self):
        labels = format_labels([{"LEA": "A & B <x>"}], "<b>%s</b>", [Field("LEA")], escape_values=True)
        assert labels == ["<b>A &amp; B &lt;x&gt;</b>"]

    def test_prebuilt_template(self, lea_rows, lea_fields):
        tpl = Template.parse(TEMPLATE)
        assert format_labels(lea_rows, tpl, lea_fields) == format_labels(lea_rows, TEMPLATE, lea_fields)


class TestFormatLabelsErrors:
    def test_too_few_fields(self):
        with pytest.raises(TemplateMismatch):
            format_labels([{"LEA": "Dublin South"}], TEMPLATE, [Field("LEA")])

    def test_too_many_fields(self, lea_fields):
        with pytest.raises(TemplateMismatch):
            format_labels([{"LEA": "x", "Pop2016": 1}], "%s", lea_fields)

    def test_mismatch_raised_even_without_features(self):
        with pytest.raises(TemplateMismatch):
            format_labels([], TEMPLATE, [Field("LEA")])

    def test_missing_attribute(self, lea_fields):
        with pytest.raises(MissingAttribute) as exc_info:
            format_labels([{"LEA": "Dublin South"}], TEMPLATE, lea_fields)
        assert exc_info.value.attribute == "Pop2016"
        assert exc_info.value.index == 0
        assert "Pop2016" in str(exc_info.value)

    def test_missing_attribute_on_later_feature(self, lea_rows, lea_fields):
        rows = lea_rows + [{"LEA": "Nowhere"}]
        with pytest.raises(MissingAttribute) as exc_info:
            format_labels(rows, TEMPLATE, lea_fields)
        assert exc_info.value.index == len(lea_rows)

    def test_null_counts_as_missing(self, lea_fields):
        with pytest.raises(MissingAttribute):
            format_labels([{"LEA": "x", "Pop2016": None}], TEMPLATE, lea_fields)
        df = pd.DataFrame({"LEA": ["x", "y"], "Pop2016": [1.0, math.nan]})
        with pytest.raises(MissingAttribute):
            format_labels(df, TEMPLATE, lea_fields)

    def test_string_to_float_placeholder(self):
        with pytest.raises(TypeMismatch):
            format_labels([{"Area": "big"}], "%.2f", [Field("Area")])

    def test_bool_to_integer_placeholder(self):
        with pytest.raises(TypeMismatch):
            format_labels([{"n": True}], "%d", [Field("n")])

    def test_fractional_to_integer_placeholder(self):
        with pytest.raises(TypeMismatch):
            format_labels([{"n": 2.5}], "%d", [Field("n")])

    def test_grouped_output_to_float_placeholder(self):
        # grouped() yields text, which a %f placeholder refuses
        with pytest.raises(TypeMismatch):
            format_labels([{"n": 1000}], "%f", [Field("n", transform=grouped())])

    def test_declared_kind_must_match_placeholder(self):
        with pytest.raises(TypeMismatch):
            format_labels([{"n": 1}], "%s", [Field("n", kind=Kind.INTEGER)])

    def test_declared_kind_from_string(self):
        assert Field("n", kind="integer").kind is Kind.INTEGER

    def test_unknown_declared_kind(self):
        with pytest.raises(TypeMismatch):
            Field("n", kind="decimal")

    def test_declared_kind_matching(self):
        assert format_labels([{"n": 1}], "%d", [Field("n", kind=Kind.INTEGER)]) == ["1"]

    def test_errors_share_base_and_builtin(self):
        assert issubclass(TemplateMismatch, (LabelError, ValueError))
        assert issubclass(MissingAttribute, KeyError)
        assert issubclass(TypeMismatch, TypeError)
