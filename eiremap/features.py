"""Feature and FeatureCollection: ordered attribute rows with opaque geometry."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import pandas as pd


@dataclass(frozen=True)
class Feature:
    """One region: its named attributes plus a geometry we never look inside."""

    attributes: Mapping[str, Any]
    geometry: Any = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def from_geojson(cls, feature: Mapping[str, Any], index: int | None = None) -> Feature:
        """Build a Feature from a GeoJSON feature mapping.

        Raises ValueError when the item or its ``properties`` is not a mapping.
        """
        if not isinstance(feature, Mapping):
            raise ValueError(f"{_where(index)} is a {type(feature).__name__}, not a mapping")
        return cls(attributes=_properties(feature, index), geometry=feature.get("geometry"))


@dataclass(frozen=True)
class FeatureCollection(Sequence):
    """Ordered, immutable sequence of features sharing one attribute schema."""

    features: tuple[Feature, ...] = ()

    def __getitem__(self, index):
        return self.features[index]

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    @classmethod
    def from_geojson(cls, geojson: Mapping[str, Any]) -> FeatureCollection:
        if not is_feature_collection(geojson):
            raise ValueError("Expected a GeoJSON FeatureCollection")
        return cls(tuple(
            Feature.from_geojson(f, index=i) for i, f in enumerate(geojson["features"])
        ))

    @classmethod
    def from_frame(cls, df: pd.DataFrame, geometry_column: str | None = "geometry") -> FeatureCollection:
        """Build a collection from a table, one feature per row, in row order."""
        has_geometry = geometry_column is not None and geometry_column in df.columns
        attr_df = df.drop(columns=[geometry_column]) if has_geometry else df
        geometries = df[geometry_column].tolist() if has_geometry else [None] * len(df)
        return cls(tuple(
            Feature(attributes=row, geometry=geom)
            for row, geom in zip(attr_df.to_dict("records"), geometries)
        ))

    def to_frame(self) -> pd.DataFrame:
        """Attribute table in feature order, without geometry."""
        return pd.DataFrame([dict(f.attributes) for f in self.features])

    def to_geojson(self) -> dict[str, Any]:
        """GeoJSON mapping whose features carry positional ids "0", "1", ..."""
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "id": str(i),
                    "properties": dict(f.attributes),
                    "geometry": f.geometry,
                }
                for i, f in enumerate(self.features)
            ],
        }


def is_feature_collection(obj: Any) -> bool:
    return (
        isinstance(obj, Mapping)
        and obj.get("type") == "FeatureCollection"
        and isinstance(obj.get("features"), list)
    )


def iter_attributes(features: Any) -> Iterator[Mapping[str, Any]]:
    """Yield one attribute mapping per feature, in order.

    Accepts a DataFrame, a GeoJSON FeatureCollection, a FeatureCollection,
    or a sequence of Feature objects, GeoJSON feature mappings or plain
    attribute mappings.
    """
    if isinstance(features, pd.DataFrame):
        yield from features.to_dict("records")
        return
    if is_feature_collection(features):
        features = features["features"]
    for index, item in enumerate(features):
        if isinstance(item, Feature):
            yield item.attributes
        elif isinstance(item, Mapping) and item.get("type") == "Feature":
            yield _properties(item, index)
        elif isinstance(item, Mapping):
            yield item
        else:
            raise ValueError(f"{_where(index)} is a {type(item).__name__}, not a mapping")


def _where(index: int | None) -> str:
    return f"Feature {index}" if index is not None else "Feature"


def _properties(feature: Mapping[str, Any], index: int | None) -> Mapping[str, Any]:
    properties = feature.get("properties")
    if properties is None:
        return {}
    if not isinstance(properties, Mapping):
        raise ValueError(
            f"{_where(index)} has {type(properties).__name__} properties, not a mapping"
        )
    return properties
