"""Pydantic schemas for API request validation and response serialization."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from eiremap.labels import Kind


class FieldSpec(BaseModel):
    attribute: str
    kind: Optional[Kind] = None
    grouping: bool = False
    digits: Optional[int] = Field(None, ge=0, le=12)


class LabelRequest(BaseModel):
    template: str
    fields: list[FieldSpec]
    # Either a GeoJSON FeatureCollection / list of attribute dicts, or a URL.
    features: Optional[dict[str, Any] | list[dict[str, Any]]] = None
    geojson_url: Optional[str] = None
    escape_values: bool = False

    @model_validator(mode="after")
    def _one_source(self) -> LabelRequest:
        if (self.features is None) == (self.geojson_url is None):
            raise ValueError("Provide exactly one of 'features' or 'geojson_url'")
        return self


class LabelsOut(BaseModel):
    count: int
    labels: list[str]


class LabelErrorOut(BaseModel):
    error: str
    detail: str


class HealthOut(BaseModel):
    status: str
    version: str
