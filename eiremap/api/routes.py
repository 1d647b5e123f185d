"""FastAPI REST endpoints for label formatting."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import APIRouter, Depends, HTTPException

from eiremap import __version__
from eiremap.api.auth import verify_api_key, verify_geojson_url
from eiremap.api.cache import cached_geojson, cached_urls, clear_cache
from eiremap.api.schemas import FieldSpec, HealthOut, LabelErrorOut, LabelRequest, LabelsOut
from eiremap.features import is_feature_collection
from eiremap.ingestion.geojson import fetch_geojson
from eiremap.labels import Field, LabelError, format_labels, grouped

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["eiremap API"])


@cached_geojson()
def fetch_remote(url: str) -> dict[str, Any]:
    return fetch_geojson(url)


def _to_field(spec: FieldSpec) -> Field:
    transform = grouped(spec.digits or 0) if spec.grouping else None
    return Field(attribute=spec.attribute, transform=transform, kind=spec.kind)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


@router.post(
    "/labels",
    summary="Format one hover label per feature",
    response_model=LabelsOut,
    responses={422: {"model": LabelErrorOut}},
)
def create_labels(
    body: LabelRequest,
    _key: str = Depends(verify_api_key),
) -> LabelsOut:
    remote = body.geojson_url is not None
    if remote:
        url = verify_geojson_url(body.geojson_url)
        try:
            features = fetch_remote(url)
        except (httpx.HTTPError, ValueError) as exc:
            raise HTTPException(status_code=502, detail=f"Upstream GeoJSON error: {exc}") from exc
    else:
        features = body.features
        if isinstance(features, dict) and not is_feature_collection(features):
            raise HTTPException(status_code=422, detail="'features' must be a GeoJSON FeatureCollection")

    try:
        labels = format_labels(
            features,
            body.template,
            [_to_field(f) for f in body.fields],
            escape_values=body.escape_values,
        )
    except LabelError as exc:
        logger.info("Label formatting rejected: %s", exc)
        raise HTTPException(
            status_code=422,
            detail={"error": type(exc).__name__, "detail": str(exc)},
        ) from exc
    except ValueError as exc:
        # Malformed feature entries
        logger.info("Malformed features rejected: %s", exc)
        if remote:
            raise HTTPException(status_code=502, detail=f"Upstream GeoJSON error: {exc}") from exc
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return LabelsOut(count=len(labels), labels=labels)


# ---------------------------------------------------------------------------
# Cache management
# ---------------------------------------------------------------------------


@router.get("/cache", summary="List cached GeoJSON URLs")
def list_cache(_key: str = Depends(verify_api_key)) -> dict[str, Any]:
    return {"urls": cached_urls()}


@router.post("/cache/clear", summary="Clear GeoJSON cache")
def flush_cache(_key: str = Depends(verify_api_key)) -> dict[str, Any]:
    evicted = clear_cache()
    return {"evicted": evicted}


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", summary="Health check", response_model=HealthOut)
def health() -> HealthOut:
    return HealthOut(status="ok", version=__version__)
