"""Fetch region boundaries published as GeoJSON."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from eiremap.features import FeatureCollection, is_feature_collection

logger = logging.getLogger(__name__)

# No default: boundary files move around, so the URL must be configured.
GEOJSON_URL = os.getenv("EIREMAP_GEOJSON_URL")

# Timeouts (connect, read) in seconds
TIMEOUT = httpx.Timeout(15.0, read=120.0)


def fetch_geojson(url: str, timeout: httpx.Timeout | float = TIMEOUT) -> dict[str, Any]:
    """Download a GeoJSON FeatureCollection and return it as a dict."""
    logger.info("Downloading GeoJSON from %s", url)
    resp = httpx.get(url, follow_redirects=True, timeout=timeout)
    resp.raise_for_status()
    payload = resp.json()
    if not is_feature_collection(payload):
        raise ValueError(f"{url} did not return a GeoJSON FeatureCollection")
    logger.info("Downloaded %d features", len(payload["features"]))
    return payload


def load_features(url: str | None = None) -> FeatureCollection:
    """Fetch *url* (default: EIREMAP_GEOJSON_URL) as a FeatureCollection."""
    url = url or GEOJSON_URL
    if not url:
        raise RuntimeError("No GeoJSON URL given and EIREMAP_GEOJSON_URL is not set")
    return FeatureCollection.from_geojson(fetch_geojson(url))
