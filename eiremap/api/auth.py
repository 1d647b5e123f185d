"""Access checks: the optional API key and the GeoJSON URL allow-list."""

from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlparse

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from eiremap.ingestion.geojson import GEOJSON_URL

API_KEY = os.getenv("EIREMAP_API_KEY")

# Comma-separated URL prefixes clients may ask us to fetch. Without it only
# EIREMAP_GEOJSON_URL itself is allowed; with neither, remote fetches are off.
ALLOWED_URL_PREFIXES = [
    p.strip() for p in os.getenv("EIREMAP_ALLOWED_URLS", "").split(",") if p.strip()
] or ([GEOJSON_URL] if GEOJSON_URL else [])

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(key: Optional[str] = Security(api_key_header)) -> Optional[str]:
    """Require a matching X-API-Key header when EIREMAP_API_KEY is set."""
    if API_KEY is None:
        return None
    if key != API_KEY:
        raise HTTPException(status_code=403, detail="Invalid or missing API key")
    return key


def verify_geojson_url(url: str) -> str:
    """Return *url* stripped if it may be fetched, else raise 403."""
    url = url.strip()
    if urlparse(url).scheme not in ("http", "https"):
        raise HTTPException(status_code=403, detail="Only http(s) GeoJSON URLs are fetched")
    if not any(url.startswith(prefix) for prefix in ALLOWED_URL_PREFIXES):
        raise HTTPException(status_code=403, detail=f"GeoJSON URL not allowed: {url}")
    return url
