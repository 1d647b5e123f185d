"""eiremap — FastAPI application entry point.

Run with:  uvicorn eiremap.main:app
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eiremap import __version__
from eiremap.api.routes import fetch_remote, router
from eiremap.ingestion.geojson import GEOJSON_URL

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Outcome of the startup check of EIREMAP_GEOJSON_URL, reported on "/".
_source_status: dict[str, object] = {"url": None, "features": None, "error": None}


def check_default_source(url: str | None) -> dict[str, object]:
    """Fetch *url* once to prove it serves a FeatureCollection and warm the cache."""
    status: dict[str, object] = {"url": url, "features": None, "error": None}
    if not url:
        logger.info("EIREMAP_GEOJSON_URL not set; clients must send features inline")
        return status
    try:
        payload = fetch_remote(url)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Default GeoJSON source %s is unusable: %s", url, exc)
        status["error"] = str(exc)
        return status
    status["features"] = len(payload["features"])
    logger.info("Default GeoJSON source %s: %d features", url, status["features"])
    return status


@asynccontextmanager
async def lifespan(app: FastAPI):
    _source_status.update(check_default_source(GEOJSON_URL))
    logger.info("eiremap API is ready.")
    yield
    logger.info("Shutting down eiremap API.")


app = FastAPI(
    title="eiremap",
    description=(
        "Hover labels for choropleth maps of Irish administrative regions. "
        "Turns GeoJSON feature attributes into formatted HTML tooltips."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "X-API-Key"],
)

app.include_router(router)


@app.get("/", tags=["Root"])
def root():
    return {
        "name": "eiremap",
        "version": __version__,
        "docs": "/docs",
        "default_source": _source_status,
    }
