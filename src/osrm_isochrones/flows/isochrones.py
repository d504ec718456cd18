"""
Prefect flow computing isochrones and persisting them as GeoJSON.

Checks the store first: a cached result younger than ``cache_ttl_hours`` is
reused (TTL 0, the default, always recomputes). Every run also exports the
GeoJSON to ``derived/isochrones/``.

Run locally:
    python -m osrm_isochrones.flows.isochrones

Run with Prefect dashboard:
    prefect server start &
    python -m osrm_isochrones.flows.isochrones
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from prefect import flow, task

from osrm_isochrones.config import get_settings
from osrm_isochrones.core.models import Origin, Point2D
from osrm_isochrones.core.pipeline import compute_isochrones
from osrm_isochrones.datasources.osrm import OSRMTableSampler
from osrm_isochrones.schemas import IsochroneRequest
from osrm_isochrones.serialization import bands_from_geojson, bands_to_geojson
from osrm_isochrones.store import DataStore

store = DataStore(get_settings().data_dir)

CACHE_DIR = Path("cache/isochrones")
EXPORT_DIR = Path("derived/isochrones")


def cache_path(request: IsochroneRequest) -> Path:
    """Store path for a request's cached result."""
    return CACHE_DIR / f"{request.cache_key()}.json"


def export_path(request: IsochroneRequest) -> Path:
    """Store path for a request's exported GeoJSON."""
    return EXPORT_DIR / f"{request.cache_key()}.geojson"


# Sampler failures abort the run; no task-level retries.
@task(name="compute-isochrones")
def compute(request: IsochroneRequest) -> dict[str, Any]:
    """Run the isochrone pipeline against the configured OSRM server."""
    settings = get_settings()
    sampler = OSRMTableSampler(settings.osrm_config(profile=request.profile))
    isochrones = compute_isochrones(
        Origin(Point2D(request.lon, request.lat), request.crs),
        request.breaks,
        sampler=sampler,
        speed_kmh=settings.speed_kmh,
        resolution=settings.grid_resolution,
    )
    return bands_to_geojson(isochrones)


@task(name="save-isochrones")
def save(request: IsochroneRequest, geojson: dict[str, Any]) -> Path:
    """Cache a freshly computed result in the store."""
    settings = get_settings()
    ttl = settings.cache_ttl_hours
    return store.write(
        cache_path(request),
        geojson,
        source=settings.osrm_server,
        valid_until=datetime.now(UTC) + timedelta(hours=ttl) if ttl > 0 else None,
        origin={"lon": request.lon, "lat": request.lat, "crs": request.crs},
        breaks=request.breaks,
        profile=request.profile or settings.osrm_profile,
    )


@task(name="export-isochrones")
def export(request: IsochroneRequest, geojson: dict[str, Any]) -> Path:
    """Write a bare FeatureCollection that GIS tools can open directly."""
    return store.write_plain(export_path(request), geojson)


@flow(name="isochrones", log_prints=True)
def isochrone_flow(
    lon: float,
    lat: float,
    breaks: list[float] | None = None,
    crs: str | None = None,
    profile: str | None = None,
    *,
    force: bool = False,
) -> dict[str, Any]:
    """
    Compute (or reuse) isochrones for one origin and persist them.

    Returns:
        Summary with band count, output path and whether the cache was used.
    """
    request = IsochroneRequest.for_origin(lon, lat, breaks, crs=crs, profile=profile)
    path = cache_path(request)

    if not force and store.is_fresh(path):
        print(f"Isochrones for ({lon}, {lat}) are fresh, skipping computation.")
        geojson = store.read(path) or {}
        cached = True
    else:
        print(f"Computing isochrones for ({lon}, {lat}), breaks {request.breaks}...")
        geojson = compute(request)
        save(request, geojson)
        cached = False

    output = export(request, geojson)
    isochrones = bands_from_geojson(geojson)
    print(f"Saved {len(isochrones)} bands to {output}")

    return {
        "bands": len(isochrones),
        "breaks": isochrones.breaks,
        "output": str(output),
        "cached": cached,
    }


if __name__ == "__main__":
    result = isochrone_flow(lon=5.936036, lat=49.24882)
    print(f"Flow complete: {result}")
