"""
Prefect flows.

Flows:
- isochrones: compute isochrones for one origin, cache and export GeoJSON

Usage (local):
    python -m osrm_isochrones.flows.isochrones

Usage (with dashboard):
    prefect server start
    osrm-isochrones run --lon 5.936036 --lat 49.24882
"""
