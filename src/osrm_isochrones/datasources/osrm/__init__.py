"""OSRM routing backend.

Public API:
  - client: OSRMConfig, server/profile defaults, coordinate formatting
  - table: fetch_table (one table request), OSRMTableSampler (cost sampler)
"""

from osrm_isochrones.datasources.osrm.client import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_PROFILE,
    DEFAULT_SERVER,
    OSRMConfig,
    format_coordinates,
)
from osrm_isochrones.datasources.osrm.table import OSRMTableSampler, fetch_table

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_PROFILE",
    "DEFAULT_SERVER",
    "OSRMConfig",
    "OSRMTableSampler",
    "fetch_table",
    "format_coordinates",
]
