"""Travel-time matrix from the OSRM table service.

One origin, many destinations. Destinations are sent in batches together
with the origin (``sources=0``), and the origin's own column is dropped
from each answer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests
from pydantic import ValidationError

from osrm_isochrones.core.models import CostQueryResult, Point2D
from osrm_isochrones.datasources.osrm.client import OSRMConfig
from osrm_isochrones.errors import SamplerFailureError
from osrm_isochrones.schemas import TableResponse
from osrm_isochrones.services.http import session as default_session

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def fetch_table(
    origin: Point2D,
    destinations: Sequence[Point2D],
    config: OSRMConfig,
    *,
    http: requests.Session | None = None,
) -> TableResponse:
    """
    Query the OSRM table service for one origin and one batch of destinations.

    Args:
        origin: Origin in lon/lat.
        destinations: Destinations in lon/lat; origin is prepended.
        config: Server and profile to query.
        http: Session to use (defaults to the shared retrying session).

    Returns:
        Validated table response whose ``code`` is ``"Ok"``.

    Raises:
        SamplerFailureError: On transport errors, HTTP errors, malformed JSON
            or a non-``Ok`` OSRM code.
    """
    http = http or default_session
    url = config.table_url([origin, *destinations])
    try:
        resp = http.get(url, params={"sources": "0"}, timeout=config.timeout)
    except requests.RequestException as e:
        msg = f"OSRM table request failed: {e}"
        raise SamplerFailureError(msg) from e
    try:
        payload = resp.json()
    except ValueError as e:
        msg = f"OSRM returned invalid JSON (HTTP {resp.status_code})"
        raise SamplerFailureError(msg) from e

    try:
        table = TableResponse.model_validate(payload)
    except ValidationError as e:
        msg = f"Malformed OSRM table response: {e.error_count()} validation errors"
        raise SamplerFailureError(msg) from e

    # OSRM reports errors (NoSegment, TooBig, ...) in the body with a 4xx status.
    if not table.ok:
        msg = f"OSRM error {table.code}: {table.message or 'no message'}"
        raise SamplerFailureError(msg)
    try:
        resp.raise_for_status()
    except requests.HTTPError as e:
        msg = f"OSRM table request failed: {e}"
        raise SamplerFailureError(msg) from e
    return table


def _batch_costs(
    table: TableResponse, expected: int
) -> tuple[list[Point2D], list[float | None]]:
    """Echoed destinations and costs in minutes, origin column removed."""
    if not table.durations or len(table.durations[0]) != expected + 1:
        msg = f"OSRM table has no duration row for {expected} destinations"
        raise SamplerFailureError(msg)
    if len(table.destinations) != expected + 1:
        msg = f"OSRM echoed {len(table.destinations)} destinations, expected {expected + 1}"
        raise SamplerFailureError(msg)

    locations = [Point2D(*w.location) for w in table.destinations[1:]]
    costs = [None if s is None else s / 60 for s in table.durations[0][1:]]
    return locations, costs


class OSRMTableSampler:
    """Cost sampler backed by the OSRM table service.

    Holds only its immutable config and a session, so one instance can serve
    many isochrone computations.
    """

    def __init__(self, config: OSRMConfig | None = None, http: requests.Session | None = None):
        self.config = config or OSRMConfig()
        self.http = http or default_session

    def __repr__(self) -> str:
        return f"OSRMTableSampler({self.config.server_url!r}, profile={self.config.profile!r})"

    def query_costs(
        self, origin: Point2D, destinations: Sequence[Point2D]
    ) -> CostQueryResult:
        """Travel time in minutes from ``origin`` to each destination.

        Raises:
            SamplerFailureError: If there is nothing to query or any batch fails.
        """
        if not destinations:
            msg = "No destinations to sample"
            raise SamplerFailureError(msg)

        size = self.config.batch_size
        locations: list[Point2D] = []
        costs: list[float | None] = []
        for start in range(0, len(destinations), size):
            batch = list(destinations[start : start + size])
            table = fetch_table(origin, batch, self.config, http=self.http)
            batch_locations, batch_costs = _batch_costs(table, len(batch))
            locations.extend(batch_locations)
            costs.extend(batch_costs)
            logger.debug(
                "OSRM batch %d-%d: %d reachable",
                start,
                start + len(batch),
                sum(c is not None for c in batch_costs),
            )

        logger.info(
            "Sampled %d destinations from %s (%s), %d unreachable",
            len(costs),
            self.config.server_url,
            self.config.profile,
            sum(c is None for c in costs),
        )
        return CostQueryResult(locations=locations, costs=costs)
