"""
Session used for OSRM table requests.

The public demo server (router.project-osrm.org) rate-limits with 429 and
sits behind a proxy that answers 502/504 while a self-hosted ``osrm-routed``
restarts. Those statuses are retried with exponential backoff. OSRM request
errors (``NoSegment``, ``TooBig``, ``InvalidQuery``) come back as 400 with a
JSON body and are never retried: the sampler reads the body and turns the
``code`` into a ``SamplerFailureError``.

Only idempotent methods are retried; the table service is a plain GET whose
coordinates live in the URL path.

Usage::

    from osrm_isochrones.services.http import session

    resp = session.get(config.table_url(points), params={"sources": "0"})
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from osrm_isochrones import __version__

#: 3 attempts after the first, sleeping 0s, 2s, 4s; 429s honour Retry-After.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    respect_retry_after_header=True,
    raise_on_status=False,  # OSRM error bodies are parsed by the caller
)

#: A full 99-destination table on the demo server usually answers in < 2 s.
DEFAULT_TIMEOUT = 30  # seconds

#: The demo server's usage policy asks clients to identify themselves.
USER_AGENT = f"osrm-isochrones/{__version__}"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a session for one OSRM server (or several, it is not host-bound).

    Args:
        retry: Retry strategy; ``Retry(total=0)`` disables retries, e.g. for
            a local server where failing fast is preferable.
        timeout: Timeout for requests that do not pass one explicitly.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    send = s.send

    def send_with_timeout(prepared: requests.PreparedRequest, **kwargs: object) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = send_with_timeout  # type: ignore[method-assign]
    return s


#: Shared by every ``OSRMTableSampler`` built without an explicit session.
session: requests.Session = create_session()
