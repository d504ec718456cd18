"""Validation of travel-time breakpoints."""

from __future__ import annotations

import math
from collections.abc import Iterable

from osrm_isochrones.errors import InvalidBreaksError


def normalize_breaks(breaks: Iterable[float]) -> list[float]:
    """Sort and de-duplicate breaks, rejecting unusable inputs.

    Args:
        breaks: Travel-time thresholds in minutes, in any order.

    Returns:
        Strictly increasing list of at least two non-negative values.

    Raises:
        InvalidBreaksError: On negative or non-finite values, or fewer than
            two distinct values.
    """
    values: list[float] = []
    for raw in breaks:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            msg = f"Break {raw!r} is not a number"
            raise InvalidBreaksError(msg) from None
        if not math.isfinite(value):
            msg = f"Break {raw!r} is not finite"
            raise InvalidBreaksError(msg)
        if value < 0:
            msg = f"Breaks must be non-negative, got {value:g}"
            raise InvalidBreaksError(msg)
        values.append(value)

    unique = sorted(set(values))
    if len(unique) < 2:
        msg = f"Need at least 2 distinct breaks, got {unique}"
        raise InvalidBreaksError(msg)
    return unique


def parse_breaks(text: str) -> list[float]:
    """Parse a comma-separated break list such as ``"0,10,20"``."""
    parts = [p.strip() for p in text.split(",") if p.strip()]
    return normalize_breaks(parts)
