"""Typed errors raised by the isochrone pipeline.

Every failure reaches the caller as a subclass of :class:`IsochroneError`
with a human-readable message. Nothing is converted to ``None``.
"""

from __future__ import annotations


class IsochroneError(Exception):
    """Base class for all isochrone computation failures."""


class InvalidBreaksError(IsochroneError, ValueError):
    """Breaks are not a usable set of travel-time thresholds."""


class InvalidGridError(IsochroneError, ValueError):
    """Sampling grid parameters are out of range."""


class SamplerFailureError(IsochroneError):
    """The cost sampler failed or returned a malformed result."""


class NoReachableAreaError(IsochroneError):
    """No sampled destination is reachable, so there is nothing to contour."""


class ReprojectionError(IsochroneError):
    """A CRS could not be resolved or a geometry could not be transformed."""


class InvalidOriginError(IsochroneError, ValueError):
    """The origin cannot be read as a single point."""
