"""
`osrm-isochrones` command.

  compute  run the pipeline once against an OSRM server and print the bands
           as GeoJSON (or write them with -o)
  run      same through the Prefect flow: reuses a fresh cached result and
           always exports to <data_dir>/derived/isochrones/
  info     show the effective settings (server, profile, speed, grid)

Isochrone errors are reported on stderr with exit code 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from osrm_isochrones import __version__
from osrm_isochrones.config import get_settings
from osrm_isochrones.core.breaks import parse_breaks
from osrm_isochrones.core.models import DEFAULT_BREAKS, Origin, Point2D
from osrm_isochrones.core.pipeline import compute_isochrones
from osrm_isochrones.datasources.osrm import OSRMTableSampler
from osrm_isochrones.errors import IsochroneError
from osrm_isochrones.flows.isochrones import isochrone_flow
from osrm_isochrones.serialization import bands_to_geojson

DEFAULT_BREAKS_TEXT = ",".join(f"{b:g}" for b in DEFAULT_BREAKS)


def _breaks(text: str) -> list[float]:
    try:
        return parse_breaks(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="osrm-isochrones",
        description="Travel-time isochrone bands from an OSRM routing server",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_origin_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--lon", type=float, required=True, help="Origin longitude (or x)")
        sub.add_argument("--lat", type=float, required=True, help="Origin latitude (or y)")
        sub.add_argument(
            "--breaks",
            type=_breaks,
            default=None,
            help=f"Comma-separated breaks in minutes (default: {DEFAULT_BREAKS_TEXT})",
        )
        sub.add_argument("--crs", default=None, help="CRS of the origin (default: EPSG:4326)")
        sub.add_argument("--profile", default=None, help="OSRM profile (default from settings)")

    # 'compute' command - run the pipeline and print/write GeoJSON
    compute_parser = subparsers.add_parser("compute", help="Compute isochrones as GeoJSON")
    add_origin_args(compute_parser)
    compute_parser.add_argument("--server", default=None, help="OSRM server base URL")
    compute_parser.add_argument(
        "--target-crs", default=None, help="CRS of the output (default: origin CRS)"
    )
    compute_parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Write GeoJSON here instead of stdout"
    )

    # 'run' command - Prefect flow with store caching
    run_parser = subparsers.add_parser("run", help="Run the isochrone flow (cached, exported)")
    add_origin_args(run_parser)
    run_parser.add_argument("--force", action="store_true", help="Ignore cached results")

    # 'info' command
    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_compute(args: argparse.Namespace) -> int:
    """Handle the 'compute' command."""
    settings = get_settings()
    sampler = OSRMTableSampler(settings.osrm_config(profile=args.profile, server=args.server))
    try:
        isochrones = compute_isochrones(
            Origin(Point2D(args.lon, args.lat), args.crs),
            args.breaks or DEFAULT_BREAKS,
            sampler=sampler,
            speed_kmh=settings.speed_kmh,
            resolution=settings.grid_resolution,
            target_crs=args.target_crs,
        )
    except IsochroneError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = json.dumps(bands_to_geojson(isochrones), indent=2)
    if args.output is None:
        print(text)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text)
        print(f"Wrote {len(isochrones)} bands to {args.output}", file=sys.stderr)
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Handle the 'run' command."""
    try:
        result = isochrone_flow(
            lon=args.lon,
            lat=args.lat,
            breaks=args.breaks,
            crs=args.crs,
            profile=args.profile,
            force=args.force,
        )
    except IsochroneError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    source = "cache" if result["cached"] else "OSRM"
    print(f"Success: {result['bands']} bands ({source}) -> {result['output']}")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"OSRM server: {settings.osrm_server}")
    print(f"OSRM profile: {settings.osrm_profile}")
    print(f"Speed: {settings.speed_kmh:g} km/h, grid {settings.grid_resolution}x{settings.grid_resolution}")
    print(f"Debug: {settings.debug}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug or get_settings().debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "compute": cmd_compute,
        "run": cmd_run,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
