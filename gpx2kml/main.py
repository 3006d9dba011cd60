"""Command line entry point for the GPX to KML converter.

Usage examples:

    # Two tracks plus the photos of a trip, default tolerance
    python -m gpx2kml.main --gpx day1.gpx,day2.gpx --photos photos/ \
        --output trip.kml

    # Print the KML instead of writing it, keeping more detail
    python -m gpx2kml.main --gpx day1.gpx --tolerance 10e-5 --stdout
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import DEFAULT_TOLERANCE, MAX_WORKERS, STYLE_OVERFLOW_POLICY
from .errors import GpxParseError, StyleCatalogExhausted
from .services import ConversionService, ConversionServiceConfig
from .styles import OVERFLOW_POLICIES, StylePalette

LOGGER = logging.getLogger("gpx2kml")


def _setup_logging(level: str = "INFO") -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert GPX tracks and geotagged photos into a KML overlay"
    )
    parser.add_argument(
        "--gpx",
        required=True,
        help="Comma separated list of GPX files",
    )
    parser.add_argument(
        "--photos",
        help="Directory scanned for geotagged jpg/png photos",
    )
    parser.add_argument(
        "--output",
        help="Output KML path (required unless --stdout is given)",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_TOLERANCE,
        help=f"Simplification tolerance in degrees (default: {DEFAULT_TOLERANCE:g})",
    )
    parser.add_argument(
        "--overflow",
        choices=OVERFLOW_POLICIES,
        default=STYLE_OVERFLOW_POLICY,
        help="Behaviour when there are more tracks than line styles",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=MAX_WORKERS,
        help="Threads used to read tracks and photos",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the KML to stdout instead of writing a file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Python logging level",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.stdout and not args.output:
        parser.error("--output is required unless --stdout is given")
    _setup_logging(args.log_level)

    service = ConversionService(
        ConversionServiceConfig(
            tolerance=args.tolerance,
            max_workers=max(1, args.workers),
            palette=StylePalette(overflow=args.overflow),
        )
    )
    try:
        document = service.run(
            args.gpx,
            args.photos,
            None if args.stdout else args.output,
        )
    except (GpxParseError, StyleCatalogExhausted, OSError) as exc:
        LOGGER.error("Conversion failed: %s", exc)
        return 1

    if args.stdout:
        sys.stdout.write(document.to_text())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
