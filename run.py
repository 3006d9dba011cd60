#!/usr/bin/env python3
"""Convenience runner for the GPX to KML converter.

Usage:
    python run.py --gpx track.gpx --photos photos/ --output track.kml
"""
import logging
from gpx2kml.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    raise SystemExit(main())
