# rideadda/formats/gpx.py
"""
GPX helpers for RideAdda

This module is intentionally format-focused:
- GPX namespace handling
- safely reading an ElementTree
- turning <trkpt> nodes into GeoSample fixes (epoch milliseconds, UTC)

Analytics live in rideadda.analyze; nothing here computes distances.
"""

from __future__ import annotations

import datetime as _dt
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from rideadda.errors import InvalidGpxError
from rideadda.models import GeoSample

# GPX 1.1 default namespace
GPX_NS = {"gpx": "http://www.topografix.com/GPX/1/1"}


def _parse_gpx_time(text: str) -> Optional[_dt.datetime]:
    """
    Parse an ISO-8601 timestamp commonly found in GPX <time> nodes.

    Expected examples:
      - "2026-01-02T21:14:44Z"
      - "2026-01-02T21:14:44.123Z"
      - "2026-01-02T21:14:44+00:00"
    """
    if not text:
        return None
    s = text.strip()
    if not s:
        return None

    # ElementTree GPX times commonly use Z for UTC.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    try:
        dt = _dt.datetime.fromisoformat(s)
    except ValueError:
        return None

    # Ensure tz-aware; if naive, assume UTC (conservative for GPX sources)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)

    return dt.astimezone(_dt.timezone.utc)


def _epoch_ms(dt: _dt.datetime) -> int:
    return int(round(dt.timestamp() * 1000))


def read_gpx(path: Path) -> ET.ElementTree:
    """
    Read a GPX file into an ElementTree.

    Raises:
      InvalidGpxError, OSError
    """
    try:
        return ET.parse(path)
    except ET.ParseError as e:
        raise InvalidGpxError(f"Not a valid GPX document: {path} ({e})") from e


def extract_samples(tree: ET.ElementTree) -> list[GeoSample]:
    """Extract ordered, timestamped fixes from a GPX tree."""
    root = tree.getroot()
    pts: list[GeoSample] = []

    for trkpt in root.findall(".//gpx:trkpt", GPX_NS):
        try:
            lat = float(trkpt.get("lat"))
            lon = float(trkpt.get("lon"))
        except (TypeError, ValueError):
            continue   # skip points without usable coordinates

        t = _parse_gpx_time(trkpt.findtext("gpx:time", default="", namespaces=GPX_NS))
        if t is None:
            continue   # skip points without timestamps

        pts.append(GeoSample(latitude=lat, longitude=lon, timestamp_ms=_epoch_ms(t)))

    return pts


def load_track(path: Path) -> list[GeoSample]:
    """Read a GPX file and return its fixes in document order."""
    return extract_samples(read_gpx(path))
