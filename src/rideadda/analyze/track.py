# rideadda/analyze/track.py
"""
Track analysis functions for RideAdda

compute_ride_statistics() is the single entry point used when a ride ends.
It is a pure batch reduction over the recorded track and never raises for
degenerate input: an empty track, a lone fix, repeated or out-of-order
timestamps all yield a displayable, zero-valued summary.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from rideadda.analyze.geo import haversine_km
from rideadda.formats.gpx import load_track
from rideadda.models import RideStatistics, Track
from rideadda.util.logging import log

# Segment speeds at or above this are GPS jitter, not riding.
MAX_PLAUSIBLE_SPEED_KPH = 180.0

IdFactory = Callable[[], str]


def default_id_factory() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class AnalyticsSettings:
    """
    Tunables for the statistics reducer.

    idle_gap_s=None keeps moving time as the plain wall-clock span of the
    track. A positive value drops any inter-sample gap longer than it.
    """

    max_plausible_speed_kph: float = MAX_PLAUSIBLE_SPEED_KPH
    idle_gap_s: Optional[float] = None


def _segment_km(p0, p1) -> Optional[float]:
    try:
        d_km = haversine_km(p0.latitude, p0.longitude, p1.latitude, p1.longitude)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(d_km):
        return None
    return d_km


def iter_segments(points: Track):
    """Yield (p0, p1, dt_s, d_km) for consecutive fixes with dt > 0 and usable coordinates."""
    for p0, p1 in zip(points, points[1:]):
        dt_s = (p1.timestamp_ms - p0.timestamp_ms) / 1000.0
        if dt_s <= 0:
            continue

        d_km = _segment_km(p0, p1)
        if d_km is None:
            continue

        yield p0, p1, dt_s, d_km


def _round_half_up(x: float) -> int:
    # Non-negative inputs only; halves go up (30 s of riding is 1 min).
    return int(math.floor(x + 0.5))


def moving_time_minutes(points: Track, *, idle_gap_s: Optional[float] = None) -> float:
    """
    Elapsed time of the track in minutes (unrounded).

    Without idle_gap_s this is the span between the first and last fix;
    stationary periods are NOT subtracted.
    """
    if len(points) < 2:
        return 0.0

    if idle_gap_s is None or idle_gap_s <= 0:
        span_ms = points[-1].timestamp_ms - points[0].timestamp_ms
        return max(0.0, span_ms / 60000.0)

    moving_s = 0.0
    for p0, p1 in zip(points, points[1:]):
        dt_s = (p1.timestamp_ms - p0.timestamp_ms) / 1000.0
        if 0 < dt_s <= idle_gap_s:
            moving_s += dt_s
    return moving_s / 60.0


def compute_ride_statistics(
        ride_id: str,
        user_id: str,
        points: Track, *,
        settings: Optional[AnalyticsSettings] = None,
        id_factory: Optional[IdFactory] = None,
) -> RideStatistics:
    """Reduce a finished ride's track to its RideStatistics record."""
    settings = settings or AnalyticsSettings()
    id_factory = id_factory or default_id_factory

    total_km = 0.0
    max_speed = 0.0
    skipped = 0

    for i in range(1, len(points)):
        p0, p1 = points[i - 1], points[i]

        d_km = _segment_km(p0, p1)
        if d_km is None:
            skipped += 1
            continue
        total_km += d_km

        # Duplicate or out-of-order timestamps still count toward distance.
        dt_s = (p1.timestamp_ms - p0.timestamp_ms) / 1000.0
        if dt_s > 0:
            speed = d_km * 3600.0 / dt_s
            if speed < settings.max_plausible_speed_kph and speed > max_speed:
                max_speed = speed

    if skipped:
        log(f"ride {ride_id}: skipped {skipped} segment(s) with unusable coordinates")

    moving_min = moving_time_minutes(points, idle_gap_s=settings.idle_gap_s)
    avg_speed = total_km / (moving_min / 60.0) if moving_min > 0 else 0.0

    return RideStatistics(
        stat_id=id_factory(),
        ride_id=ride_id,
        user_id=user_id,
        distance_km=round(total_km, 2),
        moving_time_minutes=_round_half_up(moving_min),
        avg_speed_kph=_round_half_up(avg_speed),
        max_speed_kph=_round_half_up(max_speed),
    )


def analyze_track(
        gpx_path: Path, *,
        ride_id: Optional[str] = None,
        user_id: str = "local",
        settings: Optional[AnalyticsSettings] = None,
        id_factory: Optional[IdFactory] = None,
) -> RideStatistics:
    """Read a GPX file and summarize it. ride_id defaults to the file stem."""
    gpx_path = Path(gpx_path)
    points = load_track(gpx_path)
    return compute_ride_statistics(
        ride_id or gpx_path.stem,
        user_id,
        points,
        settings=settings,
        id_factory=id_factory,
    )
