# rideadda/analyze/history.py
"""
Roll-up of a rider's past rides for the profile view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from rideadda.models import RideStatistics


@dataclass(frozen=True)
class RideHistorySummary:
    ride_count: int = 0
    total_distance_km: float = 0.0
    total_moving_time_minutes: int = 0
    best_max_speed_kph: int = 0


def summarize_history(stats: Iterable[RideStatistics]) -> RideHistorySummary:
    count = 0
    distance = 0.0
    minutes = 0
    best = 0

    for s in stats:
        count += 1
        distance += s.distance_km
        minutes += s.moving_time_minutes
        best = max(best, s.max_speed_kph)

    return RideHistorySummary(
        ride_count=count,
        total_distance_km=round(distance, 2),
        total_moving_time_minutes=minutes,
        best_max_speed_kph=best,
    )
