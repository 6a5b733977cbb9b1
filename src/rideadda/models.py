# rideadda/models.py
"""
Core data records for RideAdda.

GeoSample and RideStatistics are what the analytics engine consumes and
produces. Ride describes a group ride as shown in discovery.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class GeoSample:
    """One recorded position fix (degrees, epoch milliseconds)."""

    latitude: float
    longitude: float
    timestamp_ms: int


# A track is the ordered sequence of samples of one ride, in capture order.
Track = Sequence[GeoSample]


@dataclass(frozen=True)
class RideStatistics:
    """
    Summary of one completed ride by one participant.

    distance_km is rounded to 2 decimals; the remaining figures are
    rounded to whole numbers.
    """

    stat_id: str
    ride_id: str
    user_id: str
    distance_km: float
    moving_time_minutes: int
    avg_speed_kph: int
    max_speed_kph: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Ride:
    ride_id: str
    admin_id: str
    ride_name: str
    center_lat: float
    center_lon: float
    radius_km: float = 5.0
    status: str = "active"  # "active" | "completed"
    start_time_ms: int = 0
    end_time_ms: Optional[int] = None
    rider_count: int = 1

    @property
    def is_active(self) -> bool:
        return self.status == "active"
