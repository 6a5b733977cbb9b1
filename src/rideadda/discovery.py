# rideadda/discovery.py
"""
Nearby ride discovery: order group rides by distance from the rider.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from rideadda.analyze.geo import haversine_km, is_within_radius
from rideadda.models import Ride


@dataclass(frozen=True)
class RideDistance:
    ride: Ride
    distance_km: float

    @property
    def inside_zone(self) -> bool:
        """True if the rider already stands inside the ride's zone."""
        return self.distance_km <= self.ride.radius_km


def rank_rides_by_distance(lat: float, lon: float, rides: Iterable[Ride]) -> list[RideDistance]:
    """Pair each ride with its distance from (lat, lon), nearest first."""
    ranked = [
        RideDistance(ride=r, distance_km=haversine_km(lat, lon, r.center_lat, r.center_lon))
        for r in rides
    ]
    ranked.sort(key=lambda rd: rd.distance_km)
    return ranked


def rides_in_range(
        lat: float, lon: float,
        rides: Iterable[Ride], *,
        max_distance_km: Optional[float] = None,
        active_only: bool = True,
) -> list[RideDistance]:
    """
    Rides worth showing to a rider at (lat, lon).

    Completed rides are dropped unless active_only=False; with
    max_distance_km, rides whose center is farther away are dropped too.
    """
    out = []
    for rd in rank_rides_by_distance(lat, lon, rides):
        if active_only and not rd.ride.is_active:
            continue
        if max_distance_km is not None and rd.distance_km > max_distance_km:
            continue
        out.append(rd)
    return out


def rides_covering(lat: float, lon: float, rides: Iterable[Ride]) -> list[Ride]:
    """Active rides whose zone contains the point."""
    return [
        r for r in rides
        if r.is_active and is_within_radius(lat, lon, r.center_lat, r.center_lon, r.radius_km)
    ]
