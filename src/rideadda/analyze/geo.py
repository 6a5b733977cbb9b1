# rideadda/analyze/geo.py
"""
Great-circle helpers for RideAdda
"""

from __future__ import annotations

from haversine import haversine, Unit

# Mean Earth radius used for every distance the app reports.
EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance in kilometres between two lat/lon points (degrees).

    The haversine library yields the central angle (Unit.RADIANS), which is
    scaled by EARTH_RADIUS_KM. Range checks are disabled: out-of-range
    degrees produce a number, not an error.
    """
    angle = haversine((lat1, lon1), (lat2, lon2), unit=Unit.RADIANS, check=False)
    return EARTH_RADIUS_KM * angle


def is_within_radius(
        lat: float, lon: float,
        center_lat: float, center_lon: float,
        radius_km: float,
) -> bool:
    """True if the point lies inside or on the boundary of a ride zone."""
    return haversine_km(lat, lon, center_lat, center_lon) <= radius_km
