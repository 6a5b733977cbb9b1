import pytest

from rideadda.discovery import rank_rides_by_distance, rides_covering, rides_in_range
from rideadda.models import Ride

USER = (28.6139, 77.2090)


@pytest.fixture
def rides():
    lat, lon = USER
    return [
        Ride("1", "admin1", "Connaught Place Sunday Run", lat + 0.01, lon + 0.01, radius_km=5, rider_count=12),
        Ride("2", "admin2", "Late Night Chai @ Murthal", lat - 0.02, lon - 0.015, radius_km=10, rider_count=4),
        Ride("3", "admin3", "Lonavala Ghat Morning Ride", lat + 0.005, lon - 0.025, radius_km=3, rider_count=8),
        Ride("4", "admin4", "Old Ride", lat + 0.001, lon, status="completed"),
    ]


def test_rank_orders_nearest_first(rides):
    ranked = rank_rides_by_distance(*USER, rides)

    assert [rd.ride.ride_id for rd in ranked] == ["4", "1", "3", "2"]
    distances = [rd.distance_km for rd in ranked]
    assert distances == sorted(distances)
    assert ranked[1].distance_km == pytest.approx(1.5, abs=0.1)


def test_in_range_drops_completed_and_far_rides(rides):
    near = rides_in_range(*USER, rides, max_distance_km=2.6)
    assert [rd.ride.ride_id for rd in near] == ["1", "3"]

    everything = rides_in_range(*USER, rides, active_only=False)
    assert len(everything) == 4


def test_inside_zone(rides):
    ranked = rank_rides_by_distance(*USER, rides)
    assert all(rd.inside_zone for rd in ranked)


def test_rides_covering(rides):
    far_away = (19.0760, 72.8777)
    assert rides_covering(*far_away, rides) == []
    assert [r.ride_id for r in rides_covering(*USER, rides)] == ["1", "2", "3"]


def test_empty_input():
    assert rank_rides_by_distance(*USER, []) == []
