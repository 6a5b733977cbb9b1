import pytest

from rideadda.analyze.history import RideHistorySummary, summarize_history
from rideadda.models import RideStatistics


def test_empty_history():
    assert summarize_history([]) == RideHistorySummary()


def test_totals():
    rides = [
        RideStatistics("s1", "r1", "u", 12.34, 40, 19, 55),
        RideStatistics("s2", "r2", "u", 0.01, 1, 1, 3),
        RideStatistics("s3", "r3", "u", 101.5, 120, 51, 97),
    ]
    summary = summarize_history(rides)

    assert summary.ride_count == 3
    assert summary.total_distance_km == pytest.approx(113.85)
    assert summary.total_moving_time_minutes == 161
    assert summary.best_max_speed_kph == 97


def test_accepts_generator():
    gen = (RideStatistics(f"s{i}", "r", "u", 1.0, 2, 30, 40) for i in range(5))
    assert summarize_history(gen).ride_count == 5
