from pathlib import Path
import itertools

import matplotlib
import pytest

from rideadda.models import GeoSample

matplotlib.use("Agg")


@pytest.fixture
def sample_gpx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.gpx"


@pytest.fixture
def make_track():
    """Build a track from (lat, lon, timestamp_ms) tuples."""
    def _make(*fixes):
        return [GeoSample(latitude=lat, longitude=lon, timestamp_ms=ts) for lat, lon, ts in fixes]
    return _make


@pytest.fixture
def fixed_ids():
    """Deterministic stat ids: stat-1, stat-2, ..."""
    counter = itertools.count(1)
    return lambda: f"stat-{next(counter)}"
