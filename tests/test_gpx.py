from pathlib import Path

import pytest

from rideadda.errors import InvalidGpxError, TrackFormatError
from rideadda.formats.gpx import _parse_gpx_time, extract_samples, load_track, read_gpx


def test_load_track_skips_points_without_time(sample_gpx_path):
    samples = load_track(sample_gpx_path)

    assert len(samples) == 4
    assert samples[0].latitude == pytest.approx(28.6139)
    assert samples[0].longitude == pytest.approx(77.2090)
    assert [s.timestamp_ms - samples[0].timestamp_ms for s in samples] == [0, 30_000, 60_000, 120_000]


def test_timestamps_are_epoch_ms_utc(sample_gpx_path):
    first = extract_samples(read_gpx(sample_gpx_path))[0]
    # 2025-03-02T06:00:00Z
    assert first.timestamp_ms == 1_740_895_200_000


@pytest.mark.parametrize(
    "text, ok",
    [
        ("2026-01-02T21:14:44Z", True),
        ("2026-01-02T21:14:44.123Z", True),
        ("2026-01-02T21:14:44+05:30", True),
        ("2026-01-02T21:14:44", True),
        ("", False),
        ("   ", False),
        ("yesterday", False),
    ],
)
def test_parse_gpx_time(text, ok):
    assert (_parse_gpx_time(text) is not None) == ok


def test_bad_coordinates_are_skipped(tmp_path: Path):
    gpx = tmp_path / "bad.gpx"
    gpx.write_text(
        '<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1">'
        "<trk><trkseg>"
        '<trkpt lat="abc" lon="77.2"><time>2025-03-02T06:00:00Z</time></trkpt>'
        '<trkpt lon="77.2"><time>2025-03-02T06:00:10Z</time></trkpt>'
        '<trkpt lat="28.6" lon="77.2"><time>2025-03-02T06:00:20Z</time></trkpt>'
        "</trkseg></trk></gpx>",
        encoding="utf-8",
    )
    samples = load_track(gpx)
    assert len(samples) == 1
    assert samples[0].latitude == 28.6


def test_invalid_xml_raises(tmp_path: Path):
    gpx = tmp_path / "broken.gpx"
    gpx.write_text("<gpx><trk>", encoding="utf-8")

    with pytest.raises(InvalidGpxError):
        read_gpx(gpx)
    assert issubclass(InvalidGpxError, TrackFormatError)
