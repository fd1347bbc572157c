import datetime as dt
import math
from pathlib import Path

import pytest

from trackmetrics.analyze.geo import EARTH_RADIUS_M
from trackmetrics.analyze.samples import TrackPoint

T0 = dt.datetime(2025, 6, 1, 7, 30, 0, tzinfo=dt.timezone.utc)


def lon_for_meters(m: float) -> float:
    """Longitude offset (degrees) covering `m` meters along the equator."""
    return math.degrees(m / EARTH_RADIUS_M)


def pt(east_m: float = 0.0, t_s=None, ele=None) -> TrackPoint:
    """Equator point `east_m` meters east of (0, 0), `t_s` seconds after T0."""
    time = T0 + dt.timedelta(seconds=t_s) if t_s is not None else None
    return TrackPoint(lat=0.0, lon=lon_for_meters(east_m), ele=ele, time=time)


SAMPLE_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Morning run</name>
    <trkseg>
      <trkpt lat="47.0000" lon="8.0000"><ele>400.0</ele><time>2025-06-01T07:30:00Z</time></trkpt>
      <trkpt lat="47.0010" lon="8.0000"><ele>404.0</ele><time>2025-06-01T07:30:30Z</time></trkpt>
      <trkpt lat="47.0020" lon="8.0000"><ele>402.0</ele><time>2025-06-01T07:31:00Z</time></trkpt>
      <trkpt lat="bogus" lon="8.0000"><ele>401.0</ele><time>2025-06-01T07:31:15Z</time></trkpt>
      <trkpt lat="47.0030" lon="8.0000"><ele>408.0</ele><time>2025-06-01T07:31:30Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


@pytest.fixture
def sample_gpx_path(tmp_path) -> Path:
    p = tmp_path / "sample.gpx"
    p.write_text(SAMPLE_GPX, encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("TRACKMETRICS_MIN_SPEED_KMH", raising=False)
    monkeypatch.delenv("TRACKMETRICS_MIN_INTERVAL_S", raising=False)
