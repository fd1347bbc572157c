import datetime as dt

import pytest

from trackmetrics.analyze.samples import RawSample
from trackmetrics.analyze.track import (
    AnalysisResult,
    analyze,
    analyze_gpx,
    compute_metrics,
    elevation_gain_m,
)
from trackmetrics.errors import (
    InsufficientDataError,
    MalformedInputError,
    TrackMetricsError,
)
from conftest import T0, lon_for_meters, pt


def raw(east_m, t_s=None, ele=None):
    time = (T0 + dt.timedelta(seconds=t_s)).isoformat() if t_s is not None else None
    return RawSample(lat=0.0, lon=lon_for_meters(east_m), ele=ele, time=time)


def test_two_points_one_minute_hundred_meters():
    result = analyze([raw(0, 0), raw(100, 60)])

    assert result.duration == 60
    assert result.total_distance == pytest.approx(100.0, rel=1e-6)
    assert result.average_pace == pytest.approx(10.0, rel=1e-6)
    assert result.elevation_gain == 0
    assert len(result.points) == 2


def test_flat_track_has_no_gain():
    result = analyze([raw(i * 100, i * 60, ele=250.0) for i in range(5)])
    assert result.elevation_gain == 0


def test_elevation_gain_ignores_descents_and_gaps():
    pts = [pt(0, ele=100.0), pt(10, ele=105.0), pt(20, ele=103.0),
           pt(30, ele=None), pt(40, ele=110.0), pt(50, ele=112.0)]
    assert elevation_gain_m(pts) == pytest.approx(7.0)


def test_untimed_track_still_has_distance_and_gain():
    result = analyze([raw(0, ele=10.0), raw(300, ele=15.0), raw(600, ele=12.0)])

    assert result.duration is None
    assert result.average_pace is None
    assert result.total_distance == pytest.approx(600.0, rel=1e-6)
    assert result.elevation_gain == pytest.approx(5.0)


def test_duration_uses_endpoints_only():
    result = analyze([raw(0, 0), raw(100, None), raw(200, 120)])
    assert result.duration == 120


def test_missing_endpoint_time_means_no_duration():
    result = analyze([raw(0, None), raw(100, 60), raw(200, 120)])
    assert result.duration is None
    assert result.average_pace is None


def test_zero_distance_has_no_pace():
    result = analyze([raw(0, 0), raw(0, 600)])
    assert result.total_distance == 0
    assert result.duration == 600
    assert result.average_pace is None


def test_negative_duration_is_reported_unknown():
    result = compute_metrics([pt(0, 60), pt(100, 0)])
    assert result.duration is None
    assert result.average_pace is None


def test_stationary_points_do_not_count():
    samples = [raw(0, 0), raw(100, 60), raw(103, 120), raw(101, 180), raw(200, 240)]
    result = analyze(samples)

    # the jitter around 100 m is removed except for the last jitter fix
    assert len(result.points) == 3
    assert result.points[0].lon == pytest.approx(lon_for_meters(0))
    assert result.points[-1].lon == pytest.approx(lon_for_meters(200))


def test_single_valid_point_is_insufficient():
    samples = [raw(0, 0), RawSample(lat="x", lon=0.0), {"lat": None, "lon": 1}]
    with pytest.raises(InsufficientDataError):
        analyze(samples)


def test_empty_input_is_insufficient():
    with pytest.raises(InsufficientDataError):
        analyze([])


@pytest.mark.parametrize("bad", [None, "0,0;1,1", b"\x00", {"lat": 1, "lon": 2}, 42])
def test_non_sequences_are_malformed(bad):
    with pytest.raises(MalformedInputError):
        analyze(bad)


def test_errors_share_a_base_class():
    with pytest.raises(TrackMetricsError):
        analyze([raw(0, 0)])


def test_generators_are_accepted():
    result = analyze(raw(i * 50, i * 30) for i in range(4))
    assert len(result.points) == 4


def test_analyze_is_repeatable():
    samples = [raw(i * 40, i * 20, ele=100.0 + (i % 3)) for i in range(30)]
    assert analyze(samples) == analyze(samples)


def test_metrics_are_non_negative():
    samples = [raw((i * 37) % 200, i * 10, ele=float((i * 13) % 7)) for i in range(40)]
    result = analyze(samples)
    assert result.total_distance >= 0
    assert result.elevation_gain >= 0


def test_result_is_immutable():
    result = analyze([raw(0, 0), raw(100, 60)])
    assert isinstance(result, AnalysisResult)
    with pytest.raises(AttributeError):
        result.total_distance = 0.0


def test_derived_values():
    result = analyze([raw(0, 0, ele=1.0), raw(1000, 360, ele=2.0)])

    assert result.distance_km == pytest.approx(1.0, rel=1e-6)
    assert result.average_speed_kmh == pytest.approx(10.0, rel=1e-6)
    assert result.activity_date == dt.date(2025, 6, 1)
    b = result.bounds
    assert (b.min_lat, b.max_lat) == (0.0, 0.0)
    assert b.min_lon == 0.0
    assert b.max_lon == pytest.approx(lon_for_meters(1000))

    d = result.to_dict()
    assert d["points"] == 2
    assert d["activity_date"] == "2025-06-01"
    assert d["duration_s"] == 360
    assert d["elevation_gain_m"] == pytest.approx(1.0)


def test_untimed_result_has_no_speed_or_date():
    result = analyze([raw(0), raw(100)])
    assert result.average_speed_kmh is None
    assert result.activity_date is None
    assert result.to_dict()["activity_date"] is None


def test_analyze_sample_gpx(sample_gpx_path):
    result = analyze_gpx(sample_gpx_path)

    assert len(result.points) == 4
    assert result.total_distance == pytest.approx(333.6, abs=1.0)
    assert result.duration == 90
    assert result.average_pace == pytest.approx(4.497, abs=0.02)
    assert result.elevation_gain == pytest.approx(10.0)
