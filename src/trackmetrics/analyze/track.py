# trackmetrics/analyze/track.py
"""
Track analysis functions for trackmetrics
"""

from __future__ import annotations

import datetime as _dt
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from trackmetrics.analyze.geo import point_distance_m
from trackmetrics.analyze.movement import (
    MIN_INTERVAL_S,
    MIN_SPEED_KMH,
    filter_moving_points,
)
from trackmetrics.analyze.samples import TrackPoint, normalize_samples
from trackmetrics.errors import InsufficientDataError, MalformedInputError
from trackmetrics.formats.gpx import extract_samples, read_gpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


@dataclass(frozen=True)
class AnalysisResult:
    """
    Metrics for one analyzed track.

    Units:
      - total_distance : meters
      - duration       : seconds, None when an endpoint has no time
      - average_pace   : minutes per kilometer, None when undefined
      - elevation_gain : meters (ascents only)
      - points         : the filtered points the metrics were computed from
    """
    total_distance: float
    duration: Optional[float]
    average_pace: Optional[float]
    elevation_gain: float
    points: tuple[TrackPoint, ...]

    @property
    def distance_km(self) -> float:
        return self.total_distance / 1000.0

    @property
    def average_speed_kmh(self) -> Optional[float]:
        if not self.duration:
            return None
        return self.distance_km / (self.duration / 3600.0)

    @property
    def bounds(self) -> Bounds:
        lats = [p.lat for p in self.points]
        lons = [p.lon for p in self.points]
        return Bounds(min(lats), max(lats), min(lons), max(lons))

    @property
    def activity_date(self) -> Optional[_dt.date]:
        """Date (UTC) of the first point that carries a timestamp."""
        for p in self.points:
            if p.time is not None:
                return p.time.date()
        return None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly summary (points reduced to a count)."""
        b = self.bounds
        day = self.activity_date
        return {
            "total_distance_m": self.total_distance,
            "duration_s": self.duration,
            "average_pace_min_per_km": self.average_pace,
            "average_speed_kmh": self.average_speed_kmh,
            "elevation_gain_m": self.elevation_gain,
            "points": len(self.points),
            "activity_date": day.isoformat() if day else None,
            "bounds": {
                "min_lat": b.min_lat,
                "max_lat": b.max_lat,
                "min_lon": b.min_lon,
                "max_lon": b.max_lon,
            },
        }


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------
def total_distance_m(points: Sequence[TrackPoint]) -> float:
    """Sum of consecutive great-circle distances (m)."""
    return sum(point_distance_m(p0, p1) for p0, p1 in zip(points, points[1:]))


def duration_s(points: Sequence[TrackPoint]) -> Optional[float]:
    """Elapsed seconds between the first and last point, endpoints only."""
    start, end = points[0].time, points[-1].time
    if start is None or end is None:
        return None
    d = (end - start).total_seconds()
    if d < 0:
        logger.warning("track ends before it starts (%.1f s); duration unknown", d)
        return None
    return d


def average_pace_min_per_km(duration: Optional[float], distance: float) -> Optional[float]:
    if duration is None or distance == 0:
        return None
    return (duration / 60.0) / (distance / 1000.0)


def elevation_gain_m(points: Sequence[TrackPoint]) -> float:
    """Sum of positive elevation deltas; pairs with a missing elevation count 0."""
    gain = 0.0
    for p0, p1 in zip(points, points[1:]):
        if p0.ele is None or p1.ele is None:
            continue
        diff = p1.ele - p0.ele
        if diff > 0:
            gain += diff
    return gain


def compute_metrics(points: Sequence[TrackPoint]) -> AnalysisResult:
    distance = total_distance_m(points)
    duration = duration_s(points)
    return AnalysisResult(
        total_distance=distance,
        duration=duration,
        average_pace=average_pace_min_per_km(duration, distance),
        elevation_gain=elevation_gain_m(points),
        points=tuple(points),
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def _check_sequence(raw_samples: Any) -> Iterable[Any]:
    if raw_samples is None:
        raise MalformedInputError("No samples given (got None)")
    if isinstance(raw_samples, (str, bytes, bytearray, Mapping)):
        raise MalformedInputError(
            f"Expected a sequence of samples, got {type(raw_samples).__name__}"
        )
    try:
        iter(raw_samples)
    except TypeError as e:
        raise MalformedInputError(
            f"Expected a sequence of samples, got {type(raw_samples).__name__}"
        ) from e
    return raw_samples


def analyze(
        raw_samples: Iterable[Any], *,
        min_speed_kmh: float = MIN_SPEED_KMH,
        min_interval_s: float = MIN_INTERVAL_S,
) -> AnalysisResult:
    """
    Normalize, filter and measure one track.

    Raises:
      MalformedInputError   if raw_samples is not a sequence of samples
      InsufficientDataError if fewer than two usable points remain
    """
    points = normalize_samples(_check_sequence(raw_samples))
    if len(points) < 2:
        raise InsufficientDataError(
            f"Not enough track points to analyze ({len(points)} usable, need 2)"
        )

    moving = filter_moving_points(
        points, min_speed_kmh=min_speed_kmh, min_interval_s=min_interval_s
    )
    logger.debug("movement filter kept %d of %d points", len(moving), len(points))
    return compute_metrics(moving)


def analyze_gpx(
        gpx_path: Path, *,
        min_speed_kmh: float = MIN_SPEED_KMH,
        min_interval_s: float = MIN_INTERVAL_S,
) -> AnalysisResult:
    """Read a GPX file and analyze its track points."""
    samples = extract_samples(read_gpx(gpx_path))
    return analyze(samples, min_speed_kmh=min_speed_kmh, min_interval_s=min_interval_s)
