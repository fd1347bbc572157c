# trackmetrics/analyze/movement.py
"""
Movement filter for trackmetrics

Drops fixes recorded while standing still (GPS jitter) or sampled too
closely together to say anything about motion.
"""

from __future__ import annotations

from collections.abc import Sequence

from trackmetrics.analyze.geo import point_distance_m
from trackmetrics.analyze.samples import TrackPoint

MIN_SPEED_KMH = 1.5
MIN_INTERVAL_S = 1.0


def step_speed_kmh(p0: TrackPoint, p1: TrackPoint, dt_s: float) -> float:
    """Speed in km/h covering p0 -> p1 in dt_s seconds (dt_s > 0)."""
    return (point_distance_m(p0, p1) / 1000.0) / (dt_s / 3600.0)


def filter_moving_points(
        points: Sequence[TrackPoint], *,
        min_speed_kmh: float = MIN_SPEED_KMH,
        min_interval_s: float = MIN_INTERVAL_S,
) -> list[TrackPoint]:
    """
    Keep the points that represent real movement.

    Rules, evaluated per interior point i against points[i + 1] only:
      - either timestamp missing  -> keep (cannot be speed-tested)
      - elapsed < min_interval_s  -> drop (near-duplicate fix)
      - speed >= min_speed_kmh    -> keep, otherwise drop

    The first and last points are always kept.
    """
    n = len(points)
    if n < 2:
        return list(points)

    kept = [points[0]]
    for i in range(1, n - 1):
        p0, p1 = points[i], points[i + 1]

        if p0.time is None or p1.time is None:
            kept.append(p0)
            continue

        dt_s = (p1.time - p0.time).total_seconds()
        if dt_s < min_interval_s or dt_s <= 0:
            continue

        if step_speed_kmh(p0, p1, dt_s) >= min_speed_kmh:
            kept.append(p0)

    kept.append(points[-1])
    return kept
