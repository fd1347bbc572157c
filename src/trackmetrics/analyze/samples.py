# trackmetrics/analyze/samples.py
"""
Sample normalization for trackmetrics

Turns loosely-typed raw samples (as handed over by a file reader or any
other producer) into strict, immutable TrackPoint values.

Key rules:
  - input order is preserved; nothing is sorted or deduplicated
  - a sample without a usable latitude/longitude is dropped silently
  - elevation and time are parsed independently and stay None when
    missing or invalid (never defaulted to 0)
"""

from __future__ import annotations

import datetime as _dt
import logging
import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

_LAT_KEYS = ("lat", "latitude")
_LON_KEYS = ("lon", "lng", "longitude")
_ELE_KEYS = ("ele", "elevation")
_TIME_KEYS = ("time", "timestamp")

# Fractional seconds directly after HH:MM:SS
_FRACTION = re.compile(r"(?<=\d\d:\d\d:\d\d)\.(\d+)")


@dataclass(frozen=True)
class RawSample:
    """
    One location record as produced upstream.

    Fields are deliberately untyped: values may be floats, numeric text,
    datetimes, or junk. The normalizer decides what is usable.
    """
    lat: Any
    lon: Any
    ele: Any = None
    time: Any = None


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    ele: Optional[float] = None
    time: Optional[_dt.datetime] = None


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------
def _as_float(v: Any) -> Optional[float]:
    """Return v as a finite float, or None."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
    try:
        f = float(v)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(f):
        return None
    return f


def parse_time_utc(v: Any) -> Optional[_dt.datetime]:
    """
    Interpret a timestamp value as a tz-aware UTC datetime.

    Accepted inputs:
      - datetime (naive values are taken as UTC)
      - ISO-8601 text, e.g. "2026-01-02T21:14:44Z",
        "2026-01-02T21:14:44.123Z", "2026-01-02T21:14:44+02:00"
      - int/float epoch seconds

    Returns None for anything else.
    """
    if v is None or isinstance(v, bool):
        return None

    if isinstance(v, _dt.datetime):
        dt = v
    elif isinstance(v, (int, float)):
        try:
            if not math.isfinite(v):
                return None
            return _dt.datetime.fromtimestamp(v, tz=_dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(v, str):
        s = v.strip()
        if not s:
            return None
        # GPX times commonly use Z for UTC.
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        # fromisoformat on 3.10 only takes 3 or 6 fractional digits
        s = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s, count=1)
        try:
            dt = _dt.datetime.fromisoformat(s)
        except ValueError:
            return None
    else:
        return None

    try:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=_dt.timezone.utc)
        return dt.astimezone(_dt.timezone.utc)
    except (OverflowError, ValueError):
        # outside the representable UTC range, e.g. 0001-01-01T00:00:00+01:00
        return None


def _pick(d: Mapping, keys: tuple[str, ...]) -> Any:
    for k in keys:
        if k in d:
            return d[k]
    return None


def _fields(sample: Any) -> Optional[tuple[Any, Any, Any, Any]]:
    """Pull (lat, lon, ele, time) out of a RawSample, mapping or look-alike."""
    if isinstance(sample, Mapping):
        return (
            _pick(sample, _LAT_KEYS),
            _pick(sample, _LON_KEYS),
            _pick(sample, _ELE_KEYS),
            _pick(sample, _TIME_KEYS),
        )
    if hasattr(sample, "lat") and hasattr(sample, "lon"):
        return (
            sample.lat,
            sample.lon,
            getattr(sample, "ele", None),
            getattr(sample, "time", None),
        )
    return None


def to_track_point(sample: Any) -> Optional[TrackPoint]:
    """
    Convert one raw sample into a TrackPoint.

    Returns None when the sample has no usable position.
    """
    fields = _fields(sample)
    if fields is None:
        return None
    raw_lat, raw_lon, raw_ele, raw_time = fields

    lat = _as_float(raw_lat)
    lon = _as_float(raw_lon)
    if lat is None or lon is None:
        return None
    if not (-90.0 <= lat <= 90.0) or not (-180.0 <= lon <= 180.0):
        return None

    return TrackPoint(
        lat=lat,
        lon=lon,
        ele=_as_float(raw_ele),
        time=parse_time_utc(raw_time),
    )


def normalize_samples(raw_samples: Iterable[Any]) -> list[TrackPoint]:
    """Return the usable samples as TrackPoints, in input order."""
    points: list[TrackPoint] = []
    total = 0
    for sample in raw_samples:
        total += 1
        p = to_track_point(sample)
        if p is not None:
            points.append(p)

    dropped = total - len(points)
    if dropped:
        logger.debug("dropped %d of %d samples without a usable position", dropped, total)
    return points
