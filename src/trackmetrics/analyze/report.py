# trackmetrics/analyze/report.py
"""
Human-readable formatting of analysis results.
"""

from __future__ import annotations

import datetime as _dt
import math
from pathlib import Path
from typing import Optional

from trackmetrics.analyze.track import AnalysisResult

TSV_HEADER = "file\tpoints\tdistance_m\tduration_s\tpace_min_per_km\televation_gain_m"

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def format_time(seconds: float) -> str:
    """H:MM:SS when at least an hour, otherwise M:SS."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration(seconds: Optional[float]) -> str:
    if not seconds:
        return "--"
    return format_time(seconds)


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{_round_half_up(meters)}m"
    return f"{meters / 1000:.2f}km"


def format_pace(pace: Optional[float]) -> str:
    if not pace:
        return "--"
    return format_time(pace * 60) + "/km"


def format_elevation(meters: Optional[float]) -> str:
    if not meters:
        return "--"
    return f"{_round_half_up(meters)}m"


def format_date(day: Optional[_dt.date]) -> str:
    """English long date, e.g. June 1, 2025 (not locale dependent)."""
    if day is None:
        return "--"
    return f"{MONTHS[day.month - 1]} {day.day}, {day.year}"


def _num(v: Optional[float], fmt: str) -> str:
    return "" if v is None else format(v, fmt)


def tsv_row(path: Path, result: AnalysisResult) -> str:
    return "\t".join([
        str(path),
        str(len(result.points)),
        _num(result.total_distance, ".2f"),
        _num(result.duration, ".1f"),
        _num(result.average_pace, ".3f"),
        _num(result.elevation_gain, ".1f"),
    ])


def text_report(path: Path, result: AnalysisResult) -> str:
    day = result.activity_date
    lines = [
        f"{path}",
        f"  date          : {format_date(day)}",
        f"  points        : {len(result.points)}",
        f"  distance      : {format_distance(result.total_distance)}",
        f"  duration      : {format_duration(result.duration)}",
        f"  pace          : {format_pace(result.average_pace)}",
        f"  elevation gain: {format_elevation(result.elevation_gain)}",
    ]
    return "\n".join(lines)
