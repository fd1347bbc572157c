# trackmetrics/analyze/geo.py
"""
Geodesic distance for trackmetrics

Both the movement filter and the distance total go through distance_m(),
so the two always agree on how far apart two fixes are.
"""

from haversine import haversine, Unit

# Spherical Earth model, mean radius in meters.
EARTH_RADIUS_M = 6_371_000.0


def distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance in meters between two lat/lon points (degrees).

    The haversine library returns the central angle for Unit.RADIANS;
    scaling by EARTH_RADIUS_M keeps the radius fixed regardless of the
    library's own default mean radius.
    """
    angle = haversine((lat1, lon1), (lat2, lon2), unit=Unit.RADIANS)
    return EARTH_RADIUS_M * angle


def point_distance_m(p0, p1) -> float:
    """Distance in meters between two objects carrying .lat/.lon."""
    return distance_m(p0.lat, p0.lon, p1.lat, p1.lon)
