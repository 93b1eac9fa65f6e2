"""Bearing, distance and angle helpers for radar placement.

Public angles are degrees (0 = North, clockwise); elevations are radians.
None of these functions raise: NaN inputs propagate as NaN.
"""

import math

from skyradar.types import GeoPoint

EARTH_RADIUS_M = 6_371_000.0

_COINCIDENT_EPS = 1e-12


def bearing(origin: GeoPoint, target: GeoPoint) -> float:
    lat1 = math.radians(origin.latitude_deg)
    lat2 = math.radians(target.latitude_deg)
    d_lon = math.radians(target.longitude_deg - origin.longitude_deg)

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    if abs(x) < _COINCIDENT_EPS and abs(y) < _COINCIDENT_EPS:
        return 0.0

    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def distance(origin: GeoPoint, target: GeoPoint, earth_radius_m: float = EARTH_RADIUS_M) -> float:
    lat1 = math.radians(origin.latitude_deg)
    lat2 = math.radians(target.latitude_deg)
    d_lat = lat2 - lat1
    d_lon = math.radians(target.longitude_deg - origin.longitude_deg)

    a = math.sin(d_lat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2.0) ** 2
    # Clamp rounding drift; min/max keep NaN when it is the first argument
    a = max(min(a, 1.0), 0.0)
    return 2.0 * earth_radius_m * math.asin(math.sqrt(a))


def normalize_angle(angle: float) -> float:
    if not math.isfinite(angle):
        return math.nan
    normalized = angle
    if abs(normalized) > 540.0:
        # Repeated subtraction stalls once float spacing exceeds 360
        normalized = math.fmod(normalized, 360.0)
    while normalized > 180.0:
        normalized -= 360.0
    while normalized < -180.0:
        normalized += 360.0
    return normalized


def relative_bearing(target_bearing: float, device_heading: float) -> float:
    """Angle from the device heading to the target; positive is to the right."""
    return normalize_angle(target_bearing - device_heading)


def is_within_horizontal_fov(bearing_deg: float, heading_deg: float, fov_deg: float) -> bool:
    return abs(relative_bearing(bearing_deg, heading_deg)) <= fov_deg / 2.0


def true_elevation_angle(distance_m: float, earth_radius_m: float = EARTH_RADIUS_M) -> float:
    # A chord to a point at central angle theta dips theta/2 below the horizontal
    central_angle = distance_m / earth_radius_m
    return -min(central_angle / 2.0, math.pi / 2.0)


def scaled_elevation_angle(
    distance_m: float,
    max_distance_m: float = 20_000_000.0,
    max_angle_degrees: float = 20.0,
) -> float:
    normalized = min(distance_m / max_distance_m, 1.0)
    return -normalized * math.radians(max_angle_degrees)
