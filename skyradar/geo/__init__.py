from .angles import (
    EARTH_RADIUS_M,
    bearing,
    distance,
    is_within_horizontal_fov,
    normalize_angle,
    relative_bearing,
    scaled_elevation_angle,
    true_elevation_angle,
)

__all__ = [
    "EARTH_RADIUS_M",
    "bearing",
    "distance",
    "is_within_horizontal_fov",
    "normalize_angle",
    "relative_bearing",
    "scaled_elevation_angle",
    "true_elevation_angle",
]
