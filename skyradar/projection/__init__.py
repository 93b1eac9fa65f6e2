from .camera import (
    direction_from_az_el,
    direction_vector,
    heading_from_rotation_matrix,
    orientation_matrix,
    project_to_screen,
    screen_ray,
)
from .horizon import (
    classify_screen_point,
    earth_fill_polygon,
    horizon_screen_points,
    sky_fill_polygon,
)

__all__ = [
    "direction_from_az_el",
    "direction_vector",
    "heading_from_rotation_matrix",
    "orientation_matrix",
    "project_to_screen",
    "screen_ray",
    "classify_screen_point",
    "earth_fill_polygon",
    "horizon_screen_points",
    "sky_fill_polygon",
]
