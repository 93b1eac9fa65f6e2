"""Horizon line and earth/sky screen regions.

The fill works for every attitude: each screen corner is classified by
casting its ray back into the world, and edges whose corners disagree are
bisected to find where the horizon crosses them. The sampled line is a
separate overlay and may disagree slightly with the fill when the device
points near the zenith or nadir.
"""

from __future__ import annotations

from skyradar.types import ScreenPoint, ScreenSize
from .camera import as_rotation_matrix, direction_from_az_el, project_to_screen, screen_ray

DEFAULT_SAMPLE_STEP_DEG = 2.0
DEFAULT_BISECTION_ITERATIONS = 20


def horizon_screen_points(
    rotation_matrix,
    horizontal_fov_deg: float,
    vertical_fov_deg: float,
    screen_size: ScreenSize,
    step_deg: float = DEFAULT_SAMPLE_STEP_DEG,
) -> tuple[ScreenPoint, ...]:
    if step_deg <= 0:
        raise ValueError("Horizon sample step must be positive")
    matrix = as_rotation_matrix(rotation_matrix)
    points = []
    azimuth = 0.0
    while azimuth < 360.0:
        point = project_to_screen(
            direction_from_az_el(azimuth, 0.0),
            matrix,
            horizontal_fov_deg,
            vertical_fov_deg,
            screen_size,
        )
        if point is not None:
            points.append(point)
        azimuth += step_deg
    points.sort(key=lambda p: p.x)
    return tuple(points)


def classify_screen_point(
    point: ScreenPoint,
    rotation_matrix,
    horizontal_fov_deg: float,
    vertical_fov_deg: float,
    screen_size: ScreenSize,
) -> bool:
    """True when the ray through the point goes below the horizon."""
    ray = screen_ray(point, rotation_matrix, horizontal_fov_deg, vertical_fov_deg, screen_size)
    return ray.z < 0.0


def _corners(screen_size: ScreenSize) -> tuple[ScreenPoint, ...]:
    w, h = screen_size.width, screen_size.height
    # Clockwise from top-left
    return (
        ScreenPoint(0.0, 0.0),
        ScreenPoint(w, 0.0),
        ScreenPoint(w, h),
        ScreenPoint(0.0, h),
    )


def _lerp(a: ScreenPoint, b: ScreenPoint, t: float) -> ScreenPoint:
    return ScreenPoint(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def _bisect_edge(a: ScreenPoint, b: ScreenPoint, a_is_earth: bool, classify, iterations: int) -> ScreenPoint:
    lo, hi = 0.0, 1.0
    for _ in range(iterations):
        mid = (lo + hi) / 2.0
        if classify(_lerp(a, b, mid)) == a_is_earth:
            lo = mid
        else:
            hi = mid
    return _lerp(a, b, (lo + hi) / 2.0)


def _region_polygon(
    rotation_matrix,
    horizontal_fov_deg: float,
    vertical_fov_deg: float,
    screen_size: ScreenSize,
    iterations: int,
    want_earth: bool,
) -> tuple[ScreenPoint, ...]:
    if screen_size.is_empty:
        return ()
    matrix = as_rotation_matrix(rotation_matrix)

    def classify(point: ScreenPoint) -> bool:
        return classify_screen_point(point, matrix, horizontal_fov_deg, vertical_fov_deg, screen_size)

    corners = _corners(screen_size)
    labels = [classify(c) for c in corners]
    if all(label == want_earth for label in labels):
        return corners
    if all(label != want_earth for label in labels):
        return ()

    polygon: list[ScreenPoint] = []
    for i, corner in enumerate(corners):
        nxt = (i + 1) % len(corners)
        if labels[i] == want_earth:
            polygon.append(corner)
        if labels[i] != labels[nxt]:
            polygon.append(_bisect_edge(corner, corners[nxt], labels[i], classify, iterations))
    return tuple(polygon)


def earth_fill_polygon(
    rotation_matrix,
    horizontal_fov_deg: float,
    vertical_fov_deg: float,
    screen_size: ScreenSize,
    iterations: int = DEFAULT_BISECTION_ITERATIONS,
) -> tuple[ScreenPoint, ...]:
    return _region_polygon(
        rotation_matrix, horizontal_fov_deg, vertical_fov_deg, screen_size, iterations, want_earth=True
    )


def sky_fill_polygon(
    rotation_matrix,
    horizontal_fov_deg: float,
    vertical_fov_deg: float,
    screen_size: ScreenSize,
    iterations: int = DEFAULT_BISECTION_ITERATIONS,
) -> tuple[ScreenPoint, ...]:
    return _region_polygon(
        rotation_matrix, horizontal_fov_deg, vertical_fov_deg, screen_size, iterations, want_earth=False
    )
