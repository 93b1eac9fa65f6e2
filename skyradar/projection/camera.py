"""Pinhole projection between the North-West-Up world frame and the screen.

The orientation matrix R maps world vectors into the device frame
(x right, y up the screen, z out of the screen toward the viewer), so the
camera looks along device -z.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from skyradar.geo.angles import EARTH_RADIUS_M, bearing, distance, true_elevation_angle
from skyradar.types import GeoPoint, ScreenPoint, ScreenSize, WorldDirection

_DEVICE_FORWARD = np.array([0.0, 0.0, -1.0])


def as_rotation_matrix(rotation_matrix: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    matrix = np.asarray(rotation_matrix, dtype=float)
    if matrix.shape != (3, 3):
        raise ValueError(f"Rotation matrix must be 3x3, got shape {matrix.shape}")
    return matrix


def direction_from_az_el(azimuth_deg: float, elevation_deg: float) -> WorldDirection:
    return _direction(math.radians(azimuth_deg), math.radians(elevation_deg))


def _direction(az_rad: float, el_rad: float) -> WorldDirection:
    cos_e = math.cos(el_rad)
    # Azimuth runs clockwise from North but +y points West
    return WorldDirection(
        x=cos_e * math.cos(az_rad),
        y=-cos_e * math.sin(az_rad),
        z=math.sin(el_rad),
    )


def direction_vector(
    origin: GeoPoint,
    target: GeoPoint,
    earth_radius_m: float = EARTH_RADIUS_M,
) -> WorldDirection:
    az = math.radians(bearing(origin, target))
    el = true_elevation_angle(distance(origin, target, earth_radius_m), earth_radius_m)
    return _direction(az, el)


def project_to_screen(
    world_direction: WorldDirection,
    rotation_matrix,
    horizontal_fov_deg: float,
    vertical_fov_deg: float,
    screen_size: ScreenSize,
) -> ScreenPoint | None:
    device = as_rotation_matrix(rotation_matrix) @ world_direction.as_array()
    dx, dy, dz = (float(v) for v in device)
    if not dz < 0.0:
        return None

    angle_x = math.atan2(dx, -dz)
    angle_y = math.atan2(dy, -dz)
    half_w = screen_size.width / 2.0
    half_h = screen_size.height / 2.0
    half_hfov = math.radians(horizontal_fov_deg) / 2.0
    half_vfov = math.radians(vertical_fov_deg) / 2.0
    return ScreenPoint(
        x=half_w + (angle_x / half_hfov) * half_w,
        y=half_h - (angle_y / half_vfov) * half_h,
    )


def screen_ray(
    point: ScreenPoint,
    rotation_matrix,
    horizontal_fov_deg: float,
    vertical_fov_deg: float,
    screen_size: ScreenSize,
) -> WorldDirection:
    """World-frame direction seen through a screen point (inverse of project_to_screen)."""
    half_w = screen_size.width / 2.0
    half_h = screen_size.height / 2.0
    angle_x = (point.x - half_w) / half_w * math.radians(horizontal_fov_deg) / 2.0
    angle_y = (half_h - point.y) / half_h * math.radians(vertical_fov_deg) / 2.0

    device = np.array([math.tan(angle_x), math.tan(angle_y), -1.0])
    device /= np.linalg.norm(device)
    world = as_rotation_matrix(rotation_matrix).T @ device
    return WorldDirection(x=float(world[0]), y=float(world[1]), z=float(world[2]))


def heading_from_rotation_matrix(rotation_matrix) -> float:
    forward = as_rotation_matrix(rotation_matrix).T @ _DEVICE_FORWARD
    north, west = float(forward[0]), float(forward[1])
    return (math.degrees(math.atan2(-west, north)) + 360.0) % 360.0


def orientation_matrix(heading_deg: float, pitch_deg: float = 0.0) -> np.ndarray:
    """World-to-device matrix for an upright device facing heading_deg, tilted up by pitch_deg."""
    h = math.radians(heading_deg)
    p = math.radians(pitch_deg)
    forward = np.array([math.cos(p) * math.cos(h), -math.cos(p) * math.sin(h), math.sin(p)])
    right = np.array([-math.sin(h), -math.cos(h), 0.0])
    back = -forward
    up = np.cross(back, right)
    return np.vstack([right, up, back])
