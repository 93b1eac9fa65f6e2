import datetime
import math
from dataclasses import dataclass
from typing import AbstractSet, Iterable

import numpy as np

from skyradar.geo.angles import EARTH_RADIUS_M, bearing, distance, is_within_horizontal_fov, relative_bearing
from skyradar.projection.camera import direction_from_az_el, direction_vector, project_to_screen
from skyradar.types import (
    CelestialBody,
    Friend,
    FriendLocation,
    GeoPoint,
    HorizontalPosition,
    Landmark,
    ResolvedFriend,
    ResolvedLandmark,
    ScreenSize,
    TargetIndicator,
)
from skyradar.util.format import format_distance, format_last_seen

DEFAULT_STALENESS_S = 300.0
DEFAULT_FOUND_RADIUS_PX = 150.0


@dataclass(frozen=True)
class ViewGeometry:
    """Everything the projector needs for one frame."""

    rotation_matrix: np.ndarray
    heading_deg: float
    horizontal_fov_deg: float
    vertical_fov_deg: float
    screen_size: ScreenSize
    earth_radius_m: float = EARTH_RADIUS_M
    distance_unit: str | None = None

    def project_direction(self, direction):
        return project_to_screen(
            direction,
            self.rotation_matrix,
            self.horizontal_fov_deg,
            self.vertical_fov_deg,
            self.screen_size,
        )

    def label(self, distance_m: float) -> str | None:
        if self.distance_unit is None:
            return None
        return format_distance(distance_m, self.distance_unit)


def _utc(dt: datetime.datetime) -> datetime.datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt


def is_location_fresh(
    location: FriendLocation | None,
    now: datetime.datetime,
    staleness_s: float = DEFAULT_STALENESS_S,
) -> bool:
    if location is None:
        return False
    age_s = (_utc(now) - _utc(location.timestamp)).total_seconds()
    return age_s < staleness_s


def _place(origin: GeoPoint, target: GeoPoint, view: ViewGeometry):
    direction = direction_vector(origin, target, view.earth_radius_m)
    point = view.project_direction(direction)
    if point is None:
        return None
    bearing_deg = bearing(origin, target)
    distance_m = distance(origin, target, view.earth_radius_m)
    return point, bearing_deg, distance_m


def resolve_friends(
    friends: Iterable[Friend],
    origin: GeoPoint,
    view: ViewGeometry,
    now: datetime.datetime,
    staleness_s: float = DEFAULT_STALENESS_S,
) -> list[ResolvedFriend]:
    resolved = []
    for friend in friends:
        if not is_location_fresh(friend.location, now, staleness_s):
            continue
        placed = _place(origin, friend.location.point, view)
        if placed is None:
            continue
        point, bearing_deg, distance_m = placed
        resolved.append(
            ResolvedFriend(
                friend=friend,
                screen_point=point,
                distance_m=distance_m,
                bearing_deg=bearing_deg,
                on_screen=view.screen_size.contains(point),
                in_fov=is_within_horizontal_fov(bearing_deg, view.heading_deg, view.horizontal_fov_deg),
                distance_label=view.label(distance_m),
                last_seen_label=format_last_seen(
                    (_utc(now) - _utc(friend.location.timestamp)).total_seconds()
                ),
            )
        )
    return resolved


def resolve_landmarks(
    landmarks: Iterable[Landmark],
    origin: GeoPoint,
    view: ViewGeometry,
    show_landmarks: bool = True,
    disabled_ids: AbstractSet[str] = frozenset(),
) -> list[ResolvedLandmark]:
    if not show_landmarks:
        return []
    resolved = []
    for landmark in landmarks:
        if landmark.id in disabled_ids:
            continue
        placed = _place(origin, landmark.point, view)
        if placed is None:
            continue
        point, bearing_deg, distance_m = placed
        resolved.append(
            ResolvedLandmark(
                landmark=landmark,
                screen_point=point,
                distance_m=distance_m,
                bearing_deg=bearing_deg,
                on_screen=view.screen_size.contains(point),
                in_fov=is_within_horizontal_fov(bearing_deg, view.heading_deg, view.horizontal_fov_deg),
                distance_label=view.label(distance_m),
            )
        )
    return resolved


def resolve_celestial(name: str, position: HorizontalPosition, view: ViewGeometry | None) -> CelestialBody:
    point = None
    if view is not None:
        point = view.project_direction(direction_from_az_el(position.azimuth_deg, position.elevation_deg))
    return CelestialBody(name=name, position=position, screen_point=point)


def resolve_target(
    friend: Friend,
    origin: GeoPoint,
    view: ViewGeometry,
    found_radius_px: float = DEFAULT_FOUND_RADIUS_PX,
) -> TargetIndicator | None:
    if friend.location is None:
        return None
    target = friend.location.point
    point = view.project_direction(direction_vector(origin, target, view.earth_radius_m))
    arrow_angle = relative_bearing(bearing(origin, target), view.heading_deg)

    if point is None or point.x < 0:
        show_arrow = True
    else:
        center = view.screen_size.center
        show_arrow = math.hypot(point.x - center.x, point.y - center.y) > found_radius_px
    return TargetIndicator(
        friend=friend,
        screen_point=point,
        arrow_angle_deg=arrow_angle,
        show_arrow=show_arrow,
    )
