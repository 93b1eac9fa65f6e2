from dataclasses import dataclass, field
import datetime
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class GeoPoint:
    latitude_deg: float
    longitude_deg: float


@dataclass(frozen=True)
class WorldDirection:
    """Unit vector in the North-West-Up frame."""

    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float


@dataclass(frozen=True)
class ScreenSize:
    width: float
    height: float

    @property
    def center(self) -> ScreenPoint:
        return ScreenPoint(self.width / 2.0, self.height / 2.0)

    @property
    def is_empty(self) -> bool:
        return not (self.width > 0 and self.height > 0)

    def contains(self, point: ScreenPoint) -> bool:
        return 0.0 <= point.x <= self.width and 0.0 <= point.y <= self.height


@dataclass(frozen=True)
class HorizontalPosition:
    azimuth_deg: float
    elevation_deg: float


@dataclass(frozen=True)
class FriendLocation:
    latitude_deg: float
    longitude_deg: float
    timestamp: datetime.datetime

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude_deg, self.longitude_deg)


@dataclass(frozen=True)
class Friend:
    id: str
    display_name: str
    avatar_url: str | None = None
    location: FriendLocation | None = None


@dataclass(frozen=True)
class Landmark:
    id: str
    name: str
    icon: str
    latitude_deg: float
    longitude_deg: float
    city: str | None = None
    country: str | None = None

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude_deg, self.longitude_deg)

    @property
    def location_label(self) -> str:
        return ", ".join(part for part in (self.city, self.country) if part)


@dataclass(frozen=True)
class ResolvedFriend:
    friend: Friend
    screen_point: ScreenPoint
    distance_m: float
    bearing_deg: float
    on_screen: bool
    in_fov: bool
    distance_label: str | None = None
    last_seen_label: str | None = None

    @property
    def id(self) -> str:
        return self.friend.id


@dataclass(frozen=True)
class ResolvedLandmark:
    landmark: Landmark
    screen_point: ScreenPoint
    distance_m: float
    bearing_deg: float
    on_screen: bool
    in_fov: bool
    distance_label: str | None = None

    @property
    def id(self) -> str:
        return self.landmark.id


@dataclass(frozen=True)
class CelestialBody:
    name: str
    position: HorizontalPosition
    screen_point: ScreenPoint | None


@dataclass(frozen=True)
class EntityCluster:
    """Landmarks (and possibly friends) sharing one on-screen anchor."""

    landmarks: tuple[ResolvedLandmark, ...]
    position: ScreenPoint
    friends: tuple[ResolvedFriend, ...] = ()

    @property
    def id(self) -> str:
        # Sorted so identical membership keeps its key across frames
        landmark_ids = "-".join(sorted(l.id for l in self.landmarks))
        friend_ids = "-".join(sorted(f.id for f in self.friends))
        return landmark_ids + ("+" + friend_ids if friend_ids else "")

    @property
    def is_single(self) -> bool:
        return len(self.landmarks) == 1 and not self.friends

    @property
    def is_mixed(self) -> bool:
        return bool(self.friends)

    @property
    def total_count(self) -> int:
        return len(self.landmarks) + len(self.friends)

    @property
    def first(self) -> ResolvedLandmark | None:
        return self.landmarks[0] if self.landmarks else None

    def contains_friend(self, friend_id: str) -> bool:
        return any(f.id == friend_id for f in self.friends)


@dataclass(frozen=True)
class TargetIndicator:
    friend: Friend
    screen_point: ScreenPoint | None
    arrow_angle_deg: float
    show_arrow: bool

    @property
    def found(self) -> bool:
        return not self.show_arrow


@dataclass(frozen=True)
class Scene:
    heading_deg: float | None
    heading_label: str | None
    is_daytime: bool
    visible_friends: Sequence[ResolvedFriend] = ()
    landmark_clusters: Sequence[EntityCluster] = ()
    horizon_polyline: Sequence[ScreenPoint] = ()
    earth_polygon: Sequence[ScreenPoint] = ()
    sun: CelestialBody | None = None
    moon: CelestialBody | None = None
    moon_phase_id: str | None = None
    moon_illumination: float | None = None
    target: TargetIndicator | None = None
    stars: Sequence[ScreenPoint] = field(default_factory=tuple)

    @property
    def sun_screen_point(self) -> ScreenPoint | None:
        return self.sun.screen_point if self.sun else None

    @property
    def moon_screen_point(self) -> ScreenPoint | None:
        return self.moon.screen_point if self.moon else None

    @property
    def clustered_friend_ids(self) -> frozenset[str]:
        return frozenset(
            f.id for cluster in self.landmark_clusters for f in cluster.friends
        )

    @property
    def individual_friends(self) -> tuple[ResolvedFriend, ...]:
        clustered = self.clustered_friend_ids
        return tuple(f for f in self.visible_friends if f.id not in clustered)
