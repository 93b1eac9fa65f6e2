from dataclasses import dataclass, field
import datetime
import logging
from typing import AbstractSet, Sequence

from skyradar.catalog import LocalLandmarkCatalog
from skyradar.config import Config
from skyradar.projection.camera import as_rotation_matrix, heading_from_rotation_matrix
from skyradar.projection.horizon import earth_fill_polygon, horizon_screen_points
from skyradar.sky.astro import (
    is_daytime,
    moon_illumination_fraction,
    moon_phase_id,
    moon_position,
    sun_position,
)
from skyradar.sky.stars import star_field, stars_above_horizon
from skyradar.types import Friend, GeoPoint, Landmark, Scene, ScreenSize
from skyradar.util.format import cardinal_direction
from .clustering import cluster_landmarks
from .resolver import (
    ViewGeometry,
    resolve_celestial,
    resolve_friends,
    resolve_landmarks,
    resolve_target,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameInputs:
    """Snapshot of everything one frame depends on."""

    instant: datetime.datetime
    screen_size: ScreenSize
    orientation: object | None = None
    location: GeoPoint | None = None
    friends: Sequence[Friend] = ()
    show_landmarks: bool = True
    disabled_landmark_ids: AbstractSet[str] = field(default_factory=frozenset)
    target_friend_id: str | None = None


class FrameComposer:
    def __init__(self, config: Config, landmarks: Sequence[Landmark] | None = None):
        self._config = config
        if landmarks is None:
            landmarks = LocalLandmarkCatalog(config.landmark_catalog_path).list_landmarks()
        self._landmarks = tuple(landmarks)
        self._stars = star_field(config.star_seed, config.star_count)

    @property
    def landmarks(self) -> tuple[Landmark, ...]:
        return self._landmarks

    def compose(self, inputs: FrameInputs) -> Scene:
        config = self._config
        location = inputs.location
        lat = location.latitude_deg if location is not None else None
        lon = location.longitude_deg if location is not None else None

        daytime = is_daytime(
            inputs.instant,
            lat,
            lon,
            threshold_deg=config.twilight_elevation_deg,
            day_start_hour=config.day_start_hour,
            day_end_hour=config.day_end_hour,
        )
        phase = moon_phase_id(inputs.instant)
        illumination = moon_illumination_fraction(inputs.instant)

        view = None
        heading = None
        horizon = ()
        earth = ()
        if inputs.orientation is not None:
            matrix = as_rotation_matrix(inputs.orientation)
            heading = heading_from_rotation_matrix(matrix)
            view = ViewGeometry(
                rotation_matrix=matrix,
                heading_deg=heading,
                horizontal_fov_deg=config.horizontal_fov_deg,
                vertical_fov_deg=config.vertical_fov_deg,
                screen_size=inputs.screen_size,
                earth_radius_m=config.earth_radius_m,
                distance_unit=config.distance_unit,
            )
            if not inputs.screen_size.is_empty:
                horizon = horizon_screen_points(
                    matrix,
                    config.horizontal_fov_deg,
                    config.vertical_fov_deg,
                    inputs.screen_size,
                    step_deg=config.horizon_sample_step_deg,
                )
                earth = earth_fill_polygon(
                    matrix,
                    config.horizontal_fov_deg,
                    config.vertical_fov_deg,
                    inputs.screen_size,
                    iterations=config.horizon_bisection_iterations,
                )

        stars = () if daytime else stars_above_horizon(self._stars, horizon, inputs.screen_size)

        sun = moon = None
        if location is not None:
            sun = resolve_celestial("sun", sun_position(inputs.instant, lat, lon), view)
            moon = resolve_celestial("moon", moon_position(inputs.instant, lat, lon), view)

        if location is None or view is None:
            logger.debug("Composing frame without %s", "location" if location is None else "orientation")
            return Scene(
                heading_deg=heading,
                heading_label=cardinal_direction(heading) if heading is not None else None,
                is_daytime=daytime,
                horizon_polyline=horizon,
                earth_polygon=earth,
                sun=sun,
                moon=moon,
                moon_phase_id=phase,
                moon_illumination=illumination,
                stars=stars,
            )

        friends = resolve_friends(
            inputs.friends,
            location,
            view,
            inputs.instant,
            staleness_s=config.friend_staleness_s,
        )
        landmarks = resolve_landmarks(
            self._landmarks,
            location,
            view,
            show_landmarks=inputs.show_landmarks,
            disabled_ids=inputs.disabled_landmark_ids,
        )
        clusters = cluster_landmarks(landmarks, friends, threshold_px=config.cluster_threshold_px)

        target = None
        if inputs.target_friend_id is not None:
            friend = next((f for f in inputs.friends if f.id == inputs.target_friend_id), None)
            if friend is not None:
                target = resolve_target(friend, location, view, config.target_found_radius_px)

        logger.debug(
            "Composed frame: heading=%.1f friends=%d landmarks=%d clusters=%d",
            heading,
            len(friends),
            len(landmarks),
            len(clusters),
        )
        return Scene(
            heading_deg=heading,
            heading_label=cardinal_direction(heading),
            is_daytime=daytime,
            visible_friends=tuple(friends),
            landmark_clusters=tuple(clusters),
            horizon_polyline=horizon,
            earth_polygon=earth,
            sun=sun,
            moon=moon,
            moon_phase_id=phase,
            moon_illumination=illumination,
            target=target,
            stars=stars,
        )
