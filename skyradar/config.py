import logging
from pathlib import Path
from typing import TYPE_CHECKING

from skyradar.errors import ConfigError

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "skyradar" / "config.toml"

DISTANCE_UNITS = ("km", "mi")


class Config:
    def __init__(self, data: dict):
        self._data = data

    def _section(self, name: str) -> dict:
        return self._data.get(name, {})

    def _positive(self, section: str, key: str, default: float) -> float:
        value = self._section(section).get(key, default)
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{section}.{key} must be a number, got {value!r}") from e
        if value <= 0:
            raise ConfigError(f"{section}.{key} must be positive, got {value}")
        return value

    @property
    def horizontal_fov_deg(self):
        return self._positive("view", "horizontal_fov_deg", 60.0)

    @property
    def vertical_fov_deg(self):
        return self._positive("view", "vertical_fov_deg", 90.0)

    @property
    def friend_staleness_s(self):
        return self._positive("friends", "staleness_s", 300.0)

    @property
    def cluster_threshold_px(self):
        return self._positive("clusters", "threshold_px", 60.0)

    @property
    def earth_radius_m(self):
        return self._positive("earth", "radius_m", 6_371_000.0)

    @property
    def target_found_radius_px(self):
        return self._positive("target", "found_radius_px", 150.0)

    @property
    def horizon_sample_step_deg(self):
        return self._positive("horizon", "sample_step_deg", 2.0)

    @property
    def horizon_bisection_iterations(self):
        return int(self._positive("horizon", "bisection_iterations", 20))

    @property
    def twilight_elevation_deg(self):
        return float(self._section("sky").get("twilight_elevation_deg", -6.0))

    @property
    def day_start_hour(self):
        return int(self._section("sky").get("day_start_hour", 6))

    @property
    def day_end_hour(self):
        return int(self._section("sky").get("day_end_hour", 20))

    @property
    def star_seed(self):
        return int(self._section("sky").get("star_seed", 42))

    @property
    def star_count(self):
        return int(self._section("sky").get("star_count", 80))

    @property
    def distance_unit(self):
        unit = self._section("display").get("distance_unit", "km")
        if unit not in DISTANCE_UNITS:
            raise ConfigError(
                f"display.distance_unit must be one of {', '.join(DISTANCE_UNITS)}, got {unit!r}"
            )
        return unit

    @property
    def landmark_catalog_path(self):
        path = self._section("landmarks").get("catalog_path", None)
        if not path:
            return None
        return Path(path).expanduser()


def load_config(path: Path | None = None) -> Config:
    explicit_path = path
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Return default config if default file missing
        return Config({})

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return Config(data)
