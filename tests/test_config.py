from pathlib import Path

import pytest

import skyradar.config as config_module
from skyradar.config import Config, load_config
from skyradar.errors import ConfigError, SkyRadarError


def test_defaults():
    config = Config({})
    assert config.horizontal_fov_deg == 60.0
    assert config.vertical_fov_deg == 90.0
    assert config.friend_staleness_s == 300.0
    assert config.cluster_threshold_px == 60.0
    assert config.earth_radius_m == 6_371_000.0
    assert config.target_found_radius_px == 150.0
    assert config.horizon_sample_step_deg == 2.0
    assert config.horizon_bisection_iterations == 20
    assert config.twilight_elevation_deg == -6.0
    assert config.day_start_hour == 6
    assert config.day_end_hour == 20
    assert config.star_seed == 42
    assert config.star_count == 80
    assert config.distance_unit == "km"
    assert config.landmark_catalog_path is None


def test_overrides():
    config = Config(
        {
            "view": {"horizontal_fov_deg": 70, "vertical_fov_deg": 100},
            "friends": {"staleness_s": 600},
            "display": {"distance_unit": "mi"},
            "landmarks": {"catalog_path": "~/landmarks.csv"},
        }
    )
    assert config.horizontal_fov_deg == 70.0
    assert config.vertical_fov_deg == 100.0
    assert config.friend_staleness_s == 600.0
    assert config.distance_unit == "mi"
    assert config.landmark_catalog_path == Path("~/landmarks.csv").expanduser()


@pytest.mark.parametrize("value", [0, -10, "wide", None])
def test_invalid_fov(value):
    config = Config({"view": {"horizontal_fov_deg": value}})
    with pytest.raises(ConfigError, match="view.horizontal_fov_deg"):
        config.horizontal_fov_deg


def test_invalid_distance_unit():
    with pytest.raises(ConfigError):
        Config({"display": {"distance_unit": "furlong"}}).distance_unit


def test_config_error_is_a_skyradar_error():
    assert issubclass(ConfigError, SkyRadarError)


def test_load_config(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        "[view]\n"
        "horizontal_fov_deg = 55.0\n"
        "\n"
        "[clusters]\n"
        "threshold_px = 40\n"
    )
    config = load_config(path)
    assert config.horizontal_fov_deg == 55.0
    assert config.cluster_threshold_px == 40.0
    assert config.vertical_fov_deg == 90.0


def test_load_config_explicit_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "nope.toml")
    config = load_config()
    assert config.horizontal_fov_deg == 60.0


def test_load_config_invalid_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[view\nhorizontal_fov_deg = ")
    with pytest.raises(ConfigError, match="Invalid config file"):
        load_config(path)
