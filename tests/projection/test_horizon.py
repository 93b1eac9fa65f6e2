import numpy as np
import pytest

from skyradar.projection.camera import orientation_matrix
from skyradar.projection.horizon import (
    classify_screen_point,
    earth_fill_polygon,
    horizon_screen_points,
    sky_fill_polygon,
)
from skyradar.types import ScreenPoint, ScreenSize

SCREEN = ScreenSize(400, 800)
HFOV = 60.0
VFOV = 90.0


def earth(matrix):
    return earth_fill_polygon(matrix, HFOV, VFOV, SCREEN)


def sky(matrix):
    return sky_fill_polygon(matrix, HFOV, VFOV, SCREEN)


def test_level_horizon_is_a_flat_line_through_center():
    points = horizon_screen_points(orientation_matrix(0.0), HFOV, VFOV, SCREEN)
    assert len(points) > 2
    assert all(p.y == pytest.approx(400.0) for p in points)
    xs = [p.x for p in points]
    assert xs == sorted(xs)


def test_horizon_step_controls_density():
    matrix = orientation_matrix(0.0)
    coarse = horizon_screen_points(matrix, HFOV, VFOV, SCREEN, step_deg=10.0)
    fine = horizon_screen_points(matrix, HFOV, VFOV, SCREEN, step_deg=1.0)
    assert len(fine) > len(coarse)


def test_horizon_step_must_be_positive():
    with pytest.raises(ValueError):
        horizon_screen_points(orientation_matrix(0.0), HFOV, VFOV, SCREEN, step_deg=0.0)


def test_level_earth_fills_lower_half():
    polygon = earth(orientation_matrix(0.0))
    expected = [(400.0, 400.0), (400.0, 800.0), (0.0, 800.0), (0.0, 400.0)]
    assert len(polygon) == len(expected)
    for point, (x, y) in zip(polygon, expected):
        assert point.x == pytest.approx(x, abs=1e-3)
        assert point.y == pytest.approx(y, abs=1e-3)


def test_level_sky_fills_upper_half():
    polygon = sky(orientation_matrix(0.0))
    ys = sorted(p.y for p in polygon)
    assert ys[0] == 0.0
    assert ys[-1] == pytest.approx(400.0, abs=1e-3)


def test_looking_straight_down_is_all_earth():
    matrix = orientation_matrix(0.0, -90.0)
    polygon = earth(matrix)
    assert [(p.x, p.y) for p in polygon] == [(0.0, 0.0), (400.0, 0.0), (400.0, 800.0), (0.0, 800.0)]
    assert sky(matrix) == ()


def test_looking_straight_up_has_no_earth():
    assert earth(orientation_matrix(0.0, 90.0)) == ()


def test_looking_down_raises_the_horizon():
    polygon = earth(orientation_matrix(0.0, -10.0))
    crossings = [p for p in polygon if p.x in (0.0, 400.0) and 0.0 < p.y < 800.0]
    assert len(crossings) == 2
    left, right = sorted(crossings, key=lambda p: p.x)
    assert left.y < 400.0
    # Facing north the picture is left-right symmetric
    assert left.y == pytest.approx(right.y, abs=1e-3)


def test_classify_screen_point():
    matrix = orientation_matrix(0.0)
    assert classify_screen_point(ScreenPoint(200, 700), matrix, HFOV, VFOV, SCREEN)
    assert not classify_screen_point(ScreenPoint(200, 100), matrix, HFOV, VFOV, SCREEN)


def test_earth_and_sky_share_crossings():
    matrix = orientation_matrix(45.0, 15.0)
    earth_points = {(round(p.x, 6), round(p.y, 6)) for p in earth(matrix)}
    sky_points = {(round(p.x, 6), round(p.y, 6)) for p in sky(matrix)}
    shared = earth_points & sky_points
    assert len(shared) == 2


def test_bisection_iterations_control_precision():
    matrix = orientation_matrix(0.0)
    rough = earth_fill_polygon(matrix, HFOV, VFOV, SCREEN, iterations=2)
    exact = earth_fill_polygon(matrix, HFOV, VFOV, SCREEN, iterations=30)
    assert abs(rough[0].y - 400.0) > abs(exact[0].y - 400.0)


@pytest.mark.slow
def test_earth_polygon_for_every_attitude():
    for heading in range(0, 360, 15):
        for pitch in range(-90, 91, 5):
            for roll in (0.0, 25.0, -60.0):
                matrix = _rolled(orientation_matrix(float(heading), float(pitch)), roll)
                polygon = earth(matrix)
                assert len(polygon) == 0 or len(polygon) >= 3
                for point in polygon:
                    assert -1e-9 <= point.x <= SCREEN.width + 1e-9
                    assert -1e-9 <= point.y <= SCREEN.height + 1e-9


def _rolled(matrix, roll_deg):
    r = np.radians(roll_deg)
    # Rotate the device about its own viewing axis
    roll = np.array(
        [
            [np.cos(r), np.sin(r), 0.0],
            [-np.sin(r), np.cos(r), 0.0],
            [0.0, 0.0, 1.0],
        ]
    )
    return roll @ matrix


def test_empty_screen_has_no_regions():
    empty = ScreenSize(0, 0)
    matrix = orientation_matrix(0.0, -90.0)
    assert earth_fill_polygon(matrix, HFOV, VFOV, empty) == ()
    assert sky_fill_polygon(matrix, HFOV, VFOV, empty) == ()
    assert ScreenSize(0, 800).is_empty
    assert not SCREEN.is_empty
