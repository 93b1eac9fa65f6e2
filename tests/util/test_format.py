import pytest

from skyradar.util.format import cardinal_direction, format_distance, format_last_seen


def test_format_distance_meters():
    assert format_distance(0) == "0 m"
    assert format_distance(850.7) == "850 m"


def test_format_distance_kilometers():
    assert format_distance(1000) == "1 km"
    assert format_distance(1500) == "1.5 km"
    assert format_distance(5_570_200) == "5,570.2 km"


def test_format_distance_drops_trailing_zero():
    assert format_distance(2000) == "2 km"
    assert format_distance(12_000_000) == "12,000 km"


def test_format_distance_feet():
    # 100 m is under a tenth of a mile
    assert format_distance(100, unit="mi") == "328 ft"


def test_format_distance_miles():
    assert format_distance(1609.344 * 2, unit="mi") == "2 mi"
    assert format_distance(1609.344 * 3460.7, unit="mi") == "3,460.7 mi"


def test_format_distance_unknown_unit():
    with pytest.raises(ValueError, match="Unknown distance unit"):
        format_distance(10, unit="parsec")


@pytest.mark.parametrize(
    "heading, expected",
    [
        (0, "N"),
        (22.4, "N"),
        (22.5, "NE"),
        (44, "NE"),
        (90, "E"),
        (135, "SE"),
        (180, "S"),
        (225, "SW"),
        (270, "W"),
        (315, "NW"),
        (350, "N"),
        (-90, "W"),
        (720, "N"),
    ],
)
def test_cardinal_direction(heading, expected):
    assert cardinal_direction(heading) == expected


def test_format_last_seen():
    assert format_last_seen(30) == "Updated just now"
    assert format_last_seen(125) == "Updated 2m ago"
    assert format_last_seen(7200) == "Updated 2h ago"
    assert format_last_seen(3 * 86400 + 5) == "Updated 3d ago"
