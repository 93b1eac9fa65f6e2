import math

_METERS_PER_MILE = 1609.344
_FEET_PER_METER = 3.28084

_CARDINALS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def _format_decimal(value: float) -> str:
    text = f"{value:,.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _format_int(value: float) -> str:
    return f"{int(value):,}"


def format_distance(meters: float, unit: str = "km") -> str:
    if unit == "km":
        if meters < 1000:
            return f"{_format_int(meters)} m"
        return f"{_format_decimal(meters / 1000.0)} km"
    if unit == "mi":
        miles = meters / _METERS_PER_MILE
        if miles < 0.1:
            return f"{_format_int(meters * _FEET_PER_METER)} ft"
        return f"{_format_decimal(miles)} mi"
    raise ValueError(f"Unknown distance unit: {unit}")


def cardinal_direction(heading_deg: float) -> str:
    index = int(math.floor((heading_deg % 360.0 + 22.5) / 45.0)) % 8
    return _CARDINALS[index]


def format_last_seen(age_s: float) -> str:
    if age_s < 60:
        return "Updated just now"
    minutes = int(age_s // 60)
    if minutes < 60:
        return f"Updated {minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"Updated {hours}h ago"
    return f"Updated {hours // 24}d ago"
