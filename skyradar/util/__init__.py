from .format import (
    cardinal_direction,
    format_distance,
    format_last_seen,
)

__all__ = [
    "cardinal_direction",
    "format_distance",
    "format_last_seen",
]
