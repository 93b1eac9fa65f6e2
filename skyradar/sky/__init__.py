from .astro import (
    MOON_CRESCENT_WANING,
    MOON_CRESCENT_WAXING,
    MOON_FULL,
    MOON_HALF_WANING,
    MOON_HALF_WAXING,
    is_daytime,
    moon_illumination_fraction,
    moon_phase_id,
    moon_position,
    sun_position,
)
from .stars import Star, star_field, stars_above_horizon

__all__ = [
    "MOON_CRESCENT_WANING",
    "MOON_CRESCENT_WAXING",
    "MOON_FULL",
    "MOON_HALF_WANING",
    "MOON_HALF_WAXING",
    "is_daytime",
    "moon_illumination_fraction",
    "moon_phase_id",
    "moon_position",
    "sun_position",
    "Star",
    "star_field",
    "stars_above_horizon",
]
