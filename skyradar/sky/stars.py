from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence

import numpy as np

from skyradar.types import ScreenPoint, ScreenSize


@dataclass(frozen=True)
class Star:
    x: float  # normalized 0..1 across the screen width
    y: float  # normalized 0..1 down the screen height
    radius: float
    opacity: float


@lru_cache(maxsize=None)
def star_field(seed: int = 42, count: int = 80) -> tuple[Star, ...]:
    rng = np.random.default_rng(seed)
    xs = rng.uniform(0.0, 1.0, count)
    ys = rng.uniform(0.0, 1.0, count)
    radii = rng.uniform(1.0, 2.0, count)
    opacities = rng.uniform(0.3, 0.6, count)
    return tuple(
        Star(x=float(x), y=float(y), radius=float(r), opacity=float(o))
        for x, y, r, o in zip(xs, ys, radii, opacities)
    )


def stars_above_horizon(
    stars: Sequence[Star],
    horizon_polyline: Sequence[ScreenPoint],
    screen_size: ScreenSize,
) -> tuple[ScreenPoint, ...]:
    if len(horizon_polyline) < 2:
        return ()
    # Approximate: compare against the mean horizon height
    mean_y = sum(p.y for p in horizon_polyline) / len(horizon_polyline)
    points = []
    for star in stars:
        sy = star.y * screen_size.height
        if sy < mean_y:
            points.append(ScreenPoint(star.x * screen_size.width, sy))
    return tuple(points)
