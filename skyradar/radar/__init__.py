from .clustering import cluster_landmarks
from .composer import FrameComposer, FrameInputs
from .resolver import (
    ViewGeometry,
    is_location_fresh,
    resolve_celestial,
    resolve_friends,
    resolve_landmarks,
    resolve_target,
)

__all__ = [
    "cluster_landmarks",
    "FrameComposer",
    "FrameInputs",
    "ViewGeometry",
    "is_location_fresh",
    "resolve_celestial",
    "resolve_friends",
    "resolve_landmarks",
    "resolve_target",
]
