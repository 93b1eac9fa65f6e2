import math
from typing import Sequence

from skyradar.types import EntityCluster, ResolvedFriend, ResolvedLandmark, ScreenPoint

DEFAULT_THRESHOLD_PX = 60.0


def _pixel_distance(a: ScreenPoint, b: ScreenPoint) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def cluster_landmarks(
    landmarks: Sequence[ResolvedLandmark],
    friends: Sequence[ResolvedFriend] = (),
    threshold_px: float = DEFAULT_THRESHOLD_PX,
) -> list[EntityCluster]:
    """Group overlapping landmarks, pulling nearby friends into mixed clusters.

    Clustering is greedy: each unassigned landmark seeds a cluster and
    absorbs every unassigned landmark and friend closer than threshold_px
    to the seed. Landmarks inside a cluster are ordered nearest first.
    """
    clusters: list[EntityCluster] = []
    assigned_landmarks: set[str] = set()
    assigned_friends: set[str] = set()

    for seed in landmarks:
        if seed.id in assigned_landmarks:
            continue
        anchor = seed.screen_point
        members = [seed]
        assigned_landmarks.add(seed.id)

        for other in landmarks:
            if other.id in assigned_landmarks:
                continue
            if _pixel_distance(anchor, other.screen_point) < threshold_px:
                members.append(other)
                assigned_landmarks.add(other.id)

        nearby_friends = []
        for friend in friends:
            if friend.id in assigned_friends:
                continue
            if _pixel_distance(anchor, friend.screen_point) < threshold_px:
                nearby_friends.append(friend)
                assigned_friends.add(friend.id)

        members.sort(key=lambda l: l.distance_m)
        clusters.append(
            EntityCluster(landmarks=tuple(members), position=anchor, friends=tuple(nearby_friends))
        )

    return clusters
