"""Bucket waypoints by the map they are on."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ...models.domain import Waypoint


def group_by_map(waypoints: Sequence[Waypoint]) -> Dict[int, List[Waypoint]]:
    """Split waypoints into per-map lists.

    Buckets appear in the order their map is first encountered and keep the
    relative order of their waypoints.
    """
    groups: Dict[int, List[Waypoint]] = {}
    for waypoint in waypoints:
        groups.setdefault(waypoint.map_id, []).append(waypoint)
    return groups
