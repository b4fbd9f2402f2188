"""Nearest-neighbour ordering of the waypoints on one map."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ...models.domain import Coordinates, Waypoint
from ..geospatial import euclidean_distance


def _nearest_index(origin: Coordinates, waypoints: Sequence[Waypoint], visited: list[bool]) -> int:
    nearest = -1
    min_dist = math.inf
    for idx, waypoint in enumerate(waypoints):
        if visited[idx]:
            continue
        dist = euclidean_distance(origin, waypoint.coords)
        # strict comparison keeps the first candidate on ties
        if nearest < 0 or dist < min_dist:
            min_dist = dist
            nearest = idx
    return nearest


def sequence_within_map(
    waypoints: Sequence[Waypoint],
    start_coords: Optional[Coordinates] = None,
) -> list[Waypoint]:
    """Order waypoints with the greedy nearest-neighbour heuristic.

    The path starts at the waypoint closest to ``start_coords`` when given,
    otherwise at the first waypoint, and then always steps to the closest
    unvisited waypoint.
    """
    if len(waypoints) <= 1:
        return list(waypoints)

    visited = [False] * len(waypoints)
    current_idx = _nearest_index(start_coords, waypoints, visited) if start_coords is not None else 0

    result: list[Waypoint] = []
    while current_idx >= 0:
        visited[current_idx] = True
        current = waypoints[current_idx]
        result.append(current)
        current_idx = _nearest_index(current.coords, waypoints, visited)

    return result
