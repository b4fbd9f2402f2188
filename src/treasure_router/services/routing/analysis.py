"""Summary metrics for an ordered route."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Waypoint
from ..geospatial import euclidean_distance
from .models import RouteAnalysis


def total_distance(route: Sequence[Waypoint]) -> float:
    """Length of the route as an open path."""
    if len(route) <= 1:
        return 0.0
    return sum(euclidean_distance(a.coords, b.coords) for a, b in zip(route, route[1:]))


def analyze_route(route: Sequence[Waypoint]) -> RouteAnalysis:
    if not route:
        return RouteAnalysis(total_distance=0.0, map_count=0, map_jumps=0)

    map_jumps = sum(1 for prev, current in zip(route, route[1:]) if current.map_id != prev.map_id)
    return RouteAnalysis(
        total_distance=total_distance(route),
        map_count=len({waypoint.map_id for waypoint in route}),
        map_jumps=map_jumps,
    )
