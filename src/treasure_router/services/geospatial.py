"""Planar geometry helpers for map coordinates."""

from __future__ import annotations

import math
from typing import Sequence

from ..models.domain import Coordinates, Waypoint

DEFAULT_EMPTY_CENTROID = Coordinates(20.0, 20.0)


def euclidean_distance(p1: Coordinates, p2: Coordinates) -> float:
    """Straight-line distance between two map points."""

    return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)


def centroid(waypoints: Sequence[Waypoint], default: Coordinates = DEFAULT_EMPTY_CENTROID) -> Coordinates:
    """Arithmetic mean of the waypoint coordinates, ``default`` when empty."""

    if not waypoints:
        return default
    x = sum(w.coords.x for w in waypoints) / len(waypoints)
    y = sum(w.coords.y for w in waypoints) / len(waypoints)
    return Coordinates(x, y)
