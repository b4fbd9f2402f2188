"""Domain models for treasure waypoints and map regions."""

from dataclasses import dataclass
from typing import Hashable


@dataclass(slots=True, frozen=True)
class Coordinates:
    """Position on a map in in-game map units."""

    x: float
    y: float


@dataclass(slots=True, frozen=True, eq=False)
class Waypoint:
    """A treasure location on one map.

    Equality and hashing are by identity: two waypoints at the same spot on the
    same map are still distinct stops.
    """

    waypoint_id: Hashable
    map_id: int
    coords: Coordinates


@dataclass(slots=True, frozen=True)
class Region:
    """Named group of geographically adjacent maps."""

    name: str
    map_ids: frozenset[int]
