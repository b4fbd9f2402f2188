"""Shape checks for waypoints entering the engine."""

from __future__ import annotations

import math
from numbers import Real
from collections.abc import Sequence

from ...errors import InvalidInputError


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_waypoint(waypoint: object, *, label: str = "waypoint") -> None:
    map_id = getattr(waypoint, "map_id", None)
    coords = getattr(waypoint, "coords", None)
    if isinstance(map_id, bool) or not isinstance(map_id, int):
        raise InvalidInputError(f"{label} has an invalid map_id: {map_id!r}.")
    if coords is None:
        raise InvalidInputError(f"{label} on map {map_id} is missing coordinates.")
    x = getattr(coords, "x", None)
    y = getattr(coords, "y", None)
    if not (_is_number(x) and _is_number(y)):
        raise InvalidInputError(f"{label} on map {map_id} has invalid coordinates ({x!r}, {y!r}).")


def validate_waypoints(waypoints: Sequence[object]) -> None:
    if isinstance(waypoints, (str, bytes)) or not isinstance(waypoints, Sequence):
        raise InvalidInputError(f"Expected a sequence of waypoints, got {type(waypoints).__name__}.")
    for index, waypoint in enumerate(waypoints):
        validate_waypoint(waypoint, label=f"waypoint #{index}")
