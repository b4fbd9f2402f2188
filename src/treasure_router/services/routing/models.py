"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ...models.domain import Waypoint


@dataclass(slots=True, frozen=True)
class OptimizeOptions:
    use_map_grouping: bool = True
    use_2opt: bool = False
    start_waypoint: Optional[Waypoint] = None
    map_order: Optional[str] = None


@dataclass(slots=True, frozen=True)
class RouteAnalysis:
    total_distance: float
    map_count: int
    map_jumps: int


@dataclass(slots=True)
class RoutePlan:
    route: List[Waypoint]
    map_order: List[int]
    policy: Optional[str]
    refined: bool
