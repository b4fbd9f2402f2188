"""Routing orchestration service."""

from __future__ import annotations

import functools
import logging
from typing import Mapping, Optional, Sequence

from ...config import settings
from ...models.domain import Coordinates, Waypoint
from ...schemas.routing import (
    AnalyzeRequest,
    CoordinatesModel,
    OptimizeRequest,
    OptimizeResponse,
    RouteAnalysisModel,
    WaypointModel,
)
from .analysis import analyze_route
from .grouping import group_by_map
from .map_order import get_strategy
from .models import OptimizeOptions, RouteAnalysis, RoutePlan
from .refinement import improve_two_opt
from .regions import RegionCatalog, load_region_catalog
from .sequencing import sequence_within_map
from .validation import validate_waypoint, validate_waypoints

logger = logging.getLogger(__name__)


class RouteOptimizer:
    """Turns an unordered set of treasure waypoints into a visiting sequence.

    The optimizer only holds read-only configuration, so one instance can be
    shared between concurrent callers.
    """

    def __init__(
        self,
        catalog: RegionCatalog | None = None,
        *,
        map_order_policy: str | None = None,
        two_opt_max_iterations: int | None = None,
        empty_map_centroid: Coordinates | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else load_region_catalog()
        self.map_order_policy = map_order_policy or settings.map_order_policy
        self.two_opt_max_iterations = (
            two_opt_max_iterations if two_opt_max_iterations is not None else settings.two_opt_max_iterations
        )
        self.empty_map_centroid = empty_map_centroid or Coordinates(*settings.empty_map_centroid)
        # fail fast on a misconfigured default policy
        get_strategy(self.map_order_policy, catalog=self.catalog)

    def plan(self, waypoints: Sequence[Waypoint], options: OptimizeOptions | None = None) -> RoutePlan:
        """Build the route together with the decisions taken along the way."""
        options = options or OptimizeOptions(use_map_grouping=settings.use_map_grouping, use_2opt=settings.use_2opt)
        validate_waypoints(waypoints)
        start = options.start_waypoint
        if start is not None:
            validate_waypoint(start, label="start waypoint")
        policy = options.map_order or self.map_order_policy
        # reject unknown policies even when grouping never consults them
        get_strategy(policy, catalog=self.catalog)

        if len(waypoints) <= 1:
            return RoutePlan(
                route=list(waypoints),
                map_order=[w.map_id for w in waypoints],
                policy=None,
                refined=False,
            )

        start_coords = start.coords if start is not None else None
        if options.use_map_grouping:
            buckets = group_by_map(waypoints)
            start_map_id = start.map_id if start is not None else None
            map_order = self.order_maps(buckets, start_map_id, policy)

            route: list[Waypoint] = []
            last_coords = start_coords
            for map_id in map_order:
                ordered = sequence_within_map(buckets[map_id], last_coords)
                route.extend(ordered)
                if ordered:
                    last_coords = ordered[-1].coords
        else:
            policy = None
            route = sequence_within_map(waypoints, start_coords)
            map_order = list(dict.fromkeys(w.map_id for w in route))

        if options.use_2opt:
            route = self.refine(route)

        logger.debug(
            "Planned %d waypoints over %d maps (policy=%s, 2opt=%s)",
            len(route),
            len(map_order),
            policy,
            options.use_2opt,
        )
        return RoutePlan(route=route, map_order=map_order, policy=policy, refined=options.use_2opt)

    def optimize(self, waypoints: Sequence[Waypoint], options: OptimizeOptions | None = None) -> list[Waypoint]:
        return self.plan(waypoints, options).route

    def order_maps(
        self,
        buckets: Mapping[int, Sequence[Waypoint]],
        start_map_id: Optional[int] = None,
        policy: str | None = None,
    ) -> list[int]:
        strategy = get_strategy(
            policy or self.map_order_policy,
            catalog=self.catalog,
            empty_centroid=self.empty_map_centroid,
        )
        return strategy.order(buckets, start_map_id)

    def refine(self, route: Sequence[Waypoint], max_iterations: int | None = None) -> list[Waypoint]:
        budget = max_iterations if max_iterations is not None else self.two_opt_max_iterations
        return improve_two_opt(route, budget)

    def analyze(self, route: Sequence[Waypoint]) -> RouteAnalysis:
        validate_waypoints(route)
        return analyze_route(route)


@functools.lru_cache(maxsize=1)
def get_route_optimizer() -> RouteOptimizer:
    """Shared optimizer built from the process settings."""
    return RouteOptimizer()


def _to_waypoint(model: WaypointModel) -> Waypoint:
    return Waypoint(
        waypoint_id=model.waypoint_id,
        map_id=model.map_id,
        coords=Coordinates(model.coords.x, model.coords.y),
    )


def _to_model(waypoint: Waypoint) -> WaypointModel:
    return WaypointModel(
        waypoint_id=str(waypoint.waypoint_id),
        map_id=waypoint.map_id,
        coords=CoordinatesModel(x=waypoint.coords.x, y=waypoint.coords.y),
    )


def _analysis_model(analysis: RouteAnalysis) -> RouteAnalysisModel:
    return RouteAnalysisModel(
        total_distance=analysis.total_distance,
        map_count=analysis.map_count,
        map_jumps=analysis.map_jumps,
    )


def optimize_route(payload: OptimizeRequest) -> OptimizeResponse:
    optimizer = get_route_optimizer()
    requested = payload.options

    options = OptimizeOptions(
        use_map_grouping=requested.use_map_grouping
        if requested.use_map_grouping is not None
        else settings.use_map_grouping,
        use_2opt=requested.use_2opt if requested.use_2opt is not None else settings.use_2opt,
        start_waypoint=_to_waypoint(requested.start_waypoint) if requested.start_waypoint else None,
        map_order=requested.map_order,
    )
    waypoints = [_to_waypoint(model) for model in payload.waypoints]

    plan = optimizer.plan(waypoints, options)
    analysis = analyze_route(plan.route)
    logger.info(
        "Optimized %d waypoints: %.2f distance, %d maps, %d map jumps",
        len(plan.route),
        analysis.total_distance,
        analysis.map_count,
        analysis.map_jumps,
    )

    metadata = {
        "waypoint_count": len(plan.route),
        "map_order": plan.map_order,
        "map_order_policy": plan.policy,
        "use_map_grouping": options.use_map_grouping,
        "use_2opt": plan.refined,
    }
    if options.start_waypoint is not None:
        metadata["start_map_id"] = options.start_waypoint.map_id

    return OptimizeResponse(
        route=[_to_model(waypoint) for waypoint in plan.route],
        analysis=_analysis_model(analysis),
        metadata=metadata,
    )


def analyze_payload(payload: AnalyzeRequest) -> RouteAnalysisModel:
    route = [_to_waypoint(model) for model in payload.route]
    return _analysis_model(get_route_optimizer().analyze(route))
