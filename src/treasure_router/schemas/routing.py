"""Routing request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class CoordinatesModel(BaseModel):
    x: float
    y: float


class WaypointModel(BaseModel):
    waypoint_id: str = Field(..., description="Opaque identifier supplied by the caller.")
    map_id: int
    coords: CoordinatesModel


class OptimizeOptionsModel(BaseModel):
    use_map_grouping: Optional[bool] = Field(default=None, description="Keep each map's waypoints together.")
    use_2opt: Optional[bool] = Field(default=None, description="Run 2-opt refinement on the final route.")
    start_waypoint: Optional[WaypointModel] = Field(
        default=None,
        description="Waypoint whose map and coordinates anchor the start of the route.",
    )
    map_order: Optional[Literal["region", "centroid"]] = Field(
        default=None,
        description="Map visiting policy. Defaults to the configured policy.",
    )


class OptimizeRequest(BaseModel):
    waypoints: List[WaypointModel]
    options: OptimizeOptionsModel = Field(default_factory=OptimizeOptionsModel)


class RouteAnalysisModel(BaseModel):
    total_distance: float
    map_count: int
    map_jumps: int


class OptimizeResponse(BaseModel):
    route: List[WaypointModel]
    analysis: RouteAnalysisModel
    metadata: dict


class AnalyzeRequest(BaseModel):
    route: List[WaypointModel]


class RegionLookupResponse(BaseModel):
    map_id: int
    region: Optional[str] = None


class RegionCatalogResponse(BaseModel):
    regions: Dict[str, List[int]]
