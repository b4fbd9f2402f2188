"""Route optimization engine."""

from .analysis import analyze_route, total_distance
from .grouping import group_by_map
from .map_order import CentroidGreedyOrdering, RegionAwareOrdering, get_strategy
from .models import OptimizeOptions, RouteAnalysis, RoutePlan
from .refinement import improve_two_opt
from .regions import RegionCatalog, load_region_catalog
from .sequencing import sequence_within_map
from .service import RouteOptimizer, get_route_optimizer

__all__ = [
    "RouteOptimizer",
    "get_route_optimizer",
    "OptimizeOptions",
    "RouteAnalysis",
    "RoutePlan",
    "RegionCatalog",
    "load_region_catalog",
    "RegionAwareOrdering",
    "CentroidGreedyOrdering",
    "get_strategy",
    "group_by_map",
    "sequence_within_map",
    "improve_two_opt",
    "analyze_route",
    "total_distance",
]
