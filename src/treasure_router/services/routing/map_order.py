"""Policies deciding the order in which maps are visited."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from ...errors import InvalidInputError
from ...models.domain import Coordinates, Waypoint
from ..geospatial import DEFAULT_EMPTY_CENTROID, centroid, euclidean_distance
from .regions import RegionCatalog

logger = logging.getLogger(__name__)

MapBuckets = Mapping[int, Sequence[Waypoint]]


class MapOrderingStrategy(ABC):
    """Contract for map ordering policies."""

    name: str

    @abstractmethod
    def order(self, buckets: MapBuckets, start_map_id: Optional[int] = None) -> list[int]:
        raise NotImplementedError


class RegionAwareOrdering(MapOrderingStrategy):
    """Visit whole regions one after another, busiest region first.

    When a start map is given its region (or, for a map without region, the
    ungrouped maps) comes first and the start map leads its group.
    """

    name = "region"

    def __init__(self, catalog: RegionCatalog) -> None:
        self.catalog = catalog

    def order(self, buckets: MapBuckets, start_map_id: Optional[int] = None) -> list[int]:
        map_ids = list(buckets)
        if len(map_ids) <= 1:
            return map_ids

        region_groups: dict[str, list[int]] = {}
        ungrouped: list[int] = []
        for map_id in map_ids:
            region = self.catalog.lookup_region(map_id)
            if region:
                region_groups.setdefault(region, []).append(map_id)
            else:
                ungrouped.append(map_id)

        start_region = self.catalog.lookup_region(start_map_id)
        region_counts = {
            region: sum(len(buckets[map_id]) for map_id in region_map_ids)
            for region, region_map_ids in region_groups.items()
        }

        sorted_regions = sorted(
            region_groups,
            key=lambda region: (region != start_region if start_region else False, -region_counts[region]),
        )

        def by_count(leading: bool):
            def key(map_id: int) -> tuple[bool, int]:
                is_start = leading and map_id == start_map_id
                return (not is_start, -len(buckets[map_id]))

            return key

        for region in sorted_regions:
            region_groups[region].sort(key=by_count(start_map_id is not None and region == start_region))
        ungrouped.sort(key=by_count(start_map_id is not None and not start_region))

        result: list[int] = []
        if start_map_id is not None and not start_region and start_map_id in ungrouped:
            result.extend(ungrouped)
            for region in sorted_regions:
                result.extend(region_groups[region])
        else:
            for region in sorted_regions:
                result.extend(region_groups[region])
            result.extend(ungrouped)

        logger.debug("Region-aware map order (start=%s, region=%s): %s", start_map_id, start_region, result)
        return result


class CentroidGreedyOrdering(MapOrderingStrategy):
    """Start at the map with most waypoints and hop to the nearest map centroid.

    The start map anchor is ignored by this policy.
    """

    name = "centroid"

    def __init__(self, empty_centroid: Coordinates = DEFAULT_EMPTY_CENTROID) -> None:
        self.empty_centroid = empty_centroid

    def order(self, buckets: MapBuckets, start_map_id: Optional[int] = None) -> list[int]:
        map_ids = list(buckets)
        if len(map_ids) <= 1:
            return map_ids

        centers: dict[int, Coordinates] = {}
        for map_id in map_ids:
            if not buckets[map_id]:
                logger.warning("Map %s has no waypoints, using fallback centroid %s", map_id, self.empty_centroid)
            centers[map_id] = centroid(buckets[map_id], self.empty_centroid)

        # max() keeps the first map on equal counts
        current = max(map_ids, key=lambda map_id: len(buckets[map_id]))
        remaining = [map_id for map_id in map_ids if map_id != current]
        result = [current]

        while remaining:
            nearest = remaining[0]
            min_dist = math.inf
            for map_id in remaining:
                dist = euclidean_distance(centers[current], centers[map_id])
                if dist < min_dist:
                    min_dist = dist
                    nearest = map_id
            remaining.remove(nearest)
            result.append(nearest)
            current = nearest

        logger.debug("Centroid-greedy map order: %s", result)
        return result


MAP_ORDER_POLICIES = ("region", "centroid")


def get_strategy(
    policy: str,
    *,
    catalog: RegionCatalog,
    empty_centroid: Coordinates = DEFAULT_EMPTY_CENTROID,
) -> MapOrderingStrategy:
    match policy:
        case "region":
            return RegionAwareOrdering(catalog)
        case "centroid":
            return CentroidGreedyOrdering(empty_centroid)
        case _:
            raise InvalidInputError(
                f"Unknown map order policy '{policy}'. Expected one of: {', '.join(MAP_ORDER_POLICIES)}."
            )
