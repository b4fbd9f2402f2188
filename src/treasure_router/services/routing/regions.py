"""Static catalog of map regions.

A region groups maps that sit next to each other in the game world so that a
route finishes every map of one area before travelling to the next. The catalog
is built once and shared read-only by every optimization call.
"""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ...config import settings
from ...errors import InvalidInputError
from ...models.domain import Region

logger = logging.getLogger(__name__)

DEFAULT_REGION_GROUPS: Mapping[str, tuple[int, ...]] = MappingProxyType(
    {
        "gyr_abania": (367, 368, 369),
        "othard": (371, 354, 372),
        "ishgard": (211, 212, 213, 214, 215),
        "norvrandt": (491, 492, 493, 494, 495, 496),
        "ew_north": (695, 696),
        "ew_endgame": (698, 699, 700),
        "dt_tural": (857, 858, 859),
        "dt_solution": (860, 861, 862),
    }
)


class RegionCatalog:
    """Immutable map id -> region lookup table."""

    __slots__ = ("_regions", "_region_by_map")

    def __init__(self, regions: Iterable[Region]) -> None:
        region_list = tuple(regions)
        region_by_map: dict[int, str] = {}
        for region in region_list:
            for map_id in sorted(region.map_ids):
                # overlapping catalogs are unsupported; the first declaration wins
                region_by_map.setdefault(map_id, region.name)
        self._regions = MappingProxyType({region.name: region for region in region_list})
        self._region_by_map = MappingProxyType(region_by_map)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[int]]) -> "RegionCatalog":
        regions: list[Region] = []
        for name, map_ids in mapping.items():
            if not isinstance(name, str) or not name:
                raise InvalidInputError(f"Region name must be a non-empty string, got {name!r}.")
            try:
                ids = frozenset(_coerce_map_id(value) for value in map_ids)
            except TypeError as exc:
                raise InvalidInputError(f"Region '{name}' must list map ids.") from exc
            regions.append(Region(name=name, map_ids=ids))
        return cls(regions)

    def lookup_region(self, map_id: Optional[int]) -> Optional[str]:
        """Return the region name for ``map_id`` or ``None`` when it has no region."""
        if map_id is None:
            return None
        return self._region_by_map.get(map_id)

    @property
    def regions(self) -> tuple[str, ...]:
        return tuple(self._regions)

    def maps_in(self, region: str) -> frozenset[int]:
        found = self._regions.get(region)
        return found.map_ids if found else frozenset()

    def as_dict(self) -> dict[str, list[int]]:
        return {name: sorted(region.map_ids) for name, region in self._regions.items()}

    def __len__(self) -> int:
        return len(self._regions)

    def __contains__(self, map_id: object) -> bool:
        return map_id in self._region_by_map


def _coerce_map_id(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"Map id must be an integer, got {value!r}.")
    return value


@functools.lru_cache(maxsize=1)
def load_region_catalog(source: Optional[Path] = None) -> RegionCatalog:
    """Load the catalog from a JSON file or fall back to the built-in table."""

    path = source or settings.region_catalog_file
    if path is None:
        return RegionCatalog.from_mapping(DEFAULT_REGION_GROUPS)

    if not path.exists():
        raise FileNotFoundError(f"Region catalog file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Region catalog '{path}' is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise InvalidInputError(f"Region catalog '{path}' must be a JSON object of region -> map ids.")

    catalog = RegionCatalog.from_mapping(payload)
    logger.info("Loaded %d regions from %s", len(catalog), path)
    return catalog
