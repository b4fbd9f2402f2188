"""2-opt local search over a finished route."""

from __future__ import annotations

import logging
from typing import Sequence

from ...errors import InvalidInputError
from ...models.domain import Waypoint
from ..geospatial import euclidean_distance

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 50


def improve_two_opt(route: Sequence[Waypoint], max_iterations: int = DEFAULT_MAX_ITERATIONS) -> list[Waypoint]:
    """Shorten ``route`` by reversing segments whose endpoints cross.

    Runs first-improvement passes until a pass finds nothing or
    ``max_iterations`` passes have run. The edge after position ``k`` wraps to
    the start of the route, so the last stop is treated as linked back to the
    first one while evaluating a swap.
    """
    if max_iterations < 0:
        raise InvalidInputError(f"max_iterations must be >= 0, got {max_iterations}.")
    if len(route) <= 3:
        return list(route)

    optimized = list(route)
    n = len(optimized)
    improved = True
    iteration = 0

    while improved and iteration < max_iterations:
        improved = False
        iteration += 1
        swaps = 0

        for i in range(n - 2):
            for k in range(i + 2, n):
                after_k = optimized[(k + 1) % n].coords
                d1 = euclidean_distance(optimized[i].coords, optimized[i + 1].coords)
                d2 = euclidean_distance(optimized[k].coords, after_k)
                d3 = euclidean_distance(optimized[i].coords, optimized[k].coords)
                d4 = euclidean_distance(optimized[i + 1].coords, after_k)

                if d3 + d4 < d1 + d2:
                    optimized[i + 1 : k + 1] = reversed(optimized[i + 1 : k + 1])
                    improved = True
                    swaps += 1

        logger.debug("2-opt pass %d applied %d swaps", iteration, swaps)

    return optimized
