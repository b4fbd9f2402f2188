import math

import pytest

from treasure_router.errors import InvalidInputError
from treasure_router.models.domain import Coordinates, Waypoint
from treasure_router.services.routing.analysis import analyze_route, total_distance
from treasure_router.services.routing.models import OptimizeOptions
from treasure_router.services.routing.regions import DEFAULT_REGION_GROUPS, RegionCatalog
from treasure_router.services.routing.service import RouteOptimizer


def _waypoint(wid: str, map_id: int, x: float, y: float) -> Waypoint:
    return Waypoint(waypoint_id=wid, map_id=map_id, coords=Coordinates(x, y))


def _ids(route):
    return [waypoint.waypoint_id for waypoint in route]


@pytest.fixture
def optimizer() -> RouteOptimizer:
    return RouteOptimizer(
        RegionCatalog.from_mapping(DEFAULT_REGION_GROUPS),
        map_order_policy="region",
        two_opt_max_iterations=50,
    )


def _mixed_waypoints() -> list[Waypoint]:
    maps = [367, 368, 211, 1, 2, 857]
    return [
        _waypoint(f"w{i}", maps[i % len(maps)], (i * 13) % 29, (i * 7) % 17)
        for i in range(30)
    ]


def test_single_map_nearest_neighbour(optimizer):
    waypoints = [_waypoint("a", 1, 0, 0), _waypoint("b", 1, 10, 0), _waypoint("c", 1, 5, 0)]

    route = optimizer.optimize(waypoints, OptimizeOptions(use_map_grouping=True, use_2opt=False))

    assert _ids(route) == ["a", "c", "b"]
    assert analyze_route(route).total_distance == pytest.approx(10.0)


def test_busier_region_is_visited_first(optimizer):
    waypoints = [
        _waypoint("x1", 367, 50, 50),
        _waypoint("y1", 211, 0, 0),
        _waypoint("y2", 211, 1, 0),
        _waypoint("y3", 211, 2, 0),
    ]

    route = optimizer.optimize(waypoints, OptimizeOptions())

    assert [w.map_id for w in route] == [211, 211, 211, 367]
    assert _ids(route)[:3] == ["y1", "y2", "y3"]


def test_empty_input(optimizer):
    assert optimizer.optimize([], OptimizeOptions()) == []
    assert optimizer.analyze([]).map_count == 0


def test_single_waypoint_returns_copy(optimizer):
    waypoints = [_waypoint("only", 3, 1, 1)]

    route = optimizer.optimize(waypoints, OptimizeOptions(use_2opt=True))

    assert route == waypoints
    assert route is not waypoints
    assert route[0] is waypoints[0]


def test_start_waypoint_anchors_first_map_and_chains_maps(optimizer):
    waypoints = [
        _waypoint("far", 212, 100, 0),
        _waypoint("m5", 211, 5, 0),
        _waypoint("m1", 211, 1, 0),
        _waypoint("near", 212, 4, 0),
        _waypoint("m3", 211, 3, 0),
    ]
    start = _waypoint("start", 211, 0, 0)

    route = optimizer.optimize(waypoints, OptimizeOptions(start_waypoint=start))

    assert _ids(route) == ["m1", "m3", "m5", "near", "far"]


def test_without_grouping_sequences_whole_list(optimizer):
    waypoints = [_waypoint("a", 1, 0, 0), _waypoint("b", 2, 1, 0), _waypoint("c", 1, 2, 0)]
    start = _waypoint("start", 9, 3, 0)

    route = optimizer.optimize(waypoints, OptimizeOptions(use_map_grouping=False, start_waypoint=start))

    assert _ids(route) == ["c", "b", "a"]
    assert analyze_route(route).map_jumps == 2


def test_centroid_policy_can_be_selected_per_call(optimizer):
    waypoints = [
        _waypoint("a", 1, 0, 0),
        _waypoint("b", 2, 100, 0),
        _waypoint("c", 3, 10, 0),
        _waypoint("d", 3, 12, 0),
    ]

    plan = optimizer.plan(waypoints, OptimizeOptions(map_order="centroid"))

    assert plan.policy == "centroid"
    assert plan.map_order == [3, 1, 2]
    assert _ids(plan.route) == ["c", "d", "a", "b"]


def test_two_opt_never_lengthens_route(optimizer):
    waypoints = [
        _waypoint("a", 1, 0, 0),
        _waypoint("b", 1, 10, 10),
        _waypoint("c", 1, 10, 0),
        _waypoint("d", 1, 0, 10),
        _waypoint("e", 1, 5, 5),
    ]

    plain = optimizer.optimize(waypoints, OptimizeOptions(use_map_grouping=False))
    refined = optimizer.optimize(waypoints, OptimizeOptions(use_map_grouping=False, use_2opt=True))

    assert total_distance(refined) <= total_distance(plain) + 1e-9


@pytest.mark.parametrize("policy", ["region", "centroid"])
@pytest.mark.parametrize("grouping", [True, False])
@pytest.mark.parametrize("two_opt", [True, False])
def test_optimize_returns_permutation_of_input(optimizer, policy, grouping, two_opt):
    waypoints = _mixed_waypoints()
    before = list(waypoints)
    start = waypoints[4]

    route = optimizer.optimize(
        waypoints,
        OptimizeOptions(use_map_grouping=grouping, use_2opt=two_opt, start_waypoint=start, map_order=policy),
    )

    assert waypoints == before
    assert len(route) == len(waypoints)
    assert {id(w) for w in route} == {id(w) for w in waypoints}


def test_grouped_route_keeps_maps_contiguous(optimizer):
    route = optimizer.optimize(_mixed_waypoints(), OptimizeOptions())

    analysis = analyze_route(route)

    assert analysis.map_jumps == analysis.map_count - 1


def test_optimize_is_deterministic(optimizer):
    options = OptimizeOptions(use_2opt=True, start_waypoint=_waypoint("s", 1, 3, 3))

    first = optimizer.optimize(_mixed_waypoints(), options)
    second = optimizer.optimize(_mixed_waypoints(), options)

    assert _ids(first) == _ids(second)


@pytest.mark.parametrize(
    "bad",
    [
        _waypoint("str-map", "1", 0, 0),
        _waypoint("bool-map", True, 0, 0),
        _waypoint("nan", 1, math.nan, 0),
        _waypoint("text", 1, "0", 0),
        Waypoint(waypoint_id="no-coords", map_id=1, coords=None),
        {"map_id": 1, "coords": {"x": 0, "y": 0}},
    ],
)
def test_malformed_waypoint_is_rejected(optimizer, bad):
    waypoints = [_waypoint("ok", 1, 0, 0), bad]

    with pytest.raises(InvalidInputError):
        optimizer.optimize(waypoints, OptimizeOptions())


def test_malformed_start_waypoint_is_rejected(optimizer):
    with pytest.raises(InvalidInputError):
        optimizer.optimize(
            [_waypoint("a", 1, 0, 0), _waypoint("b", 1, 1, 1)],
            OptimizeOptions(start_waypoint=_waypoint("s", None, 0, 0)),
        )


def test_unknown_policy_is_rejected(optimizer):
    waypoints = [_waypoint("a", 1, 0, 0), _waypoint("b", 2, 1, 1)]

    with pytest.raises(InvalidInputError):
        optimizer.optimize(waypoints, OptimizeOptions(map_order="zigzag"))
    with pytest.raises(InvalidInputError):
        optimizer.optimize(waypoints, OptimizeOptions(use_map_grouping=False, map_order="zigzag"))
    with pytest.raises(InvalidInputError):
        optimizer.optimize(waypoints[:1], OptimizeOptions(map_order="zigzag"))
    with pytest.raises(InvalidInputError):
        optimizer.optimize([], OptimizeOptions(map_order="zigzag"))
    with pytest.raises(InvalidInputError):
        RouteOptimizer(RegionCatalog.from_mapping({}), map_order_policy="zigzag")


@pytest.mark.parametrize("bad", [None, "a,b", {"a": 1}, 42])
def test_non_sequence_input_is_rejected(optimizer, bad):
    with pytest.raises(InvalidInputError):
        optimizer.optimize(bad, OptimizeOptions())
    with pytest.raises(InvalidInputError):
        optimizer.analyze(bad)


def test_tuple_input_is_accepted(optimizer):
    waypoints = (_waypoint("a", 1, 0, 0), _waypoint("b", 1, 2, 0), _waypoint("c", 1, 1, 0))

    assert _ids(optimizer.optimize(waypoints, OptimizeOptions())) == ["a", "c", "b"]


def test_refine_uses_configured_budget():
    optimizer = RouteOptimizer(RegionCatalog.from_mapping({}), two_opt_max_iterations=0)
    route = [_waypoint("a", 1, 0, 0), _waypoint("c", 1, 2, 0), _waypoint("b", 1, 1, 0), _waypoint("d", 1, 3, 0)]

    assert _ids(optimizer.refine(route)) == ["a", "c", "b", "d"]
    assert _ids(optimizer.refine(route, max_iterations=5)) == ["a", "b", "c", "d"]
