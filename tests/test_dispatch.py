import pytest

from greencart.dispatch import DispatchEngine, sort_orders
from greencart.exceptions import InsufficientDriversError

from conftest import make_driver, make_order, make_route


def _order_ids(assignment):
    return [a.order.order_id for a in assignment.assigned_orders]


@pytest.fixture
def engine():
    return DispatchEngine()


def test_sort_orders_by_value_then_delivery_time():
    orders = [
        make_order(1, 500, 1, "10:00"),
        make_order(2, 500, 1, "09:00"),
        make_order(3, 900, 1, "23:00"),
        make_order(4, 500, 1, "09:00"),
    ]
    assert [o.order_id for o in sort_orders(orders)] == [3, 2, 4, 1]


def test_greedy_plan(engine, drivers, orders, route_map):
    assignments = engine.assign_orders(drivers, orders, route_map, "09:00", 8)

    assert [a.driver_id for a in assignments] == ["D1", "D2", "D3"]
    assert _order_ids(assignments[0]) == [3, 6, 4]
    assert _order_ids(assignments[1]) == [1, 5, 2]
    assert _order_ids(assignments[2]) == []

    assert assignments[0].total_hours == pytest.approx(2.5)
    assert assignments[1].total_hours == pytest.approx(2.9)
    assert assignments[2].total_hours == 0

    late = {a.order.order_id: a.is_late for x in assignments for a in x.assigned_orders}
    assert late == {1: False, 2: True, 3: True, 4: False, 5: True, 6: True}


def test_orders_without_room_are_dropped(engine, drivers, orders, route_map):
    assignments = engine.assign_orders(drivers, orders, route_map, "09:00", 1)

    assert _order_ids(assignments[0]) == [3]
    assert _order_ids(assignments[1]) == [1, 4]
    assert _order_ids(assignments[2]) == []
    for assignment in assignments:
        assert assignment.total_hours <= 1


def test_order_with_unknown_route_is_skipped(engine, drivers, route_map):
    orders = [make_order(1, 5000, 99), make_order(2, 100, 1)]
    assignments = engine.assign_orders(drivers, orders, route_map, "09:00", 8)

    assigned = [oid for a in assignments for oid in _order_ids(a)]
    assert assigned == [2]


def test_equal_scores_go_to_first_driver(engine, route_map):
    drivers = [make_driver("A"), make_driver("B")]
    assignments = engine.assign_orders(drivers, [make_order(1, 500, 1)], route_map, "09:00", 8)

    assert _order_ids(assignments[0]) == [1]
    assert _order_ids(assignments[1]) == []


def test_workload_spreads_across_equal_drivers(engine, route_map):
    drivers = [make_driver("A"), make_driver("B")]
    orders = [make_order(1, 500, 1, "09:00"), make_order(2, 500, 1, "10:00")]
    assignments = engine.assign_orders(drivers, orders, route_map, "09:00", 8)

    assert _order_ids(assignments[0]) == [1]
    assert _order_ids(assignments[1]) == [2]


def test_rested_driver_preferred_over_fatigued(engine, route_map):
    drivers = [make_driver("Tired", fatigued=True), make_driver("Rested")]
    assignments = engine.assign_orders(drivers, [make_order(1, 500, 1)], route_map, "09:00", 8)

    assert _order_ids(assignments[0]) == []
    assert _order_ids(assignments[1]) == [1]


def test_fatigued_driver_time_uses_penalty(engine):
    route = make_route(1, "Low", base_time_min=60)
    assignments = engine.assign_orders(
        [make_driver("Tired", fatigued=True)], [make_order(1, 500, 1)], {1: route}, "09:00", 8
    )
    assigned = assignments[0].assigned_orders[0]
    assert assigned.estimated_time == 78
    assert assigned.is_late is True
    assert assignments[0].is_fatigued is True


def test_insufficient_drivers(engine, drivers, orders, route_map):
    with pytest.raises(InsufficientDriversError) as exc_info:
        engine.assign_orders(drivers, orders, route_map, "09:00", 8, requested_drivers=5)

    assert exc_info.value.available == 3
    assert exc_info.value.requested == 5


def test_extra_drivers_are_not_used(engine, drivers, orders, route_map):
    assignments = engine.assign_orders(drivers, orders, route_map, "09:00", 8, requested_drivers=2)
    assert [a.driver_id for a in assignments] == ["D1", "D2"]


def test_no_orders_gives_empty_assignments(engine, drivers, route_map):
    assignments = engine.assign_orders(drivers, [], route_map, "09:00", 8)
    assert len(assignments) == 3
    assert all(a.assigned_orders == [] and a.total_hours == 0 for a in assignments)


def test_plan_is_deterministic(engine, drivers, orders, route_map):
    first = engine.assign_orders(drivers, orders, route_map, "09:00", 4)
    second = engine.assign_orders(drivers, list(reversed(orders)), route_map, "09:00", 4)
    assert [a.to_dict() for a in first] == [a.to_dict() for a in second]
