import os

import pytest

from greencart.models import Driver, Order, Route, TrafficLevel
from greencart.store import EntityStore

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "data")

RESTED_WEEK = (6, 7, 8, 6, 7, 8, 6)
TIRED_WEEK = (6, 7, 8, 6, 7, 8, 10)


def make_driver(driver_id, fatigued=False, **kwargs):
    week = TIRED_WEEK if fatigued else RESTED_WEEK
    kwargs.setdefault("name", f"Driver {driver_id}")
    kwargs.setdefault("shift_hours", 8)
    return Driver(driver_id=driver_id, past_week_hours=week, **kwargs)


def make_route(route_id, traffic="Low", base_time_min=30, distance_km=10):
    return Route(
        route_id=route_id,
        distance_km=distance_km,
        traffic_level=TrafficLevel(traffic),
        base_time_min=base_time_min,
    )


def make_order(order_id, value_rs, route_id, delivery_time="12:00", **kwargs):
    return Order(order_id=order_id, value_rs=value_rs, route_id=route_id,
                 delivery_time=delivery_time, **kwargs)


@pytest.fixture
def routes():
    return [
        make_route(1, "Low", base_time_min=30, distance_km=10),
        make_route(2, "Medium", base_time_min=60, distance_km=15),
        make_route(3, "High", base_time_min=40, distance_km=12),
    ]


@pytest.fixture
def route_map(routes):
    return {r.route_id: r for r in routes}


@pytest.fixture
def drivers():
    return [
        make_driver("D1"),
        make_driver("D2"),
        make_driver("D3", fatigued=True),
    ]


@pytest.fixture
def orders():
    return [
        make_order(1, 1500, 1, "10:00"),
        make_order(2, 800, 2, "09:30"),
        make_order(3, 2200, 3, "11:15"),
        make_order(4, 400, 1, "08:45"),
        make_order(5, 1200, 2, "13:00"),
        make_order(6, 950, 3, "12:10"),
    ]


@pytest.fixture
def store(drivers, routes, orders):
    return EntityStore(drivers, routes, orders)


@pytest.fixture
def sample_store():
    return EntityStore.from_csv(DATA_DIR)
