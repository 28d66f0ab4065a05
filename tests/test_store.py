import json

import pytest

from greencart.models import Assignment, OrderStatus, SimulationInputs, TrafficLevel
from greencart.kpis import calculate_kpis
from greencart.store import EntityStore, ResultsStore, load_drivers, load_orders, load_routes

from conftest import make_driver, make_order, make_route


def _write(path, text):
    path.write_text(text)
    return str(path)


def test_load_drivers(tmp_path):
    path = _write(tmp_path / "drivers.csv",
                  "driver_id,name,shift_hours,past_week_hours\n"
                  "D1,Amit,6,6|8|7|7|7|6|10\n"
                  "D2,Priya,6,10|9|6|6|6|7|7\n")
    drivers = load_drivers(path)

    assert [d.name for d in drivers] == ["Amit", "Priya"]
    assert drivers[0].past_week_hours == (6, 8, 7, 7, 7, 6, 10)
    assert drivers[0].is_fatigued is True
    assert drivers[1].is_fatigued is False
    assert drivers[0].is_available is True


def test_load_drivers_optional_columns(tmp_path):
    path = _write(tmp_path / "drivers.csv",
                  "driver_id,name,shift_hours,past_week_hours,is_available,current_day_hours\n"
                  "D1,Amit,6,6|8|7|7|7|6|7,false,3.5\n")
    driver = load_drivers(path)[0]
    assert driver.is_available is False
    assert driver.current_day_hours == 3.5


def test_load_drivers_rejects_short_history(tmp_path):
    path = _write(tmp_path / "drivers.csv",
                  "driver_id,name,shift_hours,past_week_hours\n"
                  "D1,Amit,6,6|8|7\n")
    with pytest.raises(ValueError, match="Invalid driver data"):
        load_drivers(path)


def test_load_routes_and_orders(tmp_path):
    routes = load_routes(_write(tmp_path / "routes.csv",
                                "route_id,distance_km,traffic_level,base_time_min\n"
                                "1,25,High,125\n"
                                "2,12,medium,48\n"))
    orders = load_orders(_write(tmp_path / "orders.csv",
                                "order_id,value_rs,route_id,delivery_time\n"
                                "1,2594,1,02:07\n"))

    assert routes[0].traffic_level is TrafficLevel.HIGH
    assert routes[1].traffic_level is TrafficLevel.MEDIUM
    assert orders[0].value_rs == 2594
    assert orders[0].delivery_time == "02:07"
    assert orders[0].status is OrderStatus.PENDING


def test_load_orders_rejects_bad_time(tmp_path):
    path = _write(tmp_path / "orders.csv",
                  "order_id,value_rs,route_id,delivery_time\n"
                  "1,100,1,25:00\n")
    with pytest.raises(ValueError, match="Invalid order data"):
        load_orders(path)


def test_load_routes_rejects_unknown_traffic(tmp_path):
    path = _write(tmp_path / "routes.csv",
                  "route_id,distance_km,traffic_level,base_time_min\n"
                  "1,5,Jammed,10\n")
    with pytest.raises(ValueError):
        load_routes(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        EntityStore.from_csv(str(tmp_path))


def test_sample_data_loads(sample_store):
    assert len(sample_store.drivers) == 10
    assert len(sample_store.routes) == 10
    assert len(sample_store.get_pending_orders()) == 30
    assert set(sample_store.get_route_map()) == set(range(1, 11))


def test_available_drivers_sorted_and_limited():
    drivers = [
        make_driver("tired", fatigued=True),
        make_driver("busy", current_day_hours=4),
        make_driver("off", is_available=False),
        make_driver("fresh"),
        make_driver("fresh2"),
    ]
    store = EntityStore(drivers, [], [])

    assert [d.driver_id for d in store.get_available_drivers()] == ["fresh", "fresh2", "busy", "tired"]
    assert [d.driver_id for d in store.get_available_drivers(limit=2)] == ["fresh", "fresh2"]


def test_pending_orders_only():
    orders = [make_order(1, 100, 1), make_order(2, 100, 1, status=OrderStatus.DELIVERED)]
    store = EntityStore([], [], orders)
    assert [o.order_id for o in store.get_pending_orders()] == [1]


@pytest.fixture
def saved_result(route_map):
    assignment = Assignment.for_driver(make_driver("D1"))
    assignment.add(make_order(1, 1500, 1), 30, False)
    return calculate_kpis([assignment], route_map)


def test_results_store_save_and_get(tmp_path, saved_result):
    results = ResultsStore(str(tmp_path / "results"))
    inputs = SimulationInputs(1, "09:00", 8)
    record = results.save("alice", inputs, saved_result)

    with open(tmp_path / "results" / f"{record.id}.json") as f:
        on_disk = json.load(f)
    assert on_disk["userId"] == "alice"
    assert on_disk["inputs"] == {"numberOfDrivers": 1, "startTime": "09:00", "maxHoursPerDriver": 8}
    assert on_disk["results"]["totalProfit"] == 1600

    assert results.get(record.id, "alice").results == saved_result.to_dict()
    assert results.get(record.id, "bob") is None
    assert results.get("missing", "alice") is None


def test_results_store_history_and_stats(tmp_path, saved_result, route_map):
    results = ResultsStore(str(tmp_path))
    inputs = SimulationInputs(1, "09:00", 8)
    empty = calculate_kpis([], route_map)

    first = results.save("alice", inputs, saved_result)
    second = results.save("alice", inputs, empty)
    results.save("bob", inputs, saved_result)

    history = results.history("alice", page=1, limit=1)
    assert history["pagination"] == {
        "currentPage": 1,
        "totalPages": 2,
        "totalSimulations": 2,
        "hasNext": True,
        "hasPrev": False,
    }
    assert len(history["simulations"]) == 1
    assert {s["id"] for s in results.history("alice")["simulations"]} == {first.id, second.id}

    stats = results.stats("alice")
    assert stats["totalSimulations"] == 2
    assert stats["averageProfit"] == 800
    assert stats["maxProfit"] == 1600
    assert stats["minProfit"] == 0
    assert stats["averageEfficiency"] == 50


def test_results_store_delete(tmp_path, saved_result):
    results = ResultsStore(str(tmp_path))
    record = results.save("alice", SimulationInputs(1, "09:00", 8), saved_result)

    assert results.delete(record.id, "bob") is False
    assert results.delete(record.id, "alice") is True
    assert results.get(record.id, "alice") is None
    assert results.stats("alice")["totalSimulations"] == 0


def test_results_store_empty_dir(tmp_path):
    results = ResultsStore(str(tmp_path / "nothing"))
    assert results.history("alice")["simulations"] == []
    assert results.stats("alice")["averageProfit"] == 0


def test_load_drivers_reads_fatigue_level(tmp_path):
    path = _write(tmp_path / "drivers.csv",
                  "driver_id,name,shift_hours,past_week_hours,fatigue_level\n"
                  "D1,Amit,6,6|8|7|7|7|6|7,55\n"
                  "D2,Priya,6,6|8|7|7|7|6|10,\n")
    drivers = load_drivers(path)
    assert drivers[0].fatigue_level == 55
    assert drivers[1].fatigue_level == 30


def test_load_drivers_rejects_bad_fatigue_level(tmp_path):
    path = _write(tmp_path / "drivers.csv",
                  "driver_id,name,shift_hours,past_week_hours,fatigue_level\n"
                  "D1,Amit,6,6|8|7|7|7|6|7,150\n")
    with pytest.raises(ValueError, match="Invalid driver data"):
        load_drivers(path)


def test_history_page_and_limit_below_one(tmp_path, saved_result):
    results = ResultsStore(str(tmp_path))
    inputs = SimulationInputs(1, "09:00", 8)
    for _ in range(3):
        results.save("alice", inputs, saved_result)

    first_page = results.history("alice", page=0, limit=2)
    assert len(first_page["simulations"]) == 2
    assert first_page["pagination"]["currentPage"] == 1
    assert first_page["pagination"]["hasPrev"] is False
    assert first_page["pagination"]["hasNext"] is True

    default_size = results.history("alice", limit=0)
    assert len(default_size["simulations"]) == 3
    assert default_size["pagination"]["totalPages"] == 1
    assert default_size["pagination"]["hasNext"] is False


@pytest.mark.parametrize("run_id", ["../outside", "..", "", "ABC", "0" * 31, "g" * 32])
def test_run_ids_not_issued_by_save_are_rejected(tmp_path, saved_result, run_id):
    results = ResultsStore(str(tmp_path / "results"))
    record = results.save("alice", SimulationInputs(1, "09:00", 8), saved_result)
    outside = tmp_path / "outside.json"
    with open(outside, "w") as f:
        json.dump(dict(record.to_dict(), id="outside"), f)

    assert results.get(run_id, "alice") is None
    assert results.delete(run_id, "alice") is False
    assert outside.exists()
