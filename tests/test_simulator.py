"""Tests du simulateur GPS / GPS simulator tests."""

import argparse
import json
import random

import httpx
import pytest
from httpx import ASGITransport

from vehicle_tracker.main import app
from vehicle_tracker.simulator import (
    GPSSimulator,
    SimulatedVehicle,
    SimulatorState,
    generate_random_movement,
    parse_args,
    simulate,
)


class _MaxRandom:
    """Toujours le deplacement maximal / Always the largest offset."""

    def uniform(self, a, b):
        return b


def _backend(vehicles, fail_names=(), list_status=200):
    """Faux backend / Fake backend recording update payloads."""
    posted = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/api/vehicles":
            return httpx.Response(list_status, json=vehicles if list_status == 200 else {"success": False})
        if request.method == "POST" and request.url.path == "/api/vehicle/update":
            body = json.loads(request.content)
            posted.append(body)
            if body["name"] in fail_names:
                return httpx.Response(404, json={"success": False, "message": f'Vehicle "{body["name"]}" not found'})
            return httpx.Response(200, json={"success": True})
        return httpx.Response(404)

    return httpx.MockTransport(handler), posted


def test_random_movement_stays_close():
    rng = random.Random(42)
    for _ in range(200):
        lat, lng = generate_random_movement(23.81, 90.41, 0.01, rng)
        assert abs(lat - 23.81) <= 0.0100001
        assert abs(lng - 90.41) <= 0.0100001
        assert round(lat, 6) == lat


def test_random_movement_keeps_position_when_result_invalid():
    assert generate_random_movement(90.0, 10.0, 0.01, _MaxRandom()) == (90.0, 10.0)
    assert generate_random_movement(0.0, 180.0, 0.01, _MaxRandom()) == (0.0, 180.0)


def test_parse_args_defaults():
    args = parse_args([])
    assert args.interval == 5.0
    assert args.initial_delay == 1.0
    assert args.ticks == 0
    args = parse_args(["--api-url", "http://backend:3000", "--ticks", "3"])
    assert args.api_url == "http://backend:3000"
    assert args.ticks == 3


@pytest.mark.asyncio
async def test_tick_refreshes_and_posts_every_vehicle():
    transport, posted = _backend([
        {"name": "A", "lat": 10, "lng": 10},
        {"name": "B", "lat": "20.5", "lng": "30.5"},
        {"name": "Broken", "lat": None, "lng": 1},
    ])
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        state = SimulatorState()
        await GPSSimulator(client, rng=random.Random(1)).tick(state)

    assert [v.name for v in state.vehicles] == ["A", "B"]
    assert sorted(p["name"] for p in posted) == ["A", "B"]
    assert all("lastUpdated" in p for p in posted)
    assert state.ticks == 1
    assert state.updated == 2
    assert state.failed == 0


@pytest.mark.asyncio
async def test_one_failure_does_not_block_others():
    transport, posted = _backend(
        [{"name": "A", "lat": 1, "lng": 1}, {"name": "Gone", "lat": 2, "lng": 2}, {"name": "C", "lat": 3, "lng": 3}],
        fail_names={"Gone"},
    )
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        state = SimulatorState()
        await GPSSimulator(client).tick(state)

    assert len(posted) == 3
    assert state.updated == 2
    assert state.failed == 1
    gone = next(v for v in state.vehicles if v.name == "Gone")
    assert (gone.lat, gone.lng) == (2, 2)


@pytest.mark.asyncio
async def test_tick_skipped_when_list_fails():
    transport, posted = _backend([], list_status=500)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        state = SimulatorState(vehicles=[SimulatedVehicle("Stale", 1, 1)])
        await GPSSimulator(client).tick(state)

    assert posted == []
    assert state.ticks == 1
    assert state.updated == state.failed == 0


@pytest.mark.asyncio
async def test_run_stops_after_max_ticks():
    transport, posted = _backend([{"name": "A", "lat": 1, "lng": 1}])
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        state = SimulatorState()
        await GPSSimulator(client).run(state, interval=0, initial_delay=0, max_ticks=3)

    assert state.ticks == 3
    assert len(posted) == 3


def _args(**overrides):
    values = {"api_url": "http://test", "interval": 0.0, "initial_delay": 0.0, "max_offset": 0.01, "ticks": 1}
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.mark.asyncio
async def test_simulate_exit_codes():
    empty, _ = _backend([])
    assert await simulate(_args(), transport=empty) == 0

    failing, _ = _backend([], list_status=503)
    assert await simulate(_args(), transport=failing) == 1

    working, posted = _backend([{"name": "A", "lat": 1, "lng": 1}])
    assert await simulate(_args(ticks=2), transport=working) == 0
    assert len(posted) == 2


@pytest.mark.asyncio
async def test_simulator_against_backend(client):
    await client.post("/api/vehicles", json={"name": "Car-1", "lat": 23.81, "lng": 90.41})
    await client.post("/api/vehicles", json={"name": "Car-2", "lat": 23.70, "lng": 90.30})

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as sim_client:
        state = SimulatorState()
        await GPSSimulator(sim_client).tick(state)

    assert state.updated == 2
    vehicles = (await client.get("/api/vehicles")).json()
    assert all(len(v["locationHistory"]) == 2 for v in vehicles)


def _raw_backend(content, content_type="application/json"):
    """Liste renvoyee telle quelle / List endpoint returning a raw body."""
    posted = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, content=content, headers={"Content-Type": content_type})
        posted.append(json.loads(request.content))
        return httpx.Response(200, json={"success": True})

    return httpx.MockTransport(handler), posted


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content,content_type",
    [
        (b"<html>proxy</html>", "text/html"),
        (b'{"success": true}', "application/json"),
    ],
)
async def test_tick_skipped_on_unusable_list_body(content, content_type):
    transport, posted = _raw_backend(content, content_type)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        state = SimulatorState(vehicles=[SimulatedVehicle("Stale", 1, 1)])
        await GPSSimulator(client).tick(state)

    assert posted == []
    assert state.ticks == 1
    assert [v.name for v in state.vehicles] == ["Stale"]


@pytest.mark.asyncio
async def test_malformed_entries_are_skipped():
    body = json.dumps(["junk", 42, {"name": 7, "lat": 1, "lng": 1}, {"name": "A", "lat": 1, "lng": 1}]).encode()
    transport, posted = _raw_backend(body)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        state = SimulatorState()
        await GPSSimulator(client).tick(state)

    assert [v.name for v in state.vehicles] == ["A"]
    assert [p["name"] for p in posted] == ["A"]


@pytest.mark.asyncio
async def test_simulate_fails_cleanly_on_non_json_list():
    transport, _ = _raw_backend(b"<html>proxy</html>", "text/html")
    assert await simulate(_args(), transport=transport) == 1
