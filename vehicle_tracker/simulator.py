"""
Simulateur GPS / GPS simulator.

Recupere les vehicules du backend, les deplace aleatoirement et publie
les nouvelles positions a intervalle regulier.
Fetches vehicles from the backend, moves them randomly and posts the new
positions on a fixed interval.

Usage:
    vehicle-tracker-simulator --api-url http://localhost:3000 --interval 5
    python -m vehicle_tracker.simulator --ticks 10
"""

import argparse
import asyncio
import logging
import random
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone

import httpx

from vehicle_tracker.config import settings
from vehicle_tracker.utils.geo import is_valid_position, parse_coordinate

logger = logging.getLogger(__name__)

VEHICLES_PATH = "/api/vehicles"
UPDATE_PATH = "/api/vehicle/update"


class SimulatorError(Exception):
    """Reponse de liste inexploitable / Unusable vehicle list response."""


@dataclass
class SimulatedVehicle:
    name: str
    lat: float
    lng: float


@dataclass
class SimulatorState:
    """Etat explicite passe a chaque tick / Explicit state passed into every tick."""
    vehicles: list[SimulatedVehicle] = field(default_factory=list)
    ticks: int = 0
    updated: int = 0
    failed: int = 0


def generate_random_movement(
    lat: float, lng: float, max_offset: float = 0.01, rng: random.Random | None = None
) -> tuple[float, float]:
    """
    Nouvelle position aleatoire autour de (lat, lng) / Random new position around (lat, lng).
    Si le resultat est invalide, la position d'origine est conservee.
    If the result would be invalid, the original position is kept.
    """
    rng = rng or random
    new_lat = round(lat + rng.uniform(-max_offset, max_offset), 6)
    new_lng = round(lng + rng.uniform(-max_offset, max_offset), 6)
    if not is_valid_position(new_lat, new_lng):
        return lat, lng
    return new_lat, new_lng


class GPSSimulator:
    """Pilote les mises a jour de position / Drives position updates against the API."""

    def __init__(self, client: httpx.AsyncClient, max_offset: float = 0.01, rng: random.Random | None = None):
        self.client = client
        self.max_offset = max_offset
        self.rng = rng or random.Random()

    async def fetch_vehicles(self) -> list[SimulatedVehicle]:
        """Lire la liste courante / Read the current vehicle list.

        Raises httpx.HTTPError on transport or status failures, SimulatorError
        when the body is not a JSON list.
        """
        resp = await self.client.get(VEHICLES_PATH)
        resp.raise_for_status()
        try:
            body = resp.json()
        except ValueError as exc:
            raise SimulatorError(f"Vehicle list is not JSON: {exc}") from exc
        if not isinstance(body, list):
            raise SimulatorError(f"Vehicle list must be a JSON array, got {type(body).__name__}")

        vehicles = []
        for raw in body:
            if not isinstance(raw, dict):
                logger.warning("Skipping malformed vehicle entry: %r", raw)
                continue
            lat = parse_coordinate(raw.get("lat"))
            lng = parse_coordinate(raw.get("lng"))
            if not isinstance(raw.get("name"), str) or not raw["name"] or not is_valid_position(lat, lng):
                logger.warning("Skipping %s (invalid name or coordinates)", raw.get("name", "<unnamed>"))
                continue
            vehicles.append(SimulatedVehicle(name=raw["name"], lat=lat, lng=lng))
        return vehicles

    async def refresh(self, state: SimulatorState) -> None:
        state.vehicles = await self.fetch_vehicles()

    async def push_update(self, vehicle: SimulatedVehicle) -> bool:
        """Deplacer et publier un vehicule / Move and post one vehicle. Never raises httpx errors."""
        lat, lng = generate_random_movement(vehicle.lat, vehicle.lng, self.max_offset, self.rng)
        payload = {
            "name": vehicle.name,
            "lat": lat,
            "lng": lng,
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
        }
        try:
            resp = await self.client.post(UPDATE_PATH, json=payload)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Error updating %s: %s %s", vehicle.name, exc.response.status_code, exc.response.text)
            return False
        except httpx.HTTPError as exc:
            logger.error("Error updating %s: %s", vehicle.name, exc)
            return False

        vehicle.lat, vehicle.lng = lat, lng
        logger.info("%s updated: %.4f, %.4f", vehicle.name, lat, lng)
        return True

    async def tick(self, state: SimulatorState) -> None:
        """Un cycle: rafraichir puis publier / One cycle: refresh, then post every vehicle.

        Les mises a jour partent en parallele; un echec n'en bloque aucune autre.
        Updates run concurrently; one failure never blocks the others.
        """
        state.ticks += 1
        try:
            await self.refresh(state)
        except (httpx.HTTPError, SimulatorError) as exc:
            logger.error("Tick %d skipped, could not fetch vehicles: %s", state.ticks, exc)
            return

        if not state.vehicles:
            logger.warning("No vehicles found in backend. Add vehicles first.")
            return

        results = await asyncio.gather(
            *(self.push_update(vehicle) for vehicle in state.vehicles),
            return_exceptions=True,
        )
        ok = 0
        for vehicle, result in zip(state.vehicles, results):
            if isinstance(result, Exception):
                logger.error("Unexpected error updating %s: %r", vehicle.name, result)
            elif result:
                ok += 1
        state.updated += ok
        state.failed += len(results) - ok
        logger.info("Tick %d: %d/%d vehicles updated", state.ticks, ok, len(results))

    async def run(
        self, state: SimulatorState, interval: float, initial_delay: float = 1.0, max_ticks: int = 0
    ) -> None:
        """Boucle periodique / Periodic loop. max_ticks=0 runs until cancelled."""
        await asyncio.sleep(initial_delay)
        while True:
            await self.tick(state)
            if max_ticks and state.ticks >= max_ticks:
                return
            await asyncio.sleep(interval)


async def simulate(args: argparse.Namespace, transport: httpx.AsyncBaseTransport | None = None) -> int:
    async with httpx.AsyncClient(base_url=args.api_url, timeout=10.0, transport=transport) as client:
        simulator = GPSSimulator(client, max_offset=args.max_offset)
        state = SimulatorState()

        try:
            await simulator.refresh(state)
        except (httpx.HTTPError, SimulatorError) as exc:
            logger.error("Failed to load vehicles: %s", exc)
            return 1

        if not state.vehicles:
            logger.warning("No vehicles in database. Add some first.")
            return 0

        logger.info("Loaded %d vehicles from backend", len(state.vehicles))
        for i, vehicle in enumerate(state.vehicles, start=1):
            logger.info("%d. %s (%.4f, %.4f)", i, vehicle.name, vehicle.lat, vehicle.lng)

        logger.info("Starting GPS simulation, updates every %s seconds", args.interval)
        await simulator.run(state, args.interval, args.initial_delay, args.ticks)
        logger.info("Simulation finished: %d updated, %d failed", state.updated, state.failed)
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Randomly move tracked vehicles and post their positions")
    parser.add_argument("--api-url", default=settings.SIMULATOR_API_URL, help="Backend base URL")
    parser.add_argument("--interval", type=float, default=settings.SIMULATOR_INTERVAL_SECONDS, help="Seconds between ticks")
    parser.add_argument(
        "--initial-delay", type=float, default=settings.SIMULATOR_INITIAL_DELAY_SECONDS, help="Seconds before the first tick"
    )
    parser.add_argument(
        "--max-offset", type=float, default=settings.SIMULATOR_MAX_OFFSET, help="Maximum move per tick, in degrees"
    )
    parser.add_argument("--ticks", type=int, default=0, help="Stop after N ticks (0 = run until interrupted)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    try:
        return asyncio.run(simulate(args))
    except KeyboardInterrupt:
        logger.info("GPS simulation stopped.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
