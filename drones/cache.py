"""Cache keys and invalidation for drone detail lookups."""

from uuid import UUID

from django.core.cache import cache

from drones.conf import catalog_setting
from drones.domain import Drone, DroneId


def drone_detail_key(drone_id: DroneId | UUID | str) -> str:
    value = drone_id.value if isinstance(drone_id, DroneId) else drone_id
    return f"drones:{value}"


def get_cached_drone(drone_id: DroneId) -> Drone | None:
    return cache.get(drone_detail_key(drone_id))


def cache_drone(drone: Drone) -> None:
    cache.set(drone_detail_key(drone.id), drone, timeout=catalog_setting("CACHE_TIMEOUT"))


def invalidate_drone(drone_id: DroneId | UUID | str) -> None:
    cache.delete(drone_detail_key(drone_id))
