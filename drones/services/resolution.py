"""Two-step drone lookup shared by the services.

A listing can be addressed either by its store identifier (a UUID) or by its
business key (``external_id``). Lookups try the store identifier first and
fall back to the business key. A malformed store identifier is not an error
here, it just skips the first step.
"""

from drones.domain import Drone, DroneId
from drones.stores.interfaces import DroneStore


def parse_drone_id(ref: str) -> DroneId | None:
    try:
        return DroneId.from_string(ref)
    except ValueError:
        return None


class DroneResolver:
    """Resolve a drone reference by store identifier, then by business key."""

    def __init__(self, store: DroneStore) -> None:
        self._store = store

    def resolve(self, ref: str) -> Drone | None:
        drone_id = parse_drone_id(ref)
        if drone_id is not None:
            drone = self._store.get_drone(drone_id)
            if drone is not None:
                return drone
        if not isinstance(ref, str) or not ref.strip():
            return None
        return self._store.get_drone_by_external_id(ref.strip())
