"""Lifecycle service: the active -> sold transition and ownership lookups."""

from typing import Any

import structlog

from drones.domain import Drone, User, UserId
from drones.domain.errors import DroneNotFoundError, InvalidUserIdError, UserNotFoundError
from drones.domain.queries import parse_status
from drones.services.resolution import DroneResolver
from drones.stores.interfaces import DroneStore, UserStore

logger = structlog.get_logger(__name__)


class LifecycleService:
    """Service for listing status transitions and ownership.

    ``active -> sold`` is the only transition. Selling an already sold
    listing is a no-op that returns it unchanged.
    """

    def __init__(self, drones: DroneStore, users: UserStore) -> None:
        self._drones = drones
        self._users = users
        self._resolver = DroneResolver(drones)

    def mark_sold(self, ref: str) -> Drone:
        """Mark a listing as sold and return it.

        Raises:
            DroneNotFoundError: If the listing does not exist.
        """
        drone = self._resolver.resolve(ref)
        if drone is None:
            raise DroneNotFoundError(str(ref))

        transitioned = self._drones.mark_sold(drone.id)
        current = self._drones.get_drone(drone.id)
        if current is None:
            raise DroneNotFoundError(str(ref))
        if transitioned:
            logger.info("drone_sold", drone_id=str(drone.id))
        else:
            logger.info("drone_already_sold", drone_id=str(drone.id))
        return current

    def get_owner(self, ref: str) -> User:
        """Return the user who owns a listing.

        Raises:
            DroneNotFoundError: If the listing does not exist.
            UserNotFoundError: If the listing has no owner or the owner is gone.
        """
        drone = self._resolver.resolve(ref)
        if drone is None:
            raise DroneNotFoundError(str(ref))
        if drone.owner_id is None:
            raise UserNotFoundError("")
        owner = self._users.get_user(drone.owner_id)
        if owner is None or owner.is_deleted:
            raise UserNotFoundError(str(drone.owner_id))
        return owner

    def list_mine(self, user_ref: str, status: Any = None) -> list[Drone]:
        """Return the listings owned by a user, optionally only active or sold ones.

        An unknown status is ignored.

        Raises:
            InvalidUserIdError: If the user ID is malformed.
        """
        try:
            owner_id = UserId.from_string(user_ref)
        except ValueError:
            raise InvalidUserIdError() from None
        return self._drones.list_by_owner(owner_id, parse_status(status))
