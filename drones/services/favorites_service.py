"""Favorites service: per-user sets of favorited listings."""

import structlog

from drones.domain import Drone, DroneId, Page, PageRequest, User, UserId
from drones.domain.errors import DroneNotFoundError, InvalidUserIdError, UserNotFoundError
from drones.services.resolution import DroneResolver, parse_drone_id
from drones.stores.interfaces import DroneStore, UserStore

logger = structlog.get_logger(__name__)


class FavoritesService:
    """Service for adding, removing and listing a user's favorite drones."""

    def __init__(self, drones: DroneStore, users: UserStore) -> None:
        self._drones = drones
        self._users = users
        self._resolver = DroneResolver(drones)

    def _get_user(self, user_ref: str) -> User:
        try:
            user_id = UserId.from_string(user_ref)
        except ValueError:
            raise InvalidUserIdError() from None
        user = self._users.get_user(user_id)
        if user is None or user.is_deleted:
            raise UserNotFoundError(str(user_ref))
        return user

    def add_favorite(self, user_ref: str, drone_ref: str) -> list[DroneId]:
        """Add a drone to a user's favorites. Adding it twice is a no-op.

        Raises:
            InvalidUserIdError: If the user ID is malformed.
            UserNotFoundError: If the user does not exist.
            DroneNotFoundError: If the drone does not exist.
        """
        user = self._get_user(user_ref)
        drone = self._resolver.resolve(drone_ref)
        if drone is None:
            raise DroneNotFoundError(str(drone_ref))
        if not self._users.add_favorite(user.id, drone.id):
            raise DroneNotFoundError(str(drone_ref))
        logger.info("favorite_added", user_id=str(user.id), drone_id=str(drone.id))
        return self._users.favorite_ids(user.id)

    def remove_favorite(self, user_ref: str, drone_ref: str) -> list[DroneId]:
        """Remove a drone from a user's favorites. Removing an absent one is a no-op.

        A well-formed drone ID is removed even when the listing no longer
        exists, so stale references can be cleared.

        Raises:
            InvalidUserIdError: If the user ID is malformed.
            UserNotFoundError: If the user does not exist.
            DroneNotFoundError: If the drone reference matches nothing.
        """
        user = self._get_user(user_ref)
        drone = self._resolver.resolve(drone_ref)
        drone_id = drone.id if drone is not None else parse_drone_id(drone_ref)
        if drone_id is None:
            raise DroneNotFoundError(str(drone_ref))
        self._users.remove_favorite(user.id, drone_id)
        logger.info("favorite_removed", user_id=str(user.id), drone_id=str(drone_id))
        return self._users.favorite_ids(user.id)

    def list_favorites(self, user_ref: str, page_request: PageRequest | None = None) -> Page[Drone]:
        """Return one page of the user's favorite drones, in the order they were added.

        References to listings that no longer exist are skipped and do not
        count toward ``total``.

        Raises:
            InvalidUserIdError: If the user ID is malformed.
            UserNotFoundError: If the user does not exist.
        """
        page_request = page_request or PageRequest()
        user = self._get_user(user_ref)
        favorite_ids = self._users.favorite_ids(user.id)
        found = self._drones.get_drones(favorite_ids)
        resolved = [found[drone_id] for drone_id in favorite_ids if drone_id in found]
        start = page_request.offset
        return Page(
            page=page_request.page,
            limit=page_request.limit,
            total=len(resolved),
            items=tuple(resolved[start : start + page_request.limit]),
        )
