"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every mutating method is a
single atomic operation against the backing store; callers never
read-modify-write through these interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from drones.domain import Drone, DroneDraft, DroneFilters, DroneId, DroneStatus, Review, User, UserId


class DroneStore(ABC):
    """Interface for drone listing persistence operations."""

    @abstractmethod
    def list_drones(
        self, filters: DroneFilters, offset: int = 0, limit: int | None = None
    ) -> list[Drone]:
        """Return matching drones ordered by created_at, then id.

        A ``limit`` of None returns every match from ``offset`` on.
        """
        ...

    @abstractmethod
    def count_drones(self, filters: DroneFilters) -> int:
        """Return the number of drones matching the filters."""
        ...

    @abstractmethod
    def get_drone(self, drone_id: DroneId) -> Drone | None:
        """Return a drone by store identifier, or None if not found."""
        ...

    @abstractmethod
    def get_drone_by_external_id(self, external_id: str) -> Drone | None:
        """Return a drone by its business key, or None if not found."""
        ...

    @abstractmethod
    def get_drones(self, drone_ids: Iterable[DroneId]) -> dict[DroneId, Drone]:
        """Return the drones that still exist among the given identifiers."""
        ...

    @abstractmethod
    def create_drone(self, draft: DroneDraft) -> Drone:
        """Persist a new active listing with no ratings."""
        ...

    @abstractmethod
    def update_drone(self, drone_id: DroneId, changes: Mapping[str, Any]) -> Drone | None:
        """Apply field changes, returning the updated drone or None if it is gone."""
        ...

    @abstractmethod
    def delete_drone(self, drone_id: DroneId) -> bool:
        """Hard-delete a drone. Return False if nothing was deleted."""
        ...

    @abstractmethod
    def append_review(self, drone_id: DroneId, review: Review) -> bool:
        """Append a review to the drone's ratings. Return False if the drone is gone."""
        ...

    @abstractmethod
    def mark_sold(self, drone_id: DroneId) -> bool:
        """Move an active drone to sold. Return False if it was not active."""
        ...

    @abstractmethod
    def list_by_owner(self, owner_id: UserId, status: DroneStatus | None = None) -> list[Drone]:
        """Return drones owned by a user, optionally restricted to one status."""
        ...


class UserStore(ABC):
    """Interface for user and favorites persistence operations."""

    @abstractmethod
    def get_user(self, user_id: UserId) -> User | None:
        """Return a user by ID, or None if not found."""
        ...

    @abstractmethod
    def add_favorite(self, user_id: UserId, drone_id: DroneId) -> bool:
        """Add a drone to the user's favorites if it is not already there.

        Return False if the drone no longer exists.
        """
        ...

    @abstractmethod
    def remove_favorite(self, user_id: UserId, drone_id: DroneId) -> None:
        """Remove a drone from the user's favorites if it is there."""
        ...

    @abstractmethod
    def favorite_ids(self, user_id: UserId) -> list[DroneId]:
        """Return the user's favorite drone IDs in the order they were added."""
        ...
