"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in drones/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from drones.domain.value_objects import (
    Category,
    Condition,
    DroneId,
    DroneStatus,
    Money,
    Rating,
    UserId,
    UserRole,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Review:
    """A single rating left on a listing."""

    reviewer_id: UserId
    rating: Rating
    comment: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Drone:
    """Domain representation of a Drone listing."""

    id: DroneId
    title: str
    description: str
    category: Category
    condition: Condition
    location: str
    price: Money
    status: DroneStatus
    created_at: datetime
    updated_at: datetime
    owner_id: UserId | None = None
    external_id: str | None = None
    sold_at: datetime | None = None
    ratings: tuple[Review, ...] = ()

    @property
    def is_sold(self) -> bool:
        return self.status is DroneStatus.SOLD

    @property
    def is_service(self) -> bool:
        return self.category is Category.SERVICES


@dataclass(frozen=True)
class DroneDraft:
    """Caller-controlled fields of a listing that has not been stored yet."""

    title: str
    category: Category
    condition: Condition
    price: Money
    description: str = ""
    location: str = ""
    owner_id: UserId | None = None
    external_id: str | None = None


@dataclass(frozen=True)
class User:
    """Domain representation of a marketplace account."""

    id: UserId
    user_name: str
    email: str
    role: UserRole = UserRole.USER
    is_deleted: bool = False


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a larger result set."""

    page: int
    limit: int
    total: int
    items: tuple[T, ...] = field(default_factory=tuple)
