from drones.domain.models import Drone, DroneDraft, Page, Review, User
from drones.domain.queries import DroneFilters, PageRequest
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

__all__ = [
    "Drone",
    "DroneDraft",
    "Review",
    "User",
    "Page",
    "PageRequest",
    "DroneFilters",
    "DroneId",
    "UserId",
    "Money",
    "Rating",
    "Category",
    "Condition",
    "DroneStatus",
    "UserRole",
]
