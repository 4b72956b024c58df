"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Self
from uuid import UUID


def _parse_uuid(value: object) -> UUID:
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a UUID string, got {type(value).__name__}")
    return UUID(value.strip())


@dataclass(frozen=True)
class DroneId:
    """Store identifier of a Drone listing."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=_parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Store identifier of a User."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=_parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not self.amount.is_finite():
            raise ValueError("Money amount must be a finite number")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def parse(cls, value: object) -> Self:
        """Build Money from user input (str, int, float or Decimal)."""
        if isinstance(value, bool):
            raise ValueError("Money amount must be a number")
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValueError("Money amount must be a number") from exc
        return cls(amount=amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Rating:
    """Review score, an integer from 1 to 5 inclusive."""

    MIN = 1
    MAX = 5

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not count as a 1-star review
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Rating must be an integer")
        if not self.MIN <= self.value <= self.MAX:
            raise ValueError(f"Rating must be between {self.MIN} and {self.MAX}")


class DroneStatus(StrEnum):
    ACTIVE = "active"
    SOLD = "sold"


class Category(StrEnum):
    RACING = "racing"
    PHOTOGRAPHY = "photography"
    AGRICULTURE = "agriculture"
    SURVEILLANCE = "surveillance"
    DELIVERY = "delivery"
    RECREATIONAL = "recreational"
    SERVICES = "services"
    OTHER = "other"


class Condition(StrEnum):
    NEW = "new"
    LIKE_NEW = "like_new"
    USED = "used"
    REFURBISHED = "refurbished"
    FOR_PARTS = "for_parts"


class UserRole(StrEnum):
    ADMIN = "admin"
    USER = "user"
    COMPANY = "company"
    GOVERNMENT = "government"
