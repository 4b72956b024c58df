"""Domain error codes for the drones module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    DRONE_NOT_FOUND = "DRONE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_DRONE_ID = "INVALID_DRONE_ID"
    INVALID_USER_ID = "INVALID_USER_ID"
    INVALID_RATING = "INVALID_RATING"
    INVALID_PRICE_RANGE = "INVALID_PRICE_RANGE"
    INVALID_CATEGORY = "INVALID_CATEGORY"
    INVALID_DRONE_DATA = "INVALID_DRONE_DATA"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    STORE_FAILURE = "STORE_FAILURE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class DroneNotFoundError(DomainError):
    """Raised when a drone listing is not found."""

    def __init__(self, drone_ref: str) -> None:
        super().__init__(
            code=ErrorCode.DRONE_NOT_FOUND,
            message="Drone not found",
        )
        self.drone_ref = drone_ref


class UserNotFoundError(DomainError):
    """Raised when a user is not found or has been deleted."""

    def __init__(self, user_ref: str) -> None:
        super().__init__(
            code=ErrorCode.USER_NOT_FOUND,
            message="User not found",
        )
        self.user_ref = user_ref


class InvalidDroneIdError(DomainError):
    """Raised when a drone ID is not a well-formed store identifier."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DRONE_ID,
            message="Invalid drone ID format",
        )


class InvalidUserIdError(DomainError):
    """Raised when a user ID is not a well-formed store identifier."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_USER_ID,
            message="Invalid user ID format",
        )


class InvalidRatingError(DomainError):
    """Raised when a rating is not an integer between 1 and 5."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RATING,
            message="Rating must be an integer between 1 and 5",
        )


class InvalidPriceRangeError(DomainError):
    """Raised when a price range bound is missing or not a number."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PRICE_RANGE,
            message="min and max must be numbers",
        )


class InvalidCategoryError(DomainError):
    """Raised when a category lookup is given no usable category."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CATEGORY,
            message="A valid category is required",
        )


class InvalidDroneDataError(DomainError):
    """Raised when listing fields break a domain invariant."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DRONE_DATA,
            message=f"{field}: {reason}",
        )
        self.field = field


class InvalidTransitionError(DomainError):
    """Raised when a listing status change is not allowed."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Cannot change status from {current} to {requested}",
        )


class StoreFailureError(DomainError):
    """Raised when the underlying store is unreachable or rejects an operation."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_FAILURE,
            message="Storage is temporarily unavailable",
        )
        self.operation = operation
