"""Catalog service: listing queries and listing CRUD.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants before any write
- Perform orchestration and error mapping
- Return domain models or raise domain errors
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

from drones.domain import (
    Category,
    Condition,
    Drone,
    DroneDraft,
    DroneFilters,
    Money,
    Page,
    PageRequest,
    UserId,
)
from drones.domain.errors import (
    DroneNotFoundError,
    InvalidCategoryError,
    InvalidDroneDataError,
    InvalidPriceRangeError,
    InvalidTransitionError,
    UserNotFoundError,
)
from drones.services.resolution import DroneResolver
from drones.stores.interfaces import DroneStore, UserStore

logger = structlog.get_logger(__name__)

# Never accepted from callers; the store owns these.
SERVER_CONTROLLED_FIELDS = frozenset(
    {
        "id",
        "_id",
        "status",
        "created_at",
        "createdAt",
        "updated_at",
        "sold_at",
        "ratings",
        "is_sold",
        "isSold",
        "is_service",
        "isService",
    }
)
EDITABLE_FIELDS = ("title", "description", "category", "condition", "location", "price")
CREATE_FIELDS = EDITABLE_FIELDS + ("owner_id", "external_id")

MAX_TITLE_LENGTH = 255
MAX_LOCATION_LENGTH = 255
MAX_EXTERNAL_ID_LENGTH = 64
# Path segments routed ahead of drones/<ref>
RESERVED_EXTERNAL_IDS = frozenset({"price-range"})


def _text(name: str, value: Any, *, required: bool = False, max_length: int | None = None) -> str:
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise InvalidDroneDataError(name, "must be a string")
    value = value.strip()
    if required and not value:
        raise InvalidDroneDataError(name, "is required")
    if max_length is not None and len(value) > max_length:
        raise InvalidDroneDataError(name, f"must be at most {max_length} characters")
    return value


def parse_field(name: str, value: Any) -> Any:
    """Convert one caller-supplied listing field to its domain type."""
    if name == "title":
        return _text(name, value, required=True, max_length=MAX_TITLE_LENGTH)
    if name == "description":
        return _text(name, value)
    if name == "location":
        return _text(name, value, max_length=MAX_LOCATION_LENGTH)
    if name == "category":
        try:
            return Category(value)
        except ValueError:
            raise InvalidDroneDataError(name, "unknown category") from None
    if name == "condition":
        try:
            return Condition(value)
        except ValueError:
            raise InvalidDroneDataError(name, "unknown condition") from None
    if name == "price":
        try:
            return Money.parse(value)
        except ValueError as exc:
            raise InvalidDroneDataError(name, str(exc)) from None
    if name == "owner_id":
        if value is None:
            return None
        try:
            return UserId.from_string(value)
        except ValueError:
            raise InvalidDroneDataError(name, "invalid user ID format") from None
    if name == "external_id":
        key = _text(name, value, max_length=MAX_EXTERNAL_ID_LENGTH)
        if key in RESERVED_EXTERNAL_IDS or "/" in key:
            raise InvalidDroneDataError(name, "reserved or not addressable")
        return key or None
    raise InvalidDroneDataError(name, "unknown field")


def _strict_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidPriceRangeError()
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidPriceRangeError() from None
    if not number.is_finite():
        raise InvalidPriceRangeError()
    return number


class CatalogService:
    """Service for drone catalog queries and listing CRUD."""

    def __init__(self, store: DroneStore, users: UserStore) -> None:
        self._store = store
        self._users = users
        self._resolver = DroneResolver(store)

    def list_drones(
        self, page_request: PageRequest | None = None, filters: DroneFilters | None = None
    ) -> Page[Drone]:
        """Return one page of drones matching every supplied filter.

        Pages past the end come back with no items rather than an error.
        """
        page_request = page_request or PageRequest()
        filters = filters or DroneFilters()
        total = self._store.count_drones(filters)
        items: list[Drone] = []
        if page_request.offset < total:
            items = self._store.list_drones(filters, page_request.offset, page_request.limit)
        return Page(
            page=page_request.page,
            limit=page_request.limit,
            total=total,
            items=tuple(items),
        )

    def find_drone(self, ref: str) -> Drone | None:
        """Return a drone by store ID or business key, or None."""
        return self._resolver.resolve(ref)

    def get_drone(self, ref: str) -> Drone:
        """Return a drone by store ID or business key.

        Raises:
            DroneNotFoundError: If neither key matches a listing.
        """
        drone = self._resolver.resolve(ref)
        if drone is None:
            raise DroneNotFoundError(str(ref))
        return drone

    def list_by_category(self, category: str) -> list[Drone]:
        """Return every drone in a category. An empty category is an empty list.

        Raises:
            InvalidCategoryError: If no category is given.
        """
        if not isinstance(category, str) or not category.strip():
            raise InvalidCategoryError()
        return self._store.list_drones(DroneFilters(category=category.strip()))

    def list_by_price_range(self, price_min: Any, price_max: Any) -> list[Drone]:
        """Return every drone priced within [price_min, price_max].

        Raises:
            InvalidPriceRangeError: If either bound is missing or not a number.
        """
        low = _strict_decimal(price_min)
        high = _strict_decimal(price_max)
        if low > high:
            return []
        return self._store.list_drones(DroneFilters(price_min=low, price_max=high))

    def create_drone(self, payload: Mapping[str, Any]) -> Drone:
        """Create a new active listing from caller-supplied fields.

        Server-controlled fields in the payload are dropped.

        Raises:
            InvalidDroneDataError: If a field breaks a listing invariant.
            UserNotFoundError: If the owner does not exist.
        """
        fields = {
            name: parse_field(name, value)
            for name, value in payload.items()
            if name in CREATE_FIELDS and name not in SERVER_CONTROLLED_FIELDS
        }
        for required in ("title", "category", "condition", "price"):
            if required not in fields:
                raise InvalidDroneDataError(required, "is required")

        owner_id = fields.get("owner_id")
        if owner_id is not None:
            owner = self._users.get_user(owner_id)
            if owner is None or owner.is_deleted:
                raise UserNotFoundError(str(owner_id))

        drone = self._store.create_drone(DroneDraft(**fields))
        logger.info("drone_created", drone_id=str(drone.id), category=drone.category.value)
        return drone

    def update_drone(self, ref: str, patch: Mapping[str, Any]) -> Drone:
        """Apply editable fields from ``patch`` to an existing listing.

        Raises:
            DroneNotFoundError: If the listing does not exist.
            InvalidTransitionError: If the patch tries to change the status.
            InvalidDroneDataError: If a field breaks a listing invariant.
        """
        drone = self.get_drone(ref)

        requested_status = patch.get("status")
        if requested_status is not None and str(requested_status) != drone.status.value:
            logger.warning(
                "status_change_rejected",
                drone_id=str(drone.id),
                current=drone.status.value,
                requested=str(requested_status),
            )
            raise InvalidTransitionError(drone.status.value, str(requested_status))

        changes = {
            name: parse_field(name, value)
            for name, value in patch.items()
            if name in EDITABLE_FIELDS
        }
        if not changes:
            return drone

        updated = self._store.update_drone(drone.id, changes)
        if updated is None:
            raise DroneNotFoundError(str(ref))
        logger.info("drone_updated", drone_id=str(drone.id), fields=sorted(changes))
        return updated

    def delete_drone(self, ref: str) -> None:
        """Hard-delete a listing.

        Raises:
            DroneNotFoundError: If the listing does not exist.
        """
        drone = self.get_drone(ref)
        if not self._store.delete_drone(drone.id):
            raise DroneNotFoundError(str(ref))
        logger.info("drone_deleted", drone_id=str(drone.id))
