"""Django ORM implementation of the DroneStore and UserStore.

Each mutation is issued as one SQL statement so concurrent requests cannot
lose each other's writes: favorites use INSERT ... ON CONFLICT DO NOTHING and
a filtered DELETE, reviews are a single INSERT, and the sale transition is a
conditional UPDATE.
"""

from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from drones import models as orm
from drones.cache import cache_drone, get_cached_drone, invalidate_drone
from drones.domain import (
    Category,
    Condition,
    Drone,
    DroneDraft,
    DroneFilters,
    DroneId,
    DroneStatus,
    Money,
    Rating,
    Review,
    User,
    UserId,
    UserRole,
)
from drones.domain.errors import InvalidDroneDataError, StoreFailureError
from drones.stores.interfaces import DroneStore, UserStore

P = ParamSpec("P")
R = TypeVar("R")


def store_operation(func: Callable[P, R]) -> Callable[P, R]:
    """Translate database errors into StoreFailureError."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            raise StoreFailureError(func.__name__) from exc

    return wrapper


def _review_to_domain(row: orm.Review) -> Review:
    return Review(
        reviewer_id=UserId(row.reviewer_id),
        rating=Rating(row.rating),
        comment=row.comment,
        created_at=row.created_at,
    )


def _drone_to_domain(row: orm.Drone, ratings: Iterable[orm.Review] | None = None) -> Drone:
    if ratings is None:
        ratings = row.ratings.all()
    return Drone(
        id=DroneId(row.id),
        external_id=row.external_id,
        owner_id=UserId(row.owner_id) if row.owner_id else None,
        title=row.title,
        description=row.description,
        category=Category(row.category),
        condition=Condition(row.condition),
        location=row.location,
        price=Money(row.price),
        status=DroneStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
        sold_at=row.sold_at,
        ratings=tuple(_review_to_domain(r) for r in ratings),
    )


def _user_to_domain(row: orm.User) -> User:
    return User(
        id=UserId(row.id),
        user_name=row.user_name,
        email=row.email,
        role=UserRole(row.role),
        is_deleted=row.is_deleted,
    )


def _column_value(value: Any) -> Any:
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, (DroneId, UserId)):
        return value.value
    if isinstance(value, Enum):
        return value.value
    return value


class DjangoDroneStore(DroneStore):
    """Relational drone store using Django ORM."""

    def _queryset(self) -> QuerySet[orm.Drone]:
        return orm.Drone.objects.prefetch_related("ratings").order_by("created_at", "id")

    def _filtered(self, filters: DroneFilters) -> QuerySet[orm.Drone]:
        qs = self._queryset()
        if filters.text:
            qs = qs.filter(Q(title__icontains=filters.text) | Q(description__icontains=filters.text))
        if filters.category:
            qs = qs.filter(category=filters.category)
        if filters.condition:
            qs = qs.filter(condition=filters.condition)
        if filters.location:
            qs = qs.filter(location__icontains=filters.location)
        if filters.price_min is not None:
            qs = qs.filter(price__gte=filters.price_min)
        if filters.price_max is not None:
            qs = qs.filter(price__lte=filters.price_max)
        if filters.status is not None:
            qs = qs.filter(status=filters.status.value)
        return qs

    @store_operation
    def list_drones(
        self, filters: DroneFilters, offset: int = 0, limit: int | None = None
    ) -> list[Drone]:
        qs = self._filtered(filters)
        rows = qs[offset:] if limit is None else qs[offset : offset + limit]
        return [_drone_to_domain(row) for row in rows]

    @store_operation
    def count_drones(self, filters: DroneFilters) -> int:
        return self._filtered(filters).count()

    @store_operation
    def get_drone(self, drone_id: DroneId) -> Drone | None:
        cached = get_cached_drone(drone_id)
        if cached is not None:
            return cached
        row = self._queryset().filter(pk=drone_id.value).first()
        if row is None:
            return None
        drone = _drone_to_domain(row)
        cache_drone(drone)
        return drone

    @store_operation
    def get_drone_by_external_id(self, external_id: str) -> Drone | None:
        row = self._queryset().filter(external_id=external_id).first()
        return _drone_to_domain(row) if row is not None else None

    @store_operation
    def get_drones(self, drone_ids: Iterable[DroneId]) -> dict[DroneId, Drone]:
        pks = [drone_id.value for drone_id in drone_ids]
        if not pks:
            return {}
        rows = self._queryset().filter(pk__in=pks)
        return {DroneId(row.id): _drone_to_domain(row) for row in rows}

    @store_operation
    def create_drone(self, draft: DroneDraft) -> Drone:
        try:
            with transaction.atomic():
                row = orm.Drone.objects.create(
                    external_id=draft.external_id,
                    owner_id=draft.owner_id.value if draft.owner_id else None,
                    title=draft.title,
                    description=draft.description,
                    category=draft.category.value,
                    condition=draft.condition.value,
                    location=draft.location,
                    price=draft.price.amount,
                    status=DroneStatus.ACTIVE.value,
                )
        except IntegrityError as exc:
            if draft.external_id and orm.Drone.objects.filter(external_id=draft.external_id).exists():
                raise InvalidDroneDataError("external_id", "already in use") from exc
            raise
        return _drone_to_domain(row, ratings=())

    @store_operation
    def update_drone(self, drone_id: DroneId, changes: Mapping[str, Any]) -> Drone | None:
        values = {name: _column_value(value) for name, value in changes.items()}
        updated = orm.Drone.objects.filter(pk=drone_id.value).update(
            **values, updated_at=timezone.now()
        )
        invalidate_drone(drone_id)
        if not updated:
            return None
        return self.get_drone(drone_id)

    @store_operation
    def delete_drone(self, drone_id: DroneId) -> bool:
        deleted, _ = orm.Drone.objects.filter(pk=drone_id.value).delete()
        invalidate_drone(drone_id)
        return deleted > 0

    @store_operation
    def append_review(self, drone_id: DroneId, review: Review) -> bool:
        try:
            with transaction.atomic():
                orm.Review.objects.create(
                    drone_id=drone_id.value,
                    reviewer_id=review.reviewer_id.value,
                    rating=review.rating.value,
                    comment=review.comment,
                )
        except IntegrityError:
            if orm.Drone.objects.filter(pk=drone_id.value).exists():
                raise
            return False
        finally:
            invalidate_drone(drone_id)
        return True

    @store_operation
    def mark_sold(self, drone_id: DroneId) -> bool:
        now = timezone.now()
        updated = orm.Drone.objects.filter(
            pk=drone_id.value, status=DroneStatus.ACTIVE.value
        ).update(status=DroneStatus.SOLD.value, sold_at=now, updated_at=now)
        invalidate_drone(drone_id)
        return updated == 1

    @store_operation
    def list_by_owner(self, owner_id: UserId, status: DroneStatus | None = None) -> list[Drone]:
        qs = self._queryset().filter(owner_id=owner_id.value)
        if status is not None:
            qs = qs.filter(status=status.value)
        return [_drone_to_domain(row) for row in qs]


class DjangoUserStore(UserStore):
    """Relational user/favorites store using Django ORM."""

    @store_operation
    def get_user(self, user_id: UserId) -> User | None:
        row = orm.User.objects.filter(pk=user_id.value).first()
        return _user_to_domain(row) if row is not None else None

    @store_operation
    def add_favorite(self, user_id: UserId, drone_id: DroneId) -> bool:
        try:
            with transaction.atomic():
                orm.Favorite.objects.bulk_create(
                    [orm.Favorite(user_id=user_id.value, drone_id=drone_id.value)],
                    ignore_conflicts=True,
                )
        except IntegrityError:
            if orm.Drone.objects.filter(pk=drone_id.value).exists():
                raise
            return False
        return True

    @store_operation
    def remove_favorite(self, user_id: UserId, drone_id: DroneId) -> None:
        orm.Favorite.objects.filter(user_id=user_id.value, drone_id=drone_id.value).delete()

    @store_operation
    def favorite_ids(self, user_id: UserId) -> list[DroneId]:
        drone_pks = (
            orm.Favorite.objects.filter(user_id=user_id.value)
            .order_by("id")
            .values_list("drone_id", flat=True)
        )
        return [DroneId(pk) for pk in drone_pks]
