"""Pytest configuration and shared fixtures."""

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import pytest
from rest_framework.test import APIClient

from drones.domain import (
    Drone,
    DroneDraft,
    DroneFilters,
    DroneId,
    DroneStatus,
    Review,
    User,
    UserId,
)
from drones.stores.interfaces import DroneStore, UserStore


class InMemoryDroneStore(DroneStore):
    """Dict-backed DroneStore for service tests."""

    def __init__(self) -> None:
        self.drones: dict[DroneId, Drone] = {}

    @staticmethod
    def _matches(drone: Drone, filters: DroneFilters) -> bool:
        if filters.text:
            needle = filters.text.lower()
            if needle not in drone.title.lower() and needle not in drone.description.lower():
                return False
        if filters.category and drone.category != filters.category:
            return False
        if filters.condition and drone.condition != filters.condition:
            return False
        if filters.location and filters.location.lower() not in drone.location.lower():
            return False
        if filters.price_min is not None and drone.price.amount < filters.price_min:
            return False
        if filters.price_max is not None and drone.price.amount > filters.price_max:
            return False
        if filters.status is not None and drone.status != filters.status:
            return False
        return True

    def list_drones(self, filters, offset=0, limit=None):
        matches = [d for d in self.drones.values() if self._matches(d, filters)]
        end = None if limit is None else offset + limit
        return matches[offset:end]

    def count_drones(self, filters):
        return sum(1 for d in self.drones.values() if self._matches(d, filters))

    def get_drone(self, drone_id):
        return self.drones.get(drone_id)

    def get_drone_by_external_id(self, external_id):
        return next((d for d in self.drones.values() if d.external_id == external_id), None)

    def get_drones(self, drone_ids: Iterable[DroneId]):
        return {i: self.drones[i] for i in drone_ids if i in self.drones}

    def create_drone(self, draft: DroneDraft) -> Drone:
        now = datetime.now(timezone.utc)
        drone = Drone(
            id=DroneId(uuid.uuid4()),
            external_id=draft.external_id,
            owner_id=draft.owner_id,
            title=draft.title,
            description=draft.description,
            category=draft.category,
            condition=draft.condition,
            location=draft.location,
            price=draft.price,
            status=DroneStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
        self.drones[drone.id] = drone
        return drone

    def update_drone(self, drone_id, changes: Mapping[str, Any]):
        if drone_id not in self.drones:
            return None
        drone = replace(self.drones[drone_id], **changes, updated_at=datetime.now(timezone.utc))
        self.drones[drone_id] = drone
        return drone

    def delete_drone(self, drone_id):
        return self.drones.pop(drone_id, None) is not None

    def append_review(self, drone_id, review: Review):
        if drone_id not in self.drones:
            return False
        drone = self.drones[drone_id]
        self.drones[drone_id] = replace(drone, ratings=drone.ratings + (review,))
        return True

    def mark_sold(self, drone_id):
        drone = self.drones.get(drone_id)
        if drone is None or drone.status is not DroneStatus.ACTIVE:
            return False
        now = datetime.now(timezone.utc)
        self.drones[drone_id] = replace(drone, status=DroneStatus.SOLD, sold_at=now, updated_at=now)
        return True

    def list_by_owner(self, owner_id, status=None):
        return [
            d
            for d in self.drones.values()
            if d.owner_id == owner_id and (status is None or d.status is status)
        ]


class InMemoryUserStore(UserStore):
    """Dict-backed UserStore for service tests."""

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.favorites: dict[UserId, list[DroneId]] = {}

    def add_user(self, user_name: str = "pilot", *, is_deleted: bool = False) -> User:
        user = User(
            id=UserId(uuid.uuid4()),
            user_name=user_name,
            email=f"{user_name}-{uuid.uuid4().hex[:8]}@example.com",
            is_deleted=is_deleted,
        )
        self.users[user.id] = user
        return user

    def get_user(self, user_id):
        return self.users.get(user_id)

    def add_favorite(self, user_id, drone_id):
        favorites = self.favorites.setdefault(user_id, [])
        if drone_id not in favorites:
            favorites.append(drone_id)
        return True

    def remove_favorite(self, user_id, drone_id):
        favorites = self.favorites.setdefault(user_id, [])
        if drone_id in favorites:
            favorites.remove(drone_id)

    def favorite_ids(self, user_id):
        return list(self.favorites.get(user_id, []))


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def drone_store() -> InMemoryDroneStore:
    return InMemoryDroneStore()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def drone_payload() -> dict[str, Any]:
    return {
        "title": "X1",
        "description": "Fast FPV quad",
        "category": "racing",
        "condition": "new",
        "location": "Barcelona",
        "price": "500",
    }


@pytest.fixture
def make_user(db):
    from drones.models import User as UserRow

    def factory(**overrides) -> UserRow:
        n = uuid.uuid4().hex[:8]
        fields = {"user_name": f"pilot-{n}", "email": f"pilot-{n}@example.com"}
        fields.update(overrides)
        return UserRow.objects.create(**fields)

    return factory


@pytest.fixture
def make_drone(db):
    from drones.models import Drone as DroneRow

    def factory(**overrides) -> DroneRow:
        fields = {
            "title": "Mavic 3",
            "description": "Camera drone",
            "category": "photography",
            "condition": "used",
            "location": "Madrid",
            "price": Decimal("1200.00"),
        }
        fields.update(overrides)
        return DroneRow.objects.create(**fields)

    return factory
