"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import uuid

import pytest
from django.core.cache import cache

from drones.cache import drone_detail_key
from drones.domain import DroneId, DroneStatus, Rating, Review, UserId
from drones.models import Drone as DroneRow
from drones.models import Review as ReviewRow
from drones.services.lifecycle_service import LifecycleService
from drones.stores.django_store import DjangoDroneStore, DjangoUserStore


@pytest.fixture
def store() -> DjangoDroneStore:
    return DjangoDroneStore()


@pytest.mark.django_db
class TestDroneDetailCache:
    """Tests for caching of drone detail lookups."""

    def test_get_drone_populates_cache(self, store, make_drone):
        row = make_drone()
        drone = store.get_drone(DroneId(row.id))
        assert cache.get(drone_detail_key(row.id)) == drone

    def test_cached_drone_is_served_without_database(self, store, make_drone, django_assert_num_queries):
        row = make_drone()
        store.get_drone(DroneId(row.id))
        with django_assert_num_queries(0):
            assert store.get_drone(DroneId(row.id)).title == row.title

    def test_store_update_invalidates_detail_cache(self, store, make_drone):
        row = make_drone(title="Before")
        store.get_drone(DroneId(row.id))
        store.update_drone(DroneId(row.id), {"title": "After"})
        assert store.get_drone(DroneId(row.id)).title == "After"

    def test_mark_sold_invalidates_detail_cache(self, store, make_drone):
        row = make_drone()
        store.get_drone(DroneId(row.id))
        store.mark_sold(DroneId(row.id))
        assert store.get_drone(DroneId(row.id)).is_sold

    def test_append_review_invalidates_detail_cache(self, store, make_drone):
        row = make_drone()
        store.get_drone(DroneId(row.id))
        store.append_review(DroneId(row.id), Review(reviewer_id=UserId(uuid.uuid4()), rating=Rating(3)))
        assert len(store.get_drone(DroneId(row.id)).ratings) == 1

    def test_mark_sold_returns_database_state_not_cached_snapshot(self, store, make_drone):
        row = make_drone()
        store.get_drone(DroneId(row.id))
        DroneRow.objects.filter(pk=row.id).update(status="sold")
        sold = LifecycleService(store, DjangoUserStore()).mark_sold(str(row.id))
        assert sold.status is DroneStatus.SOLD


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for signal-driven invalidation on model changes outside the store."""

    def test_drone_save_invalidates_detail_cache(self, store, make_drone):
        row = make_drone()
        store.get_drone(DroneId(row.id))
        row.title = "Edited in admin"
        row.save()
        assert cache.get(drone_detail_key(row.id)) is None

    def test_drone_delete_invalidates_detail_cache(self, store, make_drone):
        row = make_drone()
        store.get_drone(DroneId(row.id))
        pk = row.pk
        row.delete()
        assert cache.get(drone_detail_key(pk)) is None
        assert store.get_drone(DroneId(pk)) is None

    def test_review_save_invalidates_detail_cache(self, store, make_drone):
        row = make_drone()
        store.get_drone(DroneId(row.id))
        ReviewRow.objects.create(drone=row, reviewer_id=uuid.uuid4(), rating=5)
        assert cache.get(drone_detail_key(row.id)) is None
