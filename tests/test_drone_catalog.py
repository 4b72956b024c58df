"""Integration tests for the drone catalog HTTP API.

Run with: pytest tests/test_drone_catalog.py -v
"""

import uuid

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from drones import models as orm


def _create(api_client: APIClient, payload: dict) -> dict:
    response = api_client.post(reverse("drone-list"), payload, format="json")
    assert response.status_code == 201, response.data
    return response.data


@pytest.mark.django_db
class TestDroneList:
    """Tests for GET /api/drones"""

    def test_list_drones_returns_paginated_results(self, api_client: APIClient, make_drone):
        for i in range(12):
            make_drone(title=f"Drone {i}")
        response = api_client.get(reverse("drone-list"), {"page": 2, "limit": 5})
        assert response.status_code == 200
        assert response.data["total"] == 12
        assert (response.data["page"], response.data["limit"]) == (2, 5)
        assert [d["title"] for d in response.data["items"]] == [f"Drone {i}" for i in range(5, 10)]

    def test_list_drones_empty_catalog(self, api_client: APIClient):
        response = api_client.get(reverse("drone-list"))
        assert response.status_code == 200
        assert response.data == {"items": [], "page": 1, "limit": 10, "total": 0}

    def test_list_drones_filters(self, api_client: APIClient, make_drone):
        make_drone(title="Racer", category="racing", price=300, location="Madrid")
        make_drone(title="Cheap racer", category="racing", price=50, location="Sevilla")
        make_drone(title="Camera", category="photography", price=300, location="Madrid")
        response = api_client.get(
            reverse("drone-list"), {"category": "racing", "price_min": "100", "location": "madrid"}
        )
        assert [d["title"] for d in response.data["items"]] == ["Racer"]

    def test_invalid_numeric_params_are_ignored(self, api_client: APIClient, make_drone):
        make_drone()
        response = api_client.get(
            reverse("drone-list"), {"page": "x", "limit": "-3", "price_min": "abc", "price_max": ""}
        )
        assert response.status_code == 200
        assert response.data["total"] == 1
        assert (response.data["page"], response.data["limit"]) == (1, 10)


@pytest.mark.django_db
class TestDroneDetail:
    """Tests for GET/PUT/DELETE /api/drones/{ref}"""

    def test_get_drone_returns_details(self, api_client: APIClient, make_drone):
        row = make_drone(title="Mavic 3", price="1200.00")
        response = api_client.get(reverse("drone-detail", args=[row.id]))
        assert response.status_code == 200
        assert response.data["id"] == str(row.id)
        assert response.data["price"] == "1200.00"
        assert response.data["status"] == "active"
        assert response.data["is_sold"] is False
        assert response.data["ratings"] == []

    def test_get_drone_by_business_key(self, api_client: APIClient, make_drone):
        row = make_drone(external_id="SKU-42")
        response = api_client.get(reverse("drone-detail", args=["SKU-42"]))
        assert response.status_code == 200
        assert response.data["id"] == str(row.id)

    def test_get_drone_not_found(self, api_client: APIClient):
        response = api_client.get(reverse("drone-detail", args=[uuid.uuid4()]))
        assert response.status_code == 404
        assert response.data == {"code": "DRONE_NOT_FOUND", "message": "Drone not found"}

    def test_get_drone_malformed_id_is_not_found(self, api_client: APIClient):
        response = api_client.get(reverse("drone-detail", args=["not-an-id"]))
        assert response.status_code == 404

    def test_update_drone(self, api_client: APIClient, make_drone):
        row = make_drone(title="Old")
        response = api_client.patch(
            reverse("drone-detail", args=[row.id]), {"title": "New", "price": "10"}, format="json"
        )
        assert response.status_code == 200, response.data
        assert response.data["title"] == "New"
        assert response.data["price"] == "10.00"

    def test_update_status_is_conflict(self, api_client: APIClient, make_drone):
        row = make_drone()
        response = api_client.put(
            reverse("drone-detail", args=[row.id]), {"status": "sold"}, format="json"
        )
        assert response.status_code == 409
        assert response.data["code"] == "INVALID_TRANSITION"

    def test_update_missing_drone(self, api_client: APIClient):
        response = api_client.put(
            reverse("drone-detail", args=[uuid.uuid4()]), {"title": "X"}, format="json"
        )
        assert response.status_code == 404

    def test_delete_drone(self, api_client: APIClient, make_drone):
        row = make_drone()
        response = api_client.delete(reverse("drone-detail", args=[row.id]))
        assert response.status_code == 200
        assert not orm.Drone.objects.filter(pk=row.id).exists()
        again = api_client.delete(reverse("drone-detail", args=[row.id]))
        assert again.status_code == 404


@pytest.mark.django_db
class TestDroneCreate:
    """Tests for POST /api/drones"""

    def test_create_ignores_server_fields(self, api_client: APIClient, drone_payload):
        data = _create(
            api_client,
            {**drone_payload, "status": "sold", "ratings": [{"rating": 5}], "isSold": True},
        )
        assert data["status"] == "active"
        assert data["ratings"] == []

    def test_create_rejects_negative_price(self, api_client: APIClient, drone_payload):
        response = api_client.post(reverse("drone-list"), {**drone_payload, "price": "-5"}, format="json")
        assert response.status_code == 400
        assert orm.Drone.objects.count() == 0

    def test_create_with_unknown_owner(self, api_client: APIClient, drone_payload):
        response = api_client.post(
            reverse("drone-list"), {**drone_payload, "owner_id": str(uuid.uuid4())}, format="json"
        )
        assert response.status_code == 404
        assert response.data["code"] == "USER_NOT_FOUND"


@pytest.mark.django_db
class TestCategoryAndPriceRange:
    """Tests for GET /api/drones/category/{category} and /api/drones/price-range"""

    def test_list_by_category(self, api_client: APIClient, make_drone):
        make_drone(category="racing")
        make_drone(category="photography")
        response = api_client.get(reverse("drone-category", args=["racing"]))
        assert response.status_code == 200
        assert len(response.data) == 1

    def test_empty_category_is_empty_list(self, api_client: APIClient):
        response = api_client.get(reverse("drone-category", args=["delivery"]))
        assert response.status_code == 200
        assert response.data == []

    def test_price_range(self, api_client: APIClient, make_drone):
        make_drone(price=100)
        make_drone(price=200)
        response = api_client.get(reverse("drone-price-range"), {"min": "100", "max": "150"})
        assert response.status_code == 200
        assert [d["price"] for d in response.data] == ["100.00"]

    def test_inverted_price_range_is_empty(self, api_client: APIClient, make_drone):
        make_drone(price=75)
        response = api_client.get(reverse("drone-price-range"), {"min": "100", "max": "50"})
        assert response.status_code == 200
        assert response.data == []

    def test_non_numeric_price_range_is_bad_request(self, api_client: APIClient):
        response = api_client.get(reverse("drone-price-range"), {"min": "a", "max": "5"})
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_PRICE_RANGE"


@pytest.mark.django_db
class TestReviews:
    """Tests for POST /api/drones/{ref}/reviews"""

    def test_add_review(self, api_client: APIClient, make_drone):
        row = make_drone()
        reviewer = str(uuid.uuid4())
        response = api_client.post(
            reverse("drone-reviews", args=[row.id]),
            {"user_id": reviewer, "rating": 4, "comment": "fast"},
            format="json",
        )
        assert response.status_code == 200, response.data
        drone = response.data["drone"]
        assert drone["ratings"][0]["reviewer_id"] == reviewer
        assert drone["ratings"][0]["rating"] == 4
        assert drone["rating_count"] == 1
        assert drone["rating_average"] == 4.0

    @pytest.mark.parametrize("rating", [0, 6, 3.5])
    def test_invalid_rating(self, api_client: APIClient, make_drone, rating):
        row = make_drone()
        response = api_client.post(
            reverse("drone-reviews", args=[row.id]),
            {"user_id": str(uuid.uuid4()), "rating": rating},
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_RATING"
        assert not orm.Review.objects.exists()

    def test_invalid_reviewer(self, api_client: APIClient, make_drone):
        row = make_drone()
        response = api_client.post(
            reverse("drone-reviews", args=[row.id]), {"user_id": "user1", "rating": 4}, format="json"
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_USER_ID"

    def test_review_body_must_be_an_object(self, api_client: APIClient, make_drone):
        row = make_drone()
        response = api_client.post(
            reverse("drone-reviews", args=[row.id]), [{"rating": 4}], format="json"
        )
        assert response.status_code == 400
        assert not orm.Review.objects.exists()

    def test_review_missing_drone(self, api_client: APIClient):
        response = api_client.post(
            reverse("drone-reviews", args=[uuid.uuid4()]),
            {"user_id": str(uuid.uuid4()), "rating": 4},
            format="json",
        )
        assert response.status_code == 404


@pytest.mark.django_db
class TestSaleAndOwnership:
    """Tests for purchase, owner lookup and per-user listings."""

    def test_purchase_twice_stays_sold(self, api_client: APIClient, make_drone):
        row = make_drone()
        first = api_client.post(reverse("drone-purchase", args=[row.id]))
        second = api_client.post(reverse("drone-purchase", args=[row.id]))
        assert first.status_code == second.status_code == 200
        assert first.data["status"] == second.data["status"] == "sold"
        assert first.data["sold_at"] == second.data["sold_at"]

    def test_purchase_missing_drone(self, api_client: APIClient):
        response = api_client.post(reverse("drone-purchase", args=[uuid.uuid4()]))
        assert response.status_code == 404

    def test_get_owner(self, api_client: APIClient, make_drone, make_user):
        owner = make_user(user_name="seller")
        row = make_drone(owner=owner)
        response = api_client.get(reverse("drone-owner", args=[row.id]))
        assert response.status_code == 200
        assert response.data["user_name"] == "seller"
        assert "is_deleted" not in response.data

    def test_get_owner_soft_deleted(self, api_client: APIClient, make_drone, make_user):
        row = make_drone(owner=make_user(is_deleted=True))
        response = api_client.get(reverse("drone-owner", args=[row.id]))
        assert response.status_code == 404
        assert response.data["code"] == "USER_NOT_FOUND"

    def test_list_mine(self, api_client: APIClient, make_drone, make_user):
        owner = make_user()
        make_drone(owner=owner, title="A")
        make_drone(owner=owner, title="B", status="sold")
        response = api_client.get(reverse("user-drones", args=[owner.id]), {"status": "sold"})
        assert response.status_code == 200
        assert [d["title"] for d in response.data] == ["B"]


@pytest.mark.django_db
class TestFavorites:
    """Tests for /api/users/{user_id}/favorites"""

    def test_favorites_flow(self, api_client: APIClient, make_drone, make_user):
        user = make_user()
        drone = make_drone()
        url = reverse("user-favorite-detail", args=[user.id, drone.id])

        assert api_client.post(url).data == [str(drone.id)]
        assert api_client.post(url).data == [str(drone.id)]

        listing = api_client.get(reverse("user-favorites", args=[user.id]))
        assert listing.status_code == 200
        assert listing.data["total"] == 1
        assert listing.data["items"][0]["id"] == str(drone.id)

        assert api_client.delete(url).data == []
        assert api_client.delete(url).data == []

    def test_favorite_unknown_drone(self, api_client: APIClient, make_user):
        user = make_user()
        response = api_client.post(reverse("user-favorite-detail", args=[user.id, "d1"]))
        assert response.status_code == 404
        assert response.data["code"] == "DRONE_NOT_FOUND"
        assert not orm.Favorite.objects.exists()

    def test_favorites_unknown_user(self, api_client: APIClient):
        response = api_client.get(reverse("user-favorites", args=[uuid.uuid4()]))
        assert response.status_code == 404
        assert response.data["code"] == "USER_NOT_FOUND"

    def test_favorites_malformed_user(self, api_client: APIClient):
        response = api_client.get(reverse("user-favorites", args=["u1"]))
        assert response.status_code == 400


@pytest.mark.django_db
class TestMarketplaceScenario:
    """Create, review, sell, then browse by category."""

    def test_full_listing_lifecycle(self, api_client: APIClient):
        created = _create(
            api_client,
            {"title": "X1", "price": 500, "category": "racing", "condition": "new"},
        )
        assert created["status"] == "active"
        assert created["ratings"] == []

        reviewer = str(uuid.uuid4())
        reviewed = api_client.post(
            reverse("drone-reviews", args=[created["id"]]),
            {"user_id": reviewer, "rating": 4, "comment": "fast"},
            format="json",
        )
        ratings = reviewed.data["drone"]["ratings"]
        assert [(r["reviewer_id"], r["rating"], r["comment"]) for r in ratings] == [
            (reviewer, 4, "fast")
        ]

        sold = api_client.post(reverse("drone-purchase", args=[created["id"]]))
        assert sold.data["status"] == "sold"

        listing = api_client.get(reverse("drone-list"), {"page": 1, "limit": 10, "category": "racing"})
        assert [d["id"] for d in listing.data["items"]] == [created["id"]]


@pytest.mark.django_db
class TestStoreFailure:
    """Store failures surface as 503 without internal details."""

    def test_store_failure_is_service_unavailable(self, api_client: APIClient, monkeypatch):
        from django.db import OperationalError

        from drones.stores.django_store import DjangoDroneStore

        def broken(self):
            raise OperationalError("connection refused")

        monkeypatch.setattr(DjangoDroneStore, "_queryset", broken)
        response = api_client.get(reverse("drone-list"))
        assert response.status_code == 503
        assert response.data["code"] == "STORE_FAILURE"
        assert "connection refused" not in response.data["message"]
