from django.urls import path

from drones.handlers import (
    DroneCategoryView,
    DroneDetailView,
    DroneListView,
    DroneOwnerView,
    DronePriceRangeView,
    DronePurchaseView,
    DroneReviewView,
    UserDronesView,
    UserFavoriteDetailView,
    UserFavoritesView,
)

urlpatterns = [
    path("drones", DroneListView.as_view(), name="drone-list"),
    path("drones/price-range", DronePriceRangeView.as_view(), name="drone-price-range"),
    path(
        "drones/category/<str:category>",
        DroneCategoryView.as_view(),
        name="drone-category",
    ),
    path("drones/<str:ref>", DroneDetailView.as_view(), name="drone-detail"),
    path("drones/<str:ref>/owner", DroneOwnerView.as_view(), name="drone-owner"),
    path("drones/<str:ref>/reviews", DroneReviewView.as_view(), name="drone-reviews"),
    path("drones/<str:ref>/purchase", DronePurchaseView.as_view(), name="drone-purchase"),
    path(
        "users/<str:user_id>/favorites",
        UserFavoritesView.as_view(),
        name="user-favorites",
    ),
    path(
        "users/<str:user_id>/favorites/<str:drone_ref>",
        UserFavoriteDetailView.as_view(),
        name="user-favorite-detail",
    ),
    path("users/<str:user_id>/drones", UserDronesView.as_view(), name="user-drones"),
]
