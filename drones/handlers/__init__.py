from drones.handlers.views import (
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

__all__ = [
    "DroneListView",
    "DroneDetailView",
    "DroneOwnerView",
    "DroneCategoryView",
    "DronePriceRangeView",
    "DroneReviewView",
    "DronePurchaseView",
    "UserFavoritesView",
    "UserFavoriteDetailView",
    "UserDronesView",
]
