"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to drones.handlers.errors
- Never contain business logic
"""

from collections.abc import Mapping

from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from drones.conf import catalog_setting
from drones.domain import DroneFilters, Page, PageRequest
from drones.handlers.serializers import DroneSerializer, DroneWriteSerializer, UserSerializer
from drones.services.catalog_service import CatalogService
from drones.services.favorites_service import FavoritesService
from drones.services.lifecycle_service import LifecycleService
from drones.services.review_service import ReviewService
from drones.stores.django_store import DjangoDroneStore, DjangoUserStore


def catalog_service() -> CatalogService:
    return CatalogService(DjangoDroneStore(), DjangoUserStore())


def favorites_service() -> FavoritesService:
    return FavoritesService(DjangoDroneStore(), DjangoUserStore())


def review_service() -> ReviewService:
    return ReviewService(DjangoDroneStore())


def lifecycle_service() -> LifecycleService:
    return LifecycleService(DjangoDroneStore(), DjangoUserStore())


def _page_request(request: Request) -> PageRequest:
    return PageRequest.from_params(
        request.query_params.get("page"),
        request.query_params.get("limit"),
        default_limit=catalog_setting("DEFAULT_PAGE_SIZE"),
        max_limit=catalog_setting("MAX_PAGE_SIZE"),
    )


def _page_response(page: Page) -> Response:
    return Response(
        {
            "items": DroneSerializer(page.items, many=True).data,
            "page": page.page,
            "limit": page.limit,
            "total": page.total,
        }
    )


class DroneListView(APIView):
    """Handler for GET/POST /api/drones"""

    def get(self, request: Request) -> Response:
        filters = DroneFilters.from_params(request.query_params)
        page = catalog_service().list_drones(_page_request(request), filters)
        return _page_response(page)

    def post(self, request: Request) -> Response:
        serializer = DroneWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        drone = catalog_service().create_drone(serializer.validated_data)
        return Response(DroneSerializer(drone).data, status=status.HTTP_201_CREATED)


class DroneDetailView(APIView):
    """Handler for GET/PUT/PATCH/DELETE /api/drones/{ref}"""

    def get(self, request: Request, ref: str) -> Response:
        drone = catalog_service().get_drone(ref)
        return Response(DroneSerializer(drone).data)

    def put(self, request: Request, ref: str) -> Response:
        serializer = DroneWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        drone = catalog_service().update_drone(ref, serializer.validated_data)
        return Response(DroneSerializer(drone).data)

    patch = put

    def delete(self, request: Request, ref: str) -> Response:
        catalog_service().delete_drone(ref)
        return Response({"message": "Drone deleted"})


class DroneOwnerView(APIView):
    """Handler for GET /api/drones/{ref}/owner"""

    def get(self, request: Request, ref: str) -> Response:
        owner = lifecycle_service().get_owner(ref)
        return Response(UserSerializer(owner).data)


class DroneCategoryView(APIView):
    """Handler for GET /api/drones/category/{category}"""

    def get(self, request: Request, category: str) -> Response:
        drones = catalog_service().list_by_category(category)
        return Response(DroneSerializer(drones, many=True).data)


class DronePriceRangeView(APIView):
    """Handler for GET /api/drones/price-range?min=&max="""

    def get(self, request: Request) -> Response:
        drones = catalog_service().list_by_price_range(
            request.query_params.get("min"), request.query_params.get("max")
        )
        return Response(DroneSerializer(drones, many=True).data)


class DroneReviewView(APIView):
    """Handler for POST /api/drones/{ref}/reviews

    The body must be a JSON object. Its fields are passed through unparsed
    so the review checks run in their documented order.
    """

    def post(self, request: Request, ref: str) -> Response:
        if not isinstance(request.data, Mapping):
            raise ParseError("Expected a JSON object.")
        drone = review_service().add_review(
            ref,
            request.data.get("user_id"),
            request.data.get("rating"),
            request.data.get("comment"),
        )
        return Response({"message": "Review added", "drone": DroneSerializer(drone).data})


class DronePurchaseView(APIView):
    """Handler for POST /api/drones/{ref}/purchase"""

    def post(self, request: Request, ref: str) -> Response:
        drone = lifecycle_service().mark_sold(ref)
        return Response(DroneSerializer(drone).data)


class UserFavoritesView(APIView):
    """Handler for GET /api/users/{user_id}/favorites"""

    def get(self, request: Request, user_id: str) -> Response:
        page = favorites_service().list_favorites(user_id, _page_request(request))
        return _page_response(page)


class UserFavoriteDetailView(APIView):
    """Handler for POST/DELETE /api/users/{user_id}/favorites/{drone_ref}"""

    def post(self, request: Request, user_id: str, drone_ref: str) -> Response:
        favorites = favorites_service().add_favorite(user_id, drone_ref)
        return Response([str(drone_id) for drone_id in favorites])

    def delete(self, request: Request, user_id: str, drone_ref: str) -> Response:
        favorites = favorites_service().remove_favorite(user_id, drone_ref)
        return Response([str(drone_id) for drone_id in favorites])


class UserDronesView(APIView):
    """Handler for GET /api/users/{user_id}/drones?status="""

    def get(self, request: Request, user_id: str) -> Response:
        drones = lifecycle_service().list_mine(user_id, request.query_params.get("status"))
        return Response(DroneSerializer(drones, many=True).data)
