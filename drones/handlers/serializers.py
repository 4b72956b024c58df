"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from drones.domain import Category, Condition, DroneStatus


class ReviewSerializer(serializers.Serializer):
    """Serializer for Review domain model."""

    reviewer_id = serializers.SerializerMethodField()
    rating = serializers.SerializerMethodField()
    comment = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)

    def get_reviewer_id(self, review) -> str:
        return str(review.reviewer_id)

    def get_rating(self, review) -> int:
        return review.rating.value


class DroneSerializer(serializers.Serializer):
    """Serializer for Drone domain model."""

    id = serializers.SerializerMethodField()
    external_id = serializers.CharField(allow_null=True)
    owner_id = serializers.SerializerMethodField()
    title = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField()
    condition = serializers.CharField()
    location = serializers.CharField()
    price = serializers.DecimalField(source="price.amount", max_digits=12, decimal_places=2)
    status = serializers.CharField()
    is_sold = serializers.BooleanField()
    is_service = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    sold_at = serializers.DateTimeField(allow_null=True)
    ratings = ReviewSerializer(many=True)
    rating_count = serializers.SerializerMethodField()
    rating_average = serializers.SerializerMethodField()

    def get_id(self, drone) -> str:
        return str(drone.id)

    def get_owner_id(self, drone) -> str | None:
        return str(drone.owner_id) if drone.owner_id is not None else None

    def get_rating_count(self, drone) -> int:
        return len(drone.ratings)

    def get_rating_average(self, drone) -> float | None:
        if not drone.ratings:
            return None
        return round(sum(r.rating.value for r in drone.ratings) / len(drone.ratings), 2)


class UserSerializer(serializers.Serializer):
    """Serializer for User domain model."""

    id = serializers.SerializerMethodField()
    user_name = serializers.CharField()
    email = serializers.EmailField()
    role = serializers.CharField()

    def get_id(self, user) -> str:
        return str(user.id)


class DroneWriteSerializer(serializers.Serializer):
    """Input format for creating (full) and updating (partial) a listing.

    Server-controlled fields are not declared, so they never reach the
    service from HTTP. ``status`` is accepted only so a status change can be
    rejected explicitly on update.
    """

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=[c.value for c in Category])
    condition = serializers.ChoiceField(choices=[c.value for c in Condition])
    location = serializers.CharField(required=False, allow_blank=True, max_length=255)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    owner_id = serializers.UUIDField(required=False, allow_null=True)
    external_id = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=64
    )
    status = serializers.ChoiceField(choices=[s.value for s in DroneStatus], required=False)
