"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from drones.domain.value_objects import Category, Condition, DroneStatus, Rating, UserRole


def _choices(enum) -> list[tuple[str, str]]:
    return [(member.value, member.value.replace("_", " ").title()) for member in enum]


class User(models.Model):
    """Persistence model for marketplace accounts (favorites owner)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=_choices(UserRole), default=UserRole.USER.value)
    is_deleted = models.BooleanField(default=False)
    favorites = models.ManyToManyField(
        "Drone", through="Favorite", related_name="favorited_by", blank=True
    )

    def __str__(self) -> str:
        return self.user_name


class Drone(models.Model):
    """Persistence model for drone listings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    external_id = models.CharField(max_length=64, unique=True, null=True, blank=True)
    owner = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="drones"
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=32, choices=_choices(Category))
    condition = models.CharField(max_length=32, choices=_choices(Condition))
    location = models.CharField(max_length=255, blank=True)
    price = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )
    status = models.CharField(
        max_length=16, choices=_choices(DroneStatus), default=DroneStatus.ACTIVE.value
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    sold_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["created_at", "id"], name="drone_created_idx"),
            models.Index(fields=["category"], name="drone_category_idx"),
            models.Index(fields=["owner", "status"], name="drone_owner_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="drone_price_non_negative"),
        ]

    def __str__(self) -> str:
        return self.title


class Review(models.Model):
    """Persistence model for a rating appended to a drone."""

    drone = models.ForeignKey(Drone, on_delete=models.CASCADE, related_name="ratings")
    reviewer_id = models.UUIDField()
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(Rating.MIN), MaxValueValidator(Rating.MAX)]
    )
    comment = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=Rating.MIN, rating__lte=Rating.MAX),
                name="review_rating_in_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.rating} for {self.drone_id}"


class Favorite(models.Model):
    """Persistence model for the user ↔ drone favorites relation."""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="favorite_links")
    drone = models.ForeignKey(Drone, on_delete=models.CASCADE, related_name="favorite_links")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "drone"], name="uniq_favorite_user_drone"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} -> {self.drone_id}"
