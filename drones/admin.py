from django.contrib import admin

from drones.models import Drone, Favorite, Review, User


class ReviewInline(admin.TabularInline):
    model = Review
    extra = 0


class FavoriteInline(admin.TabularInline):
    model = Favorite
    extra = 0


@admin.register(Drone)
class DroneAdmin(admin.ModelAdmin):
    list_display = ["title", "category", "condition", "price", "status", "created_at"]
    list_filter = ["status", "category", "condition"]
    search_fields = ["title", "description", "location", "external_id"]
    readonly_fields = ["created_at", "updated_at", "sold_at"]
    inlines = [ReviewInline]


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ["user_name", "email", "role", "is_deleted"]
    list_filter = ["role", "is_deleted"]
    search_fields = ["user_name", "email"]
    inlines = [FavoriteInline]
