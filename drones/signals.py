"""Django signals for cache invalidation.

The store invalidates after its own writes; these receivers cover writes that
bypass it, such as the admin.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from drones.cache import invalidate_drone
from drones.models import Drone, Review


@receiver([post_save, post_delete], sender=Drone)
def invalidate_drone_cache(sender, instance, **kwargs):
    """Invalidate the detail cache when a drone is saved or deleted."""
    invalidate_drone(instance.pk)


@receiver([post_save, post_delete], sender=Review)
def invalidate_review_cache(sender, instance, **kwargs):
    """Invalidate the owning drone's detail cache when a review changes."""
    invalidate_drone(instance.drone_id)
