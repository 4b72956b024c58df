"""Review service: appends ratings to listings."""

from typing import Any

import structlog

from drones.domain import Drone, Rating, Review, UserId
from drones.domain.errors import DroneNotFoundError, InvalidRatingError, InvalidUserIdError
from drones.services.resolution import DroneResolver
from drones.stores.interfaces import DroneStore

logger = structlog.get_logger(__name__)


class ReviewService:
    """Service for attaching reviews to drone listings.

    A reviewer may rate the same listing more than once; every review is
    kept. No aggregate score is stored, consumers derive it from ``ratings``.
    """

    def __init__(self, store: DroneStore) -> None:
        self._store = store
        self._resolver = DroneResolver(store)

    def add_review(
        self, drone_ref: str, reviewer_ref: Any, rating: Any, comment: str | None = None
    ) -> Drone:
        """Append a review and return the updated listing.

        Checks run in order and stop at the first failure, before anything is
        written.

        Raises:
            InvalidUserIdError: If the reviewer ID is malformed.
            InvalidRatingError: If rating is not an integer from 1 to 5.
            DroneNotFoundError: If the listing does not exist.
        """
        try:
            reviewer_id = UserId.from_string(reviewer_ref)
        except ValueError:
            raise InvalidUserIdError() from None

        try:
            score = Rating(rating)
        except ValueError:
            raise InvalidRatingError() from None

        drone = self._resolver.resolve(drone_ref)
        if drone is None:
            raise DroneNotFoundError(str(drone_ref))

        text = comment.strip() if isinstance(comment, str) else None
        review = Review(reviewer_id=reviewer_id, rating=score, comment=text or None)
        if not self._store.append_review(drone.id, review):
            raise DroneNotFoundError(str(drone_ref))

        updated = self._store.get_drone(drone.id)
        if updated is None:
            raise DroneNotFoundError(str(drone_ref))
        logger.info(
            "review_added",
            drone_id=str(drone.id),
            reviewer_id=str(reviewer_id),
            rating=score.value,
        )
        return updated
