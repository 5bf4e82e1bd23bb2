"""
Review service - creates, edits and lists the reviews embedded in a gym.

Rules:
- One review per author per gym.
- Only the author may edit a review, and only within the edit window
  counted from the review's last edit.
- The gym's average rating is recomputed on every change.

Every write loads the whole gym, changes it in memory and saves it back.
Writes for the same gym are serialized with a per-gym lock; the index's
version check rejects writers from other processes that raced us.
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional

from gymdir.config import Settings, get_settings
from gymdir.domain.entities import Gym, Photo, Review, User
from gymdir.domain.pagination import Direction, Page, PageRequest, SortOrder, paginate, sort_items
from gymdir.domain.requests import ReviewCreateUpdateRequest
from gymdir.exceptions import (
    GymNotFoundError,
    ReviewIntegrityError,
    ReviewNotAllowedError,
    ReviewNotFoundError,
)
from gymdir.repositories.gym_index import GymIndex
from gymdir.utils.locks import KeyedLock
from gymdir.utils.timezone import ensure_utc, utc_now

logger = logging.getLogger(__name__)

DEFAULT_REVIEW_SORT = SortOrder("datePosted", Direction.DESC)

REVIEW_SORT_KEYS: dict[str, Callable[[Review], object]] = {
    "datePosted": lambda review: ensure_utc(review.date_posted),
    "date_posted": lambda review: ensure_utc(review.date_posted),
    "rating": lambda review: review.rating,
}


class ReviewService:
    def __init__(
        self,
        index: GymIndex,
        gym_locks: KeyedLock,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        settings = settings or get_settings()
        self.index = index
        self.gym_locks = gym_locks
        self.edit_window = timedelta(hours=settings.review_edit_window_hours)
        self.min_rating = settings.review_min_rating
        self.max_rating = settings.review_max_rating
        self.clock = clock

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create_review(
        self, author: User, gym_id: str, request: ReviewCreateUpdateRequest
    ) -> Review:
        async with self.gym_locks.hold(gym_id):
            gym = await self._get_gym_or_raise(gym_id)

            if gym.has_review_by(author.id):
                logger.warning("Author %s already reviewed gym %s", author.id, gym_id)
                raise ReviewNotAllowedError(f"author with id {author.id} already wrote a review")
            self._check_rating(request.rating)

            now = self.clock()
            review = Review(
                id=str(uuid.uuid4()),
                content=request.content,
                rating=request.rating,
                date_posted=now,
                last_edited=now,
                photos=self._photos(request.photo_ids, now),
                written_by=author.model_copy(),
            )

            gym.reviews.append(review)
            gym.recompute_average_rating()
            await self.index.save(gym)

            stored_gym = await self.index.find_by_id(gym_id)

        stored = stored_gym.find_review(review.id) if stored_gym else None
        if stored is None:
            logger.critical(
                "Review %s missing from gym %s right after saving it", review.id, gym_id
            )
            raise ReviewIntegrityError(f"error retrieving created review {review.id}")

        logger.info("Created review %s for gym %s by %s", review.id, gym_id, author.id)
        return stored

    async def update_review(
        self, user: User, gym_id: str, review_id: str, request: ReviewCreateUpdateRequest
    ) -> Review:
        async with self.gym_locks.hold(gym_id):
            gym = await self._get_gym_or_raise(gym_id)

            existing = gym.find_review(review_id)
            if existing is None:
                raise ReviewNotFoundError(gym_id, review_id)

            if existing.written_by.id != user.id:
                logger.warning(
                    "User %s tried to edit review %s written by %s",
                    user.id, review_id, existing.written_by.id,
                )
                raise ReviewNotAllowedError("only the author can edit a review")

            now = self.clock()
            if now > ensure_utc(existing.last_edited) + self.edit_window:
                logger.warning("Edit window closed for review %s", review_id)
                raise ReviewNotAllowedError("review can no longer be edited")
            self._check_rating(request.rating)

            updated = existing.model_copy(update={
                "content": request.content,
                "rating": request.rating,
                "photos": self._photos(request.photo_ids, now),
                "last_edited": now,
            })

            # An edited review moves to the end of the list
            gym.reviews = [r for r in gym.reviews if r.id != review_id]
            gym.reviews.append(updated)
            gym.recompute_average_rating()
            await self.index.save(gym)

            stored_gym = await self.index.find_by_id(gym_id)

        stored = stored_gym.find_review(review_id) if stored_gym else None
        if stored is None:
            logger.critical(
                "Review %s missing from gym %s right after updating it", review_id, gym_id
            )
            raise ReviewIntegrityError(f"error retrieving updated review {review_id}")

        logger.info("Updated review %s for gym %s", review_id, gym_id)
        return stored

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_reviews(self, gym_id: str, page_request: PageRequest) -> Page[Review]:
        """
        One page of a gym's reviews.

        Only the first sort order is applied. Unknown sort properties sort
        by date posted. Without a sort, newest reviews come first.
        """
        gym = await self._get_gym_or_raise(gym_id)
        ordered = sort_items(
            gym.reviews, page_request.first_order, REVIEW_SORT_KEYS, DEFAULT_REVIEW_SORT
        )
        return paginate(ordered, page_request)

    async def get_review(self, gym_id: str, review_id: str) -> Optional[Review]:
        gym = await self._get_gym_or_raise(gym_id)
        return gym.find_review(review_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _get_gym_or_raise(self, gym_id: str) -> Gym:
        gym = await self.index.find_by_id(gym_id)
        if gym is None:
            raise GymNotFoundError(gym_id)
        return gym

    def _check_rating(self, rating: int) -> None:
        if not self.min_rating <= rating <= self.max_rating:
            raise ReviewNotAllowedError(
                f"rating must be between {self.min_rating} and {self.max_rating}"
            )

    @staticmethod
    def _photos(photo_ids: Optional[list[str]], now: datetime) -> list[Photo]:
        return [Photo(url=photo_id, upload_date=now) for photo_id in photo_ids or []]
