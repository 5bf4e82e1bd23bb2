"""
Gym service - gym records and search.

Search supports several filter strategies but runs exactly one per call,
picked by a fixed precedence (see ``search_gyms``).
"""

import logging
from typing import Optional

from gymdir.domain.entities import Gym, Photo
from gymdir.domain.pagination import Page, PageRequest
from gymdir.domain.requests import GymCreateUpdateRequest
from gymdir.exceptions import GymNotFoundError
from gymdir.repositories.gym_index import GymIndex
from gymdir.services.geo_locator import GeoLocator
from gymdir.utils.locks import KeyedLock
from gymdir.utils.timezone import utc_now

logger = logging.getLogger(__name__)


def _photos_from_ids(photo_ids: list[str]) -> list[Photo]:
    now = utc_now()
    return [Photo(url=photo_id, upload_date=now) for photo_id in photo_ids]


class GymService:
    def __init__(self, index: GymIndex, geo_locator: GeoLocator, gym_locks: KeyedLock):
        self.index = index
        self.geo_locator = geo_locator
        self.gym_locks = gym_locks

    async def create_gym(self, request: GymCreateUpdateRequest) -> Gym:
        geo_location = self.geo_locator.geo_locate(request.address)

        gym = Gym(
            name=request.name,
            gym_type=request.gym_type,
            contact_information=request.contact_information,
            address=request.address,
            geo_location=geo_location.to_geo_point(),
            operating_hours=request.operating_hours,
            average_rating=0.0,
            photos=_photos_from_ids(request.photo_ids),
            reviews=[],
        )
        saved = await self.index.save(gym)
        logger.info("Created gym %s (%s)", saved.id, saved.name)
        return saved

    async def update_gym(self, gym_id: str, request: GymCreateUpdateRequest) -> Gym:
        """
        Overwrite a gym's listing details.

        Reviews and the average rating are not part of the request and are
        left as stored.
        """
        async with self.gym_locks.hold(gym_id):
            gym = await self.index.find_by_id(gym_id)
            if gym is None:
                raise GymNotFoundError(gym_id)

            geo_location = self.geo_locator.geo_locate(request.address)

            gym.name = request.name
            gym.gym_type = request.gym_type
            gym.contact_information = request.contact_information
            gym.address = request.address
            gym.geo_location = geo_location.to_geo_point()
            gym.operating_hours = request.operating_hours
            gym.photos = _photos_from_ids(request.photo_ids)

            saved = await self.index.save(gym)

        logger.info("Updated gym %s", gym_id)
        return saved

    async def get_gym(self, gym_id: str) -> Optional[Gym]:
        return await self.index.find_by_id(gym_id)

    async def delete_gym(self, gym_id: str) -> None:
        async with self.gym_locks.hold(gym_id):
            deleted = await self.index.delete(gym_id)
        if not deleted:
            raise GymNotFoundError(gym_id)
        logger.info("Deleted gym %s", gym_id)

    async def search_gyms(
        self,
        query: Optional[str],
        min_rating: Optional[float],
        latitude: Optional[float],
        longitude: Optional[float],
        radius: Optional[float],
        page_request: PageRequest,
    ) -> Page[Gym]:
        """
        Run one search strategy, chosen by precedence:

        1. ``min_rating`` with no usable query: rating floor only.
        2. Non-blank ``query``: fuzzy name/type match, rating floor
           ``min_rating`` (or 0) as a required condition.
        3. ``latitude``, ``longitude`` and ``radius`` (meters): geo radius.
        4. Everything.

        Filters are never combined across rules, e.g. a text query ignores
        the geo parameters entirely.
        """
        has_query = query is not None and query.strip() != ""

        if min_rating is not None and not has_query:
            logger.debug("Gym search: rating floor %.2f", min_rating)
            return await self.index.find_by_min_rating(min_rating, page_request)

        if has_query:
            search_min_rating = min_rating if min_rating is not None else 0.0
            logger.debug("Gym search: query %r, rating floor %.2f", query, search_min_rating)
            return await self.index.find_by_query_and_min_rating(
                query.strip(), search_min_rating, page_request
            )

        if latitude is not None and longitude is not None and radius is not None:
            logger.debug("Gym search: %.5f,%.5f within %.0fm", latitude, longitude, radius)
            return await self.index.find_by_location_near(latitude, longitude, radius, page_request)

        return await self.index.find_all(page_request)
