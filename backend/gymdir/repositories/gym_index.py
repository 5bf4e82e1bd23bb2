"""
Gym index - document repository for the Gym aggregate.

Each gym is one row holding the serialized aggregate plus a few
denormalized columns used for filtering. Saves are versioned: an update
only succeeds when the stored version still matches the version the
caller loaded.
"""

import logging
import uuid
from typing import Optional, Protocol

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gymdir.domain.entities import Gym
from gymdir.domain.pagination import Page, PageRequest
from gymdir.exceptions import ConcurrentModificationError, GymNotFoundError
from gymdir.models import GymDocument
from gymdir.utils.fuzzy import match_distance
from gymdir.utils.geo import bounding_box, haversine_meters

logger = logging.getLogger(__name__)


class GymIndex(Protocol):
    """Storage boundary used by the gym and review services."""

    async def save(self, gym: Gym) -> Gym: ...

    async def find_by_id(self, gym_id: str) -> Optional[Gym]: ...

    async def find_all(self, page_request: PageRequest) -> Page[Gym]: ...

    async def find_by_min_rating(self, min_rating: float, page_request: PageRequest) -> Page[Gym]: ...

    async def find_by_query_and_min_rating(
        self, query: str, min_rating: float, page_request: PageRequest
    ) -> Page[Gym]: ...

    async def find_by_location_near(
        self, latitude: float, longitude: float, radius_meters: float, page_request: PageRequest
    ) -> Page[Gym]: ...

    async def delete(self, gym_id: str) -> bool: ...


def _to_document(gym: Gym) -> dict:
    return gym.model_dump(mode="json", exclude={"id", "version"})


def _to_gym(row: GymDocument) -> Gym:
    return Gym.model_validate({**row.document, "id": row.id, "version": row.version})


def _indexed_columns(gym: Gym) -> dict:
    return {
        "name": gym.name,
        "gym_type": gym.gym_type,
        "average_rating": gym.average_rating,
        "latitude": gym.geo_location.lat if gym.geo_location else None,
        "longitude": gym.geo_location.lon if gym.geo_location else None,
    }


class SqlGymIndex:
    """GymIndex backed by a SQLAlchemy async session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def save(self, gym: Gym) -> Gym:
        """
        Persist the whole aggregate and return it with its new id/version.

        Raises ConcurrentModificationError when the stored version moved on
        since ``gym`` was loaded, and GymNotFoundError when an existing id
        no longer has a row.
        """
        if gym.id is None:
            saved = gym.model_copy(update={"id": str(uuid.uuid4()), "version": 1})
            await self.db.execute(
                insert(GymDocument).values(
                    id=saved.id,
                    version=saved.version,
                    document=_to_document(saved),
                    **_indexed_columns(saved),
                )
            )
            await self.db.commit()
            logger.debug("Inserted gym %s", saved.id)
            return saved

        saved = gym.model_copy(update={"version": gym.version + 1})
        result = await self.db.execute(
            update(GymDocument)
            .where(GymDocument.id == gym.id, GymDocument.version == gym.version)
            .values(
                version=saved.version,
                document=_to_document(saved),
                **_indexed_columns(saved),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            exists = await self.db.scalar(
                select(func.count()).select_from(GymDocument).where(GymDocument.id == gym.id)
            )
            if not exists:
                raise GymNotFoundError(gym.id)
            raise ConcurrentModificationError(gym.id, gym.version)

        await self.db.commit()
        logger.debug("Updated gym %s to version %d", saved.id, saved.version)
        return saved

    async def delete(self, gym_id: str) -> bool:
        result = await self.db.execute(
            delete(GymDocument)
            .where(GymDocument.id == gym_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        return result.rowcount > 0

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def find_by_id(self, gym_id: str) -> Optional[Gym]:
        result = await self.db.execute(
            select(GymDocument)
            .where(GymDocument.id == gym_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _to_gym(row) if row else None

    async def find_all(self, page_request: PageRequest) -> Page[Gym]:
        return await self._page_where(None, page_request)

    async def find_by_min_rating(self, min_rating: float, page_request: PageRequest) -> Page[Gym]:
        return await self._page_where(GymDocument.average_rating >= min_rating, page_request)

    async def find_by_query_and_min_rating(
        self, query: str, min_rating: float, page_request: PageRequest
    ) -> Page[Gym]:
        """
        Gyms rated at least ``min_rating`` whose name or type fuzzily
        matches ``query``, closest matches first.
        """
        result = await self.db.execute(
            select(GymDocument.id, GymDocument.name, GymDocument.gym_type)
            .where(GymDocument.average_rating >= min_rating)
        )

        scored = []
        for gym_id, name, gym_type in result.all():
            distances = [
                d for d in (match_distance(query, name), match_distance(query, gym_type))
                if d is not None
            ]
            if distances:
                scored.append((min(distances), name.lower(), gym_id))
        scored.sort()

        return await self._page_of_ids([gym_id for _, _, gym_id in scored], page_request)

    async def find_by_location_near(
        self, latitude: float, longitude: float, radius_meters: float, page_request: PageRequest
    ) -> Page[Gym]:
        """Gyms within ``radius_meters`` of the point, nearest first."""
        min_lat, max_lat, min_lon, max_lon = bounding_box(latitude, longitude, radius_meters)

        query = select(GymDocument.id, GymDocument.latitude, GymDocument.longitude).where(
            GymDocument.latitude.is_not(None),
            GymDocument.longitude.is_not(None),
            GymDocument.latitude.between(min_lat, max_lat),
        )
        # Boxes crossing the antimeridian are only filtered by latitude
        if min_lon >= -180.0 and max_lon <= 180.0:
            query = query.where(GymDocument.longitude.between(min_lon, max_lon))

        result = await self.db.execute(query)

        nearby = []
        for gym_id, lat, lon in result.all():
            distance = haversine_meters(latitude, longitude, lat, lon)
            if distance <= radius_meters:
                nearby.append((distance, gym_id))
        nearby.sort()

        return await self._page_of_ids([gym_id for _, gym_id in nearby], page_request)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _page_where(self, condition, page_request: PageRequest) -> Page[Gym]:
        count_query = select(func.count()).select_from(GymDocument)
        query = (
            select(GymDocument)
            .order_by(GymDocument.name, GymDocument.id)
            .execution_options(populate_existing=True)
        )
        if condition is not None:
            count_query = count_query.where(condition)
            query = query.where(condition)

        total = await self.db.scalar(count_query) or 0
        result = await self.db.execute(
            query.offset(page_request.offset).limit(page_request.size)
        )
        return Page(
            content=[_to_gym(row) for row in result.scalars().all()],
            number=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    async def _page_of_ids(self, ordered_ids: list[str], page_request: PageRequest) -> Page[Gym]:
        """Load one page worth of gyms from an already ranked id list."""
        start = page_request.offset
        page_ids = ordered_ids[start:start + page_request.size]

        gyms: list[Gym] = []
        if page_ids:
            result = await self.db.execute(
                select(GymDocument)
                .where(GymDocument.id.in_(page_ids))
                .execution_options(populate_existing=True)
            )
            by_id = {row.id: _to_gym(row) for row in result.scalars().all()}
            gyms = [by_id[gym_id] for gym_id in page_ids if gym_id in by_id]

        return Page(
            content=gyms,
            number=page_request.page,
            size=page_request.size,
            total_elements=len(ordered_ids),
        )
