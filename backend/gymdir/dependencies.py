"""
Service dependencies for FastAPI routes.

Services are built per request around the request's database session.
The per-gym lock registry and the photo store live for the whole process.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gymdir.config import get_settings
from gymdir.database import get_db
from gymdir.repositories.gym_index import SqlGymIndex
from gymdir.services.geo_locator import GeoLocator, RandomGeoLocator
from gymdir.services.gym_service import GymService
from gymdir.services.photo_service import PhotoService
from gymdir.services.review_service import ReviewService
from gymdir.services.storage import FileSystemPhotoStore
from gymdir.utils.locks import KeyedLock

# Shared by gym and review writes so both serialize on the same gym id
gym_locks = KeyedLock()


@lru_cache
def get_geo_locator() -> GeoLocator:
    return RandomGeoLocator(get_settings())


@lru_cache
def get_photo_store() -> FileSystemPhotoStore:
    return FileSystemPhotoStore(get_settings().storage_location)


def get_gym_index(db: AsyncSession = Depends(get_db)) -> SqlGymIndex:
    return SqlGymIndex(db)


def get_gym_service(
    index: SqlGymIndex = Depends(get_gym_index),
    geo_locator: GeoLocator = Depends(get_geo_locator),
) -> GymService:
    return GymService(index, geo_locator, gym_locks)


def get_review_service(index: SqlGymIndex = Depends(get_gym_index)) -> ReviewService:
    return ReviewService(index, gym_locks, get_settings())


def get_photo_service(
    store: FileSystemPhotoStore = Depends(get_photo_store),
) -> PhotoService:
    return PhotoService(store)
