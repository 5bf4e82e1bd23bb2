"""
Shared builders for the test suite.
"""

from datetime import datetime, timedelta
from typing import Optional

from gymdir.database import Base, engine
from gymdir.domain.entities import (
    Address,
    GeoLocation,
    GeoPoint,
    Gym,
    OperatingHours,
    Photo,
    Review,
    TimeRange,
    User,
)
from gymdir.domain.requests import GymCreateUpdateRequest, ReviewCreateUpdateRequest
from gymdir.models import GymDocument  # noqa: F401
from gymdir.utils.timezone import utc_now

ALICE = User(id="user-alice", username="alice", given_name="Alice", family_name="Meyer")
BOB = User(id="user-bob", username="bob", given_name="Bob", family_name="Schulz")


async def reset_db() -> None:
    """Drop and recreate all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


def make_address(**overrides) -> Address:
    data = dict(
        street_number="12",
        street_name="Reeperbahn",
        city="Hamburg",
        state="Hamburg",
        postal_code="20359",
        country="Germany",
    )
    data.update(overrides)
    return Address(**data)


def make_hours() -> OperatingHours:
    weekday = TimeRange(open_time="06:00", close_time="23:00")
    return OperatingHours(monday=weekday, tuesday=weekday, friday=weekday)


def make_gym_request(name: str = "Iron Forge Fitness", gym_type: str = "Fitness", **overrides) -> GymCreateUpdateRequest:
    data = dict(
        name=name,
        gym_type=gym_type,
        contact_information="+49 40 1234567",
        address=make_address(),
        operating_hours=make_hours(),
        photo_ids=["image1.jpg"],
    )
    data.update(overrides)
    return GymCreateUpdateRequest(**data)


def make_gym(
    name: str = "Iron Forge Fitness",
    gym_type: str = "Fitness",
    average_rating: float = 0.0,
    lat: float = 53.55,
    lon: float = 9.99,
    reviews: Optional[list[Review]] = None,
) -> Gym:
    """An unsaved gym; ``average_rating`` is taken as given."""
    return Gym(
        name=name,
        gym_type=gym_type,
        contact_information="+49 40 1234567",
        address=make_address(),
        geo_location=GeoPoint(lat=lat, lon=lon),
        operating_hours=make_hours(),
        average_rating=average_rating,
        photos=[Photo(url="image1.jpg", upload_date=utc_now())],
        reviews=reviews or [],
    )


def make_review(
    review_id: str,
    rating: int,
    posted: datetime,
    author: Optional[User] = None,
) -> Review:
    author = author or User(id=f"author-{review_id}")
    return Review(
        id=review_id,
        content=f"review {review_id}",
        rating=rating,
        date_posted=posted,
        last_edited=posted,
        written_by=author,
    )


def review_request(rating: int = 5, content: str = "Great gym", photo_ids=None) -> ReviewCreateUpdateRequest:
    return ReviewCreateUpdateRequest(content=content, rating=rating, photo_ids=photo_ids)


class FixedGeoLocator:
    """Places every gym at the same point."""

    def __init__(self, latitude: float = 53.55, longitude: float = 9.99):
        self.location = GeoLocation(latitude=latitude, longitude=longitude)
        self.calls = 0

    def geo_locate(self, address: Address) -> GeoLocation:
        self.calls += 1
        return self.location


class Clock:
    """Controllable clock for edit window tests."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or utc_now()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)
