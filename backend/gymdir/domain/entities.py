"""
Gym aggregate and its value objects.

A gym document embeds everything that belongs to it (address, hours,
photos, reviews) and is stored and loaded as a single unit.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Address(BaseModel):
    """Structured postal address."""
    street_number: str
    street_name: str
    unit: Optional[str] = None
    city: str
    state: str
    postal_code: str
    country: str


class TimeRange(BaseModel):
    """Opening and closing time for one day, HH:mm."""
    open_time: str
    close_time: str


class OperatingHours(BaseModel):
    """Opening hours per weekday. Missing days are closed."""
    monday: Optional[TimeRange] = None
    tuesday: Optional[TimeRange] = None
    wednesday: Optional[TimeRange] = None
    thursday: Optional[TimeRange] = None
    friday: Optional[TimeRange] = None
    saturday: Optional[TimeRange] = None
    sunday: Optional[TimeRange] = None


class GeoPoint(BaseModel):
    lat: float
    lon: float


class GeoLocation(BaseModel):
    """Result of resolving an address; only used to build a GeoPoint."""
    latitude: float
    longitude: float

    def to_geo_point(self) -> GeoPoint:
        return GeoPoint(lat=self.latitude, lon=self.longitude)


class Photo(BaseModel):
    url: str
    upload_date: datetime


class User(BaseModel):
    """
    Caller identity reconstructed from a bearer token.

    Copied into a review as the author snapshot, so later display name
    changes do not touch existing reviews.
    """
    id: str
    username: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None


class Review(BaseModel):
    id: str
    content: str
    rating: int
    date_posted: datetime
    last_edited: datetime
    photos: list[Photo] = Field(default_factory=list)
    written_by: User


class Gym(BaseModel):
    """
    Gym aggregate root.

    ``average_rating`` is derived from ``reviews`` and must be recomputed
    whenever the review list changes. ``version`` is maintained by the
    index and used for optimistic concurrency on save.
    """
    id: Optional[str] = None
    name: str
    gym_type: str
    contact_information: str
    address: Address
    geo_location: Optional[GeoPoint] = None
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)
    average_rating: float = 0.0
    photos: list[Photo] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    version: int = 0

    @property
    def total_reviews(self) -> int:
        return len(self.reviews)

    def find_review(self, review_id: str) -> Optional[Review]:
        return next((r for r in self.reviews if r.id == review_id), None)

    def has_review_by(self, author_id: str) -> bool:
        return any(r.written_by.id == author_id for r in self.reviews)

    def recompute_average_rating(self) -> None:
        if not self.reviews:
            self.average_rating = 0.0
        else:
            self.average_rating = sum(r.rating for r in self.reviews) / len(self.reviews)
