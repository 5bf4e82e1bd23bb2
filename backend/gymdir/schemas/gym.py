"""
Pydantic schemas for gym endpoints.

Request schemas validate client input. Response schemas describe whatever
the index holds and apply no format rules, so stored gyms always render.
"""

from typing import Annotated, Optional

from pydantic import Field, StringConstraints

from gymdir.domain.entities import Gym
from gymdir.domain.requests import GymCreateUpdateRequest
from gymdir.schemas.common import ApiModel, NonBlankStr
from gymdir.schemas.photo import PhotoDto
from gymdir.schemas.review import ReviewDto

StreetNumber = Annotated[
    str, StringConstraints(strip_whitespace=True, pattern=r"^[0-9]{1,5}[a-zA-Z]?$")
]
ClockTime = Annotated[str, StringConstraints(pattern=r"^([01][0-9]|2[0-3]):[0-5][0-9]$")]


# Request schemas

class AddressRequestDto(ApiModel):
    street_number: StreetNumber
    street_name: NonBlankStr
    unit: Optional[str] = None
    city: NonBlankStr
    state: NonBlankStr
    postal_code: NonBlankStr
    country: NonBlankStr


class TimeRangeRequestDto(ApiModel):
    open_time: ClockTime
    close_time: ClockTime


class OperatingHoursRequestDto(ApiModel):
    monday: Optional[TimeRangeRequestDto] = None
    tuesday: Optional[TimeRangeRequestDto] = None
    wednesday: Optional[TimeRangeRequestDto] = None
    thursday: Optional[TimeRangeRequestDto] = None
    friday: Optional[TimeRangeRequestDto] = None
    saturday: Optional[TimeRangeRequestDto] = None
    sunday: Optional[TimeRangeRequestDto] = None


class GymCreateUpdateRequestDto(ApiModel):
    """Schema for creating or updating a gym."""
    name: NonBlankStr
    gym_type: NonBlankStr
    contact_information: NonBlankStr
    address: AddressRequestDto
    operating_hours: OperatingHoursRequestDto = Field(default_factory=OperatingHoursRequestDto)
    photo_ids: list[str] = Field(..., min_length=1)

    def to_request(self) -> GymCreateUpdateRequest:
        return GymCreateUpdateRequest.model_validate(self.model_dump())


# Response schemas

class AddressDto(ApiModel):
    street_number: str
    street_name: str
    unit: Optional[str] = None
    city: str
    state: str
    postal_code: str
    country: str


class TimeRangeDto(ApiModel):
    open_time: str
    close_time: str


class OperatingHoursDto(ApiModel):
    monday: Optional[TimeRangeDto] = None
    tuesday: Optional[TimeRangeDto] = None
    wednesday: Optional[TimeRangeDto] = None
    thursday: Optional[TimeRangeDto] = None
    friday: Optional[TimeRangeDto] = None
    saturday: Optional[TimeRangeDto] = None
    sunday: Optional[TimeRangeDto] = None


class GeoPointDto(ApiModel):
    lat: float
    lon: float


class GymSummaryDto(ApiModel):
    """Gym as listed in search results."""
    id: str
    name: str
    gym_type: str
    average_rating: float
    total_reviews: int
    address: AddressDto
    photos: list[PhotoDto] = []

    @classmethod
    def from_gym(cls, gym: Gym) -> "GymSummaryDto":
        return cls.model_validate({**gym.model_dump(), "total_reviews": gym.total_reviews})


class GymDto(ApiModel):
    """Full gym including its reviews."""
    id: str
    name: str
    gym_type: str
    contact_information: str
    average_rating: float
    total_reviews: int
    geo_location: Optional[GeoPointDto] = None
    address: AddressDto
    operating_hours: OperatingHoursDto
    photos: list[PhotoDto] = []
    reviews: list[ReviewDto] = []

    @classmethod
    def from_gym(cls, gym: Gym) -> "GymDto":
        return cls.model_validate({**gym.model_dump(), "total_reviews": gym.total_reviews})
