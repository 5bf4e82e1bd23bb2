"""Internal request objects passed from the HTTP layer to the services."""

from typing import Optional

from pydantic import BaseModel, Field

from gymdir.domain.entities import Address, OperatingHours


class GymCreateUpdateRequest(BaseModel):
    name: str
    gym_type: str
    contact_information: str
    address: Address
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)
    photo_ids: list[str] = Field(default_factory=list)


class ReviewCreateUpdateRequest(BaseModel):
    content: str
    rating: int
    photo_ids: Optional[list[str]] = None
