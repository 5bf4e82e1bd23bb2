"""
Pydantic schemas for review endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from gymdir.domain.entities import Review
from gymdir.domain.requests import ReviewCreateUpdateRequest
from gymdir.schemas.common import ApiModel, NonBlankStr
from gymdir.schemas.photo import PhotoDto


# Request schemas

class ReviewCreateUpdateRequestDto(ApiModel):
    """Schema for creating or editing a review."""
    content: NonBlankStr
    rating: int = Field(..., ge=1, le=5)
    photo_ids: Optional[list[str]] = None

    def to_request(self) -> ReviewCreateUpdateRequest:
        return ReviewCreateUpdateRequest(
            content=self.content,
            rating=self.rating,
            photo_ids=self.photo_ids,
        )


# Response schemas

class UserDto(ApiModel):
    """Author snapshot stored with a review."""
    id: str
    username: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None


class ReviewDto(ApiModel):
    id: str
    content: str
    rating: int
    date_posted: datetime
    last_edited: datetime
    photos: list[PhotoDto] = []
    written_by: UserDto

    @classmethod
    def from_review(cls, review: Review) -> "ReviewDto":
        return cls.model_validate(review.model_dump())
