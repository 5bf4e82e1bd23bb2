"""
Pydantic schemas for photos.
"""

from datetime import datetime

from gymdir.schemas.common import ApiModel


class PhotoDto(ApiModel):
    url: str
    upload_date: datetime
