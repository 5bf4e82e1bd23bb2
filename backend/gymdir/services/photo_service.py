"""Photo service - uploads and lookups on top of the photo store."""

import mimetypes
import uuid
from pathlib import Path
from typing import Optional

from gymdir.domain.entities import Photo
from gymdir.services.storage import FileSystemPhotoStore
from gymdir.utils.timezone import utc_now

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class PhotoService:
    def __init__(self, store: FileSystemPhotoStore):
        self.store = store

    def upload(self, data: bytes, original_filename: Optional[str]) -> Photo:
        """Store an uploaded file under a fresh id and describe it as a Photo."""
        url = self.store.store(data, original_filename, str(uuid.uuid4()))
        return Photo(url=url, upload_date=utc_now())

    def get(self, photo_id: str) -> Optional[Path]:
        return self.store.load(photo_id)

    @staticmethod
    def content_type(path: Path) -> str:
        content_type, _ = mimetypes.guess_type(path.name)
        return content_type or DEFAULT_CONTENT_TYPE
