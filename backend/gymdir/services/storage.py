"""
Photo storage on the local filesystem.

Files are stored flat inside a single root directory. Names are built
from a generated base name plus the extension of the uploaded file.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from gymdir.exceptions import StorageError

logger = logging.getLogger(__name__)


class FileSystemPhotoStore:
    def __init__(self, location: str):
        self.root = Path(location).resolve()
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"could not initialize storage location {self.root}") from e

    def store(self, data: bytes, original_filename: Optional[str], base_name: str) -> str:
        """
        Write ``data`` as ``<base_name>.<ext>`` and return the stored name.

        The extension comes from the client's original filename; files
        without one are stored under ``base_name`` alone.
        """
        if not data:
            raise StorageError("cannot save an empty file")

        extension = os.path.splitext(original_filename or "")[1].lower()
        filename = f"{base_name}{extension}"
        destination = (self.root / filename).resolve()

        if destination.parent != self.root:
            raise StorageError("cannot store file outside the storage directory")

        try:
            destination.write_bytes(data)
        except OSError as e:
            raise StorageError(f"failed to store file {filename}") from e

        logger.info("Stored photo %s (%d bytes)", filename, len(data))
        return filename

    def load(self, filename: str) -> Optional[Path]:
        """Path of a stored file, or None if it does not exist."""
        path = (self.root / filename).resolve()
        if path.parent != self.root:
            logger.warning("Rejected photo lookup outside storage directory: %s", filename)
            return None
        if not path.is_file():
            return None
        return path
