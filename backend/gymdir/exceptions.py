"""
Domain exceptions.

Services raise these; ``gymdir.error_handlers`` maps each family to an
HTTP status and a ``{status, message}`` body.
"""


class GymDirectoryError(Exception):
    """Base class for all application errors."""


class NotFoundError(GymDirectoryError):
    """A requested resource does not exist."""


class GymNotFoundError(NotFoundError):
    def __init__(self, gym_id: str):
        self.gym_id = gym_id
        super().__init__(f"gym could not be found with id: {gym_id}")


class ReviewNotFoundError(NotFoundError):
    def __init__(self, gym_id: str, review_id: str):
        self.gym_id = gym_id
        self.review_id = review_id
        super().__init__(f"review {review_id} could not be found for gym {gym_id}")


class ReviewNotAllowedError(GymDirectoryError):
    """A review rule rejected a create or update."""


class ConcurrentModificationError(GymDirectoryError):
    """The gym document changed between load and save."""

    def __init__(self, gym_id: str, expected_version: int):
        self.gym_id = gym_id
        self.expected_version = expected_version
        super().__init__(
            f"gym {gym_id} was modified concurrently (expected version {expected_version})"
        )


class ReviewIntegrityError(GymDirectoryError):
    """
    A review written to a gym could not be found after saving it.

    Internal consistency fault, never reported to clients as NotFound.
    """


class StorageError(GymDirectoryError):
    """Photo storage could not read or write a file."""
