# Database models
from gymdir.models.gym import GymDocument

__all__ = [
    "GymDocument",
]
