# Repositories
from gymdir.repositories.gym_index import GymIndex, SqlGymIndex

__all__ = [
    "GymIndex",
    "SqlGymIndex",
]
