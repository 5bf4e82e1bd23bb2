"""GymDocument model - one row per gym aggregate."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from gymdir.database import Base


class GymDocument(Base):
    """
    Stored gym aggregate.

    The full aggregate (address, hours, photos, reviews) lives in
    ``document``. Name, type, rating and coordinates are copied into
    their own columns on every save so searches can filter in SQL.
    """

    __tablename__ = "gyms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    gym_type: Mapped[str] = mapped_column(String(100), nullable=False)
    average_rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False, index=True)

    # Location
    latitude: Mapped[float | None] = mapped_column(Float, index=True)
    longitude: Mapped[float | None] = mapped_column(Float, index=True)

    # Optimistic concurrency
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    document: Mapped[dict] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<GymDocument {self.name} v{self.version}>"
