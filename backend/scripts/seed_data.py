"""
Seed the database with sample gyms.

Run with: python -m scripts.seed_data

Optionally pass a directory of images; files named in SAMPLE_GYMS are
uploaded to photo storage and attached to their gym:

    python -m scripts.seed_data ./testdata
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

from sqlalchemy import select

from gymdir.config import get_settings
from gymdir.database import async_session_maker, init_db
from gymdir.domain.entities import Address, OperatingHours, TimeRange
from gymdir.domain.requests import GymCreateUpdateRequest
from gymdir.models import GymDocument
from gymdir.repositories.gym_index import SqlGymIndex
from gymdir.services.geo_locator import RandomGeoLocator
from gymdir.services.gym_service import GymService
from gymdir.services.photo_service import PhotoService
from gymdir.services.storage import FileSystemPhotoStore
from gymdir.utils.locks import KeyedLock


def standard_hours(weekday_open: str, weekday_close: str, weekend_open: str, weekend_close: str) -> OperatingHours:
    weekday = TimeRange(open_time=weekday_open, close_time=weekday_close)
    weekend = TimeRange(open_time=weekend_open, close_time=weekend_close)
    return OperatingHours(
        monday=weekday,
        tuesday=weekday,
        wednesday=weekday,
        thursday=weekday,
        friday=weekday,
        saturday=weekend,
        sunday=weekend,
    )


def hamburg_address(street_number: str, street_name: str, postal_code: str) -> Address:
    return Address(
        street_number=street_number,
        street_name=street_name,
        city="Hamburg",
        state="Hamburg",
        postal_code=postal_code,
        country="Germany",
    )


# (name, type, contact, address, hours, image)
SAMPLE_GYMS = [
    ("Iron Forge Fitness", "Fitnessstudio", "+49 40 1234567",
     hamburg_address("12", "Reeperbahn", "20359"),
     standard_hours("06:00", "23:00", "08:00", "22:00"), "image1.jpg"),
    ("Elb CrossFit Center", "CrossFit", "+49 40 2345678",
     hamburg_address("54", "Stresemannstraße", "22769"),
     standard_hours("06:00", "22:00", "09:00", "20:00"), "image2.jpg"),
    ("Hammer & Steel Boxing Club", "Boxing", "+49 40 3456789",
     hamburg_address("27", "Schulterblatt", "20357"),
     standard_hours("10:00", "22:00", "10:00", "20:00"), "image3.jpg"),
    ("Zen Flow Yoga Studio", "Yoga", "+49 40 4567890",
     hamburg_address("8", "Feldstraße", "20357"),
     standard_hours("08:00", "21:00", "09:00", "20:00"), "image4.jpg"),
    ("Nordic Strength Club", "Krafttraining", "+49 40 5678901",
     hamburg_address("92", "Mönckebergstraße", "20095"),
     standard_hours("06:00", "23:00", "08:00", "22:00"), "image5.jpg"),
    ("Harbor Athletic Arena", "Athletic", "+49 40 6789012",
     hamburg_address("15", "Große Elbstraße", "22767"),
     standard_hours("07:00", "22:00", "08:00", "20:00"), "image6.jpg"),
    ("Hanseatic Martial Arts", "Martial Arts", "+49 40 7890123",
     hamburg_address("32", "Wandsbeker Chaussee", "22089"),
     standard_hours("09:00", "22:00", "10:00", "20:00"), "image7.jpg"),
    ("Alster Performance Lab", "Performance", "+49 40 8901234",
     hamburg_address("71", "Alsterterrasse", "20354"),
     standard_hours("06:00", "22:00", "08:00", "21:00"), "image8.jpg"),
    ("Hamburg Powerlifting Hub", "Powerlifting", "+49 40 9012345",
     hamburg_address("45", "Langenhorner Chaussee", "22415"),
     standard_hours("06:00", "23:00", "08:00", "22:00"), "image9.jpg"),
    ("St. Pauli Strength Factory", "Strength", "+49 40 0123456",
     hamburg_address("88", "Simon-von-Utrecht-Straße", "20359"),
     standard_hours("07:00", "23:00", "08:00", "22:00"), "image10.jpg"),
]


def upload_image(photo_service: PhotoService, image_dir: Optional[Path], filename: str) -> str:
    """Upload a sample image if available; otherwise reference it by name."""
    if image_dir is None:
        return filename
    path = image_dir / filename
    if not path.is_file():
        print(f"  ! Image not found: {path}")
        return filename
    photo = photo_service.upload(path.read_bytes(), filename)
    print(f"  + Uploaded image: {filename} -> {photo.url}")
    return photo.url


async def seed_gyms(image_dir: Optional[Path]) -> None:
    """Create the sample gyms that don't exist yet."""
    settings = get_settings()
    photo_service = PhotoService(FileSystemPhotoStore(settings.storage_location))

    async with async_session_maker() as session:
        gym_service = GymService(SqlGymIndex(session), RandomGeoLocator(settings), KeyedLock())

        for name, gym_type, contact, address, hours, image in SAMPLE_GYMS:
            result = await session.execute(
                select(GymDocument.id).where(GymDocument.name == name)
            )
            if result.first():
                print(f"  ✓ {name} exists")
                continue

            photo_id = upload_image(photo_service, image_dir, image)
            gym = await gym_service.create_gym(GymCreateUpdateRequest(
                name=name,
                gym_type=gym_type,
                contact_information=contact,
                address=address,
                operating_hours=hours,
                photo_ids=[photo_id],
            ))
            print(f"  + Created: {gym.name} ({gym.id})")

    print("\n✓ Seed data complete!")


async def main():
    """Main entry point."""
    image_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None

    print("=" * 50)
    print("Seeding Gym Directory Database")
    print("=" * 50)

    print("\nInitializing database...")
    await init_db()

    print("\nSeeding gyms...")
    await seed_gyms(image_dir)


if __name__ == "__main__":
    asyncio.run(main())
