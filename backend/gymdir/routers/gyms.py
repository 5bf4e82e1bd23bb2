"""
Gym API endpoints.

Public read access; creating, updating and deleting gyms requires a
bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from gymdir.auth.dependencies import get_current_user
from gymdir.config import get_settings
from gymdir.dependencies import get_gym_service
from gymdir.domain.entities import User
from gymdir.domain.pagination import PageRequest
from gymdir.exceptions import GymNotFoundError
from gymdir.schemas.common import ERROR_RESPONSES, PageResponse
from gymdir.schemas.gym import GymCreateUpdateRequestDto, GymDto, GymSummaryDto
from gymdir.services.gym_service import GymService

router = APIRouter(responses=ERROR_RESPONSES)
settings = get_settings()


@router.post("", response_model=GymDto, status_code=status.HTTP_201_CREATED)
async def create_gym(
    data: GymCreateUpdateRequestDto,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    """
    Create a gym listing.

    The gym starts with no reviews and an average rating of 0.
    """
    gym = await gym_service.create_gym(data.to_request())
    return GymDto.from_gym(gym)


@router.get("", response_model=PageResponse[GymSummaryDto])
async def search_gyms(
    query: Optional[str] = None,
    min_rating: Optional[float] = Query(None, alias="minRating"),
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    radius: Optional[float] = Query(None, gt=0, description="Search radius in meters"),
    page: int = Query(1, ge=1, description="1-based page number"),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    gym_service: GymService = Depends(get_gym_service),
):
    """
    Search gyms.

    Only one filter is applied per request, in this order of precedence:
    - `minRating` without a query: rating floor
    - `query`: fuzzy match on name or type (plus `minRating`, default 0)
    - `latitude` + `longitude` + `radius`: gyms within the radius
    - nothing: all gyms
    """
    result = await gym_service.search_gyms(
        query,
        min_rating,
        latitude,
        longitude,
        radius,
        PageRequest(page=page - 1, size=size),
    )
    return PageResponse[GymSummaryDto].from_page(result, GymSummaryDto.from_gym)


@router.get("/{gym_id}", response_model=GymDto)
async def get_gym(
    gym_id: str,
    gym_service: GymService = Depends(get_gym_service),
):
    """
    Get a specific gym by id, including its reviews.
    """
    gym = await gym_service.get_gym(gym_id)
    if gym is None:
        raise GymNotFoundError(gym_id)
    return GymDto.from_gym(gym)


@router.put("/{gym_id}", response_model=GymDto)
async def update_gym(
    gym_id: str,
    data: GymCreateUpdateRequestDto,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    """
    Replace a gym's listing details. Reviews are not affected.
    """
    gym = await gym_service.update_gym(gym_id, data.to_request())
    return GymDto.from_gym(gym)


@router.delete("/{gym_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_gym(
    gym_id: str,
    current_user: User = Depends(get_current_user),
    gym_service: GymService = Depends(get_gym_service),
):
    """
    Delete a gym and all of its reviews.
    """
    await gym_service.delete_gym(gym_id)
