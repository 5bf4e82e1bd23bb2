"""
Review API endpoints, nested under a gym.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from gymdir.auth.dependencies import get_current_user
from gymdir.config import get_settings
from gymdir.dependencies import get_review_service
from gymdir.domain.entities import User
from gymdir.domain.pagination import PageRequest, parse_sort
from gymdir.exceptions import ReviewNotFoundError
from gymdir.schemas.common import ERROR_RESPONSES, PageResponse
from gymdir.schemas.review import ReviewCreateUpdateRequestDto, ReviewDto
from gymdir.services.review_service import ReviewService

router = APIRouter(responses=ERROR_RESPONSES)
settings = get_settings()


@router.post("", response_model=ReviewDto, status_code=status.HTTP_201_CREATED)
async def create_review(
    gym_id: str,
    data: ReviewCreateUpdateRequestDto,
    current_user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    """
    Write a review for a gym.

    Each user can review a gym once. The author's name is copied from
    the token at this point and not updated later.
    """
    review = await review_service.create_review(current_user, gym_id, data.to_request())
    return ReviewDto.from_review(review)


@router.get("", response_model=PageResponse[ReviewDto])
async def list_reviews(
    gym_id: str,
    page: int = Query(0, ge=0, description="0-based page number"),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort: Optional[list[str]] = Query(
        None,
        description="`property,direction`, e.g. `rating,asc`. Only the first is used.",
    ),
    review_service: ReviewService = Depends(get_review_service),
):
    """
    List a gym's reviews, newest first unless `sort` says otherwise.

    Sortable by `datePosted` or `rating`.
    """
    page_request = PageRequest(page=page, size=size, sort=parse_sort(sort))
    result = await review_service.list_reviews(gym_id, page_request)
    return PageResponse[ReviewDto].from_page(result, ReviewDto.from_review)


@router.get("/{review_id}", response_model=ReviewDto)
async def get_review(
    gym_id: str,
    review_id: str,
    review_service: ReviewService = Depends(get_review_service),
):
    """
    Get a single review.
    """
    review = await review_service.get_review(gym_id, review_id)
    if review is None:
        raise ReviewNotFoundError(gym_id, review_id)
    return ReviewDto.from_review(review)


@router.put("/{review_id}", response_model=ReviewDto)
async def update_review(
    gym_id: str,
    review_id: str,
    data: ReviewCreateUpdateRequestDto,
    current_user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
):
    """
    Edit your own review.

    Allowed within 24 hours of the review's last edit.
    """
    review = await review_service.update_review(
        current_user, gym_id, review_id, data.to_request()
    )
    return ReviewDto.from_review(review)
