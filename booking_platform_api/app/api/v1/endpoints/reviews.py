"""Review endpoints for API v1.

Reading reviews is public.  Writing one requires a signed-in user, who
becomes its author.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import get_current_user
from booking_platform_api.app.schemas.review import ReviewCreate, ReviewRead, ReviewUpdate, TargetModel
from booking_platform_api.app.services.review_service import ReviewService


router = APIRouter()


@router.get("/", response_model=List[ReviewRead])
async def list_reviews(
    target_model: Optional[TargetModel] = Query(None),
    target_id: Optional[int] = Query(None),
    user_id: Optional[int] = Query(None),
    service_id: Optional[int] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[ReviewRead]:
    return await ReviewService.list_reviews(
        target_model=target_model,
        target_id=target_id,
        user_id=user_id,
        service_id=service_id,
        limit=limit,
        offset=offset,
    )


@router.post("/", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def create_review(
    review: ReviewCreate,
    current_user: dict = Depends(get_current_user),
) -> ReviewRead:
    try:
        return await ReviewService.create_review(review, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{review_id}", response_model=ReviewRead)
async def get_review(review_id: int) -> ReviewRead:
    try:
        return await ReviewService.get_review(review_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{review_id}", response_model=ReviewRead)
async def update_review(
    review_id: int,
    review: ReviewUpdate,
    current_user: dict = Depends(get_current_user),
) -> ReviewRead:
    try:
        return await ReviewService.update_review(review_id, review, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: int,
    current_user: dict = Depends(get_current_user),
) -> None:
    try:
        await ReviewService.delete_review(review_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None
