"""
Pydantic schemas for reviews.

Guests review a room or a restaurant table with a 1–5 star rating and
separate positive and negative comments.  When ``service_id`` is given
the review is also attached to that service's review list.  Comments
are trimmed and limited to 1000 characters; they are HTML escaped when
read back.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


TargetModel = Literal["Room", "Table"]

MAX_COMMENT_LENGTH = 1000


def _clean_comment(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    if len(v) > MAX_COMMENT_LENGTH:
        raise ValueError(f"Comment must be {MAX_COMMENT_LENGTH} characters or fewer")
    return v


class ReviewCreate(BaseModel):
    """Schema for creating a new review."""

    review_code: str = Field(..., min_length=1, examples=["RV001"])
    positive_comment: str = ""
    negative_comment: str = ""
    stars: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    target_id: int = Field(..., description="Id of the reviewed room or table")
    target_model: TargetModel
    service_id: Optional[int] = Field(None, description="Service whose review list gets this review")

    @field_validator("positive_comment", "negative_comment")
    @classmethod
    def sanitize_comment(cls, v: str) -> str:
        return _clean_comment(v)


class ReviewUpdate(BaseModel):
    positive_comment: Optional[str] = None
    negative_comment: Optional[str] = None
    stars: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("positive_comment", "negative_comment")
    @classmethod
    def sanitize_comment(cls, v: Optional[str]) -> Optional[str]:
        return _clean_comment(v)


class ReviewRead(BaseModel):
    """Schema for reading a review from the API."""

    id: int
    review_code: str
    user_id: int
    positive_comment: str
    negative_comment: str
    stars: int
    date: datetime
    target_id: int
    target_model: TargetModel
