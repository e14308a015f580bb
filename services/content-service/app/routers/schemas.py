"""
Request and response models for the content API.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel, Field

from ..domain.entities import Comment, FeaturedInfo, Publication
from ..domain.result import DomainError, ErrorKind

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}


def raise_domain_error(error: DomainError) -> None:
    """Translate a domain error into an HTTP error response."""
    raise HTTPException(status_code=STATUS_BY_KIND[error.kind], detail=error.to_dict())


class CreatePublicationRequest(BaseModel):
    """Publication creation payload."""

    content: str = Field(..., description="Publication text; hashtags become tags")
    author_id: str = Field(..., min_length=1, description="Identifier of the author")


class UpdatePublicationRequest(BaseModel):
    """Publication update payload."""

    content: str


class CreateCommentRequest(BaseModel):
    """Comment creation payload."""

    publication_id: str = Field(..., min_length=1)
    content: str
    reply_comment_id: Optional[str] = Field(
        None, description="Comment of the same publication this one replies to"
    )
    author_id: str = Field(..., min_length=1)


class FeaturedRequest(BaseModel):
    """Batch of publication keys to summarise."""

    keys: List[str] = Field(default_factory=list, max_length=100)


class PublicationResponse(BaseModel):
    """Publication data response model."""

    id: str
    content: str
    author_id: str
    tags: List[str]
    created_on: datetime
    updated_on: Optional[datetime] = None
    images_url: Optional[str] = None

    @classmethod
    def from_entity(cls, publication: Publication) -> "PublicationResponse":
        return cls(**publication.to_dict())


class CommentResponse(BaseModel):
    """Comment data response model."""

    id: str
    content: str
    publication_id: str
    reply_comment_id: Optional[str] = None
    author_id: str
    created_on: datetime

    @classmethod
    def from_entity(cls, comment: Comment) -> "CommentResponse":
        return cls(**comment.to_dict())


class FeaturedInfoResponse(BaseModel):
    """Featured comments of one publication."""

    comments: List[CommentResponse]
    total_count: int

    @classmethod
    def from_entity(cls, info: FeaturedInfo) -> "FeaturedInfoResponse":
        return cls(**info.to_dict())


class ImageResponse(BaseModel):
    """Attached image response."""

    images_url: str

