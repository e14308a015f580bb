"""
Comment API router.
"""

from typing import Dict, List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..config import settings
from ..dependencies import get_comment_service
from ..services.comment_service import CommentService
from .publications_router import TOTAL_COUNT_HEADER
from .schemas import (
    CommentResponse,
    CreateCommentRequest,
    FeaturedInfoResponse,
    FeaturedRequest,
    raise_domain_error,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create comment",
)
async def create_comment(
    request: CreateCommentRequest,
    service: CommentService = Depends(get_comment_service),
):
    """
    Create a comment, optionally as a reply.

    A reply must target a comment of the same publication.
    """
    result = await service.create(
        request.publication_id,
        request.content,
        request.reply_comment_id,
        request.author_id,
    )
    if not result.successed:
        raise_domain_error(result.error)

    comment = await service.get_by_id(result.value)
    return CommentResponse.from_entity(comment)


@router.post(
    "/featured",
    response_model=Dict[str, FeaturedInfoResponse],
    summary="Featured comments for a batch of publications",
)
async def search_featured_comments(
    request: FeaturedRequest,
    service: CommentService = Depends(get_comment_service),
):
    logger.debug("Featured comments requested", keys=len(request.keys))
    featured = await service.search_featured(request.keys)
    return {key: FeaturedInfoResponse.from_entity(info) for key, info in featured.items()}


@router.get(
    "/by-publication/{publication_id}",
    response_model=List[CommentResponse],
    summary="Search comments of a publication",
)
async def search_comments(
    publication_id: str,
    response: Response,
    skip: int = Query(0, ge=0),
    take: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: CommentService = Depends(get_comment_service),
):
    """Page through comments of a publication, oldest first."""
    page = await service.search(publication_id, skip, take)
    if page is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Publication not found"
        )
    comments, total = page
    response.headers[TOTAL_COUNT_HEADER] = str(total)
    return [CommentResponse.from_entity(c) for c in comments]


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: str,
    service: CommentService = Depends(get_comment_service),
):
    comment = await service.get_by_id(comment_id)
    if comment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found"
        )
    return CommentResponse.from_entity(comment)


@router.delete(
    "/by-publication/{publication_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_comments_of_publication(
    publication_id: str,
    service: CommentService = Depends(get_comment_service),
):
    await service.delete_by_publication(publication_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    service: CommentService = Depends(get_comment_service),
):
    """Delete one comment. Replies to it are left in place."""
    if await service.get_by_id(comment_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found"
        )
    await service.delete(comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
