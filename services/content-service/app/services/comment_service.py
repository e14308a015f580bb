"""
Comment business logic.

Creates, searches and deletes comments while keeping reply threads
inside the publication they belong to.
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import structlog

from .. import metrics
from ..domain.entities import Comment, FeaturedInfo, utcnow
from ..domain.result import DomainError, DomainResult
from ..repositories.comment_repository import ICommentRepository
from ..repositories.publication_repository import IPublicationRepository
from ..validators import ContentValidator

logger = structlog.get_logger(__name__)

DEFAULT_FEATURED_LIMIT = 3


class CommentService:
    """
    Comment service.

    Deleting a single comment does not touch replies to it; they keep
    their ``reply_comment_id`` and become dangling references.
    """

    def __init__(
        self,
        validator: ContentValidator,
        comment_repo: ICommentRepository,
        publication_repo: IPublicationRepository,
        featured_limit: int = DEFAULT_FEATURED_LIMIT,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize comment service.

        Args:
            validator: Content validation strategy for comments
            comment_repo: Comment persistence
            publication_repo: Used to check that publications exist
            featured_limit: Newest comments included per featured key
            clock: Source of timestamps
        """
        self.validator = validator
        self.comment_repo = comment_repo
        self.publication_repo = publication_repo
        self.featured_limit = featured_limit
        self.clock = clock

    async def create(
        self,
        publication_id: str,
        content: str,
        reply_comment_id: Optional[str],
        author_id: str,
    ) -> DomainResult[str]:
        """
        Create a comment on a publication.

        Checks run in order: publication exists, reply target belongs
        to the same publication, content is valid.

        Returns:
            Result holding the new comment id
        """
        if await self.publication_repo.find_one_by_id(publication_id) is None:
            error = DomainError.publication_not_found(publication_id)
        elif reply_comment_id is not None and not await self.comment_repo.is_comment_in_publication(
            reply_comment_id, publication_id
        ):
            error = DomainError.reply_target_not_in_publication(reply_comment_id, publication_id)
        else:
            error = self.validator.validate(content).error

        if error is not None:
            logger.info(
                "Comment rejected",
                code=error.code,
                publication_id=publication_id,
                reply_comment_id=reply_comment_id,
            )
            metrics.track_rejection(error.code)
            return DomainResult.fail(error)

        comment = Comment.new(
            content,
            publication_id,
            author_id,
            reply_comment_id=reply_comment_id,
            now=self.clock(),
        )
        comment_id = await self.comment_repo.insert_one(comment)

        logger.info(
            "Comment created",
            comment_id=comment_id,
            publication_id=publication_id,
            reply_comment_id=reply_comment_id,
        )
        metrics.track_comment("created")
        return DomainResult.ok(comment_id)

    async def get_by_id(self, comment_id: str) -> Optional[Comment]:
        return await self.comment_repo.find_one_by_id(comment_id)

    async def search(
        self, publication_id: str, skip: int, take: int
    ) -> Optional[Tuple[List[Comment], int]]:
        """
        Page through the comments of a publication.

        Returns:
            Tuple of (page of comments, total count), or None when the
            publication does not exist
        """
        if await self.publication_repo.find_one_by_id(publication_id) is None:
            return None
        return await self.comment_repo.find_many(publication_id, skip, take)

    async def search_featured(self, keys: Sequence[str]) -> Dict[str, FeaturedInfo]:
        """
        Summarise comments for a batch of publications in one store call.

        Duplicate keys are collapsed; every distinct key is present in
        the result.
        """
        unique_keys = list(dict.fromkeys(keys))
        if not unique_keys:
            return {}
        return await self.comment_repo.find_featured(unique_keys, self.featured_limit)

    async def delete(self, comment_id: str) -> None:
        await self.comment_repo.delete_one(comment_id)
        logger.info("Comment deleted", comment_id=comment_id)
        metrics.track_comment("deleted")

    async def delete_by_publication(self, publication_id: str) -> None:
        """Delete every comment of a publication. Safe to repeat."""
        await self.comment_repo.delete_by_publication(publication_id)
        logger.info("Publication comments deleted", publication_id=publication_id)
