"""
Publication business logic.

Orchestrates creation, update, deletion and search of publications,
including the image attachment lifecycle and cascading comment deletion.
"""

from datetime import datetime
from typing import BinaryIO, Callable, List, Optional, Sequence, Tuple
from uuid import uuid4

import structlog

from .. import metrics
from ..domain.entities import Ordering, Publication, TagFetcher, utcnow
from ..domain.result import DomainError, DomainResult
from ..hashtags import extract_hashtags
from ..infrastructure.image_storage import IImageStorage
from ..repositories.publication_repository import IPublicationRepository
from ..validators import ContentValidator
from .comment_service import CommentService

logger = structlog.get_logger(__name__)


def _normalize_extension(extension: str) -> str:
    extension = (extension or "").strip().lower()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension


class PublicationService:
    """
    Publication service.

    Expected business conditions are returned as ``DomainResult``
    failures; storage and image backend failures propagate unchanged.
    """

    def __init__(
        self,
        validator: ContentValidator,
        publication_repo: IPublicationRepository,
        comment_service: CommentService,
        image_storage: IImageStorage,
        fetch_tags: TagFetcher = extract_hashtags,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize publication service.

        Args:
            validator: Content validation strategy for publications
            publication_repo: Publication persistence
            comment_service: Used to purge comments of deleted publications
            image_storage: Blob storage for attached images
            fetch_tags: Policy deriving hashtags from text
            clock: Source of timestamps
        """
        self.validator = validator
        self.publication_repo = publication_repo
        self.comment_service = comment_service
        self.image_storage = image_storage
        self.fetch_tags = fetch_tags
        self.clock = clock

    def _reject(self, error: DomainError, **context) -> DomainResult:
        logger.info("Publication operation rejected", code=error.code, **context)
        metrics.track_rejection(error.code)
        return DomainResult.fail(error)

    async def get_by_id(self, publication_id: str) -> Optional[Publication]:
        return await self.publication_repo.find_one_by_id(publication_id)

    async def search(
        self,
        skip: int,
        take: int,
        tags: Optional[Sequence[str]] = None,
        order: Ordering = Ordering.ASC,
    ) -> Tuple[List[Publication], int]:
        """
        Page through publications, optionally filtered by tags.

        Returns:
            Tuple of (page of publications, total count)
        """
        return await self.publication_repo.find_many(skip, take, list(tags or []), order)

    async def search_by_author(
        self,
        skip: int,
        take: int,
        author_id: str,
        order: Ordering = Ordering.ASC,
    ) -> Tuple[List[Publication], int]:
        return await self.publication_repo.find_many_by_author(skip, take, author_id, order)

    async def create(self, content: str, author_id: str) -> DomainResult[str]:
        """
        Create a publication.

        Args:
            content: Publication text
            author_id: Identifier of the author, supplied by the caller

        Returns:
            Result holding the new publication id, or the validation error
        """
        result = self.validator.validate(content)
        if not result.successed:
            return self._reject(result.error, author_id=author_id)

        publication = Publication.new(content, author_id, self.fetch_tags, now=self.clock())
        publication_id = await self.publication_repo.insert_one(publication)

        logger.info(
            "Publication created",
            publication_id=publication_id,
            author_id=author_id,
            tags=sorted(publication.tags),
        )
        metrics.track_publication("created")
        return DomainResult.ok(publication_id)

    async def update(self, publication_id: str, content: str) -> DomainResult[None]:
        """
        Replace the content of a publication.

        Re-derives tags and stamps ``updated_on``. Nothing is written
        when the publication is missing or the content is invalid.
        """
        publication = await self.publication_repo.find_one_by_id(publication_id)
        if publication is None:
            return self._reject(
                DomainError.not_found("publication", publication_id),
                publication_id=publication_id,
            )

        result = self.validator.validate(content)
        if not result.successed:
            return self._reject(result.error, publication_id=publication_id)

        publication.update(content, self.fetch_tags, now=self.clock())
        await self.publication_repo.update_one(publication)

        logger.info("Publication updated", publication_id=publication_id)
        metrics.track_publication("updated")
        return DomainResult.ok()

    async def delete(self, publication_id: str) -> None:
        """
        Delete a publication with its image and comments.

        Runs as independent steps: image, then comments, then the
        publication record, so a failed call can be retried without
        leaving orphans behind the deleted record. The image reference
        is cleared as soon as the blob is gone. Existence is checked
        by the caller; deleting a missing publication is a no-op.
        """
        publication = await self.publication_repo.find_one_by_id(publication_id)
        if publication is not None and publication.images_url is not None:
            await self.image_storage.delete(publication.images_url)
            await self.publication_repo.delete_images_url(publication_id)
            metrics.track_image("detached")

        await self.comment_service.delete_by_publication(publication_id)
        await self.publication_repo.delete_one(publication_id)

        logger.info("Publication deleted", publication_id=publication_id)
        metrics.track_publication("deleted")

    async def attach_image(
        self, publication_id: str, stream: BinaryIO, extension: str
    ) -> DomainResult[str]:
        """
        Upload an image and attach it to a publication.

        A publication holds at most one image; attaching a second one
        fails instead of overwriting.

        Args:
            publication_id: Target publication
            stream: Image bytes
            extension: File extension, with or without the leading dot

        Returns:
            Result holding the image URL
        """
        publication = await self.publication_repo.find_one_by_id(publication_id)
        if publication is None:
            return self._reject(
                DomainError.not_found("publication", publication_id),
                publication_id=publication_id,
            )
        if publication.has_image:
            return self._reject(
                DomainError.image_already_exists(publication_id),
                publication_id=publication_id,
            )

        file_name = uuid4().hex + _normalize_extension(extension)
        images_url = await self.image_storage.upload(stream, file_name)

        if not await self.publication_repo.update_images_url(publication_id, images_url):
            # Lost a race with a concurrent attach or delete.
            await self.image_storage.delete(images_url)
            return self._reject(
                DomainError.image_already_exists(publication_id),
                publication_id=publication_id,
            )

        logger.info("Image attached", publication_id=publication_id, images_url=images_url)
        metrics.track_image("attached")
        return DomainResult.ok(images_url)

    async def detach_image(self, publication_id: str) -> None:
        """Delete the attached image, if any, and clear the URL."""
        publication = await self.publication_repo.find_one_by_id(publication_id)
        if publication is None or publication.images_url is None:
            return

        await self.image_storage.delete(publication.images_url)
        await self.publication_repo.delete_images_url(publication_id)

        logger.info("Image detached", publication_id=publication_id)
        metrics.track_image("detached")
