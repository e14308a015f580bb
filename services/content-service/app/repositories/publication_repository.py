"""
Publication repository interface (Abstract Base Class).

Defines the contract for publication persistence independent of the
underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..domain.entities import Ordering, Publication


class IPublicationRepository(ABC):
    """
    Abstract repository interface for publication data operations.

    Implementations assign identifiers on insert and own filtering,
    pagination and ordering of search results.
    """

    @abstractmethod
    async def insert_one(self, publication: Publication) -> str:
        """
        Persist a new publication.

        Args:
            publication: Publication without an id

        Returns:
            Identifier assigned by the store
        """
        pass

    @abstractmethod
    async def find_one_by_id(self, publication_id: str) -> Optional[Publication]:
        """
        Find a publication by id.

        Returns:
            Publication if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_many(
        self,
        skip: int,
        take: int,
        tags: Sequence[str],
        order: Ordering,
    ) -> Tuple[List[Publication], int]:
        """
        Page through publications ordered by creation time.

        Args:
            skip: Number of publications to skip
            take: Maximum number of publications to return
            tags: When non-empty, only publications carrying any of these tags
            order: Creation time ordering

        Returns:
            Tuple of (page of publications, total count matching the filter)
        """
        pass

    @abstractmethod
    async def find_many_by_author(
        self,
        skip: int,
        take: int,
        author_id: str,
        order: Ordering,
    ) -> Tuple[List[Publication], int]:
        """
        Page through the publications of one author.

        Returns:
            Tuple of (page of publications, total count for the author)
        """
        pass

    @abstractmethod
    async def update_one(self, publication: Publication) -> None:
        """
        Store content, tags and ``updated_on`` of an existing publication.

        Args:
            publication: Publication carrying its id
        """
        pass

    @abstractmethod
    async def update_images_url(self, publication_id: str, images_url: str) -> bool:
        """
        Record the attached image URL if no image is recorded yet.

        The check and the write happen in one store operation, so two
        concurrent attach calls cannot both succeed.

        Args:
            publication_id: Publication to update
            images_url: URL returned by the image storage

        Returns:
            True if the URL was recorded, False if an image was already set
            or the publication does not exist
        """
        pass

    @abstractmethod
    async def delete_images_url(self, publication_id: str) -> None:
        """Clear the attached image URL."""
        pass

    @abstractmethod
    async def delete_one(self, publication_id: str) -> None:
        """Delete a publication. Deleting a missing id is a no-op."""
        pass
