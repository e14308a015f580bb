"""
Comment repository interface (Abstract Base Class).

Defines the contract for comment persistence independent of the
underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from ..domain.entities import Comment, FeaturedInfo


class ICommentRepository(ABC):
    """Abstract repository interface for comment data operations."""

    @abstractmethod
    async def insert_one(self, comment: Comment) -> str:
        """
        Persist a new comment.

        Returns:
            Identifier assigned by the store
        """
        pass

    @abstractmethod
    async def find_one_by_id(self, comment_id: str) -> Optional[Comment]:
        """
        Find a comment by id.

        Returns:
            Comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_many(
        self, publication_id: str, skip: int, take: int
    ) -> Tuple[List[Comment], int]:
        """
        Page through the comments of a publication, oldest first.

        Returns:
            Tuple of (page of comments, total count for the publication)
        """
        pass

    @abstractmethod
    async def find_featured(
        self, keys: Sequence[str], limit: int
    ) -> Dict[str, FeaturedInfo]:
        """
        Summarise comments for many publications in one call.

        Args:
            keys: Publication identifiers
            limit: Number of newest comments to include per key

        Returns:
            Mapping of key to its summary; every requested key is present
        """
        pass

    @abstractmethod
    async def is_comment_in_publication(
        self, comment_id: str, publication_id: str
    ) -> bool:
        """Check that a comment exists and belongs to the publication."""
        pass

    @abstractmethod
    async def delete_one(self, comment_id: str) -> None:
        """Delete a single comment. Deleting a missing id is a no-op."""
        pass

    @abstractmethod
    async def delete_by_publication(self, publication_id: str) -> None:
        """Delete every comment of a publication."""
        pass
