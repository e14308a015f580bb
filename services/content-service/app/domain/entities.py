"""
Domain entities for publications and comments.

Core business objects of the content service. These entities are
framework-agnostic and contain only business logic; identifiers are
opaque strings assigned by the persistence layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, List, Optional, Set

TagFetcher = Callable[[str], Iterable[str]]


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Ordering(str, Enum):
    """Sort order by creation time."""

    ASC = "asc"
    DESC = "desc"


@dataclass
class Publication:
    """
    Aggregate root for a user-authored post.

    Tags are always derived from the content through an injected tag
    fetcher and never supplied by the caller. ``updated_on`` stays
    ``None`` until the first content update.
    """

    content: str
    author_id: str
    created_on: datetime
    tags: Set[str] = field(default_factory=set)
    id: Optional[str] = None
    updated_on: Optional[datetime] = None
    images_url: Optional[str] = None

    @classmethod
    def new(
        cls,
        content: str,
        author_id: str,
        fetch_tags: TagFetcher,
        now: Optional[datetime] = None,
    ) -> "Publication":
        """
        Build a publication that has not been persisted yet.

        Args:
            content: Publication text
            author_id: Identifier of the creator
            fetch_tags: Policy deriving tags from the text
            now: Creation timestamp (defaults to current UTC time)

        Returns:
            New publication without an id
        """
        return cls(
            content=content,
            author_id=author_id,
            created_on=now or utcnow(),
            tags=set(fetch_tags(content)),
        )

    def update(
        self,
        content: str,
        fetch_tags: TagFetcher,
        now: Optional[datetime] = None,
    ) -> "Publication":
        """
        Replace the content, re-derive tags and stamp ``updated_on``.

        Returns:
            The same publication, for chaining
        """
        self.content = content
        self.tags = set(fetch_tags(content))
        self.updated_on = now or utcnow()
        return self

    @property
    def is_updated(self) -> bool:
        """True once the content has been updated after creation."""
        return self.updated_on is not None

    @property
    def has_image(self) -> bool:
        return self.images_url is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "content": self.content,
            "author_id": self.author_id,
            "tags": sorted(self.tags),
            "created_on": self.created_on.isoformat(),
            "updated_on": self.updated_on.isoformat() if self.updated_on else None,
            "images_url": self.images_url,
        }


@dataclass
class Comment:
    """
    A comment attached to a publication.

    Comments are never mutated after creation. ``reply_comment_id``
    points to another comment of the same publication when the comment
    is part of a thread.
    """

    content: str
    publication_id: str
    author_id: str
    created_on: datetime
    reply_comment_id: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def new(
        cls,
        content: str,
        publication_id: str,
        author_id: str,
        reply_comment_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Comment":
        """Build a comment that has not been persisted yet."""
        return cls(
            content=content,
            publication_id=publication_id,
            author_id=author_id,
            created_on=now or utcnow(),
            reply_comment_id=reply_comment_id,
        )

    @property
    def is_reply(self) -> bool:
        return self.reply_comment_id is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "content": self.content,
            "publication_id": self.publication_id,
            "reply_comment_id": self.reply_comment_id,
            "author_id": self.author_id,
            "created_on": self.created_on.isoformat(),
        }


@dataclass
class FeaturedInfo:
    """
    Lightweight comment summary for one grouping key.

    Holds the newest comments (oldest first) and the total number of
    comments stored under the key.
    """

    comments: List[Comment] = field(default_factory=list)
    total_count: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "comments": [comment.to_dict() for comment in self.comments],
            "total_count": self.total_count,
        }
