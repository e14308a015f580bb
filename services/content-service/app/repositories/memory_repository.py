"""
In-memory implementations of the publication and comment repositories.

Used for local development and the test suite. Entities are copied on
the way in and out so callers never share state with the store, the
same way a real document store behaves.
"""

import copy
import logging
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from ..domain.entities import Comment, FeaturedInfo, Ordering, Publication
from .comment_repository import ICommentRepository
from .publication_repository import IPublicationRepository

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid4().hex


def _page(items: list, skip: int, take: int) -> list:
    return items[skip : skip + take]


class InMemoryPublicationRepository(IPublicationRepository):
    """Dictionary-backed publication store."""

    def __init__(self) -> None:
        self._publications: Dict[str, Publication] = {}

    def __len__(self) -> int:
        return len(self._publications)

    def _sorted(self, publications: List[Publication], order: Ordering) -> List[Publication]:
        return sorted(
            publications,
            key=lambda p: p.created_on,
            reverse=order == Ordering.DESC,
        )

    async def insert_one(self, publication: Publication) -> str:
        stored = copy.deepcopy(publication)
        stored.id = _new_id()
        self._publications[stored.id] = stored
        logger.debug(f"Inserted publication {stored.id}")
        return stored.id

    async def find_one_by_id(self, publication_id: str) -> Optional[Publication]:
        publication = self._publications.get(publication_id)
        return copy.deepcopy(publication) if publication else None

    async def find_many(
        self,
        skip: int,
        take: int,
        tags: Sequence[str],
        order: Ordering,
    ) -> Tuple[List[Publication], int]:
        wanted = set(tags or [])
        matches = [
            p
            for p in self._publications.values()
            if not wanted or wanted & p.tags
        ]
        ordered = self._sorted(matches, order)
        return copy.deepcopy(_page(ordered, skip, take)), len(ordered)

    async def find_many_by_author(
        self,
        skip: int,
        take: int,
        author_id: str,
        order: Ordering,
    ) -> Tuple[List[Publication], int]:
        matches = [p for p in self._publications.values() if p.author_id == author_id]
        ordered = self._sorted(matches, order)
        return copy.deepcopy(_page(ordered, skip, take)), len(ordered)

    async def update_one(self, publication: Publication) -> None:
        stored = self._publications.get(publication.id)
        if stored is None:
            return
        stored.content = publication.content
        stored.tags = set(publication.tags)
        stored.updated_on = publication.updated_on

    async def update_images_url(self, publication_id: str, images_url: str) -> bool:
        stored = self._publications.get(publication_id)
        if stored is None or stored.images_url is not None:
            return False
        stored.images_url = images_url
        return True

    async def delete_images_url(self, publication_id: str) -> None:
        stored = self._publications.get(publication_id)
        if stored is not None:
            stored.images_url = None

    async def delete_one(self, publication_id: str) -> None:
        self._publications.pop(publication_id, None)


class InMemoryCommentRepository(ICommentRepository):
    """Dictionary-backed comment store."""

    def __init__(self) -> None:
        self._comments: Dict[str, Comment] = {}

    def __len__(self) -> int:
        return len(self._comments)

    def _for_publication(self, publication_id: str) -> List[Comment]:
        return sorted(
            (c for c in self._comments.values() if c.publication_id == publication_id),
            key=lambda c: c.created_on,
        )

    async def insert_one(self, comment: Comment) -> str:
        stored = copy.deepcopy(comment)
        stored.id = _new_id()
        self._comments[stored.id] = stored
        return stored.id

    async def find_one_by_id(self, comment_id: str) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        return copy.deepcopy(comment) if comment else None

    async def find_many(
        self, publication_id: str, skip: int, take: int
    ) -> Tuple[List[Comment], int]:
        comments = self._for_publication(publication_id)
        return copy.deepcopy(_page(comments, skip, take)), len(comments)

    async def find_featured(
        self, keys: Sequence[str], limit: int
    ) -> Dict[str, FeaturedInfo]:
        featured: Dict[str, FeaturedInfo] = {}
        for key in keys:
            comments = self._for_publication(key)
            newest = comments[-limit:] if limit > 0 else []
            featured[key] = FeaturedInfo(
                comments=copy.deepcopy(newest), total_count=len(comments)
            )
        return featured

    async def is_comment_in_publication(
        self, comment_id: str, publication_id: str
    ) -> bool:
        comment = self._comments.get(comment_id)
        return comment is not None and comment.publication_id == publication_id

    async def delete_one(self, comment_id: str) -> None:
        self._comments.pop(comment_id, None)

    async def delete_by_publication(self, publication_id: str) -> None:
        doomed = [
            comment_id
            for comment_id, comment in self._comments.items()
            if comment.publication_id == publication_id
        ]
        for comment_id in doomed:
            del self._comments[comment_id]
        logger.debug(f"Deleted {len(doomed)} comments of publication {publication_id}")
