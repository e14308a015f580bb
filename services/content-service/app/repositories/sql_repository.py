"""
SQLAlchemy implementation of the publication and comment repositories.

Each operation runs in its own session and transaction. Driver errors
are logged and re-raised as ``StorageException``.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..domain.entities import Comment, FeaturedInfo, Ordering, Publication
from ..domain.exceptions import StorageException
from ..models import CommentRecord, PublicationRecord, PublicationTag
from .comment_repository import ICommentRepository
from .publication_repository import IPublicationRepository

logger = logging.getLogger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; treat naive timestamps as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlPublicationRepository(IPublicationRepository):
    """Relational storage for publications and their tags."""

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize repository.

        Args:
            session_factory: Factory producing SQLAlchemy sessions
        """
        self.session_factory = session_factory

    @staticmethod
    def _map_to_entity(record: PublicationRecord) -> Publication:
        return Publication(
            id=record.id,
            content=record.content,
            author_id=record.author_id,
            created_on=_as_utc(record.created_on),
            updated_on=_as_utc(record.updated_on),
            images_url=record.images_url,
            tags={t.tag for t in record.tags},
        )

    @staticmethod
    def _ordered(query, order: Ordering):
        column = PublicationRecord.created_on
        if order == Ordering.DESC:
            return query.order_by(column.desc(), PublicationRecord.id.desc())
        return query.order_by(column.asc(), PublicationRecord.id.asc())

    def _page(self, query, skip: int, take: int, order: Ordering) -> Tuple[List[Publication], int]:
        total = query.count()
        records = self._ordered(query, order).offset(skip).limit(take).all()
        return [self._map_to_entity(r) for r in records], total

    async def insert_one(self, publication: Publication) -> str:
        publication_id = uuid4().hex
        try:
            with self.session_factory() as db:
                db.add(
                    PublicationRecord(
                        id=publication_id,
                        content=publication.content,
                        author_id=publication.author_id,
                        created_on=publication.created_on,
                        updated_on=publication.updated_on,
                        images_url=publication.images_url,
                        tags=[PublicationTag(tag=tag) for tag in sorted(publication.tags)],
                    )
                )
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error inserting publication: {e}")
            raise StorageException("insert", str(e)) from e
        return publication_id

    async def find_one_by_id(self, publication_id: str) -> Optional[Publication]:
        try:
            with self.session_factory() as db:
                record = db.get(PublicationRecord, publication_id)
                return self._map_to_entity(record) if record else None
        except SQLAlchemyError as e:
            logger.error(f"Error finding publication {publication_id}: {e}")
            raise StorageException("find", str(e)) from e

    async def find_many(
        self,
        skip: int,
        take: int,
        tags: Sequence[str],
        order: Ordering,
    ) -> Tuple[List[Publication], int]:
        try:
            with self.session_factory() as db:
                query = db.query(PublicationRecord)
                if tags:
                    tagged = select(PublicationTag.publication_id).where(
                        PublicationTag.tag.in_(list(tags))
                    )
                    query = query.filter(PublicationRecord.id.in_(tagged))
                return self._page(query, skip, take, order)
        except SQLAlchemyError as e:
            logger.error(f"Error searching publications: {e}")
            raise StorageException("find_many", str(e)) from e

    async def find_many_by_author(
        self,
        skip: int,
        take: int,
        author_id: str,
        order: Ordering,
    ) -> Tuple[List[Publication], int]:
        try:
            with self.session_factory() as db:
                query = db.query(PublicationRecord).filter(
                    PublicationRecord.author_id == author_id
                )
                return self._page(query, skip, take, order)
        except SQLAlchemyError as e:
            logger.error(f"Error searching publications of author {author_id}: {e}")
            raise StorageException("find_many_by_author", str(e)) from e

    async def update_one(self, publication: Publication) -> None:
        try:
            with self.session_factory() as db:
                record = db.get(PublicationRecord, publication.id)
                if record is None:
                    return
                record.content = publication.content
                record.updated_on = publication.updated_on
                # Keep surviving tag rows so their primary keys are not re-inserted.
                existing = {t.tag: t for t in record.tags}
                record.tags = [
                    existing.get(tag) or PublicationTag(tag=tag)
                    for tag in sorted(publication.tags)
                ]
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error updating publication {publication.id}: {e}")
            raise StorageException("update", str(e)) from e

    async def update_images_url(self, publication_id: str, images_url: str) -> bool:
        try:
            with self.session_factory() as db:
                updated = (
                    db.query(PublicationRecord)
                    .filter(
                        PublicationRecord.id == publication_id,
                        PublicationRecord.images_url.is_(None),
                    )
                    .update(
                        {PublicationRecord.images_url: images_url},
                        synchronize_session=False,
                    )
                )
                db.commit()
                return updated == 1
        except SQLAlchemyError as e:
            logger.error(f"Error setting image of publication {publication_id}: {e}")
            raise StorageException("update_images_url", str(e)) from e

    async def delete_images_url(self, publication_id: str) -> None:
        try:
            with self.session_factory() as db:
                db.query(PublicationRecord).filter(
                    PublicationRecord.id == publication_id
                ).update({PublicationRecord.images_url: None}, synchronize_session=False)
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error clearing image of publication {publication_id}: {e}")
            raise StorageException("delete_images_url", str(e)) from e

    async def delete_one(self, publication_id: str) -> None:
        try:
            with self.session_factory() as db:
                record = db.get(PublicationRecord, publication_id)
                if record is not None:
                    db.delete(record)
                    db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error deleting publication {publication_id}: {e}")
            raise StorageException("delete", str(e)) from e


class SqlCommentRepository(ICommentRepository):
    """Relational storage for comments."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _map_to_entity(record: CommentRecord) -> Comment:
        return Comment(
            id=record.id,
            content=record.content,
            publication_id=record.publication_id,
            reply_comment_id=record.reply_comment_id,
            author_id=record.author_id,
            created_on=_as_utc(record.created_on),
        )

    async def insert_one(self, comment: Comment) -> str:
        comment_id = uuid4().hex
        try:
            with self.session_factory() as db:
                db.add(
                    CommentRecord(
                        id=comment_id,
                        content=comment.content,
                        publication_id=comment.publication_id,
                        reply_comment_id=comment.reply_comment_id,
                        author_id=comment.author_id,
                        created_on=comment.created_on,
                    )
                )
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error inserting comment: {e}")
            raise StorageException("insert", str(e)) from e
        return comment_id

    async def find_one_by_id(self, comment_id: str) -> Optional[Comment]:
        try:
            with self.session_factory() as db:
                record = db.get(CommentRecord, comment_id)
                return self._map_to_entity(record) if record else None
        except SQLAlchemyError as e:
            logger.error(f"Error finding comment {comment_id}: {e}")
            raise StorageException("find", str(e)) from e

    async def find_many(
        self, publication_id: str, skip: int, take: int
    ) -> Tuple[List[Comment], int]:
        try:
            with self.session_factory() as db:
                query = db.query(CommentRecord).filter(
                    CommentRecord.publication_id == publication_id
                )
                total = query.count()
                records = (
                    query.order_by(CommentRecord.created_on.asc(), CommentRecord.id.asc())
                    .offset(skip)
                    .limit(take)
                    .all()
                )
                return [self._map_to_entity(r) for r in records], total
        except SQLAlchemyError as e:
            logger.error(f"Error searching comments of publication {publication_id}: {e}")
            raise StorageException("find_many", str(e)) from e

    async def find_featured(
        self, keys: Sequence[str], limit: int
    ) -> Dict[str, FeaturedInfo]:
        featured = {key: FeaturedInfo() for key in keys}
        if not featured:
            return featured
        try:
            with self.session_factory() as db:
                counts = (
                    db.query(CommentRecord.publication_id, func.count(CommentRecord.id))
                    .filter(CommentRecord.publication_id.in_(list(featured)))
                    .group_by(CommentRecord.publication_id)
                    .all()
                )
                for publication_id, total in counts:
                    featured[publication_id].total_count = total

                if limit > 0:
                    ranked = (
                        db.query(
                            CommentRecord.id.label("id"),
                            func.row_number()
                            .over(
                                partition_by=CommentRecord.publication_id,
                                order_by=[
                                    CommentRecord.created_on.desc(),
                                    CommentRecord.id.desc(),
                                ],
                            )
                            .label("rank"),
                        )
                        .filter(CommentRecord.publication_id.in_(list(featured)))
                        .subquery()
                    )
                    records = (
                        db.query(CommentRecord)
                        .join(ranked, CommentRecord.id == ranked.c.id)
                        .filter(ranked.c.rank <= limit)
                        .order_by(CommentRecord.created_on.asc(), CommentRecord.id.asc())
                        .all()
                    )
                    for record in records:
                        featured[record.publication_id].comments.append(
                            self._map_to_entity(record)
                        )
        except SQLAlchemyError as e:
            logger.error(f"Error loading featured comments: {e}")
            raise StorageException("find_featured", str(e)) from e
        return featured

    async def is_comment_in_publication(
        self, comment_id: str, publication_id: str
    ) -> bool:
        try:
            with self.session_factory() as db:
                found = (
                    db.query(CommentRecord.id)
                    .filter(
                        CommentRecord.id == comment_id,
                        CommentRecord.publication_id == publication_id,
                    )
                    .first()
                )
                return found is not None
        except SQLAlchemyError as e:
            logger.error(f"Error checking comment {comment_id}: {e}")
            raise StorageException("is_comment_in_publication", str(e)) from e

    async def delete_one(self, comment_id: str) -> None:
        try:
            with self.session_factory() as db:
                db.query(CommentRecord).filter(CommentRecord.id == comment_id).delete(
                    synchronize_session=False
                )
                db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error deleting comment {comment_id}: {e}")
            raise StorageException("delete", str(e)) from e

    async def delete_by_publication(self, publication_id: str) -> None:
        try:
            with self.session_factory() as db:
                deleted = (
                    db.query(CommentRecord)
                    .filter(CommentRecord.publication_id == publication_id)
                    .delete(synchronize_session=False)
                )
                db.commit()
                logger.info(f"Deleted {deleted} comments of publication {publication_id}")
        except SQLAlchemyError as e:
            logger.error(f"Error deleting comments of publication {publication_id}: {e}")
            raise StorageException("delete_by_publication", str(e)) from e
