"""
Database models for content service.

This module defines SQLAlchemy ORM models for publications, their
hashtags and comments.
"""

from typing import Any

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base: Any = declarative_base()

ID_LENGTH = 32


class PublicationRecord(Base):
    """
    Publication row.

    Attributes:
        id: Hex uuid assigned on insert
        content: Publication text
        author_id: Opaque identifier of the creator, unbounded
        created_on: Creation timestamp
        updated_on: Timestamp of the last content update, NULL until then
        images_url: URL of the attached image, NULL when none
        tags: Hashtags derived from the content
    """

    __tablename__ = "publications"

    id = Column(String(ID_LENGTH), primary_key=True)
    content = Column(Text, nullable=False)
    author_id = Column(Text, nullable=False, index=True)
    created_on = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_on = Column(DateTime(timezone=True), nullable=True)
    images_url = Column(String(2048), nullable=True)

    tags = relationship(
        "PublicationTag",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class PublicationTag(Base):
    """One hashtag of a publication. Tags are as long as the content allows."""

    __tablename__ = "publication_tags"

    publication_id = Column(
        String(ID_LENGTH),
        ForeignKey("publications.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag = Column(Text, primary_key=True)

    __table_args__ = (Index("idx_publication_tags_tag", "tag"),)


class CommentRecord(Base):
    """
    Comment row.

    ``publication_id`` is not a foreign key: comments are purged by the
    service before their publication is deleted.
    """

    __tablename__ = "comments"

    id = Column(String(ID_LENGTH), primary_key=True)
    content = Column(Text, nullable=False)
    publication_id = Column(String(ID_LENGTH), nullable=False)
    reply_comment_id = Column(String(ID_LENGTH), nullable=True)
    author_id = Column(Text, nullable=False)
    created_on = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_comments_publication_created", "publication_id", "created_on"),
    )
