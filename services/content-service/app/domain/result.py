"""
Domain result type.

Business operations return a ``DomainResult`` instead of raising for
expected conditions, which keeps "validation failed", "not found" and
"conflict" distinguishable from infrastructure failures (those still
raise).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Categories of expected domain failures."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class DomainError:
    """
    Structured description of a rejected operation.

    Attributes:
        kind: Failure category
        code: Stable machine-readable code
        message: Human-readable message
        details: Offending values for diagnostics
    """

    kind: ErrorKind
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def content_too_short(cls, min_length: int) -> "DomainError":
        return cls(
            kind=ErrorKind.VALIDATION,
            code="content_too_short",
            message=f"Content length is less than {min_length} characters",
            details={"min_length": min_length},
        )

    @classmethod
    def content_too_long(cls, max_length: int) -> "DomainError":
        return cls(
            kind=ErrorKind.VALIDATION,
            code="content_too_long",
            message=f"Content length is greater than {max_length} characters",
            details={"max_length": max_length},
        )

    @classmethod
    def not_found(cls, entity: str, entity_id: Optional[str]) -> "DomainError":
        return cls(
            kind=ErrorKind.NOT_FOUND,
            code="not_found",
            message=f"{entity.capitalize()} not found",
            details={"entity": entity, "id": entity_id},
        )

    @classmethod
    def publication_not_found(cls, publication_id: str) -> "DomainError":
        return cls(
            kind=ErrorKind.NOT_FOUND,
            code="publication_not_found",
            message="Publication not found",
            details={"publication_id": publication_id},
        )

    @classmethod
    def reply_target_not_in_publication(
        cls, reply_comment_id: str, publication_id: str
    ) -> "DomainError":
        return cls(
            kind=ErrorKind.NOT_FOUND,
            code="reply_target_not_in_publication",
            message="Comment id not found",
            details={
                "reply_comment_id": reply_comment_id,
                "publication_id": publication_id,
            },
        )

    @classmethod
    def image_already_exists(cls, publication_id: str) -> "DomainError":
        return cls(
            kind=ErrorKind.CONFLICT,
            code="image_already_exists",
            message="Publication already has an image",
            details={"publication_id": publication_id},
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for API error payloads."""
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


@dataclass(frozen=True)
class DomainResult(Generic[T]):
    """
    Outcome of a business operation: either a value or a ``DomainError``.

    Build instances with ``DomainResult.ok`` and ``DomainResult.fail``.
    """

    value: Optional[T] = None
    error: Optional[DomainError] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "DomainResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: DomainError) -> "DomainResult[T]":
        return cls(error=error)

    @property
    def successed(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.successed
