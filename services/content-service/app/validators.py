"""
Content validation strategies.

A validator checks text against business rules and returns a
``DomainResult``. Services receive a validator at construction time, so
rule sets (minimum length, maximum length, combinations) can be swapped
without touching them.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .domain.result import DomainError, DomainResult


class ContentValidator(ABC):
    """Validates publication or comment text against business rules."""

    @abstractmethod
    def validate(self, content: str) -> DomainResult[None]:
        """
        Validate content.

        Args:
            content: Text to check

        Returns:
            Successful result, or a failed result with a validation error
        """
        pass


class MinLengthValidator(ContentValidator):
    """
    Rejects content shorter than a minimum length.

    Args:
        min_length: Minimum number of characters (must be >= 0)
    """

    def __init__(self, min_length: int):
        if min_length < 0:
            raise ValueError(f"min_length must be >= 0, got {min_length}")
        self.min_length = min_length

    def validate(self, content: str) -> DomainResult[None]:
        if len(content) < self.min_length:
            return DomainResult.fail(DomainError.content_too_short(self.min_length))
        return DomainResult.ok()


class MaxLengthValidator(ContentValidator):
    """Rejects content longer than a maximum length."""

    def __init__(self, max_length: int):
        if max_length < 1:
            raise ValueError(f"max_length must be >= 1, got {max_length}")
        self.max_length = max_length

    def validate(self, content: str) -> DomainResult[None]:
        if len(content) > self.max_length:
            return DomainResult.fail(DomainError.content_too_long(self.max_length))
        return DomainResult.ok()


class CompositeValidator(ContentValidator):
    """Runs validators in order and returns the first failure."""

    def __init__(self, validators: Sequence[ContentValidator]):
        self.validators = list(validators)

    def validate(self, content: str) -> DomainResult[None]:
        for validator in self.validators:
            result = validator.validate(content)
            if not result.successed:
                return result
        return DomainResult.ok()


def build_validator(
    min_length: int, max_length: Optional[int] = None
) -> ContentValidator:
    """
    Build the validator for one kind of content from configured limits.

    Args:
        min_length: Minimum content length
        max_length: Optional maximum content length

    Returns:
        A single validator, or a composite when both limits apply
    """
    min_validator = MinLengthValidator(min_length)
    if max_length is None:
        return min_validator
    return CompositeValidator([min_validator, MaxLengthValidator(max_length)])
