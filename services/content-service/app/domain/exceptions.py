"""
Custom exceptions for the content service.

Expected business conditions are reported through ``DomainResult``;
these exceptions represent unexpected infrastructure failures that the
services let propagate to the HTTP boundary.
"""

from typing import Optional


class ContentServiceException(Exception):
    """Base exception for all content service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StorageException(ContentServiceException):
    """Raised when a document store operation fails."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Storage {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )


class ImageStorageException(ContentServiceException):
    """Raised when the blob storage backend fails."""

    def __init__(
        self, operation: str, file_name: str, reason: Optional[str] = None
    ):
        message = f"Image {operation} failed for '{file_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message,
            details={"operation": operation, "file_name": file_name, "reason": reason},
        )
