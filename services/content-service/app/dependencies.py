"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .services.comment_service import CommentService
    from .services.publication_service import PublicationService

# Global service instances (set by main app)
_publication_service: Optional["PublicationService"] = None
_comment_service: Optional["CommentService"] = None


def set_services(
    publication_service: "PublicationService", comment_service: "CommentService"
) -> None:
    """
    Set the global service instances.

    Called by main app during startup.
    """
    global _publication_service, _comment_service
    _publication_service = publication_service
    _comment_service = comment_service


async def get_publication_service() -> "PublicationService":
    """Get publication service instance for dependency injection."""
    if _publication_service is None:
        raise RuntimeError("Publication service not initialized")
    return _publication_service


async def get_comment_service() -> "CommentService":
    """Get comment service instance for dependency injection."""
    if _comment_service is None:
        raise RuntimeError("Comment service not initialized")
    return _comment_service
