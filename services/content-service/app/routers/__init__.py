"""
API routers for content service endpoints.
"""

from . import comments_router, health_router, publications_router

__all__ = ["publications_router", "comments_router", "health_router"]
