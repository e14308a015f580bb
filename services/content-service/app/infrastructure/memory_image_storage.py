"""
In-memory image storage.

Keeps uploaded blobs in a dictionary keyed by file name. Used for local
development and tests in place of the Supabase bucket.
"""

import logging
from typing import BinaryIO, Dict, Optional

from .image_storage import IImageStorage, file_name_from_url

logger = logging.getLogger(__name__)


class InMemoryImageStorage(IImageStorage):
    """Dictionary-backed blob storage serving ``memory://`` URLs."""

    def __init__(self, base_url: str = "memory://images"):
        self.base_url = base_url.rstrip("/")
        self.blobs: Dict[str, bytes] = {}

    async def upload(self, stream: BinaryIO, file_name: str) -> str:
        stream.seek(0)
        self.blobs[file_name] = stream.read()
        logger.debug(f"Stored image {file_name} ({len(self.blobs[file_name])} bytes)")
        return f"{self.base_url}/{file_name}"

    async def delete(self, images_url: str) -> None:
        self.blobs.pop(file_name_from_url(images_url), None)

    def get(self, images_url: str) -> Optional[bytes]:
        """Return the stored bytes for a URL, or None if not served."""
        return self.blobs.get(file_name_from_url(images_url))
