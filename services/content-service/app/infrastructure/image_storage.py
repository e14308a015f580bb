"""
Image storage interface (Abstract Base Class).

Blob storage contract used for publication image attachments.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO
from urllib.parse import unquote, urlsplit


class IImageStorage(ABC):
    """Uploads and deletes image blobs addressed by URL."""

    @abstractmethod
    async def upload(self, stream: BinaryIO, file_name: str) -> str:
        """
        Upload an image.

        Args:
            stream: Readable binary stream positioned anywhere
            file_name: Unique blob name including extension

        Returns:
            Public URL of the stored image
        """
        pass

    @abstractmethod
    async def delete(self, images_url: str) -> None:
        """
        Delete an image by the URL returned from ``upload``.

        Deleting an image that no longer exists is a no-op.
        """
        pass


def file_name_from_url(images_url: str) -> str:
    """Return the blob name, i.e. the last path segment of the URL."""
    path = urlsplit(images_url).path
    return unquote(path.rstrip("/").rsplit("/", 1)[-1])
