"""
Supabase Storage implementation of image storage.

Uploads publication images to a public bucket and deletes them by the
file name at the end of their public URL.
"""

import asyncio
import logging
import mimetypes
from typing import BinaryIO, Optional

from supabase import Client, create_client

from ..domain.exceptions import ImageStorageException
from .image_storage import IImageStorage, file_name_from_url

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class SupabaseImageStorage(IImageStorage):
    """
    Image storage backed by a Supabase Storage bucket.

    The Supabase client is synchronous; calls run in a worker thread so
    they do not block the event loop.
    """

    def __init__(self, client: Client, bucket: str):
        """
        Initialize storage.

        Args:
            client: Configured Supabase client
            bucket: Name of a public bucket holding publication images
        """
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_credentials(cls, url: str, key: str, bucket: str) -> "SupabaseImageStorage":
        """
        Create storage from Supabase credentials.

        Raises:
            ValueError: If url or key is missing
        """
        if not url or not key:
            raise ValueError("Supabase not configured. Set SUPABASE_URL and SUPABASE_SERVICE_KEY")
        logger.info(f"Initializing Supabase image storage for bucket '{bucket}'")
        return cls(create_client(url, key), bucket)

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    @staticmethod
    def _content_type(file_name: str) -> str:
        content_type: Optional[str] = mimetypes.guess_type(file_name)[0]
        return content_type or DEFAULT_CONTENT_TYPE

    async def upload(self, stream: BinaryIO, file_name: str) -> str:
        """Upload the stream and return its public URL."""
        stream.seek(0)
        data = stream.read()
        try:
            await asyncio.to_thread(
                self._bucket().upload,
                file_name,
                data,
                {"content-type": self._content_type(file_name)},
            )
            url = self._bucket().get_public_url(file_name)
        except Exception as e:
            logger.error(f"Error uploading image {file_name} to Supabase: {e}")
            raise ImageStorageException("upload", file_name, str(e)) from e

        logger.info(f"Uploaded image {file_name} ({len(data)} bytes)")
        return url

    async def delete(self, images_url: str) -> None:
        """Remove the blob addressed by a public URL."""
        file_name = file_name_from_url(images_url)
        try:
            await asyncio.to_thread(self._bucket().remove, [file_name])
        except Exception as e:
            logger.error(f"Error deleting image {file_name} from Supabase: {e}")
            raise ImageStorageException("delete", file_name, str(e)) from e

        logger.info(f"Deleted image {file_name}")
