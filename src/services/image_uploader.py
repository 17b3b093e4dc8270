"""Upload pending wizard images to object storage at submit time."""

import posixpath
from typing import Iterable, Optional
from ulid import ULID

from src.models.draft import PendingImage
from src.services.supabase_client import (
    SELLER_IMAGES_BUCKET,
    get_storage_public_url,
    upload_storage_object,
)
from src.utils.errors import ImageUploadError, SupabaseError
from src.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)


def build_storage_path(filename: str, prefix: Optional[str] = None) -> str:
    """``{time-ordered id}-{filename}``; the ULID prefix sorts by upload time."""
    name = posixpath.basename(filename.replace("\\", "/")) or "image"
    return f"{prefix or ULID()}-{name}"


class ImageUploader:
    """Storage-backed uploader for listing images."""

    def __init__(self, bucket: str = SELLER_IMAGES_BUCKET):
        self.bucket = bucket

    async def upload(self, image: PendingImage) -> str:
        """Upload one image and return its public URL."""
        path = build_storage_path(image.filename)
        try:
            await upload_storage_object(path, image.content, image.content_type, bucket=self.bucket)
            return await get_storage_public_url(path, bucket=self.bucket)
        except SupabaseError as e:
            raise ImageUploadError(str(e), filename=image.filename) from e


async def upload_images(images: Iterable[PendingImage], uploader: ImageUploader) -> list[str]:
    """Upload images one after another, stopping at the first failure.

    Objects stored before a failure are left in the bucket unreferenced.
    """
    urls = []
    images = list(images)
    with log_timing("upload_listing_images", logger=logger, image_count=len(images)):
        for index, image in enumerate(images):
            try:
                url = await uploader.upload(image)
            except ImageUploadError as e:
                logger.error(
                    "Image upload failed",
                    image_filename=image.filename,
                    image_index=index,
                    uploaded_before_failure=len(urls),
                    error=str(e),
                )
                raise
            urls.append(url)
    return urls
