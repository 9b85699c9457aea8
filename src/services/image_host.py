"""
Cloudinary image hosting service
"""

import asyncio
import logging
import uuid
from typing import Optional

import cloudinary
import cloudinary.uploader

from models.school import HostedImage, ImageUpload
from utils.errors import UploadError

logger = logging.getLogger(__name__)


class CloudinaryImageHost:
    """Uploads school images to Cloudinary and returns their public URLs"""

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        folder: str = "school-images"
    ):
        self.folder = folder
        self._config = None
        if cloud_name and api_key and api_secret:
            self._config = dict(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret, secure=True)
            cloudinary.config(**self._config)

    @property
    def is_configured(self) -> bool:
        return self._config is not None

    async def upload(self, image: ImageUpload) -> HostedImage:
        """Upload image bytes into the configured folder"""
        if not self.is_configured:
            raise UploadError("Cloudinary credentials are not configured")

        public_id = f"school-{uuid.uuid4().hex}"
        try:
            # The SDK is blocking; keep it off the event loop
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                image.data,
                folder=self.folder,
                public_id=public_id,
                resource_type="image",
                **self._config
            )
        except Exception as e:
            logger.error(f"Failed to upload {image.filename} to Cloudinary: {e}")
            raise UploadError(f"Cloudinary upload failed: {e}") from e

        url = result.get("secure_url") or result.get("url")
        if not url:
            raise UploadError(f"Cloudinary response missing URL for {public_id}")

        logger.info(f"Uploaded {image.filename} ({image.size} bytes) to {url}")
        return HostedImage(url=url, public_id=result.get("public_id", f"{self.folder}/{public_id}"))

    async def delete(self, public_id: str) -> None:
        """Remove a previously uploaded image"""
        if not self.is_configured:
            raise UploadError("Cloudinary credentials are not configured")

        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.destroy,
                public_id,
                resource_type="image",
                invalidate=True,
                **self._config
            )
        except Exception as e:
            raise UploadError(f"Cloudinary delete failed for {public_id}: {e}") from e

        if result.get("result") not in ("ok", "not found"):
            raise UploadError(f"Cloudinary delete returned {result!r} for {public_id}")

        logger.info(f"Deleted hosted image {public_id}")
