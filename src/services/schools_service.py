"""
Schools service - business logic for school submissions and listing
"""

import logging
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from models.school import ImageUpload, SchoolCreateForm, SchoolRecord, SchoolSummary
from services.image_host import CloudinaryImageHost
from services.schools_store import SchoolStore
from utils.errors import StorageError, UploadError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "address", "city", "state", "contact", "email_id")

# Validation messages keyed by the form field that failed
FIELD_MESSAGES = {
    "contact": "Contact must be a valid 10-digit number",
    "email_id": "Please enter a valid email address",
}


def decode_school_form(fields: Dict[str, Optional[str]]) -> SchoolCreateForm:
    """
    Decode raw form fields into a validated SchoolCreateForm

    Raises:
        ValidationError: a required field is missing or blank, or a field is malformed
    """
    for field in REQUIRED_FIELDS:
        value = fields.get(field)
        if value is None or not str(value).strip():
            raise ValidationError("All fields are required")

    try:
        return SchoolCreateForm(**{field: fields[field] for field in REQUIRED_FIELDS})
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = first["loc"][0] if first.get("loc") else None
        raise ValidationError(FIELD_MESSAGES.get(field, "All fields are required")) from e


def _format_size(num_bytes: int) -> str:
    if num_bytes >= 1024 * 1024 and num_bytes % (1024 * 1024) == 0:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes} bytes"


def check_image(image: Optional[ImageUpload], max_bytes: int) -> Optional[ImageUpload]:
    """
    Validate an optional image part; an empty part counts as no image

    Raises:
        ValidationError: the file is not an image or is too large
    """
    if image is None or (not image.filename and not image.data):
        return None
    if not image.is_image:
        raise ValidationError("Only image files are allowed")
    if image.size == 0:
        raise ValidationError("Uploaded image is empty")
    if image.size > max_bytes:
        raise ValidationError(f"Image must be {_format_size(max_bytes)} or smaller")
    return image


class SchoolsService:
    """Creates and lists school records"""

    def __init__(self, store: SchoolStore, image_host: CloudinaryImageHost, max_image_bytes: int):
        self.store = store
        self.image_host = image_host
        self.max_image_bytes = max_image_bytes

    async def create_school(
        self,
        fields: Dict[str, Optional[str]],
        image: Optional[ImageUpload] = None
    ) -> int:
        """
        Validate a submission, upload its image and persist it

        Validation happens before any side effect. The image is uploaded
        before the insert so a stored URL always points at a hosted file.
        If the insert fails the hosted image is deleted again.

        Args:
            fields: Raw text form fields
            image: Optional image file part

        Returns:
            The id assigned to the new school
        """
        form = decode_school_form(fields)
        image = check_image(image, self.max_image_bytes)

        hosted = None
        if image is not None:
            hosted = await self.image_host.upload(image)

        record = SchoolRecord.from_form(form, image_url=hosted.url if hosted else None)

        try:
            school_id = await self.store.insert(record)
        except StorageError:
            if hosted is not None:
                await self._discard_hosted_image(hosted.public_id)
            raise

        logger.info(f"Created school {school_id}: {record.name} ({record.city})")
        return school_id

    async def list_schools(self) -> List[SchoolSummary]:
        """Reduced projection of every school, newest first"""
        return await self.store.list_recent()

    async def _discard_hosted_image(self, public_id: str) -> None:
        try:
            await self.image_host.delete(public_id)
        except UploadError as e:
            # The insert failure is what the caller sees
            logger.error(f"Orphaned hosted image {public_id}: {e}")
