"""
School submission and listing API routes
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from api.dependencies import get_schools_service
from models.school import ImageUpload, SchoolCreatedResponse, SchoolSummary
from services.schools_service import SchoolsService

router = APIRouter()
logger = logging.getLogger(__name__)


async def read_image(image: Optional[UploadFile], max_bytes: int) -> Optional[ImageUpload]:
    """
    Read an uploaded file part, stopping one byte past the size cap

    The size check itself happens in the service, after the text fields.
    """
    if image is None:
        return None

    try:
        data = await image.read(max_bytes + 1)
    finally:
        await image.close()

    return ImageUpload(
        filename=image.filename or "",
        content_type=image.content_type or "application/octet-stream",
        data=data
    )


@router.post("/add", status_code=status.HTTP_201_CREATED, response_model=SchoolCreatedResponse)
async def add_school(
    name: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    contact: Optional[str] = Form(None),
    email_id: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    schools_service: SchoolsService = Depends(get_schools_service)
):
    """Create a school from a multipart form submission"""
    fields = {
        "name": name,
        "address": address,
        "city": city,
        "state": state,
        "contact": contact,
        "email_id": email_id
    }

    upload = await read_image(image, schools_service.max_image_bytes)
    logger.info(f"School submission received (image: {'yes' if upload else 'no'})")
    school_id = await schools_service.create_school(fields, upload)

    return SchoolCreatedResponse(schoolId=school_id)


@router.get("/list", response_model=List[SchoolSummary])
async def list_schools(
    schools_service: SchoolsService = Depends(get_schools_service)
):
    """List all schools, newest first"""
    return await schools_service.list_schools()
