"""
School-related Pydantic models
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

CONTACT_PATTERN = re.compile(r"^[0-9]{10}$")


class SchoolCreateForm(BaseModel):
    """Decoded and validated text fields of a school submission"""
    name: str
    address: str
    city: str
    state: str
    contact: str
    email_id: EmailStr

    @field_validator("name", "address", "city", "state", "contact", "email_id", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("contact")
    @classmethod
    def validate_contact(cls, value: str) -> str:
        # ASCII digits only; str.isdigit would accept other scripts
        if not CONTACT_PATTERN.match(value):
            raise ValueError("Contact must be a valid 10-digit number")
        return value


class ImageUpload(BaseModel):
    """Image file part of a school submission"""
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_image(self) -> bool:
        return self.content_type.lower().startswith("image/")


class HostedImage(BaseModel):
    """An image stored on the image host"""
    url: str
    public_id: str


class SchoolRecord(BaseModel):
    """Row written to the schools table"""
    name: str
    address: str
    city: str
    state: str
    contact: int
    email_id: str
    image: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_form(cls, form: SchoolCreateForm, image_url: Optional[str] = None) -> "SchoolRecord":
        return cls(
            name=form.name,
            address=form.address,
            city=form.city,
            state=form.state,
            contact=int(form.contact),
            email_id=str(form.email_id),
            image=image_url
        )


class SchoolSummary(BaseModel):
    """Reduced projection returned by the listing endpoint"""
    id: int
    name: str
    address: str
    city: str
    image: Optional[str] = None


class SchoolCreatedResponse(BaseModel):
    message: str = "School added successfully"
    schoolId: int
