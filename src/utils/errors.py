"""
Exception taxonomy for the school directory

Each error carries the HTTP status it maps to and a message that is safe to
return to the client. Internal detail goes to the server log only.
"""

from typing import Optional


class SchoolDirectoryError(Exception):
    """Base class for errors raised by the school directory services"""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, detail: str = "", message: Optional[str] = None):
        super().__init__(detail or message or self.public_message)
        self.detail = detail
        self.message = message or self.public_message


class ValidationError(SchoolDirectoryError):
    """Client supplied incomplete or malformed data"""

    status_code = 400
    public_message = "All fields are required"

    def __init__(self, message: str = "All fields are required"):
        super().__init__(detail=message, message=message)


class UploadError(SchoolDirectoryError):
    """Image host call failed"""


class StorageError(SchoolDirectoryError):
    """Table bootstrap or query failed"""


class MethodNotAllowedError(SchoolDirectoryError):
    """Wrong HTTP verb for the endpoint"""

    status_code = 405
    public_message = "Method not allowed"
