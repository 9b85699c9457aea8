"""
Request-scoped access to the handles built at startup
"""

from fastapi import Request

from services.schools_service import SchoolsService
from services.schools_store import SchoolStore


def get_schools_service(request: Request) -> SchoolsService:
    return request.app.state.schools_service


def get_school_store(request: Request) -> SchoolStore:
    return request.app.state.school_store
