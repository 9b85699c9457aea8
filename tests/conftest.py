"""
pytest configuration and fixtures for the school directory suite
In-memory store and image host stand in for PostgreSQL and Cloudinary
"""

from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio

from app import attach_services, create_app
from models.school import HostedImage, ImageUpload, SchoolRecord, SchoolSummary
from utils.errors import StorageError, UploadError


class FakeSchoolStore:
    """In-memory schools table with store-assigned ids and timestamps"""

    def __init__(self):
        self.rows: List[SchoolRecord] = []
        self.fail_insert = False
        self.fail_list = False
        self.fail_ping = False
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, 8, 0, 0)
        # Set to timedelta(0) to make consecutive inserts share created_at
        self.clock_step = timedelta(seconds=1)

    async def insert(self, record: SchoolRecord) -> int:
        if self.fail_insert:
            raise StorageError("insert failed: connection reset")
        self._clock += self.clock_step
        stored = record.model_copy(update={"id": self._next_id, "created_at": self._clock})
        self.rows.append(stored)
        self._next_id += 1
        return stored.id

    async def list_recent(self) -> List[SchoolSummary]:
        if self.fail_list:
            raise StorageError("select failed: connection reset")
        ordered = sorted(self.rows, key=lambda row: (row.created_at, row.id), reverse=True)
        return [
            SchoolSummary(id=row.id, name=row.name, address=row.address, city=row.city, image=row.image)
            for row in ordered
        ]

    async def ping(self) -> None:
        if self.fail_ping:
            raise StorageError("record store unreachable")


class FakeImageHost:
    """Records uploads and deletions instead of calling Cloudinary"""

    def __init__(self):
        self.uploads: List[ImageUpload] = []
        self.deleted: List[str] = []
        self.fail_upload = False
        self.fail_delete = False

    @property
    def is_configured(self) -> bool:
        return True

    async def upload(self, image: ImageUpload) -> HostedImage:
        if self.fail_upload:
            raise UploadError("cloudinary returned 500")
        self.uploads.append(image)
        public_id = f"school-images/school-{len(self.uploads)}"
        return HostedImage(
            url=f"https://res.cloudinary.com/demo/image/upload/{public_id}.png",
            public_id=public_id
        )

    async def delete(self, public_id: str) -> None:
        if self.fail_delete:
            raise UploadError("cloudinary delete failed")
        self.deleted.append(public_id)


@pytest.fixture
def fake_store() -> FakeSchoolStore:
    return FakeSchoolStore()


@pytest.fixture
def fake_image_host() -> FakeImageHost:
    return FakeImageHost()


@pytest.fixture
def school_app(fake_store, fake_image_host):
    """Application with fakes attached the same way the lifespan attaches real handles"""
    application = create_app()
    attach_services(application, fake_store, fake_image_host)
    return application


@pytest_asyncio.fixture
async def client(school_app):
    transport = httpx.ASGITransport(app=school_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
def oak_fields() -> Dict[str, str]:
    return {
        "name": "Oak Elementary",
        "address": "1 Oak Rd",
        "city": "Springfield",
        "state": "IL",
        "contact": "5551234567",
        "email_id": "a@b.com"
    }


class FakePool:
    """Minimal asyncpg pool: acquire() yields one shared mocked connection"""

    def __init__(self, conn: Optional[MagicMock] = None):
        self.conn = conn or make_connection()

    @asynccontextmanager
    async def acquire(self):
        yield self.conn


def make_connection() -> MagicMock:
    conn = MagicMock()
    conn.fetchval = AsyncMock()
    conn.fetch = AsyncMock(return_value=[])
    conn.execute = AsyncMock()

    @asynccontextmanager
    async def transaction():
        yield

    conn.transaction = transaction
    return conn


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()
