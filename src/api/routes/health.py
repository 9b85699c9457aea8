"""
Health check API route
"""

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_school_store
from services.schools_store import SchoolStore
from utils.errors import StorageError

router = APIRouter()

@router.get("/")
async def health_check(store: SchoolStore = Depends(get_school_store)):
    """Health check"""
    try:
        await store.ping()
    except StorageError:
        raise HTTPException(status_code=503, detail="Health check failed: database unavailable")

    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "database": "connected"
    }
