"""
Health check endpoint (no authentication required).
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from api.config import APIConfig
from api.database import BookStore
from api.dependencies import get_book_store, get_config
from api.models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: BookStore = Depends(get_book_store),
    config: APIConfig = Depends(get_config)
):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=config.api_version,
        books_count=store.count()
    )
