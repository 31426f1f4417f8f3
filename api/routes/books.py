"""
Book catalogue endpoints.

Reads are public. Creating, updating and deleting books goes through
``protected_router``, which requires a valid bearer token before the
request body is even looked at.
"""

from typing import Dict

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError

from api.auth import verify_token
from api.config import APIConfig
from api.database import BookConflictError, BookNotFoundError, BookStore, InvalidBookError
from api.dependencies import get_book_store, get_config
from api.models import Book, BookUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/books", tags=["Books"])
protected_router = APIRouter(
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(verify_token)]
)

BOOK_BODY = {"content": {"application/json": {"schema": Book.model_json_schema()}}}
BOOK_UPDATE_BODY = {"content": {"application/json": {"schema": BookUpdate.model_json_schema()}}}


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")


async def _read_update(request: Request) -> BookUpdate:
    """Parse a partial book from the body; an empty or unparseable body changes nothing."""
    body = await request.body()
    if not body:
        return BookUpdate()
    try:
        return BookUpdate.model_validate_json(body)
    except ValidationError as e:
        logger.debug("Ignoring unparseable book body", path=request.url.path, errors=e.error_count())
        return BookUpdate()


@router.get("", response_model=Dict[str, Book])
async def get_books(store: BookStore = Depends(get_book_store)):
    """Get every book keyed by id."""
    return store.list_books()


@router.get(
    "/{book_id}",
    response_model=Book,
    openapi_extra={"requestBody": {**BOOK_UPDATE_BODY, "required": False}}
)
async def get_book(
    book_id: str,
    request: Request,
    store: BookStore = Depends(get_book_store),
    config: APIConfig = Depends(get_config)
):
    """
    Get a single book by ID.

    When ``book_detail_applies_body`` is enabled a JSON body is merged
    onto the book exactly like ``PUT /books/{book_id}``.
    """
    try:
        if not config.book_detail_applies_body:
            return store.get_book(book_id)
        return store.replace_book(book_id, await _read_update(request))
    except BookNotFoundError:
        raise _not_found()


@protected_router.post(
    "",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    openapi_extra={"requestBody": {**BOOK_BODY, "required": True}}
)
async def create_book(request: Request, store: BookStore = Depends(get_book_store)):
    """Create a new book. The id is required and must be unused."""
    try:
        book = Book.model_validate_json(await request.body())
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request payload"
        )

    try:
        return store.create_book(book)
    except InvalidBookError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except BookConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Book ID already exists"
        )


@protected_router.put(
    "/{book_id}",
    response_model=Book,
    openapi_extra={"requestBody": {**BOOK_UPDATE_BODY, "required": True}}
)
async def update_book(
    book_id: str,
    request: Request,
    store: BookStore = Depends(get_book_store)
):
    """Update the fields present in the body. The path id always wins."""
    try:
        return store.replace_book(book_id, await _read_update(request))
    except BookNotFoundError:
        raise _not_found()


@protected_router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(book_id: str, store: BookStore = Depends(get_book_store)):
    """Delete a book."""
    try:
        store.delete_book(book_id)
    except BookNotFoundError:
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
