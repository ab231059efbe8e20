"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import (
    BOOKMARK_NOT_FOUND,
    get_async_session,
    get_existing_bookmark,
    verify_api_token,
)
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkResponse
from schemas.errors import ErrorResponse
from schemas.validators import validate_bookmark_create, validate_bookmark_update
from services import bookmark_service
from services.sanitizer import sanitize_bookmark

router = APIRouter(
    prefix="/bookmarks",
    tags=["bookmarks"],
    dependencies=[Depends(verify_api_token)],
    responses={401: {"model": ErrorResponse}},
)


@router.get("", response_model=list[BookmarkResponse], include_in_schema=False)
@router.get("/", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks. Returns an empty list when there are none."""
    bookmarks = await bookmark_service.list_bookmarks(db)
    return [sanitize_bookmark(b) for b in bookmarks]


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=201,
    include_in_schema=False,
)
@router.post(
    "/",
    response_model=BookmarkResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_bookmark(
    response: Response,
    payload: dict[str, Any] | None = Body(default=None),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Create a new bookmark; the Location header points at the new resource."""
    data = validate_bookmark_create(payload)
    bookmark = await bookmark_service.create_bookmark(db, data)
    response.headers["Location"] = f"{router.prefix}/{bookmark.id}"
    return sanitize_bookmark(bookmark)


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return sanitize_bookmark(bookmark)


@router.patch(
    "/{bookmark_id}",
    status_code=204,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_bookmark(
    payload: dict[str, Any] | None = Body(default=None),
    bookmark: Bookmark = Depends(get_existing_bookmark),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Partially update a bookmark.

    Existence is checked before the body is validated, so an unknown id is a
    404 even when the body is invalid.
    """
    data = validate_bookmark_update(payload)
    updated = await bookmark_service.update_bookmark(db, bookmark.id, data)
    # Row removed by a concurrent request after the existence check
    if updated is None:
        raise HTTPException(status_code=404, detail=BOOKMARK_NOT_FOUND)


@router.delete(
    "/{bookmark_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
async def delete_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    deleted = await bookmark_service.delete_bookmark(db, bookmark.id)
    # Row removed by a concurrent request after the existence check
    if not deleted:
        raise HTTPException(status_code=404, detail=BOOKMARK_NOT_FOUND)
