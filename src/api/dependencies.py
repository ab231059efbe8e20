"""FastAPI dependencies for injection."""
import logging

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import verify_api_token
from core.config import get_settings
from db.session import get_async_session
from models.bookmark import Bookmark
from services import bookmark_service

logger = logging.getLogger(__name__)

BOOKMARK_NOT_FOUND = "Bookmark doesn't exist"

# Upper bound of the INTEGER primary key; larger ids cannot exist
MAX_BOOKMARK_ID = 2**31 - 1


def parse_bookmark_id(raw_id: str) -> int | None:
    """Parse a path id; returns None for anything that can't be a stored id."""
    if not raw_id.isascii() or not raw_id.isdigit():
        return None
    bookmark_id = int(raw_id)
    if not 1 <= bookmark_id <= MAX_BOOKMARK_ID:
        return None
    return bookmark_id


async def get_existing_bookmark(
    bookmark_id: str,
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """
    Dependency that loads the bookmark named in the path or fails with 404.

    Shared by get, update and delete. Malformed ids are not distinguished from
    unknown ones.
    """
    parsed_id = parse_bookmark_id(bookmark_id)
    bookmark = None if parsed_id is None else await bookmark_service.get_bookmark(db, parsed_id)
    if bookmark is None:
        logger.info("Bookmark with id %s not found", bookmark_id)
        raise HTTPException(status_code=404, detail=BOOKMARK_NOT_FOUND)
    return bookmark


__all__ = [
    "BOOKMARK_NOT_FOUND",
    "get_async_session",
    "get_existing_bookmark",
    "get_settings",
    "parse_bookmark_id",
    "verify_api_token",
]
