"""Service layer for bookmark CRUD operations against the bookmarks table."""
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate

logger = logging.getLogger(__name__)


async def list_bookmarks(db: AsyncSession) -> list[Bookmark]:
    """Return every bookmark in storage (insertion) order."""
    result = await db.execute(select(Bookmark).order_by(Bookmark.id))
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, bookmark_id: int) -> Bookmark | None:
    """Return the bookmark with the given id, or None if it doesn't exist."""
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return result.scalar_one_or_none()


async def create_bookmark(db: AsyncSession, data: BookmarkCreate) -> Bookmark:
    """
    Insert a new bookmark and return it with its generated id.

    Uses flush() rather than commit(); the request's session dependency commits.
    """
    bookmark = Bookmark(
        title=data.title,
        url=data.url,
        description=data.description,
        rating=data.rating,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.info("Created bookmark %s", bookmark.id)
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark | None:
    """
    Apply the supplied fields of a partial update.

    Fields not present in the request body keep their stored values.
    Returns None if the bookmark doesn't exist.
    """
    bookmark = await get_bookmark(db, bookmark_id)
    if bookmark is None:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    logger.info("Updated bookmark %s (%s)", bookmark_id, ", ".join(sorted(data.model_fields_set)))
    return bookmark


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> bool:
    """Delete a bookmark. Returns True if a row was removed."""
    result = await db.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted bookmark %s", bookmark_id)
    return deleted
