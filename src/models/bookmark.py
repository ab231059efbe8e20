"""Bookmark model for storing bookmarks."""
from sqlalchemy import CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


MIN_RATING = 1
MAX_RATING = 5


class Bookmark(Base):
    """Bookmark model - a titled, described and rated URL."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        CheckConstraint(
            f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}",
            name="ck_bookmarks_rating_range",
        ),
    )

    # Server-generated; never taken from the request body
    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Bookmark id={self.id} url={self.url!r}>"
