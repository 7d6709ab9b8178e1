from datetime import UTC, datetime

from sqlalchemy import Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shelfsync.database import Base
from shelfsync.models.types import StringList, Timestamp, UUIDString


class UserBook(Base):
    __tablename__ = "user_books"
    __table_args__ = (UniqueConstraint("user_id", "book_id"),)

    id: Mapped[str] = mapped_column(UUIDString, primary_key=True)
    user_id: Mapped[str] = mapped_column(UUIDString, nullable=False, index=True)
    book_id: Mapped[str] = mapped_column(Text, nullable=False)

    # Catalog snapshot taken when the book was shelved
    title: Mapped[str] = mapped_column(Text, nullable=False)
    authors: Mapped[list[str] | None] = mapped_column(StringList)
    description: Mapped[str | None] = mapped_column(Text)
    published_date: Mapped[str | None] = mapped_column(Text)
    publisher: Mapped[str | None] = mapped_column(Text)
    categories: Mapped[list[str] | None] = mapped_column(StringList)
    thumbnail_url: Mapped[str | None] = mapped_column(Text)
    page_count: Mapped[int | None] = mapped_column(Integer)
    average_rating: Mapped[float | None] = mapped_column(Float)
    ratings_count: Mapped[int | None] = mapped_column(Integer)
    preview_link: Mapped[str | None] = mapped_column(Text)
    info_link: Mapped[str | None] = mapped_column(Text)
    language: Mapped[str | None] = mapped_column(String(20))

    # Personal state
    reading_status: Mapped[str | None] = mapped_column(String(20), default="not-read")
    personal_rating: Mapped[int | None] = mapped_column(Integer, default=0)
    reading_progress: Mapped[int | None] = mapped_column(Integer, default=0)
    current_page: Mapped[int | None] = mapped_column(Integer, default=0)
    time_spent_reading: Mapped[int | None] = mapped_column(Integer, default=0)
    notes: Mapped[str | None] = mapped_column(Text)
    my_thoughts: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list[str] | None] = mapped_column(StringList)
    date_added: Mapped[datetime | None] = mapped_column(Timestamp, default=lambda: datetime.now(UTC))
    date_started: Mapped[datetime | None] = mapped_column(Timestamp)
    date_finished: Mapped[datetime | None] = mapped_column(Timestamp)

    created_at: Mapped[datetime | None] = mapped_column(Timestamp, default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime | None] = mapped_column(Timestamp, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))
