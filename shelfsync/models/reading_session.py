from datetime import UTC, datetime

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from shelfsync.database import Base
from shelfsync.models.types import Timestamp, UUIDString


class ReadingSession(Base):
    __tablename__ = "reading_sessions"

    id: Mapped[str] = mapped_column(UUIDString, primary_key=True)
    user_id: Mapped[str] = mapped_column(UUIDString, nullable=False, index=True)
    book_id: Mapped[str] = mapped_column(Text, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    pages_read: Mapped[int | None] = mapped_column(Integer)
    notes: Mapped[str | None] = mapped_column(Text)
    session_date: Mapped[datetime | None] = mapped_column(Timestamp, default=lambda: datetime.now(UTC))
    created_at: Mapped[datetime | None] = mapped_column(Timestamp, default=lambda: datetime.now(UTC))
