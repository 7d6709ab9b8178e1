from datetime import UTC, datetime

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shelfsync.database import Base
from shelfsync.models.types import StringList, Timestamp, UUIDString


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(UUIDString, primary_key=True)
    user_id: Mapped[str] = mapped_column(UUIDString, nullable=False, unique=True, index=True)
    username: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(Text)
    favorite_genres: Mapped[list[str] | None] = mapped_column(StringList)
    reading_goal: Mapped[int | None] = mapped_column(Integer, default=12)
    preferred_reading_time: Mapped[str | None] = mapped_column(String(50))
    created_at: Mapped[datetime | None] = mapped_column(Timestamp, default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime | None] = mapped_column(Timestamp, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))
