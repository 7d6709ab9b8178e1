from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReadingSessionCreate(BaseModel):
    book_id: str
    duration_minutes: int = Field(ge=1)
    pages_read: int | None = Field(None, ge=0)
    notes: str | None = None
    session_date: datetime | None = None  # defaults to now in the endpoint


class ReadingSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    book_id: str
    duration_minutes: int
    pages_read: int | None
    notes: str | None
    session_date: datetime | None
    created_at: datetime | None
