from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    username: str | None = None
    email: str | None = None
    favorite_genres: list[str] | None = None
    reading_goal: int | None = Field(None, ge=1)
    preferred_reading_time: str | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    username: str | None
    email: str | None
    favorite_genres: list[str] | None
    reading_goal: int | None
    preferred_reading_time: str | None
    created_at: datetime | None
    updated_at: datetime | None
