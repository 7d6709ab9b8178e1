from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReadingStatus = Literal["not-read", "reading", "finished"]


class UserBookCreate(BaseModel):
    """Catalog snapshot sent when a book is added to the shelf."""

    book_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    authors: list[str] = []
    description: str | None = None
    published_date: str | None = None
    publisher: str | None = None
    categories: list[str] | None = None
    thumbnail_url: str | None = None
    page_count: int | None = Field(None, ge=0)
    average_rating: float | None = None
    ratings_count: int | None = None
    preview_link: str | None = None
    info_link: str | None = None
    language: str | None = None


class UserBookUpdate(BaseModel):
    reading_status: ReadingStatus | None = None
    personal_rating: int | None = Field(None, ge=0, le=5)  # 0 means unrated
    reading_progress: int | None = Field(None, ge=0, le=100)
    current_page: int | None = Field(None, ge=0)
    time_spent_reading: int | None = Field(None, ge=0)
    notes: str | None = None
    my_thoughts: str | None = None
    tags: list[str] | None = None
    date_started: datetime | None = None
    date_finished: datetime | None = None


class UserBookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    book_id: str
    title: str
    authors: list[str] | None
    description: str | None
    published_date: str | None
    publisher: str | None
    categories: list[str] | None
    thumbnail_url: str | None
    page_count: int | None
    average_rating: float | None
    ratings_count: int | None
    preview_link: str | None
    info_link: str | None
    language: str | None
    reading_status: str | None
    personal_rating: int | None
    reading_progress: int | None
    current_page: int | None
    time_spent_reading: int | None
    notes: str | None
    my_thoughts: str | None
    tags: list[str] | None
    date_added: datetime | None
    date_started: datetime | None
    date_finished: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
