from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelfsync.database import get_session
from shelfsync.id import make_id
from shelfsync.models import UserBook
from shelfsync.schemas.common import UserId
from shelfsync.schemas.user_book import (
    ReadingStatus,
    UserBookCreate,
    UserBookResponse,
    UserBookUpdate,
)

router = APIRouter(prefix="/api/users/{user_id}/books", tags=["bookshelf"])


async def get_entry_or_404(session: AsyncSession, user_id: str, book_id: str) -> UserBook:
    entry = (
        await session.execute(
            select(UserBook).where(UserBook.user_id == user_id, UserBook.book_id == book_id)
        )
    ).scalar_one_or_none()
    if entry is None:
        raise HTTPException(status_code=404, detail="Book not found in your library")
    return entry


def _apply_status_dates(entry: UserBook, now: datetime) -> None:
    if entry.reading_status in ("reading", "finished") and entry.date_started is None:
        entry.date_started = now
    if entry.reading_status == "finished":
        if entry.date_finished is None:
            entry.date_finished = now
        entry.reading_progress = 100


@router.post("", response_model=UserBookResponse, status_code=201)
async def add_to_bookshelf(
    user_id: UserId,
    data: UserBookCreate,
    session: AsyncSession = Depends(get_session),
):
    entry_id = make_id(user_id, data.book_id)
    existing = (await session.execute(select(UserBook).where(UserBook.id == entry_id))).scalar_one_or_none()
    if existing is not None:
        raise HTTPException(status_code=409, detail="This book is already in your library")

    entry = UserBook(
        id=entry_id,
        user_id=user_id,
        **data.model_dump(),
        reading_status="not-read",
        personal_rating=0,
        reading_progress=0,
        current_page=0,
        time_spent_reading=0,
        notes="",
        my_thoughts="",
        tags=[],
        date_added=datetime.now(UTC),
    )
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    return entry


@router.get("", response_model=list[UserBookResponse])
async def list_bookshelf(
    user_id: UserId,
    status: ReadingStatus | None = Query(None, description="Filter by reading status"),
    session: AsyncSession = Depends(get_session),
):
    stmt = select(UserBook).where(UserBook.user_id == user_id)
    if status:
        stmt = stmt.where(UserBook.reading_status == status)
    stmt = stmt.order_by(UserBook.date_added.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("/{book_id}", response_model=UserBookResponse)
async def get_bookshelf_entry(
    user_id: UserId,
    book_id: str,
    session: AsyncSession = Depends(get_session),
):
    return await get_entry_or_404(session, user_id, book_id)


@router.put("/{book_id}", response_model=UserBookResponse)
async def update_bookshelf_entry(
    user_id: UserId,
    book_id: str,
    data: UserBookUpdate,
    session: AsyncSession = Depends(get_session),
):
    entry = await get_entry_or_404(session, user_id, book_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(entry, key, value)
    now = datetime.now(UTC)
    _apply_status_dates(entry, now)
    entry.updated_at = now
    await session.commit()
    await session.refresh(entry)
    return entry


@router.delete("/{book_id}", status_code=204)
async def remove_from_bookshelf(
    user_id: UserId,
    book_id: str,
    session: AsyncSession = Depends(get_session),
):
    entry = await get_entry_or_404(session, user_id, book_id)
    await session.delete(entry)
    await session.commit()
