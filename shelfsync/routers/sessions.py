from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelfsync.database import get_session
from shelfsync.id import new_id
from shelfsync.models import ReadingSession
from shelfsync.schemas.common import UserId
from shelfsync.routers.user_books import get_entry_or_404
from shelfsync.schemas.reading_session import ReadingSessionCreate, ReadingSessionResponse

router = APIRouter(prefix="/api/users/{user_id}/sessions", tags=["reading sessions"])


@router.post("", response_model=ReadingSessionResponse, status_code=201)
async def log_session(
    user_id: UserId,
    data: ReadingSessionCreate,
    session: AsyncSession = Depends(get_session),
):
    entry = await get_entry_or_404(session, user_id, data.book_id)
    now = datetime.now(UTC)

    # Roll the finished session into the shelf entry's running totals
    entry.time_spent_reading = (entry.time_spent_reading or 0) + data.duration_minutes
    entry.current_page = (entry.current_page or 0) + (data.pages_read or 0)
    if entry.page_count:
        entry.reading_progress = min(100, int(entry.current_page / entry.page_count * 100))
    entry.updated_at = now

    reading_session = ReadingSession(
        id=new_id(),
        user_id=user_id,
        book_id=data.book_id,
        duration_minutes=data.duration_minutes,
        pages_read=data.pages_read,
        notes=data.notes,
        session_date=data.session_date or now,
    )
    session.add(reading_session)
    await session.commit()
    await session.refresh(reading_session)
    return reading_session


@router.get("", response_model=list[ReadingSessionResponse])
async def list_sessions(
    user_id: UserId,
    book_id: str | None = None,
    session: AsyncSession = Depends(get_session),
):
    stmt = select(ReadingSession).where(ReadingSession.user_id == user_id)
    if book_id:
        stmt = stmt.where(ReadingSession.book_id == book_id)
    stmt = stmt.order_by(ReadingSession.session_date.desc())
    result = await session.execute(stmt)
    return result.scalars().all()
