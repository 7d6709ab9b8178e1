from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelfsync.database import get_session
from shelfsync.id import make_id
from shelfsync.models import Profile
from shelfsync.schemas.common import UserId
from shelfsync.schemas.profile import ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/api/users/{user_id}/profile", tags=["profiles"])


@router.get("", response_model=ProfileResponse)
async def get_profile(user_id: UserId, session: AsyncSession = Depends(get_session)):
    profile = (
        await session.execute(select(Profile).where(Profile.user_id == user_id))
    ).scalar_one_or_none()
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("", response_model=ProfileResponse)
async def upsert_profile(
    user_id: UserId,
    data: ProfileUpdate,
    session: AsyncSession = Depends(get_session),
):
    profile = (
        await session.execute(select(Profile).where(Profile.user_id == user_id))
    ).scalar_one_or_none()
    if profile is None:
        profile = Profile(id=make_id(user_id), user_id=user_id)
        session.add(profile)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(profile, key, value)
    await session.commit()
    await session.refresh(profile)
    return profile
