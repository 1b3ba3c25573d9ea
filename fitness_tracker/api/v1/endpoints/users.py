"""User CRUD endpoints (authenticated)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.api.deps import get_current_user_id
from fitness_tracker.db.session import get_db
from fitness_tracker.schemas.user import UserCreate, UserRead, UserUpdate, UserWithWorkoutsRead
from fitness_tracker.services import cascade
from fitness_tracker.services import users as user_service

router = APIRouter(dependencies=[Depends(get_current_user_id)])


@router.get("/me", response_model=UserWithWorkoutsRead)
async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Profile of the token's owner, with their workouts."""
    user = await user_service.get_user_with_workouts(db, user_id)
    return UserWithWorkoutsRead.from_user(user)


@router.post("", response_model=UserRead, status_code=201)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    return await user_service.create_user(db, payload)


@router.get("", response_model=list[UserRead])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await user_service.list_users(db)


@router.get("/{user_id}", response_model=UserWithWorkoutsRead)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.get_user_with_workouts(db, user_id)
    return UserWithWorkoutsRead.from_user(user)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update username and/or email."""
    return await user_service.update_user(db, user_id, payload)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a user with their workouts, workout entries and logs."""
    await cascade.delete_user(db, user_id)
    return None
