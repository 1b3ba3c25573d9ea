"""Registration and login; both return a bearer token."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.api.deps import get_app_settings
from fitness_tracker.core.config import Settings
from fitness_tracker.core.security import create_access_token
from fitness_tracker.db.session import get_db
from fitness_tracker.schemas.user import AuthResponse, LoginRequest, UserCreate, UserRead
from fitness_tracker.services import users as user_service

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Create an account and log it in."""
    user = await user_service.create_user(db, payload)
    return AuthResponse(user=UserRead.model_validate(user), token=create_access_token(user.id, settings))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = await user_service.authenticate(db, payload.email, payload.password)
    return AuthResponse(user=UserRead.model_validate(user), token=create_access_token(user.id, settings))
