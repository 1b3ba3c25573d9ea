"""User accounts: registration, login and plain CRUD. Deletion lives in ``cascade``."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fitness_tracker.core.errors import AuthenticationError, ConflictError, NotFoundError
from fitness_tracker.core.security import hash_password, verify_password
from fitness_tracker.db.transaction import transaction
from fitness_tracker.models.user import User
from fitness_tracker.models.workout import Workout, WorkoutExercise
from fitness_tracker.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def _user_exists() -> ConflictError:
    return ConflictError("A user with this username or email already exists", reason="user_exists")


async def _taken(db: AsyncSession, username: str | None, email: str | None, exclude_id: int | None = None) -> bool:
    clauses = []
    if username is not None:
        clauses.append(User.username == username)
    if email is not None:
        clauses.append(User.email == email)
    if not clauses:
        return False
    stmt = select(User.id).where(or_(*clauses))
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return (await db.scalar(stmt.limit(1))) is not None


async def create_user(db: AsyncSession, payload: UserCreate) -> User:
    async with transaction(db, on_integrity_error=_user_exists()):
        if await _taken(db, payload.username, payload.email):
            raise _user_exists()
        user = User(
            username=payload.username,
            email=payload.email,
            password_hash=hash_password(payload.password),
        )
        db.add(user)
    logger.info("Created user %s", user.id)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await db.scalar(select(User).where(User.email == email))
    # Same message for unknown email and wrong password
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials", reason="invalid_credentials")
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def get_user_with_workouts(db: AsyncSession, user_id: int) -> User:
    """Load a user with workouts, their entries and each entry's exercise."""
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .options(
            selectinload(User.workouts)
            .selectinload(Workout.workout_exercises)
            .selectinload(WorkoutExercise.exercise)
        )
        .execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User")
    return user


async def update_user(db: AsyncSession, user_id: int, payload: UserUpdate) -> User:
    in_use = ConflictError("Username or email already in use by another user", reason="user_exists")
    async with transaction(db, on_integrity_error=in_use):
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError("User")
        data = payload.model_dump(exclude_unset=True, exclude_none=True)
        if await _taken(db, data.get("username"), data.get("email"), exclude_id=user_id):
            raise in_use
        for k, v in data.items():
            setattr(user, k, v)
    return user
