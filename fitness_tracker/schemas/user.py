"""User and auth schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from fitness_tracker.models.user import User
from fitness_tracker.schemas.base import APIModel
from fitness_tracker.schemas.workout import WorkoutRead


class UserCreate(APIModel):
    username: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)


class UserUpdate(APIModel):
    username: str | None = Field(None, min_length=1, max_length=150)
    email: str | None = Field(None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")


class UserRead(APIModel):
    id: int
    username: str
    email: str
    created_at: datetime


class UserWithWorkoutsRead(UserRead):
    """Profile plus the user's workouts, each with entries ordered by position."""

    workouts: list[WorkoutRead] = []

    @classmethod
    def from_user(cls, user: User) -> UserWithWorkoutsRead:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            workouts=[WorkoutRead.from_workout(w) for w in user.workouts],
        )


class LoginRequest(APIModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(APIModel):
    """Returned by register and login: the user plus a bearer token."""

    user: UserRead
    token: str
