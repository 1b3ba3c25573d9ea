"""Exercise schemas."""

from datetime import datetime

from pydantic import Field

from fitness_tracker.schemas.base import APIModel


class ExerciseCreate(APIModel):
    name: str = Field(..., max_length=255)
    description: str | None = None


class ExerciseUpdate(APIModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None


class ExerciseRead(APIModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime
