"""API v1 router aggregation."""

from fastapi import APIRouter

from fitness_tracker.api.v1.endpoints import (
    auth,
    exercises,
    health,
    logs,
    users,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(workouts.router, tags=["workouts"])
api_router.include_router(logs.router, prefix="/workouts", tags=["logs"])
