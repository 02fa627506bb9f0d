"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import health, progression, workout_logs

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(progression.router, prefix="/progression", tags=["progression"])
api_router.include_router(workout_logs.router, prefix="/workout-logs", tags=["workout-logs"])
