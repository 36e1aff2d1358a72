"""API router aggregator."""
from fastapi import APIRouter
from inotebook.api.routers import health, notes

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(notes.router)
