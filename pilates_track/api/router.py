from fastapi import APIRouter
from pilates_track.api.v1.auth import router as auth_router
from pilates_track.api.v1.track import router as track_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(track_router, prefix="/track", tags=["track"])
