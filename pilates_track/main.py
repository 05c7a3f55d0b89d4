import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pilates_track.api.router import api_router
from pilates_track.core import settings
from pilates_track.core.database import init_database

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Pilates Track - your personal workout tracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("Приложение запущено! Часовой пояс трекера: %s", settings.TIMEZONE)


@app.get("/")
async def root():
    return {
        "app": "Pilates Track",
        "message": "Pilates Track - your personal workout tracker",
        "links": {
            "stats": "/api/v1/track/stats",
            "logs": "/api/v1/track/logs",
            "docs": "/docs",
            "redoc": "/redoc",
        }
    }
