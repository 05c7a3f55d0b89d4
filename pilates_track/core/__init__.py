from pilates_track.core.config import settings
from pilates_track.core.base import Base
from pilates_track.core.db import engine, get_db

__all__ = ["settings", "engine", "Base", "get_db"]
