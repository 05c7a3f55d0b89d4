from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://pilates_user:pilates_password@db:5432/pilates_db"
    SECRET_KEY: str = "SECRET_KEY_FOR_PILATES_TRACK"
    REFRESH_SECRET_KEY: str = "SECRET_KEY_FOR_PILATES_TRACK_refresh"
    # При продакшн/обычной разработке лучше не пересоздавать БД на каждом старте
    RESET_DATABASE: bool = False
    SQL_ECHO: bool = False
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8081",
    ]

    # Часовой пояс, в котором определяется "сегодня" для стриков и недель
    TIMEZONE: str = "UTC"
    # На сколько дней назад можно дозаписать тренировку
    BACKFILL_DAYS: int = 7
    # Вес по умолчанию для оценки калорий, если пользователь не указал свой
    DEFAULT_WEIGHT_KG: float = 65.0

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


settings = Settings()
