from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    DEFAULT_PAGE_SIZE: int = 10
    MAX_DISCOUNT: int = 99
    # seconds between average-rating resync runs; 0 disables the job
    RATING_RESYNC_SECONDS: int = 300
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
