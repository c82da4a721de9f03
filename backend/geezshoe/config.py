# backend/geezshoe/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path
from dotenv import load_dotenv

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./geezshoe.db"

    FRONTEND_URL: Optional[str] = None

    # Object storage (product and company images)
    STORAGE_DIR: str = "static/storage"
    PUBLIC_BASE_URL: str = "http://127.0.0.1:8000"

    # Bootstrap of the single "main" admin (see seed.py)
    MAIN_ADMIN_NAME: str = "Main Admin"
    MAIN_ADMIN_EMAIL: str = "admin@geezshoe.com"
    MAIN_ADMIN_PASSWORD: str = "change-me-now"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
