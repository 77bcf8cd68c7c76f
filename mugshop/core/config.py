from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Application
    APP_NAME: str = "MugShop"
    APP_PORT: int = 9210
    DEBUG: bool = False
    SECRET_KEY: str = "mugshop-secret-key-change-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours

    # Database
    DB_URL: Optional[str] = None  # Full URL override, e.g. sqlite:///./mugshop.db
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "mugshop"
    POSTGRES_PORT: int = 5432

    # Logging
    LOG_LEVEL: str = "INFO"
    LOGS_PATH: Optional[str] = None

    # Design uploads
    STORAGE_BACKEND: str = "local"  # local, http
    UPLOAD_DIR: str = "./data/uploads"
    PUBLIC_BASE_URL: str = "http://localhost:9210"
    STORAGE_API_URL: Optional[str] = None
    STORAGE_API_KEY: Optional[str] = None
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024  # 5MB
    ALLOWED_UPLOAD_TYPES: List[str] = ["image/jpeg", "image/png", "image/webp"]

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
