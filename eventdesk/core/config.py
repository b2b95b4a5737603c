from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "EventDesk API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./eventdesk.db"
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20

    # Tokens are issued by the auth provider; we only verify them
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    CORS_ORIGINS: List[str] = []

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    # Object storage for QR artifacts
    STORAGE_ROOT: str = str(_PROJECT_ROOT / "storage")
    STORAGE_PUBLIC_BASE_URL: str = "http://localhost:8000/storage"

    # QR rendering
    QR_IMAGE_SIZE: int = 256
    QR_BORDER: int = 2

    # Batch issuance
    ISSUANCE_MAX_WORKERS: int = 8
    ISSUANCE_MAX_QUANTITY: int = 500


settings = Settings()
