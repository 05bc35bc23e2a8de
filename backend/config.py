# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, List
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    PROJECT_NAME: str = "CotaImport API"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./database_cotaimport.db"

    # Product image storage (served under /uploads)
    UPLOAD_DIR: str = "static/uploads"
    MAX_UPLOAD_MB: int = 5

    # Default USD -> BRL rate offered by the cost simulation form
    DEFAULT_EXCHANGE_RATE: float = 5.00

    FRONTEND_URL: str = "http://localhost:5173"
    EXTRA_CORS_ORIGINS: List[str] = []

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        origins = ["http://localhost:5173", "http://127.0.0.1:5173"]
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins + list(self.EXTRA_CORS_ORIGINS)

settings = Settings()
