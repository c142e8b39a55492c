import os
from pathlib import Path
from dotenv import load_dotenv
from fastapi.security import HTTPBearer

BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env explicitly from project root
load_dotenv(BASE_DIR / ".env")


class Settings:
    PROJECT_NAME = "Account Backend"

    DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'app.db'}")
    DB_TIMEOUT_SECONDS = int(os.getenv("DB_TIMEOUT_SECONDS", 10))

    JWT_SECRET = os.getenv("JWT_SECRET")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    PASSWORD_HASH_ROUNDS = int(os.getenv("PASSWORD_HASH_ROUNDS", 12))

    UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local").lower()
    SPACES_REGION = os.getenv("SPACES_REGION")
    SPACES_ENDPOINT = os.getenv("SPACES_ENDPOINT")
    SPACES_KEY = os.getenv("SPACES_KEY")
    SPACES_SECRET = os.getenv("SPACES_SECRET")
    SPACES_NAME = os.getenv("SPACES_NAME")
    SPACES_CDN_URL = os.getenv("SPACES_CDN_URL")
    SPACES_BASE_PATH = (os.getenv("SPACES_BASE_PATH") or "uploads").strip("/")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    bearer_scheme = HTTPBearer(auto_error=False)
    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    def ensure_configured(self) -> None:
        """Fail fast on settings that have no safe default."""
        if not self.JWT_SECRET:
            raise RuntimeError("JWT_SECRET is not set; refusing to start without a signing secret")
        if self.PASSWORD_HASH_ROUNDS < 12:
            raise RuntimeError("PASSWORD_HASH_ROUNDS must be at least 12")
        if self.STORAGE_BACKEND not in {"local", "spaces"}:
            raise RuntimeError(f"Unknown STORAGE_BACKEND: {self.STORAGE_BACKEND}")


settings = Settings()
