from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import settings


def _engine_options(url: str, timeout: int) -> dict:
    if url.startswith("sqlite"):
        # timeout is how long a writer waits on the database lock
        return {"connect_args": {"check_same_thread": False, "timeout": timeout}}
    if url.startswith("postgresql"):
        return {
            "pool_pre_ping": True,
            "pool_timeout": timeout,
            "connect_args": {"options": f"-c statement_timeout={timeout * 1000}"},
        }
    return {"pool_pre_ping": True, "pool_timeout": timeout}


engine = create_engine(
    settings.DATABASE_URL,
    **_engine_options(settings.DATABASE_URL, settings.DB_TIMEOUT_SECONDS),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
