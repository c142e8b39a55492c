import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("UPLOAD_DIR", str(BASE_DIR / "test_uploads"))
os.environ.setdefault("STORAGE_BACKEND", "local")

import app.main as main  # noqa: E402  (import after env vars are set)
from app.database import Base, SessionLocal, engine  # noqa: E402
from app.services.auth_middleware import get_password_hasher, get_token_service  # noqa: E402
from app.services.file_storage import IncomingFile, get_file_storage  # noqa: E402


class MemoryFileStorage:
    """Keeps uploads in a dict instead of on disk."""

    def __init__(self):
        self.files: dict[str, IncomingFile] = {}
        self.saved = 0

    def save(self, upload: IncomingFile) -> str:
        self.saved += 1
        reference = f"memory/{self.saved}-{upload.filename}"
        self.files[reference] = upload
        return reference

    def delete(self, reference: str) -> None:
        self.files.pop(reference, None)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def storage():
    return MemoryFileStorage()


@pytest.fixture()
def tokens():
    return get_token_service()


@pytest.fixture()
def passwords():
    return get_password_hasher()


@pytest.fixture()
def client(storage):
    """Provide a TestClient whose uploads land in memory."""
    main.app.dependency_overrides[get_file_storage] = lambda: storage
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.pop(get_file_storage, None)
