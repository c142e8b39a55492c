from concurrent.futures import ThreadPoolExecutor
from datetime import date
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.database import SessionLocal
from app.models.chat_user import ChatProfile
from app.services.chat_profile_service import ChatProfileService, parse_skills
from app.services.file_storage import IncomingFile
from app.utils.errors import StoreError, ValidationError


def _chat_payload(**overrides):
    payload = {
        "name": "Kiran",
        "qualification": "LLB",
        "phone": "9876500000",
        "dob": "1995-02-20",
        "about": "Corporate lawyer",
        "skills": "go,rust,testing",
    }
    payload.update(overrides)
    return payload


def test_skills_split_in_order():
    assert parse_skills("go,rust,testing") == ["go", "rust", "testing"]


def test_skills_tokens_are_trimmed():
    assert parse_skills(" contracts , , tax ") == ["contracts", "tax"]


@pytest.mark.parametrize("raw", ["", " , ", None])
def test_empty_skills_fail_validation(raw):
    with pytest.raises(ValidationError):
        parse_skills(raw)


def test_empty_skills_never_reach_the_store(db_session):
    with pytest.raises(ValidationError):
        ChatProfileService(db_session).upsert(_chat_payload(skills=""))

    assert db_session.query(ChatProfile).count() == 0


def test_missing_required_field(db_session):
    with pytest.raises(ValidationError):
        ChatProfileService(db_session).upsert(_chat_payload(qualification=None))


def test_upsert_creates_then_updates_single_record(db_session):
    service = ChatProfileService(db_session)

    created = service.upsert(_chat_payload())
    updated = service.upsert(_chat_payload(name="Kiran Kumar", skills="tax"))

    assert updated.id == created.id
    assert db_session.query(ChatProfile).count() == 1
    stored = db_session.query(ChatProfile).one()
    assert stored.name == "Kiran Kumar"
    assert stored.skills == ["tax"]
    assert stored.dob == date(1995, 2, 20)


def test_update_keeps_references_not_resent(db_session, storage):
    service = ChatProfileService(db_session, storage)
    first = service.upsert(
        _chat_payload(profile_photo="uploads/photo.png"),
        document=IncomingFile("cv.pdf", b"%PDF", "application/pdf"),
    )
    document = first.document

    second = service.upsert(_chat_payload(about="Now in litigation"))

    assert second.profile_photo == "uploads/photo.png"
    assert second.document == document
    assert second.about == "Now in litigation"


def test_concurrent_upserts_for_new_phone_leave_one_record():
    def save(name):
        session = SessionLocal()
        try:
            ChatProfileService(session).upsert(_chat_payload(name=name))
        finally:
            session.close()

    names = [f"writer-{index}" for index in range(8)]
    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(save, names))

    session = SessionLocal()
    try:
        profiles = session.query(ChatProfile).filter(ChatProfile.phone == "9876500000").all()
    finally:
        session.close()
    assert len(profiles) == 1
    assert profiles[0].name in names


def test_save_user_data_route(client, storage):
    form = {**_chat_payload(), "profilePhoto": "uploads/1700000000000.png"}

    response = client.post(
        "/auth/save-user-data",
        data=form,
        files={"document": ("degree.pdf", b"%PDF-1.4", "application/pdf")},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == "User data saved successfully"
    chat_user = payload["chatUser"]
    assert chat_user["skills"] == ["go", "rust", "testing"]
    assert chat_user["dob"] == "1995-02-20"
    assert chat_user["profilePhoto"] == "uploads/1700000000000.png"
    assert storage.files[chat_user["document"]].filename == "degree.pdf"


def test_save_user_data_twice_keeps_latest(client, db_session):
    client.post("/auth/save-user-data", data=_chat_payload(name="First"))
    response = client.post("/auth/save-user-data", data=_chat_payload(name="Second"))

    assert response.status_code == 200
    assert response.json()["chatUser"]["name"] == "Second"
    assert db_session.query(ChatProfile).count() == 1


def test_save_user_data_missing_fields(client):
    form = _chat_payload()
    form.pop("about")

    response = client.post("/auth/save-user-data", data=form)

    assert response.status_code == 400
    assert response.json() == {"error": "All fields are required"}


def test_unsupported_dialect_is_refused_before_storing_document(db_session, storage, monkeypatch):
    oracle = SimpleNamespace(dialect=SimpleNamespace(name="oracle"))
    monkeypatch.setattr(db_session, "get_bind", lambda *args, **kwargs: oracle)

    with pytest.raises(StoreError):
        ChatProfileService(db_session, storage).upsert(
            _chat_payload(),
            document=IncomingFile("cv.pdf", b"%PDF", "application/pdf"),
        )

    assert storage.files == {}


def test_failed_write_removes_stored_document(db_session, storage, monkeypatch):
    def fail(*args, **kwargs):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(db_session, "execute", fail)

    with pytest.raises(StoreError):
        ChatProfileService(db_session, storage).upsert(
            _chat_payload(),
            document=IncomingFile("cv.pdf", b"%PDF", "application/pdf"),
        )

    assert storage.saved == 1
    assert storage.files == {}


def test_upsert_stamps_update_time(db_session):
    profile = ChatProfileService(db_session).upsert(_chat_payload())

    assert profile.updated_at is not None
