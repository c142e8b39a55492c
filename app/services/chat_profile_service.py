import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import utcnow
from app.models.chat_user import ChatProfile
from app.services.file_storage import FileStorage, IncomingFile
from app.utils.errors import StoreError, ValidationError
from app.utils.validation import parse_date, require_fields

logger = logging.getLogger(__name__)

CHAT_PROFILE_FIELDS = ("name", "qualification", "phone", "dob", "about", "skills")
SKILL_DELIMITER = ","

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def parse_skills(raw) -> list[str]:
    """Split a comma separated skills string, keeping order and dropping blanks."""
    if raw is None:
        raise ValidationError()
    tokens = raw if isinstance(raw, (list, tuple)) else str(raw).split(SKILL_DELIMITER)
    skills = [str(token).strip() for token in tokens if str(token).strip()]
    if not skills:
        raise ValidationError()
    return skills


class ChatProfileService:
    def __init__(self, db: Session, storage: FileStorage | None = None):
        self.db = db
        self.storage = storage

    def upsert(self, payload: dict, document: IncomingFile | None = None) -> ChatProfile:
        require_fields(payload, CHAT_PROFILE_FIELDS)
        values = {
            "name": payload["name"],
            "qualification": payload["qualification"],
            "phone": payload["phone"],
            "dob": parse_date(payload["dob"], "dob"),
            "about": payload["about"],
            "skills": parse_skills(payload["skills"]),
            "updated_at": utcnow(),
        }
        if payload.get("profile_photo"):
            values["profile_photo"] = payload["profile_photo"]
        if document is not None and self.storage is None:
            raise RuntimeError("A file storage is required to accept documents")

        dialect = self.db.get_bind().dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            raise StoreError(f"Atomic upsert is not supported on {dialect}")

        stored_document = None
        if document is not None:
            stored_document = values["document"] = self.storage.save(document)

        statement = insert(ChatProfile).values(**values)
        # optional references not sent on this call keep their stored values
        update_columns = {
            column: getattr(statement.excluded, column)
            for column in values
            if column != "phone"
        }
        statement = statement.on_conflict_do_update(index_elements=["phone"], set_=update_columns)

        try:
            self.db.execute(statement)
            self.db.commit()
            profile = self.db.query(ChatProfile).filter(ChatProfile.phone == values["phone"]).one()
        except SQLAlchemyError as exc:
            self.db.rollback()
            if stored_document is not None:
                self.storage.delete(stored_document)
            raise StoreError(f"Could not save chat profile: {exc}") from exc

        logger.info("Saved chat profile id=%s", profile.id)
        return profile
