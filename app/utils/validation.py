from datetime import date, datetime
from typing import Iterable, Mapping

from app.utils.errors import ValidationError


def require_fields(payload: Mapping, fields: Iterable[str], message: str | None = None) -> None:
    """Raise ValidationError unless every field is present and non-blank."""
    for field in fields:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(message)


def parse_date(value, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    try:
        normalized = raw.replace("Z", "+00:00") if raw.endswith("Z") else raw
        return datetime.fromisoformat(normalized).date()
    except ValueError as exc:
        raise ValidationError(f"Invalid date for {field}") from exc
