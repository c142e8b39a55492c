import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.user import Account
from app.utils.errors import DuplicateIdentity, NotFound, StoreError
from app.utils.validation import require_fields

logger = logging.getLogger(__name__)

REQUIRED_ACCOUNT_FIELDS = (
    "salutation",
    "name",
    "email",
    "phone_number",
    "date_of_birth",
    "address",
    "password_hash",
)
UPDATABLE_FIELDS = {"profile_photo"}


class AccountStore:
    """Credential store over the accounts table."""

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, fields: dict) -> Account:
        require_fields(fields, REQUIRED_ACCOUNT_FIELDS)
        try:
            # advisory only, the unique indexes decide races
            existing = (
                self.db.query(Account)
                .filter(or_(Account.email == fields["email"], Account.phone_number == fields["phone_number"]))
                .first()
            )
            if existing:
                raise DuplicateIdentity()

            account = Account(**{name: fields[name] for name in REQUIRED_ACCOUNT_FIELDS})
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Unique constraint rejected account for email=%s", fields["email"])
            raise DuplicateIdentity() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Could not create account: {exc}") from exc
        return account

    def find_by_email(self, email: str) -> Account | None:
        try:
            return self.db.query(Account).filter(Account.email == email).first()
        except SQLAlchemyError as exc:
            raise StoreError(f"Account lookup failed: {exc}") from exc

    def find_by_id(self, account_id: int) -> Account | None:
        try:
            return self.db.get(Account, account_id)
        except SQLAlchemyError as exc:
            raise StoreError(f"Account lookup failed: {exc}") from exc

    def update_fields(self, account_id: int, partial: dict) -> Account:
        unknown = set(partial) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Account fields are not updatable: {sorted(unknown)}")

        account = self.find_by_id(account_id)
        if not account:
            raise NotFound()
        try:
            for field, value in partial.items():
                setattr(account, field, value)
            self.db.commit()
            self.db.refresh(account)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(f"Could not update account {account_id}: {exc}") from exc
        return account
