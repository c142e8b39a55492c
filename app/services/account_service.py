import logging

from app.models.user import Account
from app.services.account_store import AccountStore
from app.services.password_service import PasswordHasher
from app.services.token_service import TokenService
from app.utils.errors import InvalidCredentials, NotFound
from app.utils.validation import parse_date, require_fields

logger = logging.getLogger(__name__)

SIGNUP_FIELDS = ("salutation", "name", "email", "phone_number", "date_of_birth", "address", "password")


class AccountService:
    def __init__(self, store: AccountStore, tokens: TokenService, passwords: PasswordHasher):
        self.store = store
        self.tokens = tokens
        self.passwords = passwords

    def register(self, payload: dict) -> tuple[Account, str]:
        """Create an account and return it with a freshly issued token.

        Raises ValidationError for missing fields or an unparseable date,
        DuplicateIdentity when the email or phone number is taken and
        StoreError when persistence fails.
        """
        require_fields(payload, SIGNUP_FIELDS)
        fields = {name: payload[name] for name in SIGNUP_FIELDS if name != "password"}
        fields["date_of_birth"] = parse_date(payload["date_of_birth"], "dateOfBirth")
        fields["password_hash"] = self.passwords.hash(payload["password"])

        account = self.store.create_account(fields)
        logger.info("Registered account id=%s", account.id)
        return account, self.tokens.issue(account.id)

    def login(self, email: str | None, password: str | None) -> str:
        require_fields({"email": email, "password": password}, ("email", "password"),
                       message="Email and password are required")

        account = self.store.find_by_email(email)
        if account is None:
            self.passwords.dummy_verify()
            logger.info("Login failed: unknown email")
            raise InvalidCredentials()
        if not self.passwords.verify(password, account.password_hash):
            logger.info("Login failed: wrong password for account id=%s", account.id)
            raise InvalidCredentials()

        logger.info("Login succeeded for account id=%s", account.id)
        return self.tokens.issue(account.id)

    def fetch_profile(self, account_id: int) -> Account:
        account = self.store.find_by_id(account_id)
        if account is None:
            raise NotFound()
        return account
