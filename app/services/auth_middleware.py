from datetime import timedelta
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.services.account_service import AccountService
from app.services.account_store import AccountStore
from app.services.password_service import PasswordHasher
from app.services.token_service import TokenService
from app.utils.errors import Unauthorized


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        settings.JWT_SECRET,
        algorithm=settings.ALGORITHM,
        lifetime=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(settings.bearer_scheme),
) -> str | None:
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials


def resolve_account_id(token: str | None, tokens: TokenService) -> int:
    """Map a bearer token onto an account id, or raise an Unauthorized error.

    Routes call this inside their own try block so the failure is rendered
    through handle_exception like every other error.
    """
    if not token:
        raise Unauthorized()
    return tokens.verify(token)


def get_account_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    passwords: PasswordHasher = Depends(get_password_hasher),
) -> AccountService:
    return AccountService(AccountStore(db), tokens, passwords)
