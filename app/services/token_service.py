import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from app.utils.errors import InvalidToken, TokenExpired

logger = logging.getLogger(__name__)


class TokenService:
    """Stateless HS256 bearer tokens that carry an account id."""

    def __init__(self, secret: str, algorithm: str = "HS256", lifetime: timedelta = timedelta(hours=1)):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, account_id: int, issued_at: datetime | None = None) -> str:
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": str(account_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except JWTError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            raise InvalidToken() from exc

        subject = payload.get("sub")
        if not subject or "exp" not in payload:
            raise InvalidToken()
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise InvalidToken() from exc
