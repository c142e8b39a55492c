from passlib.context import CryptContext


class PasswordHasher:
    """bcrypt hashing; verification is constant time."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self._context.verify(password, password_hash)

    def dummy_verify(self) -> None:
        # burns the same time as a real check for unknown accounts
        self._context.dummy_verify()
