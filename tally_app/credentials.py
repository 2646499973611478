"""User accounts and login sessions."""
from __future__ import annotations

import uuid

import bcrypt

from .errors import ConflictError, UnauthorizedError
from .logger import get_logger
from .models import AuthSession, User
from .storage import LockedStore


logger = get_logger(__name__)

LOGIN_FAILED = "Login failed"

# bcrypt only uses the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialStore(LockedStore):
    """Owns the `users` and `sessions` tables."""

    label = "credentials"

    def __init__(self, rounds: int = 10) -> None:
        super().__init__()
        self.rounds = rounds

    def register_user(self, username: str, password: str) -> User:
        """Create a user with a bcrypt hash of `password`.

        Raises:
            ConflictError: If the username is already registered.
        """
        # Hashing happens outside the store lock.
        password_hash = bcrypt.hashpw(
            _password_bytes(password), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")
        with self.transaction() as session:
            if session.get(User, username) is not None:
                raise ConflictError("User already exists")
            user = User(username=username, password_hash=password_hash)
            session.add(user)
        logger.info("Registered user %s", username)
        return user

    def login(self, username: str, password: str) -> tuple[str, str]:
        """Check credentials and open a new session.

        Returns:
            The new token and the username it belongs to.

        Raises:
            UnauthorizedError: For an unknown user or a wrong password. The
                message is the same in both cases.
        """
        user = self.get_user(username)
        if user is None or not self._check_password(user, password):
            logger.info("Failed login for %s", username)
            raise UnauthorizedError(LOGIN_FAILED)

        token = str(uuid.uuid4())
        with self.transaction() as session:
            session.add(AuthSession(token=token, username=username))
        logger.info("User %s logged in", username)
        return token, username

    def logout(self, token: str | None) -> None:
        """Close the session for `token`. Unknown or empty tokens are ignored."""
        if not token:
            return
        with self.transaction() as session:
            auth_session = session.get(AuthSession, token)
            if auth_session is None:
                return
            username = auth_session.username
            session.delete(auth_session)
        logger.info("User %s logged out", username)

    def resolve_session(self, token: str | None) -> str | None:
        if not token:
            return None
        with self.read() as session:
            auth_session = session.get(AuthSession, token)
            if auth_session is None:
                return None
            if session.get(User, auth_session.username) is None:
                return None
            return auth_session.username

    def get_user(self, username: str) -> User | None:
        with self.read() as session:
            return session.get(User, username)

    @staticmethod
    def _check_password(user: User, password: str) -> bool:
        try:
            return bcrypt.checkpw(_password_bytes(password), user.password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash; treat as a failed login.
            logger.warning("Unreadable password hash for %s", user.username)
            return False
