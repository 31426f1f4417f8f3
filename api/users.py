"""
Read-only credential store backing the login endpoint.
"""

import secrets
from typing import Dict, Iterable, Optional

import structlog

from api.models import User

logger = structlog.get_logger(__name__)

DEFAULT_USERS = (
    User(id="1", username="admin", password="password123"),
    User(id="2", username="user1", password="securepass"),
    User(id="3", username="john_doe", password="mypassword"),
)


class CredentialStore:
    """
    Username to account lookup.

    Passwords are kept and compared in plaintext. Callers only go through
    ``authenticate`` so the comparison can be swapped for a hashed scheme.
    """

    def __init__(self, users: Optional[Iterable[User]] = None):
        if users is None:
            users = DEFAULT_USERS
        self._users: Dict[str, User] = {user.username: user for user in users}

    def get_user(self, username: str) -> Optional[User]:
        """Return the account for ``username``, or None."""
        return self._users.get(username)

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Check a username/password pair.

        Args:
            username: Account name
            password: Plaintext password supplied by the client

        Returns:
            The matching User, None on unknown user or wrong password
        """
        user = self.get_user(username)
        if user is None:
            logger.debug("Login for unknown user", username=username)
            return None

        if not secrets.compare_digest(user.password.encode(), password.encode()):
            logger.debug("Login with wrong password", username=username)
            return None

        return user

    def __len__(self) -> int:
        return len(self._users)
