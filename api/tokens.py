"""
Issuing and verifying signed, time-limited bearer tokens.
"""

import time
from typing import Callable, Optional

import jwt
import structlog
from pydantic import ValidationError

from api.config import HMAC_ALGORITHMS
from api.models import TokenClaims

logger = structlog.get_logger(__name__)


class TokenSigningError(Exception):
    """Raised when a token cannot be signed."""


class TokenService:
    """Signs tokens for logged-in users and verifies presented ones."""

    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = "HS256",
        expires_hours: int = 1,
        clock: Callable[[], float] = time.time
    ):
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported token algorithm: {algorithm}")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime_seconds = expires_hours * 3600
        self._clock = clock

    def issue(self, username: str) -> str:
        """
        Create a token for ``username`` expiring ``expires_hours`` from now.

        Args:
            username: Name embedded in the token claims

        Returns:
            Encoded token string

        Raises:
            TokenSigningError: If the secret is unset or empty, or signing fails
        """
        if not self._secret:
            raise TokenSigningError("No signing secret configured")

        claims = {
            "username": username,
            "exp": int(self._clock()) + self.lifetime_seconds,
        }
        try:
            return jwt.encode(claims, self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenSigningError(str(e)) from e

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Verify a presented token.

        Only HMAC-signed tokens are accepted, so a token re-signed with
        ``none`` or an asymmetric algorithm fails the signature check.

        Args:
            token: Encoded token string

        Returns:
            TokenClaims if the token is valid, None otherwise
        """
        if not self._secret:
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=list(HMAC_ALGORITHMS),
                options={"require": ["exp", "username"], "verify_exp": False},
            )
            claims = TokenClaims(**payload)
        except (jwt.PyJWTError, ValidationError) as e:
            logger.debug("Token rejected", reason=str(e))
            return None

        if claims.exp <= self._clock():
            logger.debug("Token rejected", reason="expired", username=claims.username)
            return None

        return claims
