"""
Bearer-token authentication for the protected routes.
"""

from typing import Optional

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_service
from api.models import TokenClaims
from api.tokens import TokenService

logger = structlog.get_logger(__name__)

# Missing or malformed headers are rejected in verify_token with a 401;
# the scheme must be exactly "Bearer"
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service)
) -> TokenClaims:
    """
    Verify the bearer token sent with the request.

    Args:
        credentials: Parsed ``Authorization: Bearer <token>`` header, if any
        token_service: Service checking signature and expiry

    Returns:
        Claims of the verified token

    Raises:
        HTTPException: 401 if the header is absent, malformed or the token is invalid
    """
    if credentials is None or credentials.scheme != "Bearer":
        raise _unauthorized("Missing token")

    claims = token_service.verify(credentials.credentials)
    if claims is None:
        logger.warning("Invalid token attempted", token=credentials.credentials[:10] + "...")
        raise _unauthorized("Invalid token")

    return claims
