"""
Login endpoint issuing bearer tokens.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_credential_store, get_token_service
from api.models import LoginRequest, TokenResponse
from api.tokens import TokenService, TokenSigningError
from api.users import CredentialStore

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    creds: LoginRequest,
    credential_store: CredentialStore = Depends(get_credential_store),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Exchange a username and password for a bearer token valid for one hour.
    """
    user = credential_store.authenticate(creds.username, creds.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    try:
        token = token_service.issue(user.username)
    except TokenSigningError as e:
        logger.error("Failed to sign token", username=user.username, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error generating token"
        )

    logger.info("Token issued", username=user.username)
    return TokenResponse(token=token)
