"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_current_user, get_expiring_token_service, get_user_service
from src.api.serializers import user_response
from src.config import get_settings
from src.models.user import User
from src.schemas.auth import LoginRequest, LoginResponse, SessionResponse
from src.schemas.user import UserResponse
from src.services.errors import InvalidEmail
from src.services.tokens import ExpiringTokenService
from src.services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_202_ACCEPTED)
def request_login(
    request: LoginRequest,
    users: Annotated[UserService, Depends(get_user_service)],
    tokens: Annotated[ExpiringTokenService, Depends(get_expiring_token_service)],
):
    """Issue a login link for an email, creating the account on first use."""
    try:
        user = users.lookup_or_create_by_email(request.email)
    except InvalidEmail as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    login_token = tokens.issue(user)

    # Email delivery lives outside this service
    if get_settings().is_development:
        logger.info(f"Login link for {user.email}: /api/v1/auth/login/{login_token.token}")

    return LoginResponse(message="Login link sent")


@router.get("/login/{token}", response_model=SessionResponse)
def redeem_login(
    token: str,
    users: Annotated[UserService, Depends(get_user_service)],
    tokens: Annotated[ExpiringTokenService, Depends(get_expiring_token_service)],
):
    """Redeem a login link for the user's auth token."""
    user = tokens.consume(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login link is invalid or has expired",
        )

    return SessionResponse(
        auth_token=user.auth_token,
        first_login=users.is_first_login(user),
        user=user_response(user, users),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Get current user information."""
    return user_response(current_user, users)
