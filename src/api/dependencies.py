"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.models.user import User
from src.services.tokens import ExpiringTokenService
from src.services.users import UserService

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)
cli_security = HTTPBasic()


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with the configured admin ids."""
    return UserService(db, admin_ids=get_settings().admin_ids)


def get_expiring_token_service(
    db: Annotated[Session, Depends(get_db)],
) -> ExpiringTokenService:
    """Get login token service."""
    return ExpiringTokenService(db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Get the signed-in user from the bearer auth token."""
    user = users.lookup_by_auth_token(credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_security)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> User | None:
    """Get the signed-in user if a valid auth token was sent, else None."""
    if credentials is None:
        return None
    return users.lookup_by_auth_token(credentials.credentials)


def get_cli_user(
    credentials: Annotated[HTTPBasicCredentials, Depends(cli_security)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Get the user behind a CLI request (HTTP Basic, password is the API token)."""
    user = users.lookup_by_api_token(credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or revoked API token",
            headers={"WWW-Authenticate": "Basic"},
        )
    return user
