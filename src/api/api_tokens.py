"""API token endpoints (CLI registration and revocation)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_cli_user, get_current_user, get_user_service
from src.api.serializers import user_response
from src.models.user import User
from src.schemas.api_token import ApiTokenCreate, ApiTokenListResponse, ApiTokenResponse
from src.schemas.user import UserResponse
from src.services.errors import ApiTokenNotFound
from src.services.users import UserService

router = APIRouter(prefix="/api/v1", tags=["api_tokens"])


@router.post(
    "/api_tokens", response_model=ApiTokenResponse, status_code=status.HTTP_201_CREATED
)
def register_api_token(
    request: ApiTokenCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Register a CLI token with the signed-in account.

    Recordings uploaded with this token before signing in are moved over.
    """
    try:
        return users.claim_api_token(current_user, request.token)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e


@router.get("/api_tokens", response_model=ApiTokenListResponse)
def list_api_tokens(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """List active and revoked API tokens."""
    return ApiTokenListResponse(
        active=users.active_api_tokens(current_user),
        revoked=users.revoked_api_tokens(current_user),
    )


@router.delete("/api_tokens/{token_id}", response_model=ApiTokenResponse)
def revoke_api_token(
    token_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Revoke an API token."""
    try:
        return users.revoke_api_token(current_user, token_id)
    except ApiTokenNotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="API token not found"
        ) from e


@router.get("/cli/me", response_model=UserResponse)
def get_cli_user_info(
    cli_user: Annotated[User, Depends(get_cli_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Identify the account a CLI API token belongs to."""
    return user_response(cli_user, users)
