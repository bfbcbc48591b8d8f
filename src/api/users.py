"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_current_user, get_optional_user, get_user_service
from src.api.serializers import profile_response, user_response
from src.models.user import User
from src.schemas.asciicast import AsciicastPageResponse, AsciicastResponse
from src.schemas.user import UserProfileResponse, UserResponse, UserUpdate
from src.services.errors import NotFound, UserValidationError
from src.services.users import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def get_user_or_404(users: UserService, username: str) -> User:
    """Look up a user by username, raising 404 if missing."""
    try:
        return users.lookup_by_username(username)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from e


@router.patch("/me", response_model=UserResponse)
def update_me(
    update: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Update the signed-in user's profile."""
    try:
        user = users.update_profile(current_user, update.model_dump(exclude_unset=True))
    except UserValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors,
        ) from e

    return user_response(user, users)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Delete the signed-in account and everything it owns."""
    users.destroy(current_user)


@router.get("/{username}", response_model=UserProfileResponse)
def get_profile(
    username: str,
    current_user: Annotated[User | None, Depends(get_optional_user)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Get a user's public profile."""
    user = get_user_or_404(users, username)
    owner = current_user is not None and current_user.id == user.id
    return profile_response(user, users, owner=owner)


@router.get("/{username}/asciicasts", response_model=AsciicastPageResponse)
def list_asciicasts(
    username: str,
    current_user: Annotated[User | None, Depends(get_optional_user)],
    users: Annotated[UserService, Depends(get_user_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 15,
):
    """List a user's asciicasts, newest first. Owners also see private ones."""
    user = get_user_or_404(users, username)
    include_private = current_user is not None and current_user.id == user.id
    result = users.paged_asciicasts(user, page, per_page, include_private)
    return AsciicastPageResponse(
        items=[AsciicastResponse.model_validate(asciicast) for asciicast in result.items],
        page=result.page,
        per_page=result.per_page,
        total=result.total,
        pages=result.pages,
    )
