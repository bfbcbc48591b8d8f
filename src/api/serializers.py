"""Helpers that turn models into response schemas needing service data."""

from src.models.user import User
from src.schemas.user import UserProfileResponse, UserResponse
from src.services.users import UserService


def user_response(user: User, users: UserService) -> UserResponse:
    response = UserResponse.model_validate(user)
    response.is_admin = users.is_admin(user)
    return response


def profile_response(user: User, users: UserService, owner: bool) -> UserProfileResponse:
    """Public profile; the total count (private included) only for the owner."""
    return UserProfileResponse(
        id=user.id,
        username=user.username,
        theme_name=user.theme_name,
        public_asciicast_count=users.public_asciicast_count(user),
        asciicast_count=users.asciicast_count(user) if owner else None,
    )
