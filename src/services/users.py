"""User account service: lookups, token issuance, merging and profile updates."""

import logging
import re
from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from src.models import theme as themes
from src.models.api_token import ApiToken
from src.models.asciicast import Asciicast
from src.models.enums import TokenKind
from src.models.expiring_token import ExpiringToken
from src.models.social import Comment, Like
from src.models.user import User
from src.services.errors import (
    ApiTokenNotFound,
    InvalidEmail,
    NotFound,
    UserValidationError,
)
from src.services.tokens import generate_token

logger = logging.getLogger(__name__)

USERNAME_FORMAT = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9]")
USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 16
EMAIL_FORMAT = re.compile(r".+@.+\..+", re.IGNORECASE)

# Inserts retried when a freshly generated token loses a race to another insert
MAX_CREATE_ATTEMPTS = 5

PROFILE_FIELDS = ("username", "email", "theme_name", "asciicasts_private_by_default")
USER_RELATIONSHIPS = ["api_tokens", "asciicasts", "likes", "comments", "expiring_tokens"]


@dataclass
class Page:
    """One page of a user's asciicasts."""

    items: list[Asciicast]
    page: int
    per_page: int
    total: int

    @property
    def pages(self) -> int:
        return max(1, -(-self.total // self.per_page))


class UserService:
    """Account manager for users and the records they own."""

    def __init__(
        self,
        db: Session,
        admin_ids: Iterable[int] = (),
        token_generator: Callable[[], str] = generate_token,
    ):
        self.db = db
        self.admin_ids = frozenset(admin_ids)
        self.token_generator = token_generator

    # Lookups

    def lookup_or_create_by_email(self, email: str | None) -> User:
        """Return the user with this email, creating one on first sight.

        Raises InvalidEmail for a blank or malformed email, or when another
        account claims the email while this one is being created.
        """
        if email is None or not email.strip():
            raise InvalidEmail("Email can't be blank")
        email = email.strip()

        user = self.db.query(User).filter(User.email == email).first()
        if user:
            return user

        try:
            return self.create_user(email=email)
        except UserValidationError as e:
            if "email" in e.errors:
                raise InvalidEmail(f"Email {', '.join(e.errors['email'])}") from e
            raise

    def lookup_by_username(self, username: str) -> User:
        """Get a user by exact username. Raises NotFound on a miss."""
        user = (
            self.db.query(User)
            .filter(User.username.isnot(None), User.username == username)
            .first()
        )
        if user is None:
            raise NotFound(f"User {username!r} not found")
        return user

    def lookup_by_api_token(self, token: str | None) -> User | None:
        """Get the owner of an active (non-revoked) API token."""
        if token is None or not token.strip():
            return None

        return (
            self.db.query(User)
            .join(ApiToken, ApiToken.user_id == User.id)
            .filter(ApiToken.token == token, ApiToken.revoked_at.is_(None))
            .first()
        )

    def lookup_by_auth_token(self, auth_token: str | None) -> User | None:
        """Get a user by auth token."""
        if not auth_token:
            return None
        return self.db.query(User).filter(User.auth_token == auth_token).first()

    # Creation and token issuance

    def create_user(self, **attributes: Any) -> User:
        """Validate and insert a new user with fresh auth and feed tokens.

        The unique constraints on the token columns are authoritative: if an
        insert collides on a token another session committed after our
        existence check, that token is regenerated and the insert retried.
        """
        user = User(**attributes)
        self.validate(user)

        for kind in TokenKind:
            setattr(user, kind.column_name, self.issue_unique_token(kind))

        for attempt in range(1, MAX_CREATE_ATTEMPTS + 1):
            try:
                with self.db.begin_nested():
                    self.db.add(user)
                    self.db.flush()
                break
            except IntegrityError as e:
                conflicts = self._conflicting_columns(user)
                if "email" in conflicts:
                    raise InvalidEmail("Email has already been taken") from e

                stale = [kind for kind in TokenKind if kind.column_name in conflicts]
                if not stale or attempt == MAX_CREATE_ATTEMPTS:
                    raise
                for kind in stale:
                    logger.warning(f"{kind.value} token collided on insert, regenerating")
                    setattr(user, kind.column_name, self.issue_unique_token(kind))

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def issue_unique_token(self, kind: TokenKind | str) -> str:
        """Generate a token no existing user holds for the given kind."""
        kind = TokenKind(kind)
        while True:
            token = self.token_generator()
            if not self._token_taken(kind, token):
                return token
            logger.info(f"Generated {kind.value} token already in use, retrying")

    def _token_taken(self, kind: TokenKind, token: str) -> bool:
        column = getattr(User, kind.column_name)
        return self.db.query(User.id).filter(column == token).first() is not None

    def _conflicting_columns(self, user: User) -> set[str]:
        """Find unique columns whose value on `user` is held by another row."""
        conflicts = set()
        for name in ("email", "auth_token", "feed_token"):
            value = getattr(user, name)
            if value is None:
                continue
            column = getattr(User, name)
            query = self.db.query(User.id).filter(column == value)
            if user.id is not None:
                query = query.filter(User.id != user.id)
            if query.first() is not None:
                conflicts.add(name)
        return conflicts

    # Validation

    def validate(self, user: User) -> None:
        """Check account invariants, raising UserValidationError on failure."""
        errors: dict[str, list[str]] = defaultdict(list)

        if user.id is not None and not user.email:
            errors["email"].append("can't be blank")

        if user.email:
            if not EMAIL_FORMAT.search(user.email):
                errors["email"].append("is invalid")
            elif self._taken(user, User.email == user.email):
                errors["email"].append("has already been taken")

        if user.username is not None:
            username = user.username
            if len(username) < USERNAME_MIN_LENGTH:
                errors["username"].append(
                    f"is too short (minimum is {USERNAME_MIN_LENGTH} characters)"
                )
            elif len(username) > USERNAME_MAX_LENGTH:
                errors["username"].append(
                    f"is too long (maximum is {USERNAME_MAX_LENGTH} characters)"
                )
            if not USERNAME_FORMAT.fullmatch(username):
                errors["username"].append("is invalid")
            elif self._taken(user, func.lower(User.username) == username.lower()):
                errors["username"].append("has already been taken")

        # Column default only applies on insert
        if user.id is not None and user.asciicasts_private_by_default is None:
            errors["asciicasts_private_by_default"].append("can't be blank")

        if user.theme_name and themes.for_name(user.theme_name) is None:
            errors["theme_name"].append("is not a known theme")

        if errors:
            raise UserValidationError(dict(errors))

    def _taken(self, user: User, condition) -> bool:
        query = self.db.query(User.id).filter(condition)
        if user.id is not None:
            query = query.filter(User.id != user.id)
        return query.first() is not None

    def update_profile(self, user: User, changes: dict[str, Any]) -> User:
        """Apply profile changes (username, email, theme, privacy default)."""
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update {', '.join(sorted(unknown))}")

        try:
            for field, value in changes.items():
                setattr(user, field, value)
            self.validate(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(user)
        return user

    # API tokens

    def assign_api_token(self, user: User, raw_token: str) -> ApiToken:
        """Attach an API token to the user, taking it over if it exists."""
        if raw_token is None or not raw_token.strip():
            raise ValueError("API token can't be blank")

        api_token = self.db.query(ApiToken).filter(ApiToken.token == raw_token).first()
        if api_token:
            api_token.reassign_to(user)
        else:
            api_token = ApiToken(user=user, token=raw_token)
            self.db.add(api_token)

        self.db.commit()
        self.db.refresh(api_token)
        return api_token

    def claim_api_token(self, user: User, raw_token: str) -> ApiToken:
        """Register a CLI API token for a signed-in user.

        Recordings made before signing in belong to a throwaway unconfirmed
        account holding the token; that account is merged into `user`.
        """
        api_token = self.db.query(ApiToken).filter(ApiToken.token == raw_token).first()
        if api_token and api_token.user_id != user.id and not api_token.user.confirmed:
            self.merge_into(api_token.user, user)
            self.db.refresh(api_token)
            return api_token
        return self.assign_api_token(user, raw_token)

    def active_api_tokens(self, user: User) -> list[ApiToken]:
        return (
            self.db.query(ApiToken)
            .filter(ApiToken.user_id == user.id, ApiToken.revoked_at.is_(None))
            .order_by(ApiToken.created_at.desc())
            .all()
        )

    def revoked_api_tokens(self, user: User) -> list[ApiToken]:
        return (
            self.db.query(ApiToken)
            .filter(ApiToken.user_id == user.id, ApiToken.revoked_at.isnot(None))
            .order_by(ApiToken.revoked_at.desc())
            .all()
        )

    def revoke_api_token(self, user: User, token_id: int) -> ApiToken:
        api_token = (
            self.db.query(ApiToken)
            .filter(ApiToken.id == token_id, ApiToken.user_id == user.id)
            .first()
        )
        if api_token is None:
            raise ApiTokenNotFound(f"API token {token_id} not found")

        api_token.revoke()
        self.db.commit()
        self.db.refresh(api_token)
        return api_token

    # Merging and removal

    def merge_into(self, source: User, target: User) -> None:
        """Move source's asciicasts and API tokens to target, then delete source.

        Runs as one transaction: on any failure nothing is reassigned and
        source still exists.
        """
        if source.id == target.id:
            raise ValueError("Cannot merge a user into itself")

        source_id = source.id
        now = datetime.now(UTC)
        try:
            for model in (Asciicast, ApiToken):
                self.db.query(model).filter(model.user_id == source_id).update(
                    {model.user_id: target.id, model.updated_at: now},
                    synchronize_session="fetch",
                )
            self._delete_with_dependents(source)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Merged user {source_id} into user {target.id}")

    def destroy(self, user: User) -> None:
        """Delete a user together with everything it owns."""
        user_id = user.id
        try:
            self._delete_with_dependents(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Deleted user {user_id}")

    def _delete_with_dependents(self, user: User) -> None:
        """Delete the user's dependent rows, then the user (no commit)."""
        own_asciicasts = select(Asciicast.id).where(Asciicast.user_id == user.id)

        # Likes and comments go first: they reference the user's asciicasts
        for model in (Like, Comment):
            self.db.query(model).filter(
                or_(model.user_id == user.id, model.asciicast_id.in_(own_asciicasts))
            ).delete(synchronize_session="fetch")

        for model in (Asciicast, ApiToken, ExpiringToken):
            self.db.query(model).filter(model.user_id == user.id).delete(
                synchronize_session="fetch"
            )

        # Collections may still hold the rows deleted above
        self.db.expire(user, USER_RELATIONSHIPS)
        self.db.delete(user)
        self.db.flush()

    # Roles and state

    def is_admin(self, user: User | None) -> bool:
        return user is not None and user.id in self.admin_ids

    def is_first_login(self, user: User) -> bool:
        """True when exactly one login token has ever been issued."""
        count = (
            self.db.query(func.count(ExpiringToken.id))
            .filter(ExpiringToken.user_id == user.id)
            .scalar()
        )
        return count == 1

    def theme(self, user: User) -> themes.Theme | None:
        return user.theme

    # Asciicast queries

    def _asciicasts_query(self, user: User, include_private: bool):
        query = self.db.query(Asciicast).filter(Asciicast.user_id == user.id)
        if not include_private:
            query = query.filter(Asciicast.private.is_(False))
        return query

    def public_asciicast_count(self, user: User) -> int:
        return self._asciicasts_query(user, include_private=False).count()

    def asciicast_count(self, user: User) -> int:
        return self._asciicasts_query(user, include_private=True).count()

    def other_asciicasts(self, user: User, asciicast: Asciicast, limit: int) -> list[Asciicast]:
        """Random sample of the user's public asciicasts, excluding `asciicast`."""
        return (
            self._asciicasts_query(user, include_private=False)
            .filter(Asciicast.id != asciicast.id)
            .order_by(func.random())
            .limit(limit)
            .all()
        )

    def paged_asciicasts(
        self, user: User, page: int, per_page: int, include_private: bool
    ) -> Page:
        """Newest-first page of the user's asciicasts (pages start at 1)."""
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be positive")

        query = self._asciicasts_query(user, include_private)
        total = query.count()
        items = (
            query.options(joinedload(Asciicast.user))
            .order_by(Asciicast.created_at.desc(), Asciicast.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return Page(items=items, page=page, per_page=per_page, total=total)
