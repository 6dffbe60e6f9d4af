"""
SpeakerDesk Backend — User Service
===================================

What:  Local account sign-up and credential checks.
Why:   Speakers need an authenticated actor; this is the minimal collaborator
       that produces one. Password reset, OAuth providers and profile edits
       are out of scope.
Who:   Called by app/routes/auth.py.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, ValidationError
from app.models.user import User
from app.schemas.user import SignInRequest, SignUpRequest, UserResponse
from app.security import hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Unknown user or invalid password"


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        display_name=user.display_name,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        username=user.username,
        provider=user.provider,
        created=user.created,
    )


class UserService:
    """Stateless account operations."""

    async def sign_up(self, db: AsyncSession, payload: SignUpRequest) -> User:
        """
        Create a local user.

        Raises:
            ValidationError: username already taken (→ 400)
            DatabaseError: insert failed for another reason (→ 500)
        """
        display_name = payload.display_name
        if not display_name:
            display_name = f"{payload.first_name} {payload.last_name}".strip() or payload.username

        user = User(
            first_name=payload.first_name,
            last_name=payload.last_name,
            display_name=display_name,
            email=payload.email,
            username=payload.username,
            password_hash=hash_password(payload.password),
            provider="local",
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ValidationError(message="Username already exists", field="username")
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error during sign-up: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s signed up", user.id)
        return user

    async def sign_in(self, db: AsyncSession, payload: SignInRequest) -> User:
        """
        Check credentials.

        Raises:
            ValidationError: unknown username or wrong password (→ 400);
                             the message does not say which
        """
        result = await db.execute(select(User).where(User.username == payload.username))
        user = result.scalar_one_or_none()
        if user is None or not verify_password(payload.password, user.password_hash):
            raise ValidationError(message=INVALID_CREDENTIALS_MESSAGE)
        return user


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
