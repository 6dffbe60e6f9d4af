"""
SpeakerDesk Backend — Authentication and Authorization
=======================================================

What:  Password hashing, session-bound authentication and the ownership check.
Why:   Every mutating speaker route needs an actor; update and delete also
       need that actor to be the owner.
How:   The signed session cookie (Starlette SessionMiddleware) carries only
       the user id. authenticate() resolves it to a User row per request.

Interfaces:
    authenticate(request, db) -> User          raises UnauthorizedError
    authorize(speaker, actor)  -> None          raises ForbiddenError
    require_login                               FastAPI dependency over authenticate()

Password hashing uses PBKDF2-HMAC-SHA256 with a per-password random salt,
stored as "salt$hash" in hex.
"""

import hashlib
import hmac
import logging
import os
import uuid
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import ForbiddenError, UnauthorizedError
from app.models.speaker import Speaker
from app.models.user import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"
PBKDF2_ITERATIONS = 100_000


# ══════════════════════════════════════════════════════════════════════════
# Password Hashing
# ══════════════════════════════════════════════════════════════════════════

def hash_password(password: str) -> str:
    """Hash a password with a fresh 16-byte salt; returns "salt$hash"."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time comparison of a password against a stored "salt$hash"."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


# ══════════════════════════════════════════════════════════════════════════
# Session Helpers
# ══════════════════════════════════════════════════════════════════════════

def login(request: Request, user: User) -> None:
    """Bind the session cookie to this user."""
    request.session[SESSION_USER_KEY] = str(user.id)


def logout(request: Request) -> None:
    request.session.clear()


def _session_user_id(request: Request) -> Optional[uuid.UUID]:
    raw = request.session.get(SESSION_USER_KEY)
    if not raw:
        return None
    try:
        return uuid.UUID(raw)
    except (TypeError, ValueError):
        # Cookie signed by us but not a user id; treat as logged out
        logger.warning("Discarding malformed session user id")
        return None


# ══════════════════════════════════════════════════════════════════════════
# Authentication / Authorization
# ══════════════════════════════════════════════════════════════════════════

async def authenticate(request: Request, db: AsyncSession) -> User:
    """
    Resolve the request's session to a User.

    Raises:
        UnauthorizedError: no session, or the session's user no longer exists
    """
    user_id = _session_user_id(request)
    if user_id is None:
        raise UnauthorizedError()

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        logger.info("Session refers to missing user %s", user_id)
        raise UnauthorizedError()
    return user


def authorize(speaker: Speaker, actor: User) -> None:
    """
    Allow the call only if the actor owns the speaker.

    Raises:
        ForbiddenError: owner differs from actor, or the speaker has no owner
    """
    if speaker.user_id is None or speaker.user_id != actor.id:
        logger.info(
            "User %s denied access to speaker %s owned by %s",
            actor.id, speaker.id, speaker.user_id,
        )
        raise ForbiddenError()


async def require_login(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """FastAPI dependency: the acting User, or 401 before any route logic runs."""
    return await authenticate(request, db)
