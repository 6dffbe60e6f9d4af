"""
SpeakerDesk Backend — Speaker Route Dependencies
=================================================

What:  The resource loader and the ownership guard for /speakers/{speaker_id}.
How:   FastAPI resolves sub-dependencies in parameter order and caches each
       one per request, so `has_authorization` runs loader → login → check
       and the handler reuses the same loaded Speaker without a second query.

Chains (see app/routes/speakers.py):
    GET    /speakers/{id}: speaker_by_id
    PUT    /speakers/{id}: speaker_by_id → require_login → has_authorization
    DELETE /speakers/{id}: speaker_by_id → require_login → has_authorization
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models.speaker import Speaker
from app.models.user import User
from app.security import authorize, require_login
from app.services.speaker_service import speaker_service


async def speaker_by_id(
    speaker_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Speaker:
    """Load the Speaker named by the path, owner resolved; 404 when missing."""
    return await speaker_service.get_speaker(db, speaker_id)


async def has_authorization(
    speaker: Speaker = Depends(speaker_by_id),
    actor: User = Depends(require_login),
) -> User:
    """Pass only when the signed-in user owns the loaded speaker; returns the actor."""
    authorize(speaker, actor)
    return actor
