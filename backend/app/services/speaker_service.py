"""
SpeakerDesk Backend — Speaker Service (CRUD Handler Set)
=========================================================

What:  create / read / update / delete / list for Speaker records.
Why:   Keeps store access and payload translation out of the route layer.
How:   Each method takes the request's AsyncSession, talks to the store,
       and returns a SpeakerResponse (or the loaded entity, for the loader).
Who:   Called by app/routes/speakers.py and by the speaker_by_id loader.

Write-through:
    Mutating methods commit before returning, so the HTTP response is only
    built after the store has acknowledged the write.

Error Handling Strategy:
    ValidationError from the model propagates as-is (400).
    A missing record becomes NotFoundError (404).
    Anything else the store raises is wrapped in DatabaseError, except on
    delete, where the store's own message is returned as a 400.
"""

import logging
import uuid
from datetime import timezone
from typing import Any, List, Mapping

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.speaker import Speaker
from app.models.user import User
from app.schemas.speaker import OwnerSummary, SpeakerCreate, SpeakerResponse

logger = logging.getLogger(__name__)


def to_response(speaker: Speaker) -> SpeakerResponse:
    """Serialize a Speaker with its owner reduced to id + display name."""
    created = speaker.created
    # SQLite hands back naive datetimes; stored values are always UTC
    if created is not None and created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    owner = None
    if speaker.user is not None:
        owner = OwnerSummary(id=speaker.user.id, display_name=speaker.user.display_name)
    return SpeakerResponse(
        id=speaker.id,
        name=speaker.name,
        owner=owner,
        created=created,
    )


class SpeakerService:
    """
    Stateless CRUD operations over the speakers table.

    Responsibilities:
        - get_speaker(): resolve a path id to a loaded entity (Resource Loader)
        - create(): new record stamped with the acting user
        - read(): representation of an already-loaded entity
        - update(): overlay payload fields, persist
        - delete(): remove, return last-known representation
        - list_speakers(): everything, newest first
    """

    async def get_speaker(self, db: AsyncSession, speaker_id: str) -> Speaker:
        """
        Fetch one Speaker with its owner eagerly loaded.

        Raises:
            NotFoundError: malformed id or no matching row (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            key = uuid.UUID(str(speaker_id))
        except ValueError:
            raise NotFoundError(resource="Speaker", resource_id=str(speaker_id))

        try:
            result = await db.execute(
                select(Speaker)
                .options(selectinload(Speaker.user))
                .where(Speaker.id == key)
            )
            speaker = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching speaker %s: %s", speaker_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the speaker. Please try again.",
                context={"speaker_id": str(speaker_id)},
            )

        if speaker is None:
            raise NotFoundError(resource="Speaker", resource_id=str(speaker_id))
        return speaker

    async def create(
        self,
        db: AsyncSession,
        payload: SpeakerCreate,
        actor: User,
    ) -> SpeakerResponse:
        """
        Persist a new Speaker owned by `actor`.

        Any owner in the payload is ignored; the schema already drops it and
        the relationship is assigned from the session here.

        Raises:
            ValidationError: empty or missing name (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        speaker = Speaker(name=payload.name)
        speaker.user = actor
        speaker.validate()

        db.add(speaker)
        await self._commit(db, "create")
        logger.info("Speaker %s created by user %s", speaker.id, actor.id)
        return to_response(speaker)

    def read(self, speaker: Speaker) -> SpeakerResponse:
        """Representation of the entity the loader attached; no extra checks."""
        return to_response(speaker)

    async def update(
        self,
        db: AsyncSession,
        speaker: Speaker,
        payload: Mapping[str, Any],
    ) -> SpeakerResponse:
        """
        Overlay `payload` onto `speaker` and persist.

        Raises:
            ValidationError: the overlaid name is empty (→ 400)
            DatabaseError: update failed (→ 500)
        """
        speaker.overlay(payload)
        speaker.validate()
        await self._commit(db, "update")
        logger.info("Speaker %s updated", speaker.id)
        return to_response(speaker)

    async def delete(self, db: AsyncSession, speaker: Speaker) -> SpeakerResponse:
        """
        Remove `speaker`; the response is its representation before removal.

        Raises:
            ValidationError: the store refused the delete (→ 400, store message)
        """
        response = to_response(speaker)
        try:
            await db.delete(speaker)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.warning("Delete of speaker %s failed: %s", speaker.id, str(e))
            raise ValidationError(
                message=str(getattr(e, "orig", None) or e),
                context={"speaker_id": str(speaker.id)},
            )
        logger.info("Speaker %s deleted", response.id)
        return response

    async def list_speakers(self, db: AsyncSession) -> List[SpeakerResponse]:
        """
        All speakers, owner resolved, newest first.

        No pagination and no filtering: this is a full-table scan.
        """
        try:
            result = await db.execute(
                select(Speaker)
                .options(selectinload(Speaker.user))
                .order_by(desc(Speaker.created))
            )
            speakers = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing speakers: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve speakers. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [to_response(speaker) for speaker in speakers]

    async def _commit(self, db: AsyncSession, operation: str) -> None:
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error during speaker %s: %s", operation, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the speaker. Please try again.",
                context={"operation": operation, "error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
speaker_service = SpeakerService()
