"""
SpeakerDesk Backend — Speaker Route Handlers
=============================================

What:  The route table for the Speaker resource.
How:   Each handler declares its chain as dependencies; FastAPI resolves
       them in order and stops at the first one that raises.

Route Table:
    GET    /speakers             list
    POST   /speakers             require_login → create
    GET    /speakers/{id}        speaker_by_id → read
    PUT    /speakers/{id}        speaker_by_id → require_login → has_authorization → update
    DELETE /speakers/{id}        speaker_by_id → require_login → has_authorization → delete
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import has_authorization, speaker_by_id
from app.models.speaker import Speaker
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.speaker import SpeakerCreate, SpeakerResponse
from app.security import require_login
from app.services.speaker_service import speaker_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/speakers", tags=["Speakers"])

_auth_errors = {
    401: {"description": "Not signed in", "model": ErrorResponse},
}
_owner_errors = {
    401: {"description": "Not signed in", "model": ErrorResponse},
    403: {"description": "Signed-in user does not own the speaker", "model": ErrorResponse},
    404: {"description": "Speaker not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[SpeakerResponse],
    summary="List all speakers, newest first",
)
async def list_speakers(
    db: AsyncSession = Depends(get_db_session),
) -> List[SpeakerResponse]:
    return await speaker_service.list_speakers(db)


@router.post(
    "",
    response_model=SpeakerResponse,
    responses={400: {"description": "Invalid speaker", "model": ErrorResponse}, **_auth_errors},
    summary="Create a speaker owned by the signed-in user",
)
async def create_speaker(
    payload: SpeakerCreate,
    actor: User = Depends(require_login),
    db: AsyncSession = Depends(get_db_session),
) -> SpeakerResponse:
    """
    Create a speaker.

    Only `name` is read from the body. The owner is always the signed-in
    user; `_id` and `created` are assigned by the store.
    """
    return await speaker_service.create(db, payload, actor)


@router.get(
    "/{speaker_id}",
    response_model=SpeakerResponse,
    responses={404: {"description": "Speaker not found", "model": ErrorResponse}},
    summary="Get a single speaker",
)
async def read_speaker(
    speaker: Speaker = Depends(speaker_by_id),
) -> SpeakerResponse:
    return speaker_service.read(speaker)


@router.put(
    "/{speaker_id}",
    response_model=SpeakerResponse,
    responses={400: {"description": "Invalid speaker", "model": ErrorResponse}, **_owner_errors},
    summary="Update a speaker (owner only)",
)
async def update_speaker(
    speaker: Speaker = Depends(speaker_by_id),
    actor: User = Depends(has_authorization),
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> SpeakerResponse:
    """
    Update a speaker.

    Body fields overwrite same-named speaker fields; fields not in the body
    are kept. `_id`, `owner` and `created` cannot be changed.
    """
    return await speaker_service.update(db, speaker, payload)


@router.delete(
    "/{speaker_id}",
    response_model=SpeakerResponse,
    responses={400: {"description": "Delete failed", "model": ErrorResponse}, **_owner_errors},
    summary="Delete a speaker (owner only)",
)
async def delete_speaker(
    speaker: Speaker = Depends(speaker_by_id),
    actor: User = Depends(has_authorization),
    db: AsyncSession = Depends(get_db_session),
) -> SpeakerResponse:
    return await speaker_service.delete(db, speaker)
