"""
SpeakerDesk Backend — Session Route Handlers
=============================================

What:  Sign-up, sign-in, sign-out and "who am I".
Why:   Speaker mutations require a signed-in session; these routes create it.
How:   The session cookie is signed by Starlette's SessionMiddleware and
       holds only the user id.

Routes:
    POST /auth/signup    create a local user and sign in
    POST /auth/signin    check credentials and sign in
    GET  /auth/signout   clear the session
    GET  /users/me       the signed-in user (401 otherwise)
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models.user import User
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.user import SignInRequest, SignUpRequest, UserResponse
from app.security import login, logout, require_login
from app.services.user_service import to_user_response, user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/auth/signup",
    response_model=UserResponse,
    responses={400: {"description": "Username taken", "model": ErrorResponse}},
    summary="Create a local account and start a session",
)
async def sign_up(
    payload: SignUpRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.sign_up(db, payload)
    login(request, user)
    return to_user_response(user)


@router.post(
    "/auth/signin",
    response_model=UserResponse,
    responses={400: {"description": "Bad credentials", "model": ErrorResponse}},
    summary="Start a session",
)
async def sign_in(
    payload: SignInRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.sign_in(db, payload)
    login(request, user)
    logger.info("User %s signed in", user.id)
    return to_user_response(user)


@router.get(
    "/auth/signout",
    response_model=MessageResponse,
    summary="End the session",
)
async def sign_out(request: Request) -> MessageResponse:
    logout(request)
    return MessageResponse(message="Signed out")


@router.get(
    "/users/me",
    response_model=UserResponse,
    responses={401: {"description": "Not signed in", "model": ErrorResponse}},
    summary="The signed-in user",
)
async def me(actor: User = Depends(require_login)) -> UserResponse:
    return to_user_response(actor)
