"""
SpeakerDesk Backend — User and Session Schemas
===============================================

What:  Bodies for sign-up / sign-in and the public user representation.
Who:   Used by the /auth and /users routes.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SignUpRequest(BaseModel):
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    display_name: Optional[str] = Field(default=None, alias="displayName")
    email: str = Field(default="")
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class SignInRequest(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    """
    What:  Public user representation.
    Why:   Never includes password_hash.
    """
    id: uuid.UUID = Field(alias="_id")
    display_name: str = Field(alias="displayName")
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    username: str
    provider: str = "local"
    created: datetime

    model_config = ConfigDict(populate_by_name=True)
