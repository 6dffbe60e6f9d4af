"""
SpeakerDesk Backend — Speaker Request/Response Schemas
=======================================================

What:  Pydantic models defining the Speaker wire contract.
Why:   The JSON shape is fixed independently of the table layout:
       `_id`, `name`, `owner: {_id, displayName}`, `created`.
How:   Fields use Python names internally and serialize by alias.
       populate_by_name lets the client proxy parse responses by alias
       and the service build them by field name.
Who:   Used by SpeakerService to build responses and by app.client to parse them.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OwnerSummary(BaseModel):
    """
    What:  The resolved owner reference embedded in a Speaker.
    Why:   Clients show who added a speaker without a second request.
    """
    id: uuid.UUID = Field(alias="_id", description="Owner user id")
    display_name: str = Field(alias="displayName", description="Owner display name")

    model_config = ConfigDict(populate_by_name=True)


class SpeakerResponse(BaseModel):
    """
    What:  Full representation of a Speaker.
    Who:   Returned by every /speakers endpoint (list returns an array of these).
    """
    id: uuid.UUID = Field(alias="_id", description="Speaker identifier")
    name: str = Field(description="Speaker name")
    owner: Optional[OwnerSummary] = Field(
        default=None,
        description="User who created the speaker (null for seeded records)",
    )
    created: datetime = Field(description="When the speaker was created (UTC ISO 8601)")

    model_config = ConfigDict(populate_by_name=True)


class SpeakerCreate(BaseModel):
    """
    What:  Body of POST /speakers.

    name is optional here on purpose: a missing or empty name is rejected
    by the model with its own message (400), not by schema parsing.
    Any other field (_id, owner, created) is dropped; the server assigns them.
    """
    name: Optional[str] = Field(default=None, description="Speaker name")

    model_config = ConfigDict(extra="ignore")
