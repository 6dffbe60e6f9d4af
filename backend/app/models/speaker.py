"""
SpeakerDesk Backend — Speaker SQLAlchemy Model
===============================================

What:  ORM model representing the `speakers` table.
Why:   The one CRUD resource this service exposes.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by SpeakerService and the speaker_by_id loader.

Field rules:
    - id, created: assigned on insert, never rewritten
    - user_id: stamped with the acting user on create, never rewritten
    - name: required string, trimmed, non-empty ("Please fill Speaker name")

Index on created DESC:
    The list endpoint always returns newest first.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid, inspect
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.database import Base
from app.exceptions import ValidationError
from app.models.user import User

NAME_REQUIRED_MESSAGE = "Please fill Speaker name"
NAME_TYPE_MESSAGE = "Speaker name must be text"


class Speaker(Base):
    """
    A conference speaker owned by the user who created it.

    Lifecycle:
        1. Created through POST /speakers; user stamped from the session
        2. Renamed through PUT /speakers/{id} by the owner
        3. Deleted through DELETE /speakers/{id} by the owner
    """

    __tablename__ = "speakers"

    # Columns an update payload may never overwrite
    IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created"})

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Nullable at the store level: rows seeded outside the authenticated
    # path have no owner, and nobody can mutate them through the API.
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=True,
    )

    user: Mapped[Optional[User]] = relationship(User, lazy="raise")

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_speakers_created", created.desc()),
    )

    @validates("name")
    def _validate_name(self, key: str, value: Any) -> str:
        if value is None:
            raise ValidationError(message=NAME_REQUIRED_MESSAGE, field="name")
        if not isinstance(value, str):
            raise ValidationError(message=NAME_TYPE_MESSAGE, field="name")
        value = value.strip()
        if not value:
            raise ValidationError(message=NAME_REQUIRED_MESSAGE, field="name")
        return value

    def validate(self) -> None:
        """
        Check constraints that attribute validators cannot see.

        @validates only fires on assignment, so a Speaker built without a
        name at all is caught here before it reaches the store.
        """
        if not self.name:
            raise ValidationError(message=NAME_REQUIRED_MESSAGE, field="name")

    @classmethod
    def writable_fields(cls) -> frozenset:
        columns = {attr.key for attr in inspect(cls).column_attrs}
        return frozenset(columns - cls.IMMUTABLE_FIELDS)

    def overlay(self, payload: Mapping[str, Any]) -> None:
        """
        Overlay payload fields onto this entity.

        Same-named writable columns are overwritten; everything absent is
        preserved. Immutable and unknown keys are skipped. Values are copied
        as-is, no deep merge.
        """
        writable = self.writable_fields()
        for key, value in payload.items():
            if key in writable:
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"<Speaker(id={self.id}, name='{self.name}', user_id={self.user_id})>"
