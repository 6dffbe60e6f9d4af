"""
SpeakerDesk Backend — User SQLAlchemy Model
============================================

What:  ORM model for the `users` table.
Why:   Speakers reference the user who created them; sign-in resolves a
       session back to one of these rows.
Who:   Used by UserService (sign-up/sign-in), the require_login dependency,
       and as the `user` relationship target of Speaker.

Only `id` and `display_name` leave the server as part of a Speaker
representation. The password hash never does.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """
    A local account.

    display_name defaults to "first_name last_name" when not given.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    display_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Unique login handle
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    # PBKDF2 "salt$hash" (see app.security.hash_password)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    provider: Mapped[str] = mapped_column(String(50), nullable=False, default="local")

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
