"""
SpeakerDesk Backend — Speaker Service Unit Tests
=================================================

What:  Tests for SpeakerService (loader lookup, create, read, update, delete, list).
How:   Mock sessions where the store is incidental; the SQLite test database
       where the store assigns ids and timestamps.

What we test:
    ✅ Malformed / unknown ids raise NotFoundError
    ✅ Create stamps the actor as owner and trims the name
    ✅ Empty or missing name raises ValidationError with the model's message
    ✅ Update overlays writable fields only
    ✅ Delete failure surfaces the store message as a ValidationError
    ✅ List orders newest first
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.speaker import Speaker
from app.models.user import User
from app.schemas.speaker import SpeakerCreate
from app.security import hash_password
from app.services.speaker_service import SpeakerService


def make_user(**overrides) -> User:
    fields = {
        "id": uuid.uuid4(),
        "display_name": "Full Name",
        "username": f"user-{uuid.uuid4().hex[:6]}",
        "password_hash": "00$00",
    }
    fields.update(overrides)
    return User(**fields)


def make_speaker(user=None, **overrides) -> Speaker:
    fields = {
        "id": uuid.uuid4(),
        "name": "Speaker Name",
        "created": datetime.now(timezone.utc),
    }
    fields.update(overrides)
    speaker = Speaker(**fields)
    if user is not None:
        speaker.user = user
        speaker.user_id = user.id
    return speaker


class TestSpeakerServiceLoader:
    """Tests for get_speaker, the lookup behind the resource loader."""

    def setup_method(self):
        self.service = SpeakerService()

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError, match="Failed to load Speaker not-a-uuid"):
            await self.service.get_speaker(mock_db_session, "not-a-uuid")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError):
            await self.service.get_speaker(mock_db_session, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_found_returns_entity(self, mock_db_session):
        speaker = make_speaker(user=make_user())
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = speaker
        mock_db_session.execute.return_value = mock_result

        loaded = await self.service.get_speaker(mock_db_session, str(speaker.id))

        assert loaded is speaker
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_store_failure_is_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = SQLAlchemyError("connection reset")

        with pytest.raises(DatabaseError):
            await self.service.get_speaker(mock_db_session, str(uuid.uuid4()))


class TestSpeakerServiceCreate:

    def setup_method(self):
        self.service = SpeakerService()

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="Please fill Speaker name"):
            await self.service.create(mock_db_session, SpeakerCreate(name=""), make_user())
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_name_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="Please fill Speaker name"):
            await self.service.create(mock_db_session, SpeakerCreate(), make_user())

    @pytest.mark.asyncio
    async def test_whitespace_name_rejected(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, SpeakerCreate(name="   "), make_user())
        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_create_persists_with_actor_as_owner(self, db_session):
        actor = User(
            display_name="Full Name",
            username="username",
            password_hash=hash_password("password"),
        )
        db_session.add(actor)
        await db_session.commit()

        result = await self.service.create(
            db_session, SpeakerCreate(name="  Speaker Name  "), actor
        )

        assert result.name == "Speaker Name"
        assert result.owner is not None
        assert result.owner.id == actor.id
        assert result.owner.display_name == "Full Name"
        assert isinstance(result.id, uuid.UUID)
        assert result.created is not None

        stored = await self.service.get_speaker(db_session, str(result.id))
        assert stored.user_id == actor.id


class TestSpeakerServiceUpdate:

    def setup_method(self):
        self.service = SpeakerService()

    @pytest.mark.asyncio
    async def test_overlay_replaces_name_and_keeps_the_rest(self, mock_db_session):
        owner = make_user()
        speaker = make_speaker(user=owner)
        original_id, original_created = speaker.id, speaker.created

        result = await self.service.update(
            mock_db_session,
            speaker,
            {
                "name": "WHY YOU GOTTA BE SO MEAN?",
                "_id": str(uuid.uuid4()),
                "id": uuid.uuid4(),
                "user_id": uuid.uuid4(),
                "created": "2001-01-01T00:00:00Z",
                "unknown": "ignored",
            },
        )

        assert result.name == "WHY YOU GOTTA BE SO MEAN?"
        assert result.id == original_id
        assert result.created == original_created
        assert speaker.user_id == owner.id
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_payload_without_name_keeps_name(self, mock_db_session):
        speaker = make_speaker(user=make_user())

        result = await self.service.update(mock_db_session, speaker, {})

        assert result.name == "Speaker Name"

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, mock_db_session):
        speaker = make_speaker(user=make_user())

        with pytest.raises(ValidationError, match="Please fill Speaker name"):
            await self.service.update(mock_db_session, speaker, {"name": ""})
        assert speaker.name == "Speaker Name"
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_is_database_error(self, mock_db_session):
        speaker = make_speaker(user=make_user())
        mock_db_session.commit.side_effect = SQLAlchemyError("deadlock")

        with pytest.raises(DatabaseError):
            await self.service.update(mock_db_session, speaker, {"name": "New"})
        mock_db_session.rollback.assert_awaited_once()


class TestSpeakerServiceDelete:

    def setup_method(self):
        self.service = SpeakerService()

    @pytest.mark.asyncio
    async def test_delete_returns_last_known_representation(self, mock_db_session):
        speaker = make_speaker(user=make_user())

        result = await self.service.delete(mock_db_session, speaker)

        assert result.id == speaker.id
        assert result.name == "Speaker Name"
        mock_db_session.delete.assert_awaited_once_with(speaker)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_store_failure_becomes_validation_error(self, mock_db_session):
        speaker = make_speaker(user=make_user())
        mock_db_session.commit.side_effect = SQLAlchemyError("row is locked")

        with pytest.raises(ValidationError, match="row is locked"):
            await self.service.delete(mock_db_session, speaker)


class TestSpeakerServiceList:

    def setup_method(self):
        self.service = SpeakerService()

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_speakers(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_newest_first(self, db_session):
        now = datetime.now(timezone.utc)
        db_session.add_all([
            Speaker(name="Oldest", created=now - timedelta(hours=2)),
            Speaker(name="Newest", created=now),
            Speaker(name="Middle", created=now - timedelta(hours=1)),
        ])
        await db_session.commit()

        result = await self.service.list_speakers(db_session)

        assert [item.name for item in result] == ["Newest", "Middle", "Oldest"]
        assert all(item.owner is None for item in result)

    @pytest.mark.asyncio
    async def test_list_resolves_owner(self, db_session):
        owner = User(display_name="Full Name", username="username", password_hash="00$00")
        db_session.add(owner)
        db_session.add(Speaker(name="Speaker Name", user=owner))
        await db_session.commit()

        result = await self.service.list_speakers(db_session)

        assert len(result) == 1
        assert result[0].owner.id == owner.id
        assert result[0].owner.display_name == "Full Name"
