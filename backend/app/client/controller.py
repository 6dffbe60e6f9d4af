"""
SpeakerDesk Client — Speakers View Controller
==============================================

What:  Presentation state for the speaker list / detail / edit views.
How:   Calls SpeakerResource and records the outcome in plain attributes
       a view layer can render: `speakers`, `speaker`, `name`, `error`,
       and `location` (the path the view should navigate to next).
"""

import uuid
from typing import Any, List, Optional, Union

from app.client.resource import ResourceError, SpeakerRecord, SpeakerResource


class SpeakersController:

    def __init__(self, resource: SpeakerResource, authentication: Optional[Any] = None):
        self.resource = resource
        # Signed-in user as returned by /users/me, or None
        self.authentication = authentication
        self.speakers: List[SpeakerRecord] = []
        self.speaker: Optional[SpeakerRecord] = None
        self.name: str = ""
        self.error: Optional[str] = None
        self.location: Optional[str] = None

    def _on_error(self, error: ResourceError) -> None:
        self.error = error.message

    async def create(self) -> None:
        """Save a new speaker from `name`; on success go to its page and clear the form."""
        speaker = self.resource.new(name=self.name)

        def on_success(saved: SpeakerRecord) -> None:
            self.location = f"speakers/{saved.id}"
            self.name = ""

        await speaker.save(on_success, self._on_error)

    async def remove(self, speaker: Optional[SpeakerRecord] = None) -> None:
        """
        Remove `speaker` from the server and from the list, or, with no
        argument, remove the speaker being viewed and go back to the list.
        """
        if speaker is not None:
            await speaker.remove(on_error=self._on_error)
            self.speakers = [item for item in self.speakers if item is not speaker]
            return

        def on_success(_: SpeakerRecord) -> None:
            self.location = "speakers"

        await self.speaker.remove(on_success, self._on_error)

    async def update(self) -> None:
        speaker = self.speaker

        def on_success(saved: SpeakerRecord) -> None:
            self.location = f"speakers/{saved.id}"

        await speaker.update(on_success, self._on_error)

    async def find(self) -> None:
        self.speakers = await self.resource.query()

    async def find_one(self, speaker_id: Union[str, uuid.UUID]) -> None:
        self.speaker = await self.resource.get(speaker_id)
