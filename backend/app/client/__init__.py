# Client package init
"""
SpeakerDesk Client
==================

HTTP-side mirror of the /speakers route table:
    - resource.py:   SpeakerResource / SpeakerRecord over httpx.AsyncClient
    - controller.py: SpeakersController, view state on top of the resource
"""

from app.client.controller import SpeakersController
from app.client.resource import ResourceError, SpeakerRecord, SpeakerResource

__all__ = ["ResourceError", "SpeakerRecord", "SpeakerResource", "SpeakersController"]
