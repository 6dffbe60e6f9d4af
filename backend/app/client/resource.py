"""
SpeakerDesk Client — Speaker Resource Proxy
============================================

What:  Typed async accessor mirroring the /speakers REST surface.
Why:   Callers (the view controller, scripts, tests) work with SpeakerRecord
       objects instead of raw HTTP calls.
How:   Wraps an httpx.AsyncClient. Responses are parsed into the same
       SpeakerResponse schema the server serializes.

Surface:
    resource.query()           GET    /speakers
    resource.get(id)           GET    /speakers/{id}
    resource.new(name=...)     (unsaved record)
    record.save()              POST   /speakers
    record.update()            PUT    /speakers/{id}
    record.remove()            DELETE /speakers/{id}

Instance methods accept optional on_success / on_error callbacks. Without
on_error a failed call raises ResourceError.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

import httpx

from app.schemas.speaker import OwnerSummary, SpeakerResponse

logger = logging.getLogger(__name__)

SuccessCallback = Callable[["SpeakerRecord"], Any]
ErrorCallback = Callable[["ResourceError"], Any]


class ResourceError(Exception):
    """
    A non-2xx response from the speakers API.

    Attributes:
        status_code: HTTP status
        data: parsed error body; always has a "message" key
    """

    def __init__(self, status_code: int, data: Dict[str, Any]):
        self.status_code = status_code
        self.data = data
        super().__init__(f"{status_code}: {self.message}")

    @property
    def message(self) -> str:
        return str(self.data.get("message", ""))

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ResourceError":
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {"message": response.text}
        data.setdefault("message", response.reason_phrase)
        return cls(response.status_code, data)


class SpeakerRecord:
    """One speaker as seen by the client; unsaved until `id` is set."""

    def __init__(self, resource: "SpeakerResource", **fields: Any):
        self._resource = resource
        self.id: Optional[uuid.UUID] = None
        self.name: Optional[str] = None
        self.owner: Optional[OwnerSummary] = None
        self.created: Optional[datetime] = None
        for key, value in fields.items():
            setattr(self, key, value)

    @classmethod
    def from_payload(cls, resource: "SpeakerResource", payload: Dict[str, Any]) -> "SpeakerRecord":
        record = cls(resource)
        record._apply(payload)
        return record

    def _apply(self, payload: Dict[str, Any]) -> None:
        parsed = SpeakerResponse.model_validate(payload)
        self.id = parsed.id
        self.name = parsed.name
        self.owner = parsed.owner
        self.created = parsed.created

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        if self.id is not None:
            payload["_id"] = str(self.id)
        return payload

    async def save(
        self,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> "SpeakerRecord":
        return await self._send("POST", self._resource.collection_url, on_success, on_error)

    async def update(
        self,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> "SpeakerRecord":
        return await self._send("PUT", self._resource.item_url(self._require_id()), on_success, on_error)

    async def remove(
        self,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> "SpeakerRecord":
        return await self._send("DELETE", self._resource.item_url(self._require_id()), on_success, on_error)

    def _require_id(self) -> uuid.UUID:
        if self.id is None:
            raise ValueError("Speaker has not been saved yet")
        return self.id

    async def _send(
        self,
        method: str,
        url: str,
        on_success: Optional[SuccessCallback],
        on_error: Optional[ErrorCallback],
    ) -> "SpeakerRecord":
        body = None if method == "DELETE" else self.to_payload()
        try:
            payload = await self._resource.request(method, url, json=body)
        except ResourceError as e:
            if on_error is None:
                raise
            on_error(e)
            return self
        self._apply(payload)
        if on_success is not None:
            on_success(self)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpeakerRecord):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)

    def __repr__(self) -> str:
        return f"<SpeakerRecord(id={self.id}, name='{self.name}')>"


class SpeakerResource:
    """
    Accessor for /speakers on one API client.

    The httpx client owns the base URL and the session cookie jar, so a
    client that has signed in sends its session with every call here.
    """

    def __init__(self, client: httpx.AsyncClient, path: str = "/speakers"):
        self.client = client
        self.collection_url = path.rstrip("/")

    def item_url(self, speaker_id: Union[str, uuid.UUID]) -> str:
        return f"{self.collection_url}/{speaker_id}"

    async def request(self, method: str, url: str, json: Any = None) -> Any:
        response = await self.client.request(method, url, json=json)
        if response.is_error:
            error = ResourceError.from_response(response)
            logger.debug("%s %s failed: %s", method, url, error)
            raise error
        return response.json()

    def new(self, **fields: Any) -> SpeakerRecord:
        return SpeakerRecord(self, **fields)

    async def query(self) -> List[SpeakerRecord]:
        payload = await self.request("GET", self.collection_url)
        return [SpeakerRecord.from_payload(self, item) for item in payload]

    async def get(self, speaker_id: Union[str, uuid.UUID]) -> SpeakerRecord:
        payload = await self.request("GET", self.item_url(speaker_id))
        return SpeakerRecord.from_payload(self, payload)
