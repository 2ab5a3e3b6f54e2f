"""Wire models for the remote mirror endpoint.

The endpoint speaks the generic "posts" shape: ``userId``, ``title``,
``body`` and, on responses and updates, ``id``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fieldreport.domain.incident import Incident


class RemoteIncidentPayload(BaseModel):
    """Body sent on create (``POST``) and replace (``PUT``)."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    title: str
    body: str
    id: Optional[int] = None

    @classmethod
    def from_incident(
        cls,
        incident: Incident,
        include_remote_id: bool = False,
    ) -> RemoteIncidentPayload:
        return cls(
            user_id=incident.user_id,
            title=incident.title,
            body=incident.description,
            id=incident.remote_id if include_remote_id else None,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class RemotePost(BaseModel):
    """A post as returned by the endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    user_id: Optional[int] = Field(None, alias="userId")
    title: str = ""
    body: str = ""
