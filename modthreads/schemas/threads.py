"""Schemas related to thread snapshots."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from modthreads.models.enums import ThreadType
from modthreads.services import FacetSet, ThreadSnapshot


class ThreadMessageRead(BaseModel):
    """Serialized representation of a thread message."""

    id: int
    author_id: int | None = None
    thread_id: int
    body: str
    created: datetime

    model_config = ConfigDict(from_attributes=True)


class ThreadRead(BaseModel):
    """Serialized thread snapshot."""

    id: int
    thread_type: ThreadType
    mod_id: int | None = None
    report_id: int | None = None
    show_in_mod_inbox: bool = False
    members: list[int] = Field(default_factory=list, description="Member user ids in ascending order")
    messages: list[ThreadMessageRead] = Field(
        default_factory=list, description="Messages ordered by creation time, then id"
    )

    @classmethod
    def from_snapshot(cls, snapshot: ThreadSnapshot) -> "ThreadRead":
        return cls(
            id=snapshot.id,
            thread_type=snapshot.thread_type,
            mod_id=snapshot.mod_id,
            report_id=snapshot.report_id,
            show_in_mod_inbox=snapshot.show_in_mod_inbox,
            members=sorted(snapshot.members),
            messages=[ThreadMessageRead.model_validate(message) for message in snapshot.messages],
        )


class VersionFacetsRead(BaseModel):
    """Facets of a project reachable through its versions."""

    mod_id: int
    loaders: list[str] = Field(default_factory=list)
    project_types: list[str] = Field(default_factory=list)
    games: list[str] = Field(default_factory=list)

    @classmethod
    def from_facets(cls, facets: FacetSet) -> "VersionFacetsRead":
        return cls(
            mod_id=facets.mod_id,
            loaders=sorted(facets.loaders),
            project_types=sorted(facets.project_types),
            games=sorted(facets.games),
        )
