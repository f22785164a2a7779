"""Facet lookups used to enrich moderation queue entries."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from modthreads.database import get_db
from modthreads.schemas import VersionFacetsRead
from modthreads.services import VersionFacetService

router = APIRouter(prefix="/versions", tags=["versions"])


@router.get("/facets", response_model=list[VersionFacetsRead])
def list_version_facets(
    ids: list[int] | None = Query(default=None, description="Version ids to resolve"),
    db: Session = Depends(get_db),
) -> list[VersionFacetsRead]:
    """Return loaders, project types and games per project owning the versions."""

    facets = VersionFacetService(db).get_many(ids or ())
    return [VersionFacetsRead.from_facets(facets[mod_id]) for mod_id in sorted(facets)]
