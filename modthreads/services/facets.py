"""Loader, project type and game facets of projects, reached through versions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from sqlalchemy import Select, and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from modthreads.models import (
    Game,
    Loader,
    LoaderProjectType,
    LoaderProjectTypeGame,
    LoaderVersion,
    ProjectType,
    Version,
)
from modthreads.services.aggregation import ChildGroup, fold_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FacetSet:
    """Distinct facets of one project."""

    mod_id: int
    loaders: frozenset[str]
    project_types: frozenset[str]
    games: frozenset[str]


FACET_GROUPS: tuple[ChildGroup, ...] = (
    ChildGroup(name="loaders", value=lambda row: row.loader),
    ChildGroup(name="project_types", value=lambda row: row.project_type),
    ChildGroup(name="games", value=lambda row: row.game),
)


def facet_rows_statement(version_ids: Iterable[int]) -> Select:
    """Return the inner join chain version -> loader -> project type -> game."""

    return (
        select(
            Version.mod_id,
            Loader.loader,
            ProjectType.name.label("project_type"),
            Game.slug.label("game"),
        )
        .select_from(Version)
        .join(LoaderVersion, LoaderVersion.version_id == Version.id)
        .join(Loader, Loader.id == LoaderVersion.loader_id)
        .join(LoaderProjectType, LoaderProjectType.joining_loader_id == Loader.id)
        .join(ProjectType, ProjectType.id == LoaderProjectType.joining_project_type_id)
        .join(
            LoaderProjectTypeGame,
            and_(
                LoaderProjectTypeGame.loader_id == Loader.id,
                LoaderProjectTypeGame.project_type_id == ProjectType.id,
            ),
        )
        .join(Game, Game.id == LoaderProjectTypeGame.game_id)
        .where(Version.id.in_(list(version_ids)))
        .distinct()
    )


def build_facet_sets(rows: Iterable[Any]) -> dict[int, FacetSet]:
    return {
        mod_id: FacetSet(
            mod_id=mod_id,
            loaders=frozenset(folded["loaders"]),
            project_types=frozenset(folded["project_types"]),
            games=frozenset(folded["games"]),
        )
        for mod_id, folded in fold_rows(rows, lambda row: row.mod_id, FACET_GROUPS).items()
    }


def fetch_version_facets(db: Session, version_ids: Iterable[int]) -> dict[int, FacetSet]:
    """Return facets per project for every project owning one of ``version_ids``.

    Projects whose versions reach no loader/project type/game combination
    are left out of the result.
    """

    unique_ids = sorted(set(version_ids))
    if not unique_ids:
        return {}

    try:
        rows = db.execute(facet_rows_statement(unique_ids)).all()
    except SQLAlchemyError:
        logger.exception("Failed to load facets for %d versions", len(unique_ids))
        raise

    facets = build_facet_sets(rows)
    logger.debug("Resolved facets for %d projects from %d versions", len(facets), len(unique_ids))
    return facets


class VersionFacetService:
    """Session-bound facade over :func:`fetch_version_facets`."""

    def __init__(self, session: Session):
        self._session = session

    def get_many(self, version_ids: Iterable[int]) -> dict[int, FacetSet]:
        return fetch_version_facets(self._session, version_ids)
