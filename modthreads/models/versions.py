from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, ForeignKeyConstraint, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modthreads.models.base import Base


class Version(Base):
    """Uploaded release of a project."""

    __tablename__ = "versions"

    id: Mapped[int] = mapped_column(primary_key=True)
    mod_id: Mapped[int] = mapped_column(ForeignKey("mods.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    project: Mapped["Project"] = relationship(back_populates="versions")


class Loader(Base):
    """Mod loader a version can target (fabric, forge, ...)."""

    __tablename__ = "loaders"

    id: Mapped[int] = mapped_column(primary_key=True)
    loader: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)


class LoaderVersion(Base):
    """Link table between loader and version."""

    __tablename__ = "loaders_versions"

    loader_id: Mapped[int] = mapped_column(ForeignKey("loaders.id", ondelete="CASCADE"), primary_key=True)
    version_id: Mapped[int] = mapped_column(
        ForeignKey("versions.id", ondelete="CASCADE"), primary_key=True
    )


class ProjectType(Base):
    """Project type a loader supports (mod, modpack, shader, ...)."""

    __tablename__ = "project_types"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)


class LoaderProjectType(Base):
    """Link table between loader and project type."""

    __tablename__ = "loaders_project_types"

    joining_loader_id: Mapped[int] = mapped_column(
        ForeignKey("loaders.id", ondelete="CASCADE"), primary_key=True
    )
    joining_project_type_id: Mapped[int] = mapped_column(
        ForeignKey("project_types.id", ondelete="CASCADE"), primary_key=True
    )


class Game(Base):
    """Game a loader/project type pair is available for."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(primary_key=True)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False, default="")


class LoaderProjectTypeGame(Base):
    """Games reachable from a loader for a given project type."""

    __tablename__ = "loaders_project_types_games"
    __table_args__ = (
        ForeignKeyConstraint(
            ["loader_id", "project_type_id"],
            ["loaders_project_types.joining_loader_id", "loaders_project_types.joining_project_type_id"],
            ondelete="CASCADE",
        ),
    )

    loader_id: Mapped[int] = mapped_column(primary_key=True)
    project_type_id: Mapped[int] = mapped_column(primary_key=True)
    game_id: Mapped[int] = mapped_column(ForeignKey("games.id", ondelete="CASCADE"), primary_key=True)
