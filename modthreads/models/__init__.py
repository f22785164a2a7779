"""Database models package."""

from .base import Base
from .enums import ThreadType
from .threads import Project, Report, Thread, ThreadMember, ThreadMessage, User
from .versions import (
    Game,
    Loader,
    LoaderProjectType,
    LoaderProjectTypeGame,
    LoaderVersion,
    ProjectType,
    Version,
)

__all__ = [
    "Base",
    "User",
    "Project",
    "Report",
    "Thread",
    "ThreadMember",
    "ThreadMessage",
    "Version",
    "Loader",
    "LoaderVersion",
    "ProjectType",
    "LoaderProjectType",
    "Game",
    "LoaderProjectTypeGame",
    "ThreadType",
]
