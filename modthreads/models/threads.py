from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from modthreads.models.base import Base
from modthreads.models.enums import ThreadType


class User(Base):
    """Platform account that can author messages and join threads."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Project(Base):
    """Project (mod) that threads and versions can belong to."""

    __tablename__ = "mods"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str | None] = mapped_column(String(64), unique=True)

    threads: Mapped[list["Thread"]] = relationship(back_populates="project")
    versions: Mapped[list["Version"]] = relationship(
        back_populates="project", cascade="all, delete-orphan"
    )


class Report(Base):
    """User-submitted report that opens a moderation thread."""

    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(primary_key=True)
    mod_id: Mapped[int | None] = mapped_column(ForeignKey("mods.id", ondelete="CASCADE"))
    reporter_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    threads: Mapped[list["Thread"]] = relationship(back_populates="report")


class Thread(Base):
    """Conversation container grouping members and messages."""

    __tablename__ = "threads"

    id: Mapped[int] = mapped_column(primary_key=True)
    thread_type: Mapped[ThreadType] = mapped_column(
        SAEnum(
            ThreadType,
            name="thread_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    mod_id: Mapped[int | None] = mapped_column(ForeignKey("mods.id", ondelete="CASCADE"), nullable=True)
    report_id: Mapped[int | None] = mapped_column(
        ForeignKey("reports.id", ondelete="CASCADE"), nullable=True
    )
    show_in_mod_inbox: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    project: Mapped[Project | None] = relationship(back_populates="threads")
    report: Mapped[Report | None] = relationship(back_populates="threads")
    members: Mapped[list["ThreadMember"]] = relationship(
        back_populates="thread", cascade="all, delete-orphan"
    )
    messages: Mapped[list["ThreadMessage"]] = relationship(
        back_populates="thread", cascade="all, delete-orphan"
    )


class ThreadMember(Base):
    """Link table between thread and user."""

    __tablename__ = "threads_members"

    thread_id: Mapped[int] = mapped_column(
        ForeignKey("threads.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    thread: Mapped[Thread] = relationship(back_populates="members")


class ThreadMessage(Base):
    """Message posted within a thread."""

    __tablename__ = "threads_messages"
    __table_args__ = (Index("ix_threads_messages_thread_created", "thread_id", "created"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    thread_id: Mapped[int] = mapped_column(
        ForeignKey("threads.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    thread: Mapped[Thread] = relationship(back_populates="messages")
