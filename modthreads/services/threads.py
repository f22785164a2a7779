"""Bulk loading of thread snapshots.

A snapshot is the fully materialized view of a thread: its scalar columns,
the distinct member ids and the ordered message history. :func:`fetch_threads`
builds snapshots for any number of thread ids with a single SQL statement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from modthreads.models import Thread, ThreadMember, ThreadMessage, ThreadType
from modthreads.services.aggregation import ChildGroup, fold_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageSnapshot:
    """Read-only copy of a thread message."""

    id: int
    author_id: int | None
    thread_id: int
    body: str
    created: datetime

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return (self.created, self.id)


@dataclass(frozen=True)
class ThreadSnapshot:
    """Thread metadata with its deduplicated members and ordered messages."""

    id: int
    thread_type: ThreadType
    mod_id: int | None
    report_id: int | None
    show_in_mod_inbox: bool
    members: frozenset[int]
    messages: tuple[MessageSnapshot, ...]


def _pack_message(row: Any) -> MessageSnapshot | None:
    if row.message_id is None:
        return None
    return MessageSnapshot(
        id=row.message_id,
        author_id=row.message_author_id,
        thread_id=row.thread_id,
        body=row.message_body,
        created=row.message_created,
    )


THREAD_GROUPS: tuple[ChildGroup, ...] = (
    ChildGroup(name="members", value=lambda row: row.member_id),
    ChildGroup(name="messages", value=_pack_message, key=lambda message: message.id),
)


def thread_rows_statement(thread_ids: Iterable[int]) -> Select:
    """Return the join producing one row per (thread, member, message) combination.

    Both child tables are outer joined so threads without members or messages
    still yield their thread row, with ``NULL`` in the child columns.
    """

    return (
        select(
            Thread.id.label("thread_id"),
            Thread.thread_type,
            Thread.mod_id,
            Thread.report_id,
            Thread.show_in_mod_inbox,
            ThreadMember.user_id.label("member_id"),
            ThreadMessage.id.label("message_id"),
            ThreadMessage.author_id.label("message_author_id"),
            ThreadMessage.body.label("message_body"),
            ThreadMessage.created.label("message_created"),
        )
        .select_from(Thread)
        .outerjoin(ThreadMember, ThreadMember.thread_id == Thread.id)
        .outerjoin(ThreadMessage, ThreadMessage.thread_id == Thread.id)
        .where(Thread.id.in_(list(thread_ids)))
        .order_by(Thread.id)
    )


def build_thread_snapshots(rows: Iterable[Any]) -> dict[int, ThreadSnapshot]:
    """Fold raw join rows into one :class:`ThreadSnapshot` per thread id."""

    snapshots: dict[int, ThreadSnapshot] = {}
    for thread_id, folded in fold_rows(rows, lambda row: row.thread_id, THREAD_GROUPS).items():
        head = folded.head
        snapshots[thread_id] = ThreadSnapshot(
            id=thread_id,
            thread_type=ThreadType(head.thread_type),
            mod_id=head.mod_id,
            report_id=head.report_id,
            show_in_mod_inbox=bool(head.show_in_mod_inbox),
            members=frozenset(folded["members"]),
            messages=tuple(sorted(folded["messages"], key=lambda message: message.sort_key)),
        )
    return snapshots


def fetch_threads(db: Session, thread_ids: Iterable[int]) -> dict[int, ThreadSnapshot]:
    """Load snapshots for ``thread_ids`` in one round trip.

    Ids that do not exist are absent from the returned mapping. An empty
    input returns an empty mapping without touching the database.
    """

    unique_ids = sorted(set(thread_ids))
    if not unique_ids:
        return {}

    try:
        rows = db.execute(thread_rows_statement(unique_ids)).all()
    except SQLAlchemyError:
        logger.exception("Failed to load %d threads", len(unique_ids))
        raise

    snapshots = build_thread_snapshots(rows)
    logger.debug(
        "Loaded %d of %d requested threads from %d rows", len(snapshots), len(unique_ids), len(rows)
    )
    return snapshots


class ThreadService:
    """Session-bound facade over :func:`fetch_threads`."""

    def __init__(self, session: Session):
        self._session = session

    def get_many(self, thread_ids: Iterable[int]) -> dict[int, ThreadSnapshot]:
        return fetch_threads(self._session, thread_ids)

    def get(self, thread_id: int) -> ThreadSnapshot | None:
        return self.get_many((thread_id,)).get(thread_id)
