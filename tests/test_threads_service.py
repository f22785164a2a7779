"""Tests for bulk thread snapshot loading against SQLite."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from modthreads.models import (
    Project,
    Report,
    Thread,
    ThreadMember,
    ThreadMessage,
    ThreadType,
    User,
)
from modthreads.services import ThreadService, fetch_threads
from modthreads.services.threads import build_thread_snapshots, thread_rows_statement

T1 = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture()
def seeded(db_session):
    """Create a handful of threads covering every member/message combination."""

    db_session.add_all(User(id=user_id, username=f"user{user_id}") for user_id in (5, 7, 9))
    db_session.add(Project(id=50, title="Sodium", slug="sodium"))
    db_session.add(Report(id=80, mod_id=50, reporter_id=9, body="Broken links"))
    db_session.flush()

    db_session.add_all(
        [
            Thread(id=10, thread_type=ThreadType.PROJECT, mod_id=50, show_in_mod_inbox=True),
            Thread(id=11, thread_type=ThreadType.REPORT, report_id=80),
            Thread(id=12, thread_type=ThreadType.DIRECT_MESSAGE),
            Thread(id=13, thread_type=ThreadType.PROJECT, mod_id=50),
            Thread(id=14, thread_type=ThreadType.REPORT, mod_id=50, report_id=80),
        ]
    )
    db_session.flush()

    db_session.add_all(
        [
            ThreadMember(thread_id=10, user_id=5),
            ThreadMember(thread_id=10, user_id=7),
            ThreadMember(thread_id=11, user_id=9),
        ]
    )
    db_session.add_all(
        [
            # inserted out of order to make sure ordering does not follow insertion
            ThreadMessage(id=101, thread_id=10, author_id=7, body="second", created=T1),
            ThreadMessage(id=100, thread_id=10, author_id=5, body="first", created=T1),
            ThreadMessage(
                id=99, thread_id=10, author_id=None, body="latest", created=T1 + timedelta(minutes=5)
            ),
            ThreadMessage(id=130, thread_id=13, author_id=5, body="no members here", created=T1),
        ]
    )
    db_session.commit()
    return db_session


def test_fan_out_is_collapsed_into_distinct_members_and_messages(seeded):
    snapshots = fetch_threads(seeded, {10})

    thread = snapshots[10]
    assert thread.members == frozenset({5, 7})
    assert [message.id for message in thread.messages] == [100, 101, 99]
    assert len({message.id for message in thread.messages}) == len(thread.messages)


def test_timestamp_ties_are_broken_by_message_id(seeded):
    messages = fetch_threads(seeded, [10])[10].messages

    tied = [message for message in messages if message.created == T1]
    assert [message.id for message in tied] == [100, 101]


def test_scalar_fields_are_carried_over(seeded):
    snapshots = fetch_threads(seeded, {10, 11, 14})

    assert snapshots[10].thread_type is ThreadType.PROJECT
    assert snapshots[10].mod_id == 50
    assert snapshots[10].report_id is None
    assert snapshots[10].show_in_mod_inbox is True

    assert snapshots[11].thread_type is ThreadType.REPORT
    assert snapshots[11].mod_id is None
    assert snapshots[11].report_id == 80
    assert snapshots[11].show_in_mod_inbox is False

    assert (snapshots[14].mod_id, snapshots[14].report_id) == (50, 80)


def test_message_fields_are_packed(seeded):
    first = fetch_threads(seeded, {10})[10].messages[0]

    assert first.id == 100
    assert first.author_id == 5
    assert first.thread_id == 10
    assert first.body == "first"
    assert first.created == T1


def test_threads_without_members_or_messages_are_returned(seeded):
    snapshots = fetch_threads(seeded, {11, 12, 13})

    assert snapshots[11].members == frozenset({9})
    assert snapshots[11].messages == ()

    assert snapshots[12].members == frozenset()
    assert snapshots[12].messages == ()

    assert snapshots[13].members == frozenset()
    assert [message.id for message in snapshots[13].messages] == [130]


def test_missing_ids_are_absent_not_errors(seeded):
    snapshots = fetch_threads(seeded, {10, 404, 500})

    assert set(snapshots) == {10}


def test_duplicate_ids_are_queried_once(seeded, statements):
    statements.clear()

    snapshots = fetch_threads(seeded, [10, 10, 12, 10])

    assert set(snapshots) == {10, 12}
    assert len(statements) == 1


def test_one_statement_per_batch_regardless_of_size(seeded, statements):
    statements.clear()

    fetch_threads(seeded, range(1, 200))

    assert len(statements) == 1


def test_empty_input_skips_the_database(seeded, statements):
    statements.clear()

    assert fetch_threads(seeded, []) == {}
    assert fetch_threads(seeded, set()) == {}
    assert statements == []


def test_fetch_is_idempotent(seeded):
    assert fetch_threads(seeded, {10, 11, 12}) == fetch_threads(seeded, {10, 11, 12})


def test_batch_equals_union_of_single_fetches(seeded):
    combined = fetch_threads(seeded, {10, 13})

    assert combined == {**fetch_threads(seeded, {10}), **fetch_threads(seeded, {13})}


def test_service_get_returns_snapshot_or_none(seeded):
    service = ThreadService(seeded)

    assert service.get(12).id == 12
    assert service.get(404) is None
    assert set(service.get_many({11, 12})) == {11, 12}


def test_builder_accepts_raw_statement_rows(seeded):
    rows = seeded.execute(thread_rows_statement([10])).all()

    # 2 members x 3 messages
    assert len(rows) == 6
    assert build_thread_snapshots(rows)[10].members == frozenset({5, 7})


def test_store_failures_propagate(seeded, test_engine):
    ThreadMember.__table__.drop(test_engine)

    with pytest.raises(OperationalError):
        fetch_threads(seeded, {10})
