"""Read-only HTTP endpoints for thread snapshots."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from modthreads.database import get_db
from modthreads.schemas import ThreadRead
from modthreads.services import ThreadService

router = APIRouter(prefix="/threads", tags=["threads"])


@router.get("", response_model=list[ThreadRead])
def list_threads(
    ids: list[int] | None = Query(default=None, description="Thread ids to load"),
    db: Session = Depends(get_db),
) -> list[ThreadRead]:
    """Return snapshots for every requested thread that exists.

    Unknown ids are left out; compare the returned ids with the request to
    find them.
    """

    snapshots = ThreadService(db).get_many(ids or ())
    return [ThreadRead.from_snapshot(snapshots[thread_id]) for thread_id in sorted(snapshots)]


@router.get("/{thread_id}", response_model=ThreadRead)
def get_thread(thread_id: int, db: Session = Depends(get_db)) -> ThreadRead:
    snapshot = ThreadService(db).get(thread_id)
    if snapshot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Thread not found")
    return ThreadRead.from_snapshot(snapshot)
