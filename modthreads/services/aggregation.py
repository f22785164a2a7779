"""Fold flat join results back into one record per parent row.

Relational joins repeat the parent columns once per combination of child
rows. With two independent child tables (members and messages, say) a
parent with M members and N messages comes back as M x N rows. The helpers
here collapse such a result into one :class:`FoldedRow` per parent key,
keeping every child group deduplicated on its own identity and skipping the
``NULL`` values produced by outer joins that matched nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Hashable, Iterable, Mapping, Sequence, TypeVar

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")
KeyT = TypeVar("KeyT", bound=Hashable)

_MISSING = object()


def _identity(value: Any) -> Hashable:
    return value


@dataclass(frozen=True)
class ChildGroup(Generic[RowT]):
    """Describe one child collection carried by the joined rows.

    ``value`` extracts the child value from a row and may return ``None`` when
    the outer join found nothing for that row. ``key`` gives the identity the
    group deduplicates on; by default the value itself.
    """

    name: str
    value: Callable[[RowT], Any]
    key: Callable[[Any], Hashable] = _identity


@dataclass(frozen=True)
class FoldedRow(Generic[KeyT, RowT]):
    """All rows sharing one parent key, collapsed.

    ``head`` is the first row seen for the parent and carries its scalar
    columns. ``children`` maps every group name to a tuple of distinct,
    non-null values in first-seen order.
    """

    key: KeyT
    head: RowT
    children: Mapping[str, tuple[Any, ...]]

    def __getitem__(self, group: str) -> tuple[Any, ...]:
        return self.children[group]


@dataclass
class _Accumulator(Generic[KeyT, RowT]):
    key: KeyT
    head: RowT
    seen: dict[str, dict[Hashable, Any]] = field(default_factory=dict)

    def add(self, row: RowT, groups: Sequence[ChildGroup[RowT]]) -> None:
        for group in groups:
            value = group.value(row)
            if value is None:
                continue
            bucket = self.seen.setdefault(group.name, {})
            identity = group.key(value)
            existing = bucket.get(identity, _MISSING)
            if existing is _MISSING:
                bucket[identity] = value
            elif existing != value:
                logger.warning(
                    "Conflicting %s values for identity %r under parent %r; keeping the first",
                    group.name,
                    identity,
                    self.key,
                )

    def finalize(self, groups: Sequence[ChildGroup[RowT]]) -> FoldedRow[KeyT, RowT]:
        children = {
            group.name: tuple(self.seen.get(group.name, {}).values()) for group in groups
        }
        return FoldedRow(key=self.key, head=self.head, children=children)


def fold_rows(
    rows: Iterable[RowT],
    parent_key: Callable[[RowT], KeyT],
    groups: Sequence[ChildGroup[RowT]],
) -> dict[KeyT, FoldedRow[KeyT, RowT]]:
    """Group ``rows`` by ``parent_key`` and deduplicate every child group.

    Every distinct parent key in ``rows`` appears exactly once in the result,
    with a (possibly empty) tuple for each group in ``groups``. Parents come
    out in first-seen order.
    """

    names = [group.name for group in groups]
    if len(set(names)) != len(names):
        raise ValueError(f"Child group names must be unique: {names}")

    accumulators: dict[KeyT, _Accumulator[KeyT, RowT]] = {}
    row_count = 0
    for row in rows:
        row_count += 1
        key = parent_key(row)
        accumulator = accumulators.get(key)
        if accumulator is None:
            accumulator = accumulators[key] = _Accumulator(key=key, head=row)
        accumulator.add(row, groups)

    logger.debug("Folded %d rows into %d parents", row_count, len(accumulators))
    return {key: accumulator.finalize(groups) for key, accumulator in accumulators.items()}
