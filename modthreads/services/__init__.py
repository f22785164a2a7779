"""Application service helpers."""

from .aggregation import ChildGroup, FoldedRow, fold_rows
from .facets import FacetSet, VersionFacetService, fetch_version_facets
from .threads import MessageSnapshot, ThreadService, ThreadSnapshot, fetch_threads

__all__ = [
    "ChildGroup",
    "FoldedRow",
    "fold_rows",
    "FacetSet",
    "VersionFacetService",
    "fetch_version_facets",
    "MessageSnapshot",
    "ThreadService",
    "ThreadSnapshot",
    "fetch_threads",
]
