"""Pydantic schemas for API payloads."""

from .threads import ThreadMessageRead, ThreadRead, VersionFacetsRead

__all__ = [
    "ThreadMessageRead",
    "ThreadRead",
    "VersionFacetsRead",
]
