from __future__ import annotations

from enum import Enum


class ThreadType(str, Enum):
    """Kinds of conversation a thread can hold."""

    PROJECT = "project"
    REPORT = "report"
    DIRECT_MESSAGE = "direct_message"
