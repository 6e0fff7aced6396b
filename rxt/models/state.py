"""Extractor lifecycle state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ExtractorState(str, Enum):
    """Lifecycle states of an extractor.

    NOT_STARTED -> CONFIGURED -> READY -> EXHAUSTED -> CLOSED, with
    CONFIGURED -> FAILED when begin() fails. end() moves any state to CLOSED.
    """

    NOT_STARTED = "not_started"
    CONFIGURED = "configured"
    READY = "ready"
    EXHAUSTED = "exhausted"
    FAILED = "failed"
    CLOSED = "closed"


@dataclass
class CursorState:
    """Progress counters of an extraction run.

    A value of -1 means "not started" for progress and "unknown" for total.
    """

    progress: int = -1
    total: int = -1
    exhausted: bool = False
