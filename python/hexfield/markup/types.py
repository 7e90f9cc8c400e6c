"""Token types -- enums and dataclasses for classified hexfield markup."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    PROJECT_TAG = "project-tag"
    PRIORITY_HIGH = "priority-high"
    PRIORITY_MED = "priority-medium"
    PRIORITY_LOW = "priority-low"
    TIME_ESTIMATE = "time-estimate"
    IN_PROGRESS = "in-progress"
    DUE_DATE = "due-date"


class Proximity(Enum):
    OVERDUE = "overdue"
    TODAY = "today"
    SOON = "soon"
    FUTURE = "future"


class DocumentKind(Enum):
    """Host language ids a markdown document can be classified as."""

    GENERIC = "markdown"
    SPECIALIZED = "hexfield-markdown"


@dataclass(frozen=True)
class Token:
    """A classified span of document text.

    ``start``/``end`` are a half-open range of character offsets.
    ``proximity`` and ``due`` are set only for DUE_DATE tokens.
    """

    kind: TokenKind
    start: int
    end: int
    text: str
    proximity: Proximity | None = None
    due: dt.date | None = None

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError(f"empty token span [{self.start}, {self.end})")
        if (self.kind is TokenKind.DUE_DATE) != (self.proximity is not None):
            raise ValueError("proximity is required for due dates and only for due dates")

    def to_dict(self) -> dict:
        """Serialize to a JSON-ready dict."""
        d: dict = {
            "kind": self.kind.value,
            "start": self.start,
            "end": self.end,
            "text": self.text,
        }
        if self.proximity is not None:
            d["proximity"] = self.proximity.value
        if self.due is not None:
            d["due"] = self.due.isoformat()
        return d
