"""Token extraction -- regex scanning of hexfield markup.

Every kind is scanned independently over the whole text. Each scan walks
its own ``finditer`` cursor, so the compiled patterns hold no state between
calls and a scan can be repeated or interleaved freely.

Priority markers match on exact run length: ``!``, ``!!`` and ``!!!`` are
low, medium and high; a run of four or more is not a priority at all.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Iterable

from .proximity import local_today, parse_iso_date, proximity
from .types import Token, TokenKind

# Scan order doubles as the tie-break order for tokens sharing a start offset.
_PATTERNS: list[tuple[TokenKind, re.Pattern]] = [
    (TokenKind.PROJECT_TAG, re.compile(r"(?<!\S)#[A-Za-z][A-Za-z0-9_\-]*")),
    (TokenKind.PRIORITY_HIGH, re.compile(r"(?<!!)!!!(?!!)")),
    (TokenKind.PRIORITY_MED, re.compile(r"(?<!!)!!(?!!)")),
    (TokenKind.PRIORITY_LOW, re.compile(r"(?<!!)!(?!!)")),
    (TokenKind.TIME_ESTIMATE, re.compile(r"\best:[0-9]+(?:\.[0-9]+)?[hm]\b")),
    (TokenKind.IN_PROGRESS, re.compile(r"\[/\]")),
    # Group 1 is the inner date string.
    (TokenKind.DUE_DATE, re.compile(r"\[([0-9]{4}-[0-9]{2}-[0-9]{2})\]")),
]

_KIND_ORDER = {kind: idx for idx, (kind, _) in enumerate(_PATTERNS)}
_PATTERN_BY_KIND = dict(_PATTERNS)


def scan_kind(
    text: str,
    kind: TokenKind,
    *,
    today: dt.date | None = None,
) -> list[Token]:
    """Return every token of one kind, left to right."""
    if today is None and kind is TokenKind.DUE_DATE:
        today = local_today()
    return list(_iter_kind(text, kind, today))


def scan_tokens(
    text: str,
    *,
    today: dt.date | None = None,
    kinds: Iterable[TokenKind] | None = None,
) -> list[Token]:
    """Scan text for all token kinds (or just ``kinds``).

    ``today`` is fixed once for the whole scan so every due date in the
    result is classified against the same day. Results are ordered by start
    offset, ties broken by kind.
    """
    if today is None:
        today = local_today()
    selected = list(_PATTERN_BY_KIND) if kinds is None else list(kinds)

    tokens: list[Token] = []
    for kind in selected:
        tokens.extend(_iter_kind(text, kind, today))
    tokens.sort(key=lambda t: (t.start, _KIND_ORDER[t.kind]))
    return tokens


def _iter_kind(text: str, kind: TokenKind, today: dt.date | None):
    pattern = _PATTERN_BY_KIND[kind]
    for m in pattern.finditer(text):
        if kind is TokenKind.DUE_DATE:
            due = parse_iso_date(m.group(1))
            if due is None:
                # [2025-02-30] looks like a date but is not one
                continue
            yield Token(
                kind=kind,
                start=m.start(),
                end=m.end(),
                text=m.group(),
                proximity=proximity(due, today),
                due=due,
            )
        else:
            yield Token(kind=kind, start=m.start(), end=m.end(), text=m.group())
