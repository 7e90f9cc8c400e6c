"""Tests for hexfield.markup.types -- Token, TokenKind, Proximity, DocumentKind."""

import datetime as dt
import json

import pytest

from hexfield.markup.types import DocumentKind, Proximity, Token, TokenKind


def test_token_to_dict_static_kind():
    token = Token(kind=TokenKind.PROJECT_TAG, start=4, end=9, text="#work")
    d = token.to_dict()
    assert d == {"kind": "project-tag", "start": 4, "end": 9, "text": "#work"}
    # JSON-ready
    assert json.loads(json.dumps(d)) == d


def test_token_to_dict_due_date():
    token = Token(
        kind=TokenKind.DUE_DATE,
        start=0,
        end=12,
        text="[2025-01-01]",
        proximity=Proximity.OVERDUE,
        due=dt.date(2025, 1, 1),
    )
    d = token.to_dict()
    assert d["proximity"] == "overdue"
    assert d["due"] == "2025-01-01"


def test_token_rejects_empty_span():
    with pytest.raises(ValueError):
        Token(kind=TokenKind.PRIORITY_LOW, start=3, end=3, text="")


def test_due_date_requires_proximity():
    with pytest.raises(ValueError):
        Token(kind=TokenKind.DUE_DATE, start=0, end=12, text="[2025-01-01]")


def test_static_kind_rejects_proximity():
    with pytest.raises(ValueError):
        Token(kind=TokenKind.IN_PROGRESS, start=0, end=3, text="[/]", proximity=Proximity.SOON)


def test_token_is_frozen():
    token = Token(kind=TokenKind.PRIORITY_LOW, start=0, end=1, text="!")
    with pytest.raises(AttributeError):
        token.start = 2


def test_document_kind_values_are_language_ids():
    assert DocumentKind.GENERIC.value == "markdown"
    assert DocumentKind.SPECIALIZED.value == "hexfield-markdown"


def test_proximity_values():
    assert [p.value for p in Proximity] == ["overdue", "today", "soon", "future"]
