"""Tests for the KindClassifier -- promote/demote state machine."""

from unittest.mock import MagicMock

import pytest

from hexfield.host import MemoryDocument
from hexfield.kinds import KindClassifier, Transition
from hexfield.markup.types import DocumentKind
from hexfield.protocol import DocumentClosedError

PLANNER = "---\ntype: hexfield-planner\n---\n- [ ] task !!\n"
PLAIN = "---\ntitle: Notes\n---\n- [ ] task !!\n"


def test_promotes_planner_document(host):
    doc = host.open_document("plan.md", PLANNER)
    classifier = KindClassifier(host)
    assert classifier.evaluate(doc) is Transition.PROMOTED
    assert doc.kind == "hexfield-markdown"
    assert host.kind_changes == [("plan.md", "hexfield-markdown")]


def test_transitions_are_idempotent(host):
    doc = host.open_document("plan.md", PLANNER)
    classifier = KindClassifier(host)
    classifier.evaluate(doc)
    assert classifier.evaluate(doc) is None
    assert len(host.kind_changes) == 1


def test_demotes_when_marker_removed(host):
    doc = host.open_document("plan.md", PLANNER)
    classifier = KindClassifier(host)
    classifier.evaluate(doc)

    host.edit(doc, PLAIN)
    assert classifier.evaluate(doc) is Transition.DEMOTED
    assert doc.kind == "markdown"
    assert classifier.evaluate(doc) is None


def test_plain_markdown_stays_generic(host):
    doc = host.open_document("notes.md", PLAIN)
    assert KindClassifier(host).evaluate(doc) is None
    assert doc.kind == "markdown"
    assert host.kind_changes == []


def test_other_kinds_left_alone(host):
    doc = host.open_document("plan.md", PLANNER, kind="plaintext")
    assert KindClassifier(host).evaluate(doc) is None
    assert doc.kind == "plaintext"


def test_non_md_file_not_promoted(host):
    doc = host.open_document("plan.txt", PLANNER)
    assert KindClassifier(host).evaluate(doc) is None


def test_classify_does_not_touch_host():
    host = MagicMock()
    doc = MemoryDocument("plan.md", PLANNER)
    assert KindClassifier(host).classify(doc) is DocumentKind.SPECIALIZED
    assert KindClassifier.classify(MemoryDocument("plan.md", PLAIN)) is DocumentKind.GENERIC
    host.set_document_kind.assert_not_called()


def test_is_specialized():
    assert KindClassifier.is_specialized(MemoryDocument("a.md", kind="hexfield-markdown"))
    assert not KindClassifier.is_specialized(MemoryDocument("a.md"))


class TestHostRaces:
    def test_closed_document_is_noop(self, host):
        doc = host.open_document("plan.md", PLANNER)
        host.close_document(doc)
        assert KindClassifier(host).evaluate(doc) is None
        assert doc.kind == "markdown"

    def test_kind_change_failure_is_swallowed(self):
        host = MagicMock()
        host.set_document_kind.side_effect = DocumentClosedError("gone")
        doc = MemoryDocument("plan.md", PLANNER)
        assert KindClassifier(host).evaluate(doc) is None
        assert doc.kind == "markdown"

    def test_document_dropped_from_host_between_event_and_handler(self, host):
        doc = host.open_document("plan.md", PLANNER)
        host.documents.pop("plan.md")
        assert KindClassifier(host).evaluate(doc) is None

    def test_unexpected_errors_propagate(self):
        host = MagicMock()
        host.set_document_kind.side_effect = ValueError("bad kind")
        with pytest.raises(ValueError):
            KindClassifier(host).evaluate(MemoryDocument("plan.md", PLANNER))
