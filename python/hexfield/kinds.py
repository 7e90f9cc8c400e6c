"""Document kind state machine -- promote or demote planner documents.

A ``markdown`` document gaining ``type: hexfield-planner`` frontmatter is
promoted to ``hexfield-markdown``; a ``hexfield-markdown`` document losing it
is demoted back. Documents of any other kind are left alone.
"""

import logging
from enum import Enum
from typing import Optional

from .markup.frontmatter import is_hexfield_document
from .markup.types import DocumentKind
from .protocol import EditorHost, HostStateError, TextDocument

logger = logging.getLogger(__name__)


class Transition(Enum):
    PROMOTED = "promoted"
    DEMOTED = "demoted"


class KindClassifier:
    """Applies promote/demote transitions through the host."""

    def __init__(self, host: EditorHost):
        self._host = host

    @staticmethod
    def classify(document: TextDocument) -> DocumentKind:
        """Derive the kind a document's current content calls for."""
        if is_hexfield_document(document.file_name, document.get_text()):
            return DocumentKind.SPECIALIZED
        return DocumentKind.GENERIC

    @staticmethod
    def is_specialized(document: TextDocument) -> bool:
        return document.kind == DocumentKind.SPECIALIZED.value

    def evaluate(self, document: TextDocument) -> Optional[Transition]:
        """Re-check a document and apply a transition if one is due.

        Returns the transition applied, or None when the document is already
        in the right state, is not a markdown kind, or went away meanwhile.
        """
        if document.is_closed:
            return None
        current = document.kind
        if current not in (DocumentKind.GENERIC.value, DocumentKind.SPECIALIZED.value):
            return None

        try:
            target = self.classify(document)
        except HostStateError as exc:
            logger.debug("classification of %s dropped: %s", document.uri, exc)
            return None
        if target.value == current:
            return None

        try:
            self._host.set_document_kind(document, target.value)
        except HostStateError as exc:
            # Document may have been closed or is not promotable
            logger.debug("kind change for %s dropped: %s", document.uri, exc)
            return None

        transition = Transition.PROMOTED if target is DocumentKind.SPECIALIZED else Transition.DEMOTED
        logger.info("%s %s to %s", transition.value, document.uri, target.value)
        return transition
