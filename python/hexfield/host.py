"""In-memory editor host -- documents, views, styles and events without an editor.

Implements every protocol in ``hexfield.protocol``. Used by the CLI to
decorate files on disk, and handy for driving the controller in tests:

    host = MemoryHost()
    manager = hexfield.activate(host)
    doc = host.open_document("plan.md", "---\\ntype: hexfield-planner\\n---\\n")
    view = host.show(doc)
    host.edit(doc, doc.get_text() + "- [ ] ship it !!! [2025-01-01]\\n")
"""

import bisect
import itertools
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .config import MappingConfig
from .markup.colors import StyleDescriptor
from .markup.types import DocumentKind
from .protocol import DocumentClosedError, HostEvent, Position, Range, ViewClosedError


class LineIndex:
    """Maps character offsets to zero-based line/character positions."""

    def __init__(self, text: str):
        self._length = len(text)
        self._starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._starts.append(i + 1)

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, self._length))
        line = bisect.bisect_right(self._starts, offset) - 1
        return Position(line, offset - self._starts[line])


class MemoryDocument:
    """A text document held in memory."""

    def __init__(self, uri: str, text: str = "", kind: str = DocumentKind.GENERIC.value,
                 file_name: Optional[str] = None):
        self.uri = uri
        self.file_name = file_name or uri
        self.kind = kind
        self.is_closed = False
        self._text = text
        self._index: Optional[LineIndex] = None

    def get_text(self) -> str:
        if self.is_closed:
            raise DocumentClosedError(f"document closed: {self.uri}")
        return self._text

    def position_at(self, offset: int) -> Position:
        if self._index is None:
            self._index = LineIndex(self._text)
        return self._index.position_at(offset)

    def replace(self, text: str) -> None:
        self._text = text
        self._index = None


@dataclass(eq=False)
class StyleHandle:
    """A live style allocation; identity-hashed."""

    id: int
    descriptor: StyleDescriptor
    released: bool = False


class MemoryView:
    """A view showing one document, holding the ranges drawn per style."""

    def __init__(self, document: MemoryDocument):
        self.document = document
        self.is_closed = False
        self.decorations: Dict[StyleHandle, List[Range]] = {}

    def set_decorations(self, handle: Any, ranges: Sequence[Range]) -> None:
        if self.is_closed:
            raise ViewClosedError(f"view closed: {self.document.uri}")
        if getattr(handle, "released", False):
            raise ValueError(f"style handle {handle.id} was released")
        self.decorations[handle] = list(ranges)

    def ranges(self, handle: StyleHandle) -> List[Range]:
        return list(self.decorations.get(handle, []))


class _Subscription:
    def __init__(self, listeners: List[Callable], callback: Callable):
        self._listeners = listeners
        self._callback = callback

    def dispose(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class MemoryHost:
    """An editor host kept entirely in memory."""

    def __init__(self, config: Optional[MappingConfig] = None):
        self.config = config or MappingConfig()
        self.documents: Dict[str, MemoryDocument] = {}
        self.views: List[MemoryView] = []
        self.active_view: Optional[MemoryView] = None
        self.styles: Dict[int, StyleHandle] = {}
        self.kind_changes: List[Tuple[str, str]] = []
        self._ids = itertools.count(1)
        self._listeners: Dict[HostEvent, List[Callable]] = {event: [] for event in HostEvent}

    # ------------------------------------------------------------------
    # Host protocol
    # ------------------------------------------------------------------

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.config.get(key, default)

    def create_style(self, descriptor: StyleDescriptor) -> StyleHandle:
        handle = StyleHandle(next(self._ids), descriptor)
        self.styles[handle.id] = handle
        return handle

    def release_style(self, handle: StyleHandle) -> None:
        self.styles.pop(handle.id, None)
        handle.released = True
        for view in self.views:
            view.decorations.pop(handle, None)

    def set_document_kind(self, document: MemoryDocument, kind: str) -> None:
        if document.is_closed or self.documents.get(document.uri) is not document:
            raise DocumentClosedError(f"document closed: {document.uri}")
        document.kind = kind
        self.kind_changes.append((document.uri, kind))

    def visible_views(self) -> List[MemoryView]:
        return [view for view in self.views if not view.is_closed]

    def open_documents(self) -> List[MemoryDocument]:
        return [doc for doc in self.documents.values() if not doc.is_closed]

    def subscribe(self, event: HostEvent, callback: Callable[..., None]) -> _Subscription:
        listeners = self._listeners[event]
        listeners.append(callback)
        return _Subscription(listeners, callback)

    # ------------------------------------------------------------------
    # Driving the host
    # ------------------------------------------------------------------

    def open_document(self, uri: str, text: str = "",
                      kind: str = DocumentKind.GENERIC.value) -> MemoryDocument:
        document = MemoryDocument(uri, text, kind)
        self.documents[uri] = document
        self._emit(HostEvent.DOCUMENT_OPENED, document)
        return document

    def edit(self, document: MemoryDocument, text: str) -> None:
        document.replace(text)
        self._emit(HostEvent.DOCUMENT_CHANGED, document)

    def show(self, document: MemoryDocument) -> MemoryView:
        view = MemoryView(document)
        self.views.append(view)
        self.active_view = view
        self._emit(HostEvent.ACTIVE_VIEW_CHANGED, view)
        return view

    def close_view(self, view: MemoryView) -> None:
        view.is_closed = True
        if view in self.views:
            self.views.remove(view)
        if self.active_view is view:
            self.active_view = None
            self._emit(HostEvent.ACTIVE_VIEW_CHANGED, None)

    def close_document(self, document: MemoryDocument) -> None:
        for view in [v for v in self.views if v.document is document]:
            self.close_view(view)
        document.is_closed = True
        self.documents.pop(document.uri, None)

    def update_config(self, key: str, value: Optional[str]) -> None:
        self.config.set(key, value)
        self._emit(HostEvent.CONFIGURATION_CHANGED, [key])

    def _emit(self, event: HostEvent, *args: Any) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)
