"""Host boundary -- what hexfield consumes from the editor it runs inside.

The editor owns documents, views, styles, configuration and events. hexfield
only reads text, asks for styles, submits ranges and requests kind changes.
Anything the host cannot do because a document or view has gone away is
reported as a HostStateError subclass; callers treat that as a dropped event.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Protocol, Sequence

from .markup.colors import StyleDescriptor


class HostStateError(RuntimeError):
    """The host state changed underneath an event (closed document or view)."""


class DocumentClosedError(HostStateError):
    pass


class ViewClosedError(HostStateError):
    pass


class HostEvent(Enum):
    DOCUMENT_OPENED = "document-opened"
    DOCUMENT_CHANGED = "document-changed"
    ACTIVE_VIEW_CHANGED = "active-view-changed"
    CONFIGURATION_CHANGED = "configuration-changed"


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line and character offset within a document."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


class TextDocument(Protocol):
    uri: str
    file_name: str
    kind: str
    is_closed: bool

    def get_text(self) -> str: ...

    def position_at(self, offset: int) -> Position: ...


class TextView(Protocol):
    document: TextDocument
    is_closed: bool

    def set_decorations(self, handle: Any, ranges: Sequence[Range]) -> None:
        """Replace every range currently shown for ``handle`` on this view."""
        ...


class StyleHost(Protocol):
    def create_style(self, descriptor: StyleDescriptor) -> Any: ...

    def release_style(self, handle: Any) -> None: ...


class ConfigSource(Protocol):
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]: ...


class Subscription(Protocol):
    def dispose(self) -> None: ...


class EditorHost(StyleHost, ConfigSource, Protocol):
    """Everything the reactivity controller needs from the editor."""

    def set_document_kind(self, document: TextDocument, kind: str) -> None:
        """Change a document's kind; may raise HostStateError."""
        ...

    def visible_views(self) -> List[TextView]: ...

    def open_documents(self) -> Iterable[TextDocument]: ...

    def subscribe(self, event: HostEvent, callback: Callable[..., None]) -> Subscription: ...
