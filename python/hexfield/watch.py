"""Reactive decoration -- decide when the engine re-scans a document.

Activation and promotion decorate immediately. Edits to a planner document
are debounced: each change (re)starts a quiet-period timer for that document,
cancelling the previous one, so at most one re-scan is pending per document
and it always reads the latest text when it fires.
"""

import itertools
import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from .config import affects_colors
from .decorators import DecorationEngine
from .kinds import KindClassifier, Transition
from .protocol import EditorHost, HostEvent, HostStateError, TextDocument, TextView

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.5


class Timer(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer: ...


class ThreadingScheduler:
    """Runs deferred calls on daemon ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class PendingDecorate:
    """A scheduled re-scan of one document."""

    def __init__(self, uri: str, generation: int, timer: Timer):
        self.uri = uri
        self.generation = generation
        self.timer = timer


class WatchManager:
    """Routes host events to the kind classifier and the decoration engine.

    Every event handler and every fired timer runs under one lock, so events
    for a document are processed strictly in arrival order even though timers
    fire on their own threads.
    """

    def __init__(
        self,
        host: EditorHost,
        engine: DecorationEngine,
        classifier: Optional[KindClassifier] = None,
        delay: float = DEBOUNCE_SECONDS,
        scheduler: Optional[Scheduler] = None,
    ):
        self._host = host
        self._engine = engine
        self._classifier = classifier or KindClassifier(host)
        self._delay = delay
        self._scheduler = scheduler or ThreadingScheduler()
        self._pending: Dict[str, PendingDecorate] = {}
        self._generations = itertools.count(1)
        self._subscriptions: List = []
        self._disposed = False
        self._lock = threading.RLock()

    def attach(self) -> "WatchManager":
        """Subscribe to host events and process what is already open."""
        with self._lock:
            handlers = (
                (HostEvent.DOCUMENT_OPENED, self.on_open),
                (HostEvent.DOCUMENT_CHANGED, self.on_change),
                (HostEvent.ACTIVE_VIEW_CHANGED, self.on_activate),
                (HostEvent.CONFIGURATION_CHANGED, self.on_config_change),
            )
            for event, handler in handlers:
                self._subscriptions.append(self._host.subscribe(event, handler))

            for document in list(self._host.open_documents()):
                self.on_open(document)
            for view in self._host.visible_views():
                if self._classifier.is_specialized(view.document):
                    self._decorate_view(view)
        return self

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_open(self, document: TextDocument) -> None:
        with self._lock:
            if self._disposed:
                return
            if self._classifier.evaluate(document) is Transition.PROMOTED:
                self._decorate_document(document)

    def on_change(self, document: TextDocument) -> None:
        with self._lock:
            if self._disposed:
                return
            was_specialized = self._classifier.is_specialized(document)
            transition = self._classifier.evaluate(document)
            if transition is Transition.PROMOTED:
                self._decorate_document(document)
            elif transition is Transition.DEMOTED:
                self._cancel(document.uri)
                for view in self._views_of(document.uri):
                    self._clear_view(view)
            elif was_specialized:
                self._schedule(document)

    def on_activate(self, view: Optional[TextView]) -> None:
        if view is None:
            return
        with self._lock:
            if self._disposed or view.is_closed:
                return
            transition = self._classifier.evaluate(view.document)
            if transition is Transition.DEMOTED:
                self._clear_view(view)
            elif self._classifier.is_specialized(view.document):
                self._decorate_view(view)

    def on_config_change(self, keys: Optional[Iterable[str]] = None) -> None:
        if keys is not None:
            keys = list(keys)
        if not affects_colors(keys):
            return
        with self._lock:
            if self._disposed:
                return
            self._engine.refresh_colors()
            for view in self._host.visible_views():
                if self._classifier.is_specialized(view.document):
                    self._decorate_view(view)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def engine(self) -> DecorationEngine:
        return self._engine

    def pending(self, document: TextDocument) -> bool:
        with self._lock:
            return document.uri in self._pending

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def dispose(self) -> None:
        """Cancel pending re-scans, unsubscribe and dispose the engine."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            for uri in list(self._pending):
                self._cancel(uri)
            subscriptions, self._subscriptions = self._subscriptions, []
            for subscription in subscriptions:
                subscription.dispose()
            self._engine.dispose()

    # ------------------------------------------------------------------
    # Debounce
    # ------------------------------------------------------------------

    def _schedule(self, document: TextDocument) -> None:
        uri = document.uri
        self._cancel(uri)
        generation = next(self._generations)
        timer = self._scheduler.call_later(self._delay, lambda: self._fire(uri, generation))
        self._pending[uri] = PendingDecorate(uri, generation, timer)

    def _cancel(self, uri: str) -> None:
        pending = self._pending.pop(uri, None)
        if pending is not None:
            pending.timer.cancel()

    def _fire(self, uri: str, generation: int) -> None:
        with self._lock:
            pending = self._pending.get(uri)
            if pending is None or pending.generation != generation:
                # Superseded or cancelled after the timer had already started
                return
            del self._pending[uri]
            if self._disposed:
                return
            views = self._views_of(uri)
            if not views:
                logger.debug("dropping re-scan of %s: no visible view", uri)
                return
            for view in views:
                if self._classifier.is_specialized(view.document):
                    self._decorate_view(view)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _views_of(self, uri: str) -> List[TextView]:
        return [
            view for view in self._host.visible_views()
            if not view.is_closed and view.document.uri == uri
        ]

    def _decorate_document(self, document: TextDocument) -> None:
        self._cancel(document.uri)
        for view in self._views_of(document.uri):
            self._decorate_view(view)

    def _decorate_view(self, view: TextView) -> None:
        if view.is_closed:
            return
        try:
            self._engine.decorate(view)
        except HostStateError as exc:
            logger.debug("decorate of %s dropped: %s", view.document.uri, exc)

    def _clear_view(self, view: TextView) -> None:
        try:
            self._engine.clear(view)
        except HostStateError as exc:
            logger.debug("clear of %s dropped: %s", view.document.uri, exc)
