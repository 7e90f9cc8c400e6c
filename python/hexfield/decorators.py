"""Decoration engine -- colour the tokens of a view's document.

The engine owns one style handle per colour class. A set of handles lives for
one configuration *epoch*: it is allocated when the engine is built or when
colours are refreshed, and released before the next set is allocated or when
the engine is disposed.

Usage:
    engine = DecorationEngine(host, host)
    engine.decorate(view)      # scan and submit every colour class
    engine.refresh_colors()    # new epoch after a config change
    engine.decorate(view)      # callers re-decorate visible views
    engine.dispose()
"""

import datetime as dt
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .config import read_overlay
from .markup.colors import ColorClass, ColorResolver
from .markup.proximity import local_today
from .markup.tokens import scan_tokens
from .protocol import ConfigSource, Range, StyleHost, TextView

logger = logging.getLogger(__name__)


class DecorationEngine:
    """Groups a document's tokens by colour class and submits them to a view.

    Handle allocation and release never interleave with a decorate call:
    both run under the engine lock.
    """

    def __init__(
        self,
        styles: StyleHost,
        config: ConfigSource,
        clock: Callable[[], dt.date] = local_today,
    ):
        self._styles = styles
        self._config = config
        self._clock = clock
        self._lock = threading.RLock()
        self._handles: Dict[ColorClass, Any] = {}
        self._resolver: Optional[ColorResolver] = None
        self._epoch = 0
        self._epochs_opened = 0
        self._disposed = False
        self._open_epoch()

    @property
    def epoch(self) -> int:
        """Current epoch number; 0 once disposed."""
        return self._epoch

    @property
    def resolver(self) -> Optional[ColorResolver]:
        return self._resolver

    @property
    def disposed(self) -> bool:
        return self._disposed

    def handle(self, cls: ColorClass) -> Any:
        """The current epoch's style handle for a colour class."""
        with self._lock:
            return self._handles.get(cls)

    def decorate(self, view: TextView) -> Dict[ColorClass, List[Range]]:
        """Scan the view's document and replace all of its decorations.

        Every colour class is submitted, with an empty list when nothing in
        the document falls into it, so stale ranges are always cleared.
        Returns the submitted ranges.
        """
        with self._lock:
            if self._disposed or not self._handles:
                return {}
            document = view.document
            text = document.get_text()
            today = self._clock()

            groups: Dict[ColorClass, List[Range]] = {cls: [] for cls in ColorClass}
            for token in scan_tokens(text, today=today):
                groups[ColorClass.for_token(token)].append(Range(
                    document.position_at(token.start),
                    document.position_at(token.end),
                ))

            for cls, ranges in groups.items():
                view.set_decorations(self._handles[cls], ranges)
            return groups

    def clear(self, view: TextView) -> None:
        """Remove every hexfield decoration from a view."""
        with self._lock:
            for handle in self._handles.values():
                view.set_decorations(handle, [])

    def refresh_colors(self) -> None:
        """Start a new epoch with freshly read colours.

        Does not re-scan; callers re-decorate the views they care about.
        """
        with self._lock:
            if self._disposed:
                return
            self._release_handles()
            self._open_epoch()

    def dispose(self) -> None:
        """Release all style handles. Safe to call more than once."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._release_handles()
            self._resolver = None
            logger.debug("decoration engine disposed")

    # ------------------------------------------------------------------
    # Epoch lifecycle
    # ------------------------------------------------------------------

    def _open_epoch(self) -> None:
        resolver = ColorResolver(read_overlay(self._config))
        handles: Dict[ColorClass, Any] = {}
        try:
            for cls in ColorClass:
                handles[cls] = self._styles.create_style(resolver.style(cls))
        except Exception:
            # All or nothing: an epoch never holds a partial set of handles
            for handle in handles.values():
                self._styles.release_style(handle)
            raise
        self._handles = handles
        self._resolver = resolver
        self._epochs_opened += 1
        self._epoch = self._epochs_opened
        logger.info("colour epoch %d opened", self._epoch)

    def _release_handles(self) -> None:
        handles = self._handles
        self._handles = {}
        self._epoch = 0
        for handle in handles.values():
            self._styles.release_style(handle)
