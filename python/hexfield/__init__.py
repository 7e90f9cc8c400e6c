"""hexfield -- token colouring for hexfield-markdown planner documents."""

import datetime as dt
from typing import Callable, Optional

from .config import COLOR_NAMESPACE, MappingConfig, load_config, load_from_yaml, read_overlay
from .decorators import DecorationEngine
from .host import MemoryDocument, MemoryHost, MemoryView
from .kinds import KindClassifier, Transition
from .markup import ColorClass, ColorResolver, DocumentKind, Proximity, Token, TokenKind, scan_tokens
from .markup.proximity import local_today
from .protocol import DocumentClosedError, EditorHost, HostEvent, HostStateError, Position, Range, ViewClosedError
from .watch import DEBOUNCE_SECONDS, Scheduler, ThreadingScheduler, WatchManager


def activate(
    host: EditorHost,
    delay: float = DEBOUNCE_SECONDS,
    scheduler: Optional[Scheduler] = None,
    clock: Callable[[], dt.date] = local_today,
) -> WatchManager:
    """Wire an engine, classifier and controller to a host and attach them.

    The returned manager owns everything; call ``dispose()`` on it to tear
    down.
    """
    engine = DecorationEngine(host, host, clock=clock)
    manager = WatchManager(host, engine, KindClassifier(host), delay=delay, scheduler=scheduler)
    return manager.attach()


__all__ = [
    'activate',
    'DecorationEngine', 'KindClassifier', 'Transition', 'WatchManager',
    'Scheduler', 'ThreadingScheduler', 'DEBOUNCE_SECONDS',
    'MemoryHost', 'MemoryDocument', 'MemoryView',
    'COLOR_NAMESPACE', 'MappingConfig', 'load_config', 'load_from_yaml', 'read_overlay',
    'ColorClass', 'ColorResolver', 'DocumentKind', 'Proximity', 'Token', 'TokenKind', 'scan_tokens',
    'EditorHost', 'HostEvent', 'HostStateError', 'DocumentClosedError', 'ViewClosedError',
    'Position', 'Range',
]
__version__ = "0.1.0"
