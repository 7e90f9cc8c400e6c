"""hexfield.markup -- token classification for hexfield-markdown text.

Pure functions and value types; nothing here talks to an editor host.
"""

from .colors import (
    CHIP_BORDER_ALPHA,
    DEFAULT_COLORS,
    ColorClass,
    ColorResolver,
    StyleDescriptor,
    tint,
)
from .frontmatter import HEAD_WINDOW, PLANNER_TYPE, is_hexfield_document, read_frontmatter
from .proximity import SOON_DAYS, local_today, parse_iso_date, proximity
from .tokens import scan_kind, scan_tokens
from .types import DocumentKind, Proximity, Token, TokenKind

__all__ = [
    "CHIP_BORDER_ALPHA",
    "DEFAULT_COLORS",
    "ColorClass",
    "ColorResolver",
    "StyleDescriptor",
    "tint",
    "HEAD_WINDOW",
    "PLANNER_TYPE",
    "is_hexfield_document",
    "read_frontmatter",
    "SOON_DAYS",
    "local_today",
    "parse_iso_date",
    "proximity",
    "scan_kind",
    "scan_tokens",
    "DocumentKind",
    "Proximity",
    "Token",
    "TokenKind",
]
