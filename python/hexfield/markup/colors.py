"""ColorResolver -- colour classes, built-in defaults and overlay resolution.

Proximity colours mirror the Hexfield Deck board badges exactly.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .types import Proximity, Token, TokenKind


class ColorClass(Enum):
    """One renderable style per static kind, one per due-date bucket.

    The value is the configuration key suffix.
    """

    PROJECT_TAG = "project-tag"
    PRIORITY_HIGH = "priority-high"
    PRIORITY_MED = "priority-medium"
    PRIORITY_LOW = "priority-low"
    TIME_ESTIMATE = "time-estimate"
    IN_PROGRESS = "in-progress"
    DUE_OVERDUE = "overdue"
    DUE_TODAY = "today"
    DUE_SOON = "soon"
    DUE_FUTURE = "future"

    @staticmethod
    def for_token(token: Token) -> ColorClass:
        if token.kind is TokenKind.DUE_DATE:
            return _BY_PROXIMITY[token.proximity]
        return _BY_KIND[token.kind]


_BY_KIND: dict[TokenKind, ColorClass] = {
    TokenKind.PROJECT_TAG: ColorClass.PROJECT_TAG,
    TokenKind.PRIORITY_HIGH: ColorClass.PRIORITY_HIGH,
    TokenKind.PRIORITY_MED: ColorClass.PRIORITY_MED,
    TokenKind.PRIORITY_LOW: ColorClass.PRIORITY_LOW,
    TokenKind.TIME_ESTIMATE: ColorClass.TIME_ESTIMATE,
    TokenKind.IN_PROGRESS: ColorClass.IN_PROGRESS,
}

_BY_PROXIMITY: dict[Proximity, ColorClass] = {
    Proximity.OVERDUE: ColorClass.DUE_OVERDUE,
    Proximity.TODAY: ColorClass.DUE_TODAY,
    Proximity.SOON: ColorClass.DUE_SOON,
    Proximity.FUTURE: ColorClass.DUE_FUTURE,
}

DEFAULT_COLORS: dict[ColorClass, str] = {
    ColorClass.PROJECT_TAG: "#4EC9B0",    # Teal
    ColorClass.PRIORITY_HIGH: "#F44747",  # Red
    ColorClass.PRIORITY_MED: "#CCA700",   # Yellow
    ColorClass.PRIORITY_LOW: "#3794FF",   # Blue
    ColorClass.TIME_ESTIMATE: "#9CDCFE",  # Light blue
    ColorClass.IN_PROGRESS: "#C586C0",    # Purple
    ColorClass.DUE_OVERDUE: "#F44747",    # Red
    ColorClass.DUE_TODAY: "#CE9178",      # Orange
    ColorClass.DUE_SOON: "#CCA700",       # Yellow
    ColorClass.DUE_FUTURE: "#858585",     # Gray
}

# Classes drawn as chips: a translucent border around coloured text.
CHIP_CLASSES = frozenset({ColorClass.PROJECT_TAG})
CHIP_BORDER_ALPHA = 0.4
CHIP_BORDER_RADIUS = "3px"

_HEX6_RE = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")


@dataclass(frozen=True)
class StyleDescriptor:
    """What the host needs to allocate a style handle."""

    color: str
    border_color: str | None = None
    border_radius: str | None = None


def tint(color: str, alpha: float) -> str:
    """Re-express a ``#RRGGBB`` colour as ``rgba(...)`` at ``alpha``.

    Any other form (named colours, short hex, ``var(...)``) is returned
    unchanged.
    """
    m = _HEX6_RE.fullmatch(color)
    if m is None:
        return color
    r, g, b = (int(h, 16) for h in m.groups())
    return f"rgba({r}, {g}, {b}, {alpha})"


class ColorResolver:
    """Resolves colour classes against an overlay of user overrides."""

    def __init__(self, overlay: Mapping[str, object] | None = None) -> None:
        self.overlay = dict(overlay or {})

    def resolve(self, cls: ColorClass) -> str:
        """Overlay value when it is a non-blank string, else the default."""
        value = self.overlay.get(cls.value)
        if isinstance(value, str) and value.strip():
            return value
        return DEFAULT_COLORS[cls]

    def border_color(self, cls: ColorClass) -> str | None:
        if cls not in CHIP_CLASSES:
            return None
        return tint(self.resolve(cls), CHIP_BORDER_ALPHA)

    def style(self, cls: ColorClass) -> StyleDescriptor:
        if cls in CHIP_CLASSES:
            return StyleDescriptor(
                color=self.resolve(cls),
                border_color=self.border_color(cls),
                border_radius=CHIP_BORDER_RADIUS,
            )
        return StyleDescriptor(color=self.resolve(cls))

    def resolve_all(self) -> dict[ColorClass, str]:
        return {cls: self.resolve(cls) for cls in ColorClass}
