"""YAML/dict configuration for hexfield colour overrides.

Colour overrides live under the ``hexfield.colors`` namespace, one key per
colour class. Example YAML:

    hexfield:
      colors:
        overdue: "#FF0000"
        project-tag: "#00A0A0"

A flat ``colors:`` mapping (without the ``hexfield:`` wrapper) is accepted
too. Missing, blank or non-string values simply leave the built-in default in
place.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .markup.colors import ColorClass
from .protocol import ConfigSource

logger = logging.getLogger(__name__)

CONFIG_SECTION = "hexfield"
COLOR_NAMESPACE = f"{CONFIG_SECTION}.colors"

_KNOWN_COLOR_KEYS = frozenset(cls.value for cls in ColorClass)


def color_key(cls: ColorClass) -> str:
    """Full configuration key for a colour class, e.g. ``hexfield.colors.overdue``."""
    return f"{COLOR_NAMESPACE}.{cls.value}"


def affects_colors(keys) -> bool:
    """True when a configuration change touches the colour namespace.

    ``keys=None`` means the host did not say what changed.
    """
    if keys is None:
        return True
    for key in keys:
        if key in (CONFIG_SECTION, COLOR_NAMESPACE) or key.startswith(COLOR_NAMESPACE + "."):
            return True
    return False


def read_overlay(source: ConfigSource) -> dict[str, str]:
    """Read the current colour overrides from a configuration source.

    Always reads fresh; callers must not keep the result across epochs.
    """
    overlay: dict[str, str] = {}
    for cls in ColorClass:
        value = source.get(color_key(cls), "")
        if isinstance(value, str) and value.strip():
            overlay[cls.value] = value
    return overlay


def load_config(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    if not isinstance(data, dict):
        logger.debug("ignoring non-mapping config document: %r", data)
        return {"colors": {}}
    # Support nested under "hexfield" key or flat
    if CONFIG_SECTION in data:
        data = data[CONFIG_SECTION] or {}
        if not isinstance(data, dict):
            logger.debug("ignoring non-mapping %s section: %r", CONFIG_SECTION, data)
            return {"colors": {}}

    colors = data.get("colors") or {}
    if not isinstance(colors, dict):
        logger.debug("ignoring non-mapping colors section: %r", colors)
        colors = {}

    normalized: dict[str, str] = {}
    for key, value in colors.items():
        if key not in _KNOWN_COLOR_KEYS:
            logger.debug("ignoring unknown colour key %r", key)
            continue
        if not isinstance(value, str) or not value.strip():
            logger.debug("ignoring unusable value for %r: %r", key, value)
            continue
        normalized[key] = value
    return {"colors": normalized}


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(path, encoding="utf-8") as f:
        return load_config(yaml.safe_load(f) or {})


class MappingConfig:
    """A ConfigSource over a nested dict, addressed with dotted keys."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    @classmethod
    def from_yaml(cls, path: str | Path) -> MappingConfig:
        return cls({CONFIG_SECTION: load_from_yaml(path)})

    def get(self, key: str, default: str | None = None) -> str | None:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        if not isinstance(node, str):
            return default
        return node

    def set(self, key: str, value: str | None) -> None:
        """Set (or with None, remove) a dotted key."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        if value is None:
            node.pop(parts[-1], None)
        else:
            node[parts[-1]] = value
