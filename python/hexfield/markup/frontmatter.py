"""Frontmatter marker detection for hexfield planner documents.

A planner document is a ``.md`` file whose YAML frontmatter declares::

    ---
    type: hexfield-planner
    ---

Only the first ``HEAD_WINDOW`` characters are inspected; frontmatter always
sits at the top of the file.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

MARKDOWN_SUFFIX = ".md"
HEAD_WINDOW = 2048
PLANNER_TYPE = "hexfield-planner"

# Opening fence on the very first line, body, then the first closing fence line.
_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)

# ``type: hexfield-planner`` as a top-level line of the block body.
_PLANNER_TYPE_RE = re.compile(
    r"^type[ \t]*:[ \t]*" + re.escape(PLANNER_TYPE) + r"[ \t\r]*$",
    re.MULTILINE,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def is_hexfield_document(file_name: str, text: str) -> bool:
    """Return True when a markdown file declares ``type: hexfield-planner``."""
    if not file_name.endswith(MARKDOWN_SUFFIX):
        return False
    body = _extract_frontmatter(text)
    if body is None:
        return False
    return _PLANNER_TYPE_RE.search(body) is not None


def read_frontmatter(text: str) -> dict[str, Any] | None:
    """Parse the frontmatter block as YAML.

    Returns None if there is no block, it is not valid YAML, or it is not a
    mapping.
    """
    body = _extract_frontmatter(text)
    if body is None:
        return None
    try:
        data = yaml.safe_load(body)
    except yaml.YAMLError:
        return None
    if not isinstance(data, dict):
        return None
    return data


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract_frontmatter(text: str) -> str | None:
    """Return the frontmatter body from the head of ``text``, or None."""
    m = _FRONTMATTER_RE.match(text[:HEAD_WINDOW])
    if m is None:
        return None
    return m.group(1)
