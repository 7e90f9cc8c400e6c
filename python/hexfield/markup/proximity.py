"""Due-date proximity relative to the current calendar day.

    Overdue  (due < today)
    Today    (due == today)
    Soon     (1-3 days ahead)
    Future   (more than 3 days ahead)
"""

from __future__ import annotations

import datetime as dt
import re

from .types import Proximity

# Upper bound (inclusive) of the Soon bucket, in days.
SOON_DAYS = 3

_ISO_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


def local_today() -> dt.date:
    """Return today's local calendar date.

    Evaluated on every call; never cache the result across scans.
    """
    return dt.date.today()


def parse_iso_date(text: str) -> dt.date | None:
    """Parse a strict ``YYYY-MM-DD`` string.

    Returns None for anything that is not a real calendar date.
    """
    m = _ISO_DATE_RE.fullmatch(text)
    if m is None:
        return None
    year, month, day = (int(g) for g in m.groups())
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


def proximity(due: dt.date, today: dt.date) -> Proximity:
    """Classify ``due`` against ``today`` by whole calendar days."""
    diff_days = (due - today).days
    if diff_days < 0:
        return Proximity.OVERDUE
    if diff_days == 0:
        return Proximity.TODAY
    if diff_days <= SOON_DAYS:
        return Proximity.SOON
    return Proximity.FUTURE
