"""Contest period helpers.

A contest period is the calendar (month, year) pair derived from the current
date. Upload quotas, and optionally vote quotas, are scoped to it.
"""

from datetime import datetime
from typing import NamedTuple

MONTH_NAMES = [
    "Gennaio", "Febbraio", "Marzo", "Aprile", "Maggio", "Giugno",
    "Luglio", "Agosto", "Settembre", "Ottobre", "Novembre", "Dicembre",
]


class ContestPeriod(NamedTuple):
    """Calendar month of the contest."""

    month: int
    year: int

    @property
    def month_name(self) -> str:
        return get_month_name(self.month)


def current_period(now: datetime | None = None) -> ContestPeriod:
    """Return the contest period for ``now`` (UTC today by default)."""
    now = now or datetime.utcnow()
    return ContestPeriod(month=now.month, year=now.year)


def get_month_name(month: int) -> str:
    """Return the Italian name of a month (1-12)."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    return MONTH_NAMES[month - 1]
