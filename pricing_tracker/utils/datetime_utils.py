"""Datetime utilities for timestamps and report headers.

Usage:
    from pricing_tracker.utils.datetime_utils import utc_now, report_date

    # For SQLAlchemy Column defaults
    created_at = Column(DateTime, default=utc_now)

    # For report headers ("19/10/2026")
    header = report_date()
"""

from datetime import date, datetime, timezone
from typing import Optional

from .constants import REPORT_DATE_FORMAT


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def report_date(when: Optional[date] = None) -> str:
    """
    Format a date the way reports print their generation date.

    Args:
        when: Date to format (default: today, local time)

    Returns:
        Date string in day/month/year order
    """
    if when is None:
        when = datetime.now().date()
    return when.strftime(REPORT_DATE_FORMAT)


def report_file_stamp(when: Optional[date] = None) -> str:
    """Return an ISO date stamp for default export file names."""
    if when is None:
        when = datetime.now().date()
    return when.isoformat()
