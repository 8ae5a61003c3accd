"""Deadline expiry classification."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from projectflow_engine.schema import Project, ProjectStatus, Urgency

EXPIRY_THRESHOLD_DAYS = 15
_SECONDS_PER_DAY = 86400.0


def utcnow() -> datetime:
    """Default clock: timezone-aware current UTC time."""

    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_remaining(end_date: datetime, now: datetime) -> int:
    """Whole calendar days until ``end_date``, rounded up (12 hours left counts as 1)."""

    return math.ceil((end_date - now).total_seconds() / _SECONDS_PER_DAY)


def classify(
    end_date: datetime,
    now: datetime,
    status: str,
    threshold_days: int = EXPIRY_THRESHOLD_DAYS,
) -> str:
    """Return the urgency of a deadline.

    Overdue needs a negative day count and a status other than Completed.
    Expiring covers 1..threshold_days inclusive; a deadline due today (0 days)
    is Normal.
    """

    days = days_remaining(end_date, now)
    if days < 0 and status != ProjectStatus.COMPLETED:
        return Urgency.OVERDUE
    if 0 < days <= threshold_days:
        return Urgency.EXPIRING
    return Urgency.NORMAL


def classify_project(project: Project, now: datetime, threshold_days: int = EXPIRY_THRESHOLD_DAYS) -> str:
    return classify(project.end_date, now, project.status, threshold_days)
