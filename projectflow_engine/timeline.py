"""Shared Gantt time axis and percentage layout."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

import numpy as np

from projectflow_engine.expiry import EXPIRY_THRESHOLD_DAYS, classify, days_remaining, utcnow
from projectflow_engine.schema import Project

BUFFER_DAYS = 5
MIN_BAR_WIDTH = 1.0


@dataclass(frozen=True)
class TimelineWindow:
    """Padded date range used as the common horizontal axis."""

    start: datetime
    end: datetime

    @property
    def total_seconds(self) -> float:
        return (self.end - self.start).total_seconds()

    @property
    def degenerate(self) -> bool:
        return self.total_seconds <= 0


@dataclass(frozen=True)
class TimelineBar:
    """Rendering payload for one project row."""

    project_id: str
    left: float
    width: float
    days_remaining: int
    urgency: str


def compute_window(
    projects: Iterable[Project],
    now: Optional[datetime] = None,
    buffer_days: int = BUFFER_DAYS,
) -> TimelineWindow:
    """Span every project date, padded by ``buffer_days`` on each side.

    Start and end dates are pooled before taking min/max so inverted
    ranges still produce a window that covers them. With no projects the
    window collapses onto ``now``.
    """

    dates = []
    for project in projects:
        dates.append(project.start_date)
        dates.append(project.end_date)

    if not dates:
        anchor = now or utcnow()
        return TimelineWindow(start=anchor, end=anchor)

    pad = timedelta(days=buffer_days)
    return TimelineWindow(start=min(dates) - pad, end=max(dates) + pad)


def position(date: datetime, window: TimelineWindow) -> float:
    """Percentage offset of ``date`` inside the window, clamped to [0, 100]."""

    if window.degenerate:
        return 0.0
    percent = (date - window.start).total_seconds() / window.total_seconds * 100.0
    return max(0.0, min(100.0, percent))


def span(start_date: datetime, end_date: datetime, window: TimelineWindow) -> float:
    """Bar width in percent; never below MIN_BAR_WIDTH, never negative."""

    width = abs(position(end_date, window) - position(start_date, window))
    return max(MIN_BAR_WIDTH, width)


def layout(
    projects: Iterable[Project],
    window: TimelineWindow,
    now: datetime,
    threshold_days: int = EXPIRY_THRESHOLD_DAYS,
) -> list[TimelineBar]:
    """Build one bar per project against a shared window."""

    bars: list[TimelineBar] = []
    for project in projects:
        left = min(position(project.start_date, window), position(project.end_date, window))
        bars.append(
            TimelineBar(
                project_id=project.id,
                left=left,
                width=span(project.start_date, project.end_date, window),
                days_remaining=days_remaining(project.end_date, now),
                urgency=classify(project.end_date, now, project.status, threshold_days),
            )
        )
    return bars


def axis_ticks(window: TimelineWindow, count: int = 5) -> list[datetime]:
    """Evenly spaced grid-line dates from window start to window end."""

    if window.degenerate or count < 2:
        return [window.start]

    offsets = np.linspace(0.0, window.total_seconds, num=count)
    return [window.start + timedelta(seconds=float(offset)) for offset in offsets]
