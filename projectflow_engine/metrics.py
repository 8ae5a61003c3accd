"""Portfolio summary metrics for the dashboard view."""

from __future__ import annotations

from collections import Counter
from datetime import datetime

import numpy as np

from projectflow_engine.expiry import EXPIRY_THRESHOLD_DAYS, classify
from projectflow_engine.schema import Project, ProjectStatus, Urgency


def portfolio_summary(
    projects: list[Project],
    now: datetime,
    threshold_days: int = EXPIRY_THRESHOLD_DAYS,
) -> dict:
    """Compute status counts, client count, urgency counts and mean progress."""

    if not projects:
        return {
            "total": 0,
            "completed": 0,
            "on_track": 0,
            "at_risk": 0,
            "pending": 0,
            "clients": 0,
            "expiring": 0,
            "overdue": 0,
            "avg_progress": 0.0,
        }

    statuses = Counter(project.status for project in projects)
    urgencies = Counter(classify(p.end_date, now, p.status, threshold_days) for p in projects)
    completed = statuses.get(ProjectStatus.COMPLETED, 0)
    on_track = statuses.get(ProjectStatus.ON_TRACK, 0)
    at_risk = statuses.get(ProjectStatus.AT_RISK, 0)

    return {
        "total": len(projects),
        "completed": completed,
        "on_track": on_track,
        "at_risk": at_risk,
        "pending": len(projects) - (completed + on_track + at_risk),
        "clients": len({project.client_name for project in projects}),
        "expiring": urgencies.get(Urgency.EXPIRING, 0),
        "overdue": urgencies.get(Urgency.OVERDUE, 0),
        "avg_progress": float(np.mean([float(project.progress) for project in projects])),
    }
