"""Core data schema for projects and their urgency."""

from dataclasses import dataclass
from datetime import datetime


class ProjectStatus:
    """Allowed project status values."""

    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    COMPLETED = "Completed"
    PENDING = "Pending"

    ALL = (ON_TRACK, AT_RISK, COMPLETED, PENDING)


class Urgency:
    """Deadline urgency classification."""

    OVERDUE = "overdue"
    EXPIRING = "expiring"
    NORMAL = "normal"


@dataclass(frozen=True)
class Project:
    """Project record shared by the store, classifier, timeline and scheduler."""

    id: str
    project_name: str
    client_name: str
    client_email: str
    client_phone: str
    start_date: datetime
    end_date: datetime
    manager_email: str
    status: str = ProjectStatus.PENDING
    progress: float = 0
