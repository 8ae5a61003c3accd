"""Session-scoped deadline alerting.

Each pass walks the current project set with a single captured ``now``,
notifies the manager of every Expiring project that has not been alerted
yet in this session, and records the project id only after the sender
reports success. Passes are serialized with a lock so overlapping
"project set replaced" events cannot notify the same project twice.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Optional

from projectflow_engine.config import Settings, get_settings
from projectflow_engine.expiry import as_utc, classify, days_remaining, utcnow
from projectflow_engine.log import get_logger
from projectflow_engine.schema import Project, Urgency

logger = get_logger(__name__)

Sender = Callable[[str, str, str, Optional[str]], bool]
Clock = Callable[[], datetime]


class AlertRecord:
    """Ids already notified this session. Grows only, until the session clears it."""

    def __init__(self) -> None:
        self._ids: set[str] = set()

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, project_id: str) -> None:
        self._ids.add(project_id)

    def clear(self) -> None:
        self._ids.clear()


@dataclass
class AlertPassReport:
    """Outcome of one scheduler pass."""

    checked_at: datetime
    sent: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: int = 0


def build_alert_message(project: Project, days_left: int) -> tuple[str, str]:
    """Return (subject, body) for a manager deadline alert."""

    subject = f'Action Required: "{project.project_name}" Expires in {days_left} Days'
    body = (
        "Hello Project Manager,\n\n"
        f'This is an automated alert to inform you that the project "{project.project_name}" '
        f"for client {project.client_name} is approaching its deadline on "
        f"{project.end_date.date().isoformat()}.\n\n"
        f"Current Status: {project.status}\n"
        f"Progress: {project.progress:g}%\n\n"
        "Please ensure all deliverables are on track.\n\n"
        "Best,\n"
        "ProjectFlow AI"
    )
    return subject, body


class DeadlineAlertScheduler:
    def __init__(
        self,
        sender: Sender,
        record: AlertRecord,
        clock: Clock = utcnow,
        settings: Optional[Settings] = None,
    ) -> None:
        self._sender = sender
        self._record = record
        self._clock = clock
        self._settings = settings or get_settings()
        self._lock = threading.Lock()
        self.last_report: Optional[AlertPassReport] = None

    def run_pass(self, projects: Iterable[Project]) -> AlertPassReport:
        """Evaluate every project once and dispatch alerts for newly Expiring ones."""

        with self._lock:
            now = as_utc(self._clock())
            report = AlertPassReport(checked_at=now)
            for project in projects:
                if project.id in self._record:
                    report.skipped += 1
                    continue

                urgency = classify(
                    project.end_date, now, project.status, self._settings.expiry_threshold_days
                )
                if urgency != Urgency.EXPIRING:
                    report.skipped += 1
                    continue

                if self._dispatch(project, days_remaining(project.end_date, now)):
                    self._record.add(project.id)
                    report.sent.append(project.id)
                else:
                    report.failed.append(project.id)

            self.last_report = report

        logger.info(
            "Alert pass at %s: sent=%d failed=%d skipped=%d",
            now.isoformat(),
            len(report.sent),
            len(report.failed),
            report.skipped,
        )
        return report

    def on_projects_replaced(self, projects: Iterable[Project]) -> None:
        """Store listener: one pass per "project set replaced" event."""

        self.run_pass(projects)

    def _dispatch(self, project: Project, days_left: int) -> bool:
        recipient = project.manager_email or self._settings.fallback_manager_address
        subject, body = build_alert_message(project, days_left)
        try:
            delivered = bool(self._sender(recipient, subject, body, self._settings.sender_address))
        except Exception:  # noqa: BLE001
            logger.exception("Deadline alert for project %s to %s failed", project.id, recipient)
            return False

        if not delivered:
            logger.warning("Deadline alert for project %s to %s was not accepted", project.id, recipient)
        return delivered
