"""Session context owning the project store and the Alert Record."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from projectflow_engine.adapters import csv_adapter, json_adapter
from projectflow_engine.alerts import AlertRecord, Clock, DeadlineAlertScheduler, Sender
from projectflow_engine.config import Settings, get_settings
from projectflow_engine.expiry import as_utc, utcnow
from projectflow_engine.log import get_logger
from projectflow_engine.notifications import SimulatedEmailProvider
from projectflow_engine.schema import Project
from projectflow_engine.store import ProjectStore
from projectflow_engine.timeline import TimelineBar, TimelineWindow, compute_window, layout

logger = get_logger(__name__)


class Session:
    """One dashboard session.

    Created at session start, the session wires the deadline scheduler to
    its store so that every replacement of the project set triggers one
    alert pass. ``close()`` clears the Alert Record and detaches the
    scheduler; alerts are never carried over to another session.
    """

    def __init__(
        self,
        sender: Optional[Sender] = None,
        clock: Clock = utcnow,
        settings: Optional[Settings] = None,
        projects: Optional[Iterable[Project]] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._clock = clock
        self.store = ProjectStore()
        self._alert_record = AlertRecord()
        self.scheduler = DeadlineAlertScheduler(
            sender or SimulatedEmailProvider(self.settings),
            self._alert_record,
            clock=clock,
            settings=self.settings,
        )
        self.store.subscribe(self.scheduler.on_projects_replaced)
        self.closed = False
        if projects is not None:
            self.store.replace(projects)

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def import_file(self, file_path: str) -> list[Project]:
        """Parse a CSV/JSON export and append its projects to the store."""

        if self.closed:
            raise RuntimeError("Session is closed")

        suffix = Path(file_path).suffix.lower()
        if suffix == ".csv":
            projects = csv_adapter.parse(file_path, now=self.now(), settings=self.settings)
        elif suffix == ".json":
            projects = json_adapter.parse(file_path, now=self.now(), settings=self.settings)
        else:
            raise ValueError("Unsupported input format, expected .csv or .json")

        logger.info("Imported %d projects from %s", len(projects), file_path)
        self.store.extend(projects)
        return projects

    def now(self) -> datetime:
        """Current session time as aware UTC, whatever the injected clock returns."""

        return as_utc(self._clock())

    def timeline(self) -> tuple[TimelineWindow, list[TimelineBar]]:
        """Window and bars for the current project set, judged against one clock reading."""

        now = self.now()
        projects = self.store.all()
        window = compute_window(projects, now=now, buffer_days=self.settings.timeline_buffer_days)
        return window, layout(projects, window, now, self.settings.expiry_threshold_days)

    def was_alerted(self, project_id: str) -> bool:
        return project_id in self._alert_record

    def close(self) -> None:
        if self.closed:
            return
        self.store.unsubscribe(self.scheduler.on_projects_replaced)
        self._alert_record.clear()
        self.closed = True
        logger.debug("Session closed")
