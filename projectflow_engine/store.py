"""In-memory ordered project collection."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional

from projectflow_engine.log import get_logger
from projectflow_engine.schema import Project

logger = get_logger(__name__)

Listener = Callable[[tuple[Project, ...]], None]


class ProjectStore:
    """Holds the current project set; every mutation replaces it wholesale and notifies listeners."""

    def __init__(self, projects: Optional[Iterable[Project]] = None) -> None:
        self._projects: tuple[Project, ...] = tuple(projects or ())
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._projects)

    def __iter__(self) -> Iterator[Project]:
        return iter(self._projects)

    def all(self) -> tuple[Project, ...]:
        return self._projects

    def get(self, project_id: str) -> Optional[Project]:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def replace(self, projects: Iterable[Project]) -> None:
        self._projects = tuple(projects)
        self._publish()

    def extend(self, projects: Iterable[Project]) -> None:
        """Append an imported batch; still a single replacement of the collection."""

        self.replace(self._projects + tuple(projects))

    def _publish(self) -> None:
        snapshot = self._projects
        logger.debug("Project set replaced (%d projects)", len(snapshot))
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # noqa: BLE001
                logger.exception("Project listener %r failed", listener)
