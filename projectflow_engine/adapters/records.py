"""Map spreadsheet-style rows onto Project records, defaulting missing fields."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional
from uuid import uuid4

from projectflow_engine.config import Settings, get_settings
from projectflow_engine.expiry import as_utc
from projectflow_engine.log import get_logger
from projectflow_engine.schema import Project, ProjectStatus

logger = get_logger(__name__)

_COLUMNS = {
    "project_name": ("Project Name", "project_name"),
    "client_name": ("Client Name", "client_name"),
    "client_email": ("Client Email", "client_email"),
    "client_phone": ("Client Phone", "client_phone"),
    "start_date": ("Start Date", "start_date"),
    "end_date": ("End Date", "end_date"),
    "manager_email": ("Manager Email", "manager_email"),
    "status": ("Status", "status"),
    "progress": ("Progress", "progress"),
}


def _lookup(row: dict, field_name: str) -> Any:
    for key in _COLUMNS[field_name]:
        value = row.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        return value
    return None


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO date/datetime (or a date object) into aware UTC; None when unusable."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def _text(row: dict, field_name: str, default: str, label: str) -> str:
    value = _lookup(row, field_name)
    if value is None:
        logger.debug("%s: no %s, using %r", label, field_name, default)
        return default
    return str(value)


def _parse_progress(value: Any, label: str) -> float:
    if value is None:
        logger.debug("%s: no progress, using 0", label)
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("%s: invalid progress %r, using 0", label, value)
        return 0


def build_project(row: dict, index: int, now: datetime, settings: Optional[Settings] = None) -> Project:
    """Build a Project from one imported row. ``index`` is zero-based."""

    settings = settings or get_settings()
    label = f"Row {index + 1}"
    now = as_utc(now)
    stamp = int(now.timestamp() * 1000)

    start_raw = _lookup(row, "start_date")
    start_date = parse_date(start_raw)
    if start_date is None:
        if start_raw is not None:
            logger.warning("%s: malformed start date %r, using import time", label, start_raw)
        else:
            logger.debug("%s: no start date, using import time", label)
        start_date = now

    end_raw = _lookup(row, "end_date")
    end_date = parse_date(end_raw)
    if end_date is None:
        if end_raw is not None:
            logger.warning("%s: malformed end date %r, using default duration", label, end_raw)
        else:
            logger.debug("%s: no end date, using default duration", label)
        end_date = now + timedelta(days=settings.default_duration_days)

    status = _lookup(row, "status")
    if status is None:
        logger.debug("%s: no status, using %s", label, ProjectStatus.PENDING)
        status = ProjectStatus.PENDING
    elif status not in ProjectStatus.ALL:
        logger.warning("%s: unknown status %r, using %s", label, status, ProjectStatus.PENDING)
        status = ProjectStatus.PENDING

    return Project(
        id=f"prj-{index}-{stamp}-{uuid4().hex[:8]}",
        project_name=_text(row, "project_name", f"Project {index + 1}", label),
        client_name=_text(row, "client_name", "Unknown Client", label),
        client_email=_text(row, "client_email", "", label),
        client_phone=_text(row, "client_phone", "", label),
        start_date=start_date,
        end_date=end_date,
        manager_email=_text(row, "manager_email", "", label),
        status=status,
        progress=_parse_progress(_lookup(row, "progress"), label),
    )
