"""CSV adapter for spreadsheet project exports."""

from __future__ import annotations

import csv
from datetime import datetime
from typing import Optional

from projectflow_engine.adapters.records import build_project
from projectflow_engine.config import Settings
from projectflow_engine.expiry import utcnow
from projectflow_engine.schema import Project


def parse(file_path: str, now: Optional[datetime] = None, settings: Optional[Settings] = None) -> list[Project]:
    """Parse a CSV file (one project per row) into projects."""

    now = now or utcnow()
    with open(file_path, newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        return [build_project(row, index, now, settings) for index, row in enumerate(reader)]
