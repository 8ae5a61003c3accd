"""JSON adapter for project lists."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

from projectflow_engine.adapters.records import build_project
from projectflow_engine.config import Settings
from projectflow_engine.expiry import utcnow
from projectflow_engine.schema import Project


def parse(file_path: str, now: Optional[datetime] = None, settings: Optional[Settings] = None) -> list[Project]:
    """Parse a JSON array of project objects."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    now = now or utcnow()
    projects: list[Project] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"Item {index + 1}: expected an object")
        projects.append(build_project(item, index, now, settings))
    return projects
