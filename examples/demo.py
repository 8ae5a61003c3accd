"""Demo script for projectflow-engine."""

import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from projectflow_engine.metrics import portfolio_summary
from projectflow_engine.session import Session


def main() -> None:
    now = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    with Session(clock=lambda: now) as session:
        session.import_file("examples/sample_projects.csv")
        projects = list(session.store)

        print("Summary:", portfolio_summary(projects, now))
        window, bars = session.timeline()
        print(f"Window: {window.start.date()} -> {window.end.date()}")
        for project, bar in zip(projects, bars):
            flag = " (alert sent)" if session.was_alerted(project.id) else ""
            print(f"{project.project_name:<20} left={bar.left:6.2f}% width={bar.width:6.2f}% {bar.urgency}{flag}")


if __name__ == "__main__":
    main()
