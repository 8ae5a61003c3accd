"""Import a CSV/JSON project export and run one deadline alert pass."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from projectflow_engine.adapters.records import parse_date
from projectflow_engine.expiry import utcnow
from projectflow_engine.metrics import portfolio_summary
from projectflow_engine.notifications import SimulatedEmailProvider
from projectflow_engine.session import Session


def _resolve_now(raw: str | None) -> datetime:
    if raw is None:
        return utcnow()
    now = parse_date(raw)
    if now is None:
        raise ValueError(f"Invalid --now value '{raw}'")
    return now


def main() -> None:
    parser = argparse.ArgumentParser(description="Run projectflow-engine deadline alerts")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON projects file")
    parser.add_argument("--now", help="ISO timestamp to evaluate deadlines against (default: current time)")
    args = parser.parse_args()

    now = _resolve_now(args.now)
    provider = SimulatedEmailProvider()
    with Session(sender=provider, clock=lambda: now) as session:
        session.import_file(args.data)
        report = session.scheduler.last_report
        projects = list(session.store)

    output = {
        "checked_at": now.isoformat(),
        "summary": portfolio_summary(projects, now),
        "sent": report.sent if report else [],
        "failed": report.failed if report else [],
        "skipped": report.skipped if report else 0,
        "emails": [{"to": mail.to, "subject": mail.subject} for mail in provider.outbox],
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
