from datetime import datetime, timedelta, timezone

import pytest

from projectflow_engine.config import Settings
from projectflow_engine.notifications import SimulatedEmailProvider
from projectflow_engine.schema import Project
from projectflow_engine.session import Session
from projectflow_engine.store import ProjectStore

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)

CSV_TEXT = (
    "Project Name,Client Name,Start Date,End Date,Manager Email,Status,Progress\n"
    "Website Redesign,Acme Corp,2025-02-20,2025-03-21,pm@flow.com,On Track,35\n"
    "Mobile App Dev,TechStart Inc,2025-02-10,2025-03-06,pm@flow.com,At Risk,80\n"
)


def make_project(project_id, days_left):
    return Project(
        project_id, f"Project {project_id}", "Acme", "", "", NOW, NOW + timedelta(days=days_left), "pm@flow.com"
    )


def make_session(**kwargs):
    provider = SimulatedEmailProvider(Settings())
    session = Session(sender=provider, clock=lambda: NOW, settings=Settings(), **kwargs)
    return session, provider


def test_initial_projects_trigger_a_pass():
    session, provider = make_session(projects=[make_project("a", 5), make_project("b", 40)])
    assert [mail.to for mail in provider.outbox] == ["pm@flow.com"]
    assert session.was_alerted("a")
    assert not session.was_alerted("b")


def test_import_appends_and_alerts(tmp_path):
    path = tmp_path / "projects.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    session, provider = make_session(projects=[make_project("a", 40)])

    imported = session.import_file(str(path))
    assert len(imported) == 2
    assert len(session.store) == 3
    assert [mail.subject for mail in provider.outbox] == ['Action Required: "Mobile App Dev" Expires in 5 Days']
    assert session.scheduler.last_report.sent == [imported[1].id]

    session.store.replace(list(session.store))
    assert len(provider.outbox) == 1


def test_unsupported_file_type(tmp_path):
    path = tmp_path / "projects.xlsx"
    path.write_bytes(b"")
    session, _ = make_session()
    with pytest.raises(ValueError):
        session.import_file(str(path))


def test_close_clears_alert_record_and_detaches():
    session, provider = make_session(projects=[make_project("a", 5)])
    with session:
        assert session.was_alerted("a")
    assert session.closed
    assert not session.was_alerted("a")

    session.store.replace([make_project("b", 3)])
    assert len(provider.outbox) == 1
    with pytest.raises(RuntimeError):
        session.import_file("projects.csv")


def test_store_listener_failure_does_not_stop_others():
    store = ProjectStore()
    seen = []

    def broken(projects):
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(lambda projects: seen.append(len(projects)))
    store.replace([make_project("a", 1)])
    store.extend([make_project("b", 2)])
    assert seen == [1, 2]
    assert store.get("b").project_name == "Project b"
    assert store.get("missing") is None


def test_timeline_uses_configured_buffer():
    settings = Settings()
    settings.timeline_buffer_days = 10
    session = Session(sender=SimulatedEmailProvider(settings), clock=lambda: NOW, settings=settings)
    session.store.replace([make_project("a", 20)])
    window, bars = session.timeline()
    assert window.start == NOW - timedelta(days=10)
    assert window.end == NOW + timedelta(days=30)
    assert bars[0].left == pytest.approx(25.0)
    assert bars[0].width == pytest.approx(50.0)


def test_repeated_imports_with_fixed_clock_get_distinct_ids(tmp_path):
    first = tmp_path / "first.csv"
    first.write_text("Project Name,End Date,Manager Email\nAlpha,2025-03-06T09:00:00,alpha@flow.com\n", encoding="utf-8")
    second = tmp_path / "second.csv"
    second.write_text("Project Name,End Date,Manager Email\nBeta,2025-03-07T09:00:00,beta@flow.com\n", encoding="utf-8")
    session, provider = make_session()

    alpha = session.import_file(str(first))[0]
    beta = session.import_file(str(second))[0]

    assert alpha.id != beta.id
    assert session.store.get(beta.id).project_name == "Beta"
    assert [mail.to for mail in provider.outbox] == ["alpha@flow.com", "beta@flow.com"]
    assert session.was_alerted(alpha.id)
    assert session.was_alerted(beta.id)


def test_naive_clock_is_treated_as_utc(tmp_path):
    path = tmp_path / "projects.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    provider = SimulatedEmailProvider(Settings())
    session = Session(sender=provider, clock=lambda: datetime(2025, 3, 1, 9, 0), settings=Settings())

    imported = session.import_file(str(path))
    assert session.now() == NOW
    assert [mail.subject for mail in provider.outbox] == ['Action Required: "Mobile App Dev" Expires in 5 Days']
    assert session.was_alerted(imported[1].id)

    window, bars = session.timeline()
    assert window.start == datetime(2025, 2, 5, tzinfo=timezone.utc)
    assert len(bars) == 2
