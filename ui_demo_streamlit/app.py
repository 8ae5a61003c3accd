"""Streamlit dashboard for projectflow-engine."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

from projectflow_engine.metrics import portfolio_summary
from projectflow_engine.schema import Urgency
from projectflow_engine.session import Session
from projectflow_engine.timeline import axis_ticks

BAR_COLORS = {
    Urgency.OVERDUE: "#ef4444",
    Urgency.EXPIRING: "#fbbf24",
    Urgency.NORMAL: "#6366f1",
}


def import_uploaded(session: Session, uploaded_file) -> list:
    """Import an uploaded file through a temporary copy that is removed afterwards."""

    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    try:
        return session.import_file(temp_path)
    finally:
        os.unlink(temp_path)


def _fmt_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def build_view(session: Session) -> dict[str, Any]:
    """Compute everything the dashboard renders for the session's project set."""

    projects = list(session.store)
    window, bars = session.timeline()
    rows = []
    for project, bar in zip(projects, bars):
        rows.append(
            {
                "project": project,
                "left": bar.left,
                "width": bar.width,
                "days_remaining": bar.days_remaining,
                "urgency": bar.urgency,
            }
        )

    return {
        "summary": portfolio_summary(projects, session.now(), session.settings.expiry_threshold_days),
        "window": window,
        "ticks": [_fmt_date(tick) for tick in axis_ticks(window)],
        "rows": rows,
    }


def _bar_html(row: dict[str, Any]) -> str:
    color = BAR_COLORS[row["urgency"]]
    progress = row["project"].progress
    return (
        '<div style="position:relative;height:22px;background:#f8fafc;border-radius:11px;">'
        f'<div style="position:absolute;left:{row["left"]:.2f}%;width:{row["width"]:.2f}%;'
        f'top:0;bottom:0;background:{color};border-radius:11px;color:white;font-size:10px;'
        f'padding-left:6px;">{progress:g}%</div></div>'
    )


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="ProjectFlow Timeline", layout="wide")
    st.title("ProjectFlow — Projects & Timeline")

    if "session" not in st.session_state:
        st.session_state["session"] = Session()
    session: Session = st.session_state["session"]

    with st.sidebar:
        st.header("Import")
        uploaded = st.file_uploader("Upload project export", type=["csv", "json"])
        use_demo = st.button("Load demo projects")
        if st.button("End session"):
            session.close()
            st.session_state["session"] = Session()
            session = st.session_state["session"]

    try:
        if use_demo:
            session.import_file("examples/sample_projects.csv")
        elif uploaded is not None and st.session_state.get("imported_name") != uploaded.name:
            import_uploaded(session, uploaded)
            st.session_state["imported_name"] = uploaded.name
    except ValueError as exc:
        st.error(f"Input error: {exc}")

    projects = list(session.store)
    if not projects:
        st.info("Upload a CSV/JSON export with Project Name, Client Name, Start Date and End Date columns.")
        return

    view = build_view(session)

    st.subheader("Overview")
    summary = view["summary"]
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Projects", summary["total"])
    c2.metric("Clients", summary["clients"])
    c3.metric("Expiring", summary["expiring"])
    c4.metric("Overdue", summary["overdue"])

    st.subheader("Gantt")
    st.caption("  |  ".join(view["ticks"]))
    for row in view["rows"]:
        project = row["project"]
        name_col, bar_col = st.columns([1, 4])
        label = f"**{project.project_name}**  \n{project.client_name}"
        if row["urgency"] == Urgency.EXPIRING:
            label += f"  \nExpiring in {row['days_remaining']} days"
        if session.was_alerted(project.id):
            label += "  \nAuto-alert sent to manager"
        name_col.markdown(label)
        bar_col.markdown(_bar_html(row), unsafe_allow_html=True)


if __name__ == "__main__":
    main()
