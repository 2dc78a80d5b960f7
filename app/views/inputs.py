"""
Input View (Sidebar)
====================
Handles file loading and the workspace summary.
"""
from pathlib import Path

import streamlit as st

from alchemist.errors import LoadError
from alchemist.io.loader import load_file, read_upload
from app.state.session import SessionStateManager

SAMPLE_PATH = Path(__file__).resolve().parents[2] / "data" / "sample.json"


def _handle_upload(state: SessionStateManager, uploaded, merge: bool):
    if not state.is_new_upload(uploaded.name, uploaded.size):
        return

    try:
        dataset = read_upload(uploaded.name, uploaded.getvalue())
    except LoadError as e:
        state.upload_error = str(e)
        return

    if dataset.is_empty:
        st.sidebar.warning("ℹ️ No clients, workers or tasks found in this file")
    report = state.load_dataset(dataset, uploaded.name, merge=merge)
    st.sidebar.success(
        f"✅ {uploaded.name}: {len(dataset.clients)} clients, {len(dataset.workers)} workers, "
        f"{len(dataset.tasks)} tasks ({len(report.errors)} errors)"
    )


def render_inputs(state: SessionStateManager):
    """Render the sidebar inputs and update state."""
    with st.sidebar:
        st.markdown("### 🧪 Data Alchemist")

        st.header("1. Data")
        merge = st.checkbox(
            "Keep other tables",
            value=True,
            help="A CSV/XLSX file holds one table; keep the tables it does not contain.",
        )
        uploaded = st.file_uploader(
            "Upload data file",
            type=["json", "csv", "xlsx"],
            key=state.uploader_key,
            help="JSON with 'Clients 1', 'Worker 1', 'Tasks 1' arrays, or one table as CSV/XLSX",
        )
        if uploaded is not None:
            _handle_upload(state, uploaded, merge)
        else:
            state.forget_upload()

        col1, col2 = st.columns(2)
        with col1:
            if st.button("📂 Sample data", width="stretch", disabled=not SAMPLE_PATH.exists()):
                try:
                    state.load_dataset(load_file(SAMPLE_PATH), SAMPLE_PATH.name)
                except LoadError as e:
                    state.upload_error = str(e)
        with col2:
            if st.button("🗑️ Reset", width="stretch"):
                state.reset()
                st.rerun()

        st.divider()
        st.header("2. Summary")
        counts = state.dataset.counts()
        c1, c2, c3 = st.columns(3)
        c1.metric("Clients", counts["clients"])
        c2.metric("Workers", counts["workers"])
        c3.metric("Tasks", counts["tasks"])
        c1.metric("Errors", len(state.errors))
        c2.metric("Warnings", len(state.warnings))
        c3.metric("Rules", len(state.workspace.rules))
        if state.upload_name:
            st.caption(f"Source: {state.upload_name}")
