"""Editable entity grid for Streamlit."""
import math
from typing import Any, List, Tuple

import pandas as pd
import streamlit as st

from alchemist.models.entities import ENTITY_TYPES, apply_cell_edit
from app.state.session import SessionStateManager

ISSUE_COLUMN = "Issues"

COLUMN_LABELS = {
    "ClientID": "Client ID", "ClientName": "Name", "PriorityLevel": "Priority",
    "RequestedTaskIDs": "Tasks", "GroupTag": "Group", "AttributesJSON": "Attributes",
    "WorkerID": "Worker ID", "WorkerName": "Name", "Skills": "Skills",
    "AvailableSlots": "Available Slots", "MaxLoadPerPhase": "Max Load",
    "WorkerGroup": "Group", "QualificationLevel": "Qualification",
    "TaskID": "Task ID", "TaskName": "Name", "Category": "Category", "Duration": "Duration",
    "RequiredSkills": "Skills", "PreferredPhases": "Preferred Phases",
    "MaxConcurrent": "Max Concurrent",
}


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _same(a: Any, b: Any, numeric: bool = False) -> bool:
    if _blank(a) and _blank(b):
        return True
    if _blank(a) or _blank(b):
        return False
    if numeric:
        try:
            return float(a) == float(b)
        except (TypeError, ValueError):
            pass
    return str(a) == str(b)


def rows_to_frame(table: str, rows: List, report=None) -> pd.DataFrame:
    """Build the grid frame; the first column flags rows with errors."""
    columns = ENTITY_TYPES[table].COLUMNS
    data = []
    for row in rows:
        record = {ISSUE_COLUMN: "❌" if report is not None and report.has_error(table, row.key) else ""}
        record.update(row.to_dict())
        data.append(record)
    return pd.DataFrame(data, columns=[ISSUE_COLUMN] + columns)


def frame_to_edits(rows: List, edited_df: pd.DataFrame) -> List[Tuple[Any, Any]]:
    """
    Diff the edited grid against the shown rows.

    Returns ``(shown_row, updated_row)`` pairs for the rows that changed,
    rebuilt through ``apply_cell_edit``.
    """
    changed = []
    records = edited_df.to_dict(orient="records")
    for row, record in zip(rows, records):
        updated = row
        current = row.to_dict()
        for column in row.editable_columns():
            new_value = record.get(column)
            if not _same(current[column], new_value, numeric=column in row.INT_COLUMNS):
                updated = apply_cell_edit(updated, column, new_value)
        if updated is not row:
            changed.append((row, updated))
    return changed


def _column_config(table: str) -> dict:
    entity_cls = ENTITY_TYPES[table]
    config = {ISSUE_COLUMN: st.column_config.TextColumn("", width="small", disabled=True)}
    for col in entity_cls.COLUMNS:
        label = COLUMN_LABELS.get(col, col)
        if col == entity_cls.KEY_COLUMN:
            config[col] = st.column_config.TextColumn(label, disabled=True)
        elif col in entity_cls.INT_COLUMNS:
            config[col] = st.column_config.NumberColumn(label, step=1, format="%d")
        else:
            config[col] = st.column_config.TextColumn(label)
    return config


def render_entity_grid(state: SessionStateManager, table: str, rows: List):
    """
    Render an editable table in Streamlit.

    Edits are applied to the full table by row identity, so editing a
    filtered view never drops the hidden rows or merges duplicate IDs.
    """
    report = state.report
    flagged = [r for r in rows if report.has_error(table, r.key)]

    df = rows_to_frame(table, rows, report)
    edited_df = st.data_editor(
        df,
        column_config=_column_config(table),
        num_rows="fixed",
        width="stretch",
        hide_index=True,
        key=f"grid_{table}_{state.workspace.query}",
    )

    changed = frame_to_edits(rows, edited_df)
    if changed:
        state.workspace.update_rows(table, changed)
        state.banner_dismissed = False
        st.session_state["reset_search"] = True
        st.rerun()

    if flagged:
        st.caption(f"❌ {len(flagged)} of {len(rows)} rows have validation errors")
