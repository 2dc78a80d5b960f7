"""
Export View
===========
Handles file downloads (CSV tables, rules JSON, summary JSON).
"""
import streamlit as st

from alchemist.io.export import default_base_name
from alchemist.validation import validate_export
from app.components.banners import truncate_issues
from app.state.session import SessionStateManager


def render_downloads(state: SessionStateManager):
    """Render the download section."""
    ws = state.workspace
    st.subheader("📥 Export")

    ok, problems = validate_export(ws.dataset, ws.rules.to_list())
    if not ok:
        st.warning("Export check found problems; files are still exported as they are:")
        for line in truncate_issues(problems, 5):
            st.markdown(f"- {line}")
    elif state.errors:
        st.info(f"ℹ️ {len(state.errors)} validation errors remain in the data")
    else:
        st.success("✅ Ready to export")

    base = st.text_input(
        "File name prefix",
        key="export_name",
        help="Leave empty for a timestamped name",
    ).strip() or default_base_name()

    bundle = ws.export_bundle(base_name=base)
    counts = ws.dataset.counts()

    col1, col2, col3 = st.columns(3)
    labels = [
        ("clients", f"📥 Clients ({counts['clients']})"),
        ("workers", f"📥 Workers ({counts['workers']})"),
        ("tasks", f"📥 Tasks ({counts['tasks']})"),
    ]
    for col, (table, label) in zip((col1, col2, col3), labels):
        export_file = bundle[f"{base}-{table}.csv"]
        col.download_button(
            label, export_file.content, export_file.filename, export_file.mime,
            key=f"dl_{table}", width="stretch",
        )

    st.divider()
    col1, col2 = st.columns(2)
    rules_file = bundle[f"{base}-rules.json"]
    summary_file = bundle[f"{base}-summary.json"]
    col1.download_button(
        f"📥 Rules & weights ({len(ws.rules)} rules)", rules_file.content, rules_file.filename,
        rules_file.mime, key="dl_rules", width="stretch",
    )
    col2.download_button(
        "📥 Summary", summary_file.content, summary_file.filename, summary_file.mime,
        key="dl_summary", width="stretch",
    )

    with st.expander("Preview rules.json", expanded=False):
        st.code(rules_file.content, language="json")
