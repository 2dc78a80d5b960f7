import streamlit as st

from alchemist.search import KeywordMode
from app.state.session import SessionStateManager

EXAMPLES = [
    '"high priority clients" - clients with priority 4-5',
    '"workers with coding skills" - workers who can code',
    '"long duration tasks" - tasks lasting 3+ phases',
    '"group A workers" - workers in GroupA',
    '"expert workers" - workers with qualification 4-5',
]


def _run(state: SessionStateManager):
    state.workspace.run_search(st.session_state.get("search_query", ""))


def _clear(state: SessionStateManager):
    st.session_state["search_query"] = ""
    state.workspace.clear_search()


def render_search_bar(state: SessionStateManager):
    """Keyword search over the three tables."""
    ws = state.workspace

    # Edits and uploads drop the filter; the box is reset before it is drawn
    if st.session_state.get("reset_search"):
        st.session_state["search_query"] = ""
        st.session_state["reset_search"] = False

    with st.form("search_form", clear_on_submit=False):
        col1, col2, col3 = st.columns([6, 1, 1])
        with col1:
            st.text_input(
                "Search",
                key="search_query",
                placeholder="e.g. 'high priority clients', 'workers with coding skills'",
            )
        with col2:
            st.form_submit_button("🔍 Search", on_click=_run, args=(state,), width="stretch")
        with col3:
            st.form_submit_button("Clear", on_click=_clear, args=(state,), width="stretch")

    with st.expander("Search options & examples", expanded=False):
        combine_all = st.toggle(
            "Combine keyword filters",
            value=ws.keyword_mode == KeywordMode.ALL,
            help="On: every keyword must match. Off: the last keyword replaces the earlier ones.",
        )
        mode = KeywordMode.ALL if combine_all else KeywordMode.LAST
        if mode != ws.keyword_mode:
            ws.keyword_mode = mode
            if ws.query:
                ws.run_search(ws.query)
        for example in EXAMPLES:
            st.caption(f"• {example}")

    if ws.view is not None:
        counts = ws.view.counts()
        triggers = ", ".join(ws.view.triggers) or "text match"
        st.caption(
            f"Showing {counts['clients']} clients, {counts['workers']} workers, "
            f"{counts['tasks']} tasks for '{ws.query}' ({triggers})"
        )
