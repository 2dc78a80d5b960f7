"""
Data Alchemist: Streamlit Web UI
================================
Upload, validate, search and edit client/worker/task tables, define
business rules and weights, and export the cleaned data.
"""
import sys
import os
from collections import Counter

import streamlit as st

# Add src and project root to python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../src"))

from alchemist.config import SETTINGS
from alchemist.utils.logging_setup import init_logging
from app.state.session import SessionStateManager
from app.components.styling import apply_styling, priority_band
from app.components.banners import render_validation_banners
from app.components.search_bar import render_search_bar
from app.components.grid import render_entity_grid
from app.views.inputs import render_inputs
from app.views.rules import render_rules
from app.views.prioritization import render_prioritization
from app.views.export import render_downloads


def _priority_badges(clients) -> str:
    bands = Counter(priority_band(c.priority_level) for c in clients)
    return " ".join(
        f'<span class="priority-{band}">{band} {bands[band]}</span>'
        for band in ("high", "mid", "low")
        if bands[band]
    )


@st.cache_resource(show_spinner=False)
def _init_logging():
    return init_logging(level=SETTINGS.log_level, log_file=SETTINGS.log_file)


def main():
    # 1. Init
    st.set_page_config(page_title="Data Alchemist", page_icon="🧪", layout="wide")
    _init_logging()
    SessionStateManager.init_state()
    state = SessionStateManager()
    apply_styling()

    st.title("🧪 Data Alchemist")
    st.markdown(
        '<p class="header-sub">AI Resource Allocation Configurator</p>',
        unsafe_allow_html=True,
    )

    # 2. Sidebar (Inputs)
    render_inputs(state)

    # 3. Banners and search
    render_validation_banners(state)
    render_search_bar(state)

    visible = state.workspace.visible()
    counts = visible.counts()

    # 4. Main Tabs
    tabs = st.tabs([
        f"👥 Clients ({counts['clients']})",
        f"🛠️ Workers ({counts['workers']})",
        f"📋 Tasks ({counts['tasks']})",
        f"⚙️ Rules ({len(state.workspace.rules)})",
        "⚖️ Prioritization",
        "📥 Export",
    ])

    with tabs[0]:
        if visible.clients:
            st.markdown(_priority_badges(visible.clients), unsafe_allow_html=True)
        render_entity_grid(state, "clients", visible.clients)
    with tabs[1]:
        render_entity_grid(state, "workers", visible.workers)
    with tabs[2]:
        render_entity_grid(state, "tasks", visible.tasks)
    with tabs[3]:
        render_rules(state)
    with tabs[4]:
        render_prioritization(state)
    with tabs[5]:
        render_downloads(state)


if __name__ == "__main__":
    main()
