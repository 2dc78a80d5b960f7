"""Validation summary banners."""
from typing import List

import streamlit as st

from alchemist.config import SETTINGS
from app.state.session import SessionStateManager


def truncate_issues(items: List[str], limit: int) -> List[str]:
    """First ``limit`` messages plus an "... and N more" line."""
    shown = list(items[:limit])
    if len(items) > limit:
        shown.append(f"... and {len(items) - limit} more")
    return shown


def render_validation_banners(state: SessionStateManager):
    """Error (dismissible) and warning banners above the tabs."""
    errors, warnings = state.errors, state.warnings

    if state.upload_error:
        st.error(f"❌ {state.upload_error}")

    if errors and not state.banner_dismissed:
        lines = "\n".join(f"- {e}" for e in truncate_issues(errors, SETTINGS.max_errors_shown))
        col1, col2 = st.columns([10, 1])
        with col1:
            st.error(f"**Validation Errors ({len(errors)})**\n\n{lines}")
        with col2:
            if st.button("✕", key="dismiss_errors", help="Hide until the next change"):
                state.banner_dismissed = True
                st.rerun()

    if warnings:
        lines = "\n".join(f"- {w}" for w in truncate_issues(warnings, SETTINGS.max_warnings_shown))
        st.warning(f"**Warnings ({len(warnings)})**\n\n{lines}")
