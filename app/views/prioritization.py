"""
Prioritization View
===================
Importance sliders, preset profiles and the relative share chart.
"""
import pandas as pd
import plotly.express as px
import streamlit as st

from alchemist.models.weights import CRITERIA, PRESET_PROFILES, PrioritizationWeights
from app.state.session import SessionStateManager


def _slider_key(criterion: str) -> str:
    return f"weight_{criterion}"


def _sync_sliders(weights: PrioritizationWeights):
    for key, value in weights.to_dict().items():
        st.session_state[_slider_key(key)] = value


def _on_slider(state: SessionStateManager, criterion: str):
    ws = state.workspace
    ws.weights = ws.weights.with_weight(criterion, st.session_state[_slider_key(criterion)])


def _apply_profile(state: SessionStateManager, name: str):
    state.workspace.weights = PrioritizationWeights.from_profile(name)
    _sync_sliders(state.workspace.weights)


def _reset(state: SessionStateManager):
    state.workspace.weights = PrioritizationWeights.defaults()
    _sync_sliders(state.workspace.weights)


def render_prioritization(state: SessionStateManager):
    """Render the weight sliders, ranking and presets."""
    weights = state.workspace.weights
    values = weights.to_dict()

    st.subheader("Prioritization & Weights")
    st.caption("Set the relative importance of each allocation criterion")

    left, right = st.columns([3, 2])

    with left:
        for criterion, (label, description) in CRITERIA.items():
            key = _slider_key(criterion)
            if key not in st.session_state:
                st.session_state[key] = values[criterion]
            st.slider(
                label,
                min_value=1,
                max_value=10,
                step=1,
                key=key,
                help=description,
                on_change=_on_slider,
                args=(state, criterion),
            )
            st.caption(f"{weights.percentage(criterion)}% of total weight")
        st.button("↺ Reset to defaults", on_click=_reset, args=(state,))

    with right:
        st.markdown("**Priority Ranking**")
        for position, (criterion, value) in enumerate(weights.ranking(), start=1):
            st.markdown(f"{position}. {CRITERIA[criterion][0]} · **{value}**")

        df = pd.DataFrame(
            [{"Criterion": CRITERIA[k][0], "Share": weights.percentage(k)} for k in values]
        )
        fig = px.pie(df, values="Share", names="Criterion", hole=0.4)
        fig.update_layout(margin=dict(l=20, r=20, t=30, b=20), height=300, showlegend=False)
        st.plotly_chart(fig, width="stretch")
        st.caption(f"Total weight: {weights.total()}")

    st.divider()
    st.markdown("**Preset Profiles**")
    cols = st.columns(len(PRESET_PROFILES))
    for col, (name, profile) in zip(cols, PRESET_PROFILES.items()):
        with col:
            st.button(
                name,
                key=f"profile_{name}",
                help=profile["description"],
                on_click=_apply_profile,
                args=(state, name),
                width="stretch",
            )
