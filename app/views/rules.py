"""
Rules View
==========
Form-driven rule builder: add, configure, reorder, toggle and delete.
"""
import streamlit as st

from alchemist.config import SETTINGS
from alchemist.models.rules import (
    BusinessRule,
    CoRunConfig,
    LoadLimitConfig,
    PatternMatchConfig,
    PhaseWindowConfig,
    PrecedenceConfig,
    RuleType,
    SlotRestrictionConfig,
)
from app.state.session import SessionStateManager

RULE_ICONS = {
    RuleType.CO_RUN: "🔗",
    RuleType.SLOT_RESTRICTION: "⏰",
    RuleType.LOAD_LIMIT: "⚖️",
    RuleType.PHASE_WINDOW: "📅",
    RuleType.PATTERN_MATCH: "🔍",
    RuleType.PRECEDENCE: "⬆️",
}


def _render_add_form(state: SessionStateManager):
    with st.expander("➕ Add Rule", expanded=len(state.workspace.rules) == 0):
        with st.form("add_rule_form", clear_on_submit=True):
            rule_type = st.selectbox(
                "Rule Type",
                list(RuleType),
                format_func=lambda t: f"{RULE_ICONS[t]} {t.label} - {t.description}",
            )
            name = st.text_input("Rule Name", placeholder="e.g., High Priority Co-Run")
            description = st.text_area("Description", placeholder="Describe what this rule does...", height=68)
            if st.form_submit_button("Add Rule", type="primary"):
                if not name.strip():
                    st.error("A rule name is required")
                else:
                    state.workspace.rules.add(rule_type, name, description)
                    st.rerun()


def _task_options(state: SessionStateManager):
    return {t.task_id: f"{t.task_id} - {t.task_name}" for t in state.dataset.tasks}


def _render_config(state: SessionStateManager, rule: BusinessRule):
    """Per-type config widgets; returns a new config or None if unchanged."""
    cfg = rule.config
    key = f"cfg_{rule.id}"
    tasks = _task_options(state)
    groups = [""] + SETTINGS.group_choices

    if rule.type == RuleType.CO_RUN:
        choices = list(tasks) + [t for t in cfg.task_ids if t not in tasks]
        selected = st.multiselect(
            "Tasks to run together", choices, default=cfg.task_ids,
            format_func=lambda t: tasks.get(t, t), key=f"{key}_tasks",
        )
        return CoRunConfig(task_ids=selected)

    if rule.type == RuleType.SLOT_RESTRICTION:
        c1, c2 = st.columns(2)
        group = c1.selectbox(
            "Group", groups, index=groups.index(cfg.group) if cfg.group in groups else 0,
            key=f"{key}_group",
        )
        slots = c2.number_input("Minimum Common Slots", min_value=1, value=max(1, cfg.min_common_slots),
                                key=f"{key}_slots")
        return SlotRestrictionConfig(group=group, min_common_slots=int(slots))

    if rule.type == RuleType.LOAD_LIMIT:
        c1, c2 = st.columns(2)
        group = c1.selectbox(
            "Worker Group", groups,
            index=groups.index(cfg.worker_group) if cfg.worker_group in groups else 0,
            key=f"{key}_group",
        )
        max_slots = c2.number_input("Max Slots Per Phase", min_value=1, value=max(1, cfg.max_slots_per_phase),
                                    key=f"{key}_max")
        return LoadLimitConfig(worker_group=group, max_slots_per_phase=int(max_slots))

    if rule.type == RuleType.PHASE_WINDOW:
        options = [""] + list(tasks)
        c1, c2 = st.columns(2)
        task_id = c1.selectbox(
            "Task", options, index=options.index(cfg.task_id) if cfg.task_id in options else 0,
            format_func=lambda t: tasks.get(t, "Select Task"), key=f"{key}_task",
        )
        phases = c2.multiselect(
            "Allowed Phases", SETTINGS.phase_choices,
            default=[p for p in cfg.allowed_phases if p in SETTINGS.phase_choices],
            format_func=lambda p: f"Phase {p}", key=f"{key}_phases",
        )
        return PhaseWindowConfig(task_id=task_id, allowed_phases=sorted(phases))

    if rule.type == RuleType.PATTERN_MATCH:
        c1, c2 = st.columns(2)
        pattern = c1.text_input("Pattern (regex)", value=cfg.pattern, key=f"{key}_pattern")
        template = c2.text_input("Rule Template", value=cfg.rule_template, key=f"{key}_template")
        return PatternMatchConfig(pattern=pattern, rule_template=template, parameters=cfg.parameters)

    if rule.type == RuleType.PRECEDENCE:
        options = [""] + list(tasks)
        c1, c2 = st.columns(2)
        before = c1.selectbox(
            "Before", options, index=options.index(cfg.before_task) if cfg.before_task in options else 0,
            format_func=lambda t: tasks.get(t, "Select Task"), key=f"{key}_before",
        )
        after = c2.selectbox(
            "After", options, index=options.index(cfg.after_task) if cfg.after_task in options else 0,
            format_func=lambda t: tasks.get(t, "Select Task"), key=f"{key}_after",
        )
        return PrecedenceConfig(before_task=before, after_task=after)

    return None


def _render_rule(state: SessionStateManager, rule: BusinessRule):
    registry = state.workspace.rules
    status = "🟢 Active" if rule.enabled else "⚪ Inactive"

    with st.container(border=True):
        head, actions = st.columns([3, 2])
        with head:
            st.markdown(f"**{RULE_ICONS[rule.type]} {rule.name}** · {status}")
            if rule.description:
                st.caption(rule.description)
        with actions:
            c1, c2, c3 = st.columns(3)
            positions = list(range(1, len(registry) + 1))
            current = rule.priority if rule.priority in positions else positions[-1]
            priority = c1.selectbox(
                "Priority", positions, index=positions.index(current),
                format_func=lambda p: f"Priority {p}", key=f"prio_{rule.id}",
                label_visibility="collapsed",
            )
            if priority != rule.priority:
                registry.set_priority(rule.id, priority)
                st.rerun()
            if c2.button("Disable" if rule.enabled else "Enable", key=f"toggle_{rule.id}"):
                registry.toggle(rule.id)
                st.rerun()
            if c3.button("Delete", key=f"delete_{rule.id}"):
                registry.delete(rule.id)
                st.rerun()

        new_config = _render_config(state, rule)
        if new_config is not None and new_config != rule.config:
            registry.update_config(rule.id, new_config)


def render_rules(state: SessionStateManager):
    """Render the business rule builder."""
    st.subheader("Business Rules")
    st.caption("Define constraints and relationships for resource allocation")

    _render_add_form(state)

    rules = state.workspace.rules.to_list()
    if not rules:
        st.info('No rules defined yet. Use "Add Rule" to get started.')
        return

    for rule in rules:
        _render_rule(state, rule)
