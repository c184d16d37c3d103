"""
Regulatory Experiment Picker — Streamlit Dashboard
===================================================

Optional questionnaire UI. Every widget change writes one answer into the
session's ``AnswerStore``; the recommendation panel re-evaluates the engine
against the full snapshot on each rerun.

Why optional?
-------------
- Streamlit adds ~100 MB of dependencies not needed for the CLI.
- The engine and CLI work without it.
- The same flow is available via ``experiment-picker questionnaire``.

Usage
-----
    pip install -e ".[dashboard]"
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# ── Ensure project root is importable ────────────────────────────────────────
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="Regulatory Experiment Picker",
    layout="centered",
)

from experiment_picker.config import load_config
from experiment_picker.questionnaire import flow
from experiment_picker.questionnaire.flow import Question
from experiment_picker.reporting.formatters import format_instruments
from experiment_picker.store import AnswerStore
from experiment_picker.taxonomy.answer_taxonomy import Role

# ── Session state ─────────────────────────────────────────────────────────────

if "store" not in st.session_state:
    st.session_state.store = AnswerStore(load_config().questionnaire)

store: AnswerStore = st.session_state.store
st.session_state.setdefault("session_no", 0)


def _render_question(question: Question) -> None:
    """Radio card for one question; selecting an option stores it immediately."""
    values = [opt.value for opt in question.options]
    current = getattr(store.answers, question.field.value)
    index = values.index(current) if current is not None else None

    with st.container(border=True):
        st.markdown(f"**{question.title}**")
        if question.subtitle:
            st.caption(question.subtitle)
        selected = st.radio(
            question.title,
            options=values,
            index=index,
            format_func=lambda v: question.option(v).label,
            captions=[opt.help for opt in question.options],
            key=f"{st.session_state.session_no}_{question.field.value}",
            label_visibility="collapsed",
        )
    if selected is not None and selected != current:
        store.set_answer(question.field, selected)
        st.rerun()


# ── Header ────────────────────────────────────────────────────────────────────

st.title("Regulatory Experiment Picker")
st.write(
    "Find out whether you need a **Regulatory Sandbox**, **Testbed**, "
    "**Living Lab**, **Policy Lab**, or a **Trusted Research Environment (TRE)**."
)

# ── Role choice ───────────────────────────────────────────────────────────────

if store.role is None:
    st.subheader("First, who are you?")
    cols = st.columns(len(Role))
    for col, role in zip(cols, Role):
        with col:
            if st.button(role.label, key=f"role_{role}", use_container_width=True):
                store.select_role(role)
                st.session_state.session_no += 1
                st.rerun()
            st.caption(role.description)
    st.stop()

# ── Questionnaire ─────────────────────────────────────────────────────────────

head, action = st.columns([4, 1])
head.subheader(f"{store.role.label} — step {store.step}")
if action.button("Start over"):
    store.reset()
    st.session_state.session_no += 1
    st.rerun()

for question in flow.visible_questions(store.role, store.step, store.answers):
    _render_question(question)
    likely = flow.shortcut_hint(store.role, store.step, store.answers)
    if question.step == 1 and likely is not None:
        with st.container(border=True):
            st.markdown(
                "**Shortcut:** Based on your primary objective, you may already "
                "have a likely instrument. Continue to confirm cross-cutting "
                "constraints."
            )
            st.markdown(f"- Likely: **{likely.label}**")
            if st.button("Next", disabled=store.step != flow.SHORTCUT_STEP):
                store.advance()
                st.rerun()

# ── Recommendation ────────────────────────────────────────────────────────────

if store.result_visible:
    rec = store.recommendation
    st.divider()
    st.subheader("Recommendation")
    with st.container(border=True):
        st.markdown(f"Primary instrument: **{rec.primary.label}**")
        if rec.secondary:
            st.markdown(f"Secondary/Sequencing: {format_instruments(rec.secondary)}")
        for note in rec.notes:
            st.markdown(f"- {note}")

st.caption("Tip: adjust answers and the recommendation updates instantly.")
