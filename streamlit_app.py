"""Streamlit Web UI for skillgap-radar.

Two screens:
  A) Input      — job description + résumé upload (PDF/DOCX/TXT) → run analysis
  B) Dashboard  — match score, radar chart, searchable skill matrix, learning pathway, export
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so the LLM client can read them
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from skillgap_radar.config import load_config
from skillgap_radar.controller import AnalysisController
from skillgap_radar.dashboard.charts import build_radar_figure
from skillgap_radar.dashboard.uploads import ingest_upload
from skillgap_radar.dashboard.views import (
    coverage_percent,
    escape_markdown,
    filter_result,
    radar_points,
    resolve_focus,
    resource_link,
    score_band,
)
from skillgap_radar.export.pdf_report import (
    HTML_REPORT_FILENAME,
    REPORT_FILENAME,
    render_html_report,
    render_pdf,
)
from skillgap_radar.parsers.resume_parser import ACCEPTED_EXTENSIONS
from skillgap_radar.pipeline.gap_analyst import GapAnalyst
from skillgap_radar.samples import SAMPLE_JD, SAMPLE_RESUME_FILENAME, sample_payload
from skillgap_radar.state import ActionToggled, SearchChanged, SkillSelected
from skillgap_radar.storage.local_store import open_store

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="SkillGap Radar",
    page_icon=":dart:",
    layout="wide",
)

_THEME_CSS = {
    "dark": """
        .stApp { background-color: #0f172a; color: #e2e8f0; }
        .stApp h1, .stApp h2, .stApp h3, .stApp label, .stApp p { color: #e2e8f0; }
    """,
    "light": """
        .stApp { background-color: #f8fafc; color: #1e293b; }
        .stApp h1, .stApp h2, .stApp h3, .stApp label, .stApp p { color: #1e293b; }
    """,
}

_SCORE_COLORS = {"high": "#34d399", "medium": "#facc15", "low": "#f87171"}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_config():
    return load_config()


def _get_controller() -> AnalysisController:
    """One controller per browser session, restored from the local store on first use."""
    if "controller" not in st.session_state:
        config = _get_config()
        store = open_store(config.storage.resolved_db_path)
        controller = AnalysisController(GapAnalyst(config=config.llm), store)
        controller.restore()
        st.session_state.controller = controller
    return st.session_state.controller


def _dispatch(event) -> None:
    _get_controller().dispatch(event)


def _load_sample() -> None:
    st.session_state.jd_text = SAMPLE_JD
    st.session_state.resume_payload = sample_payload()
    st.session_state.resume_name = SAMPLE_RESUME_FILENAME
    st.session_state.pop("resume_error", None)


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

controller = _get_controller()
st.markdown(f"<style>{_THEME_CSS[controller.state.theme]}</style>", unsafe_allow_html=True)

with st.sidebar:
    st.title("SkillGap Radar")
    st.caption("AI-Powered Semantic Gap Analysis")

    theme_label = "Light mode" if controller.state.theme == "dark" else "Dark mode"
    if st.button(theme_label, width="stretch"):
        controller.toggle_theme()
        st.rerun()

    st.divider()

    mode_label = st.radio(
        "Analysis mode",
        ["Standard", "Deep (extended thinking)"],
        index=0 if _get_config().llm.mode == "standard" else 1,
        help="Deep mode lets the model reason longer before answering.",
    )
    mode = "standard" if mode_label == "Standard" else "deep"
    if getattr(controller.provider, "mode", None) != mode:
        controller.provider = GapAnalyst(config=_get_config().llm, mode=mode)

    if controller.state.result is not None:
        st.divider()
        if st.button("Reset", width="stretch"):
            controller.reset()
            st.rerun()


# ---------------------------------------------------------------------------
# Screen A: Input
# ---------------------------------------------------------------------------


def _screen_input():
    st.header("SkillGap Radar")
    st.markdown("Paste a job description and upload a résumé to map the candidate's skill gaps.")
    st.button("Load Sample Data", on_click=_load_sample)

    col_jd, col_resume = st.columns(2)
    with col_jd:
        jd_text = st.text_area(
            "Job Description",
            key="jd_text",
            height=300,
            placeholder="Paste Job Description here...",
            max_chars=_get_config().upload.max_jd_chars,
        )
    with col_resume:
        resume_file = st.file_uploader(
            "Candidate Profile",
            type=list(ACCEPTED_EXTENSIONS),
            help="PDF, DOCX or TXT",
        )
        if resume_file is not None:
            ingest_upload(st.session_state, resume_file, _get_config().upload.max_size_bytes)
        if "resume_error" in st.session_state:
            st.error(st.session_state.resume_error)
        elif "resume_payload" in st.session_state:
            st.success(f"Loaded: {escape_markdown(st.session_state.get('resume_name', 'résumé'))}")

    payload = st.session_state.get("resume_payload")
    can_run = controller.can_submit(jd_text, payload) and not controller.state.loading

    if st.button("Run Gap Analysis", type="primary", disabled=not can_run):
        with st.spinner(f"Analyzing with {controller.provider.model_label}..."):
            try:
                result = asyncio.run(controller.submit(jd_text, payload))
            except Exception:
                logger.exception("Gap analysis crashed")
                result = None
        if result is None:
            st.error(controller.state.error or "Analysis failed. Please try again or check your API key.")
        else:
            st.rerun()
    elif not can_run:
        missing = []
        if not (jd_text and jd_text.strip()):
            missing.append("job description")
        if payload is None:
            missing.append("résumé")
        if missing:
            st.info(f"Required: {', '.join(missing)}")


# ---------------------------------------------------------------------------
# Screen B: Dashboard
# ---------------------------------------------------------------------------


def _screen_dashboard():
    state = controller.state
    result = state.result
    color = _SCORE_COLORS[score_band(result.match_score)]

    head_score, head_title, head_actions = st.columns([1, 3, 2])
    with head_score:
        st.markdown(
            f"<div style='font-size:2.6rem;font-weight:700;color:{color}'>{result.match_score}%</div>",
            unsafe_allow_html=True,
        )
    with head_title:
        st.subheader("Analysis Complete")
        st.caption(f"Based on {result.model_used}" if result.model_used else "Match score")
    with head_actions:
        try:
            st.download_button(
                label="Export PDF",
                data=render_pdf(result),
                file_name=REPORT_FILENAME,
                mime="application/pdf",
                type="primary",
            )
        except Exception:
            logger.exception("PDF generation failed")
            st.warning("PDF generation failed")
        st.download_button(
            label="Export HTML",
            data=render_html_report(result, theme=state.theme).encode("utf-8"),
            file_name=HTML_REPORT_FILENAME,
            mime="text/html",
        )

    query = st.text_input("Search skills and actions", value=state.search, placeholder="e.g. React")
    if query != state.search:
        _dispatch(SearchChanged(query))
    view = filter_result(result, query)
    focused = resolve_focus(view.skills, state.selected_skill)

    col_left, col_right = st.columns([1, 2])
    with col_left:
        with st.container(border=True):
            st.markdown("**Executive Summary**")
            st.markdown(escape_markdown(result.executive_summary))
        with st.container(border=True):
            st.markdown("**Competency Radar**")
            points = radar_points(result.skills)
            if points:
                st.plotly_chart(build_radar_figure(points, state.theme), width="stretch")
            else:
                st.caption("No Critical or High importance skills to chart.")

    with col_right:
        with st.container(border=True, height=500):
            st.markdown("**Skill Gap Matrix**")
            if not view.skills:
                st.caption("No skills match your search.")
            for i, skill in enumerate(view.skills):
                selected = focused is not None and skill.name == focused.name
                critical = " :red[CRITICAL]" if skill.importance == "Critical" else ""
                label = (
                    f"{'▸ ' if selected else ''}**{escape_markdown(skill.name)}**{critical}  "
                    f"Req {skill.required_level}/5 · Obs {skill.observed_level}/5"
                )
                st.button(
                    label,
                    key=f"skill_{i}",
                    on_click=_dispatch,
                    args=(SkillSelected(skill.name),),
                    width="stretch",
                )
                st.progress(coverage_percent(skill) / 100)

        if focused is not None:
            with st.container(border=True):
                title_col, badge_col = st.columns([3, 1])
                with title_col:
                    st.subheader(escape_markdown(focused.name))
                    st.caption(escape_markdown(focused.category))
                with badge_col:
                    if focused.gap > 0:
                        st.error(f"Gap Level: {focused.gap}")
                    else:
                        st.success("Match / Exceeds")
                reason_col, evidence_col = st.columns(2)
                with reason_col:
                    st.markdown("**AI Reasoning**")
                    st.markdown(escape_markdown(focused.reasoning))
                with evidence_col:
                    st.markdown("**Evidence Found**")
                    st.markdown(f'_"{escape_markdown(focused.evidence)}"_')

    with st.container(border=True):
        st.markdown("**Personalized Upskilling Pathway**")
        if not view.actions:
            st.caption("No learning actions match your search.")
        for i, item in enumerate(view.actions):
            done = item.action in state.completed
            action_text = escape_markdown(item.action)
            st.checkbox(
                f"~~{action_text}~~" if done else action_text,
                value=done,
                key=f"action_{i}_{done}",
                on_change=_dispatch,
                args=(ActionToggled(item.action),),
            )
            link = resource_link(item.resource)
            resource = f"[Recommended Resource]({link})" if link else escape_markdown(item.resource)
            st.caption(
                f"Priority: {item.priority} · Estimated: {escape_markdown(item.timeline)} · {resource}"
            )


# ---------------------------------------------------------------------------
# Main router
# ---------------------------------------------------------------------------

if controller.state.result is None:
    _screen_input()
else:
    _screen_dashboard()
