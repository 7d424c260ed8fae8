"""Dataset Advisor - Streamlit dashboard"""
import sys
from pathlib import Path

import streamlit as st

app_dir = Path(__file__).parent
if str(app_dir) not in sys.path:
    sys.path.insert(0, str(app_dir))

from dataset_advisor.demo_data import list_demos
from dataset_advisor.errors import AnalysisError, ConfigurationError, ParseError
from dataset_advisor.llm.prompts import ANALYSIS_PHASES
from dataset_advisor.session import AnalysisSession

from llm_utils import get_settings, render_missing_key_help
from style_utils import section_divider
from ui_components import (
    render_chat,
    render_code,
    render_column_cards,
    render_dataset_header,
    render_features_and_models,
    render_overview,
    render_profile_table,
    render_training,
)

st.set_page_config(
    page_title="Dataset Advisor",
    page_icon="📊",
    layout="wide"
)

SESSION_KEY = "session"
UPLOAD_KEY = "last_upload"


def get_session() -> AnalysisSession:
    """One AnalysisSession per browser session."""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = AnalysisSession.create(get_settings())
    return st.session_state[SESSION_KEY]


def handle_upload(session: AnalysisSession, upload) -> None:
    # Reruns hand back the same upload; only profile it once.
    marker = (upload.name, upload.size)
    if st.session_state.get(UPLOAD_KEY) == marker:
        return
    st.session_state[UPLOAD_KEY] = marker
    try:
        session.load_csv(upload.getvalue(), source_name=upload.name)
    except ParseError:
        # state.error carries the message; the previous dataset stays loaded.
        pass


def run_analysis(session: AnalysisSession) -> None:
    with st.status("Analyzing dataset...", expanded=True) as status:
        for phase in ANALYSIS_PHASES:
            st.write(phase)
        try:
            session.analyze()
        except ConfigurationError:
            status.update(label="Analysis failed", state="error")
            render_missing_key_help()
            return
        except AnalysisError:
            status.update(label="Analysis failed", state="error")
            return
        status.update(label="Analysis complete", state="complete", expanded=False)


def render_sidebar(session: AnalysisSession) -> None:
    st.sidebar.header("Dataset")

    upload = st.sidebar.file_uploader("Upload a CSV", type=["csv"])
    if upload is not None:
        handle_upload(session, upload)

    st.sidebar.markdown("---")
    st.sidebar.markdown("**Or try a demo**")
    demos = {d.key: d for d in list_demos()}
    choice = st.sidebar.selectbox(
        "Demo dataset",
        [""] + list(demos),
        format_func=lambda k: demos[k].name if k else "—",
    )
    if st.sidebar.button("Load demo", disabled=not choice):
        session.load_demo(choice)
        st.session_state.pop(UPLOAD_KEY, None)

    st.sidebar.markdown("---")
    if st.sidebar.button("Start over"):
        session.reset()
        st.session_state.pop(UPLOAD_KEY, None)
        st.rerun()


def main():
    st.title("📊 Dataset Advisor")
    st.caption("Profile a CSV locally, then get a model-generated ML strategy for it")

    session = get_session()
    render_sidebar(session)

    if session.state.status == "error" and session.state.error:
        st.error(session.state.error)

    snapshot = session.snapshot
    if snapshot is None:
        st.info("Upload a CSV in the sidebar, or load one of the demo datasets.")
        return

    demo_name = None
    if session.demo_key:
        demo_name = next((d.name for d in list_demos() if d.key == session.demo_key), None)
    render_dataset_header(snapshot, demo_name)

    if session.report is None:
        st.subheader("Column Profile")
        render_column_cards(snapshot)
        with st.expander("Profile table"):
            render_profile_table(snapshot)
        st.caption("Only column metadata, the row count and the first 5 rows are sent for analysis.")
        if st.button("Run analysis", type="primary", disabled=session.state.status == "analyzing"):
            run_analysis(session)
            if session.report is not None:
                st.rerun()
        return

    report = session.report
    tab1, tab2, tab3, tab4, tab5 = st.tabs([
        "Overview",
        "Features & Models",
        "Training",
        "Code",
        "Data Profile",
    ])

    with tab1:
        render_overview(report)

    with tab2:
        render_features_and_models(report)

    with tab3:
        render_training(report)

    with tab4:
        render_code(report, snapshot)

    with tab5:
        render_column_cards(snapshot)
        render_profile_table(snapshot)

    section_divider()
    render_chat(session)


if __name__ == "__main__":
    main()
