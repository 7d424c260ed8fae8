"""Follow-up chat panel."""
import streamlit as st

from dataset_advisor.errors import ChatError
from dataset_advisor.session import AnalysisSession


def render_chat(session: AnalysisSession):
    """
    Render the transcript and an input box.

    The input is only enabled once a live analysis exists; demo reports have
    no model session behind them.
    """
    st.subheader("Ask the Assistant")

    if not session.can_chat:
        if session.demo_key:
            st.info("Chat is available after running a live analysis on your own dataset.")
        else:
            st.info("Run an analysis to start asking follow-up questions.")
        return

    for msg in session.transcript:
        with st.chat_message(msg.role):
            st.markdown(msg.content)

    question = st.chat_input("Ask about features, models, or the baseline code...")
    if question:
        with st.spinner("Thinking..."):
            try:
                session.ask(question)
            except ChatError:
                # The apology is already in the transcript.
                pass
        st.rerun()
