"""LLM configuration for the dashboard.

API Key Priority:
1. st.secrets["OPENAI_API_KEY"] (gives you control over costs)
2. os.environ["OPENAI_API_KEY"]
3. os.environ["AI_INTEGRATIONS_OPENAI_API_KEY"] (fallback)
"""
import os
from typing import Optional

import streamlit as st

from dataset_advisor.config import Settings


def _secret(name: str) -> Optional[str]:
    try:
        if name in st.secrets:
            return st.secrets[name]
    except FileNotFoundError:
        # No secrets.toml at all.
        return None
    return None


def get_openai_api_key() -> Optional[str]:
    """
    Get OpenAI API key with user-provided key taking priority.

    Returns:
        API key string or None if not configured.
    """
    return (
        _secret("OPENAI_API_KEY")
        or os.environ.get("OPENAI_API_KEY")
        or os.environ.get("AI_INTEGRATIONS_OPENAI_API_KEY")
    )


def get_settings() -> Settings:
    """Environment settings with the Streamlit secret key applied on top."""
    return Settings.from_env().with_api_key(get_openai_api_key())


def render_missing_key_help():
    """Shown when an analysis fails because no credential is configured."""
    st.warning("""
**OpenAI API key not configured**

Add `OPENAI_API_KEY` to `.streamlit/secrets.toml` or export it in the environment,
then run the analysis again. Demo datasets work without a key.
    """)
