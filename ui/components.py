"""
Shared UI components, navigation and store access for Streamlit pages.
"""

import streamlit as st

from state.session_file import load_session_user
from state.store import AppStore

SESSION_PARAM = "session"

PAGES = ["login", "dashboard", "questionnaire", "admin", "logs", "profile"]


def get_store() -> AppStore:
    """
    Return the AppStore of this browser session, creating it on first use.
    The persisted session user is read only once, at creation, from the
    token in the query string.
    """
    if "store" not in st.session_state:
        store = AppStore()
        token = st.query_params.get(SESSION_PARAM)
        user = load_session_user(token)
        if user:
            store.set_current_user(user)
            store.session_token = token
        st.session_state["store"] = store
    return st.session_state["store"]


def navigate(page: str):
    st.session_state["page"] = page
    st.query_params["page"] = page
    st.rerun()


def render_card_start(title: str = ""):
    """
    Render start wrapper for unified centered card layout.
    """
    st.markdown(
        f"""
    <div class="score-card">
        <div class="score-header">
            <div class="score-logo">T3</div>
            <div class="score-subtitle"><strong>Score Inteligente</strong></div>
        </div>
        <h2 class="score-title">{title}</h2>
    """,
        unsafe_allow_html=True,
    )


def render_card_end():
    st.markdown("</div>", unsafe_allow_html=True)
