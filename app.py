"""
Main Streamlit entry point for Score Inteligente.
This file handles the main routing logic, distinguishing between
public-facing pages (login, signup) and authenticated, role-based
pages (dashboard, questionnaire, admin, logs, profile).
"""

import logging
import os

import streamlit as st
from dotenv import load_dotenv

import ui.admin as admin_page
import ui.dashboard as dashboard_page
import ui.login as login_page
import ui.logs as logs_page
import ui.profile as profile_page
import ui.questionnaire as questionnaire_page
import ui.signup as signup_page
from services.auth_service import logout
from services.question_service import fetch_questionnaire_data
from ui.components import PAGES, SESSION_PARAM, get_store

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL)

ADMIN_ONLY_PAGES = ("admin", "logs")

NAV_LABELS = {
    "dashboard": "Painel",
    "questionnaire": "Questionário",
    "admin": "Admin",
    "logs": "Logs",
    "profile": "Meu Perfil",
}


def _current_route() -> str:
    """The query string plays the role of the browser app's #hash routes."""
    page = st.session_state.get("page") or st.query_params.get("page", "login")
    return page if page in PAGES or page == "signup" else "login"


def main():
    st.set_page_config(page_title="Score Inteligente", layout="wide")
    store = get_store()
    user = store.current_user
    route = _current_route()

    if not user:
        # --- Unauthenticated Routes ---
        col1, col2, col3 = st.columns([1, 2, 1])
        with col2:
            if route == "signup":
                signup_page.render_signup()
            else:
                st.session_state["page"] = "login"
                login_page.render_login()
        return

    # --- Authenticated Routes ---
    if store.session_token and st.query_params.get(SESSION_PARAM) != store.session_token:
        st.query_params[SESSION_PARAM] = store.session_token

    if not st.session_state.get("questionnaire_loaded"):
        # Categories and questions feed every page, load them once per session.
        with st.spinner("Carregando questionários..."):
            fetch_questionnaire_data(store)
        st.session_state["questionnaire_loaded"] = True

    if route in ("login", "signup"):
        route = "dashboard"
    if route in ADMIN_ONLY_PAGES and not user.is_admin:
        route = "dashboard"
    st.session_state["page"] = route

    st.sidebar.title("Score Inteligente")
    st.sidebar.caption(f"{user.name} · {user.company_name}")
    st.sidebar.markdown("---")

    nav_options = [p for p in NAV_LABELS if user.is_admin or p not in ADMIN_ONLY_PAGES]
    selection = st.sidebar.radio(
        "Navegação",
        nav_options,
        index=nav_options.index(route),
        format_func=lambda p: NAV_LABELS[p],
        label_visibility="collapsed",
    )
    if selection != route:
        st.session_state["page"] = selection
        st.query_params["page"] = selection
        st.rerun()

    if st.sidebar.button("Sair"):
        logout(store)
        # Clear all session state keys on logout
        for k in list(st.session_state.keys()):
            del st.session_state[k]
        st.query_params.clear()
        st.session_state["page"] = "login"
        st.query_params["page"] = "login"
        st.rerun()

    # --- Role-Based Page Routing ---
    if route == "admin":
        admin_page.render_admin()
    elif route == "logs":
        logs_page.render_logs()
    elif route == "questionnaire":
        questionnaire_page.render_questionnaire()
    elif route == "profile":
        profile_page.render_profile()
    else:
        dashboard_page.render_dashboard()


if __name__ == "__main__":
    main()
